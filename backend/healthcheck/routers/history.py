from fastapi import APIRouter, Depends, HTTPException, Response, status
from pydantic import ValidationError
from supabase import Client

from healthcheck.diagnosis.presenter import parse_result, present_result
from healthcheck.models.account import AuthSession
from healthcheck.models.history import HistoryCreate, HistoryEntry
from healthcheck.routers.auth import get_current_session, get_store
from healthcheck.services import history_store
from healthcheck.services.errors import EntryNotFound, StoreUnavailable

router = APIRouter()


@router.post("", response_model=HistoryEntry, status_code=status.HTTP_201_CREATED)
def save_history(
    entry: HistoryCreate,
    session: AuthSession = Depends(get_current_session),
    client: Client = Depends(get_store),
):
    """Store a diagnosis the user just received."""
    try:
        result = parse_result(entry.result)
    except ValidationError as e:
        raise HTTPException(
            status.HTTP_422_UNPROCESSABLE_ENTITY, detail=f"Invalid prediction result: {e}"
        ) from e
    try:
        return history_store.save_entry(client, session, entry, result)
    except StoreUnavailable as e:
        raise HTTPException(status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(e)) from e


@router.get("")
def list_history(
    session: AuthSession = Depends(get_current_session),
    client: Client = Depends(get_store),
):
    try:
        entries = history_store.list_entries(client, session)
    except StoreUnavailable as e:
        raise HTTPException(status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(e)) from e
    return {"history": entries}


@router.get("/{entry_id}")
def history_detail(
    entry_id: str,
    session: AuthSession = Depends(get_current_session),
    client: Client = Depends(get_store),
):
    """One stored diagnosis together with the view the frontend renders for it."""
    try:
        entry = history_store.get_entry(client, session, entry_id)
    except EntryNotFound as e:
        raise HTTPException(status.HTTP_404_NOT_FOUND, detail="History entry not found") from e
    except StoreUnavailable as e:
        raise HTTPException(status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(e)) from e
    return {"entry": entry, "view": present_result(entry.result)}


@router.delete("/{entry_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_history(
    entry_id: str,
    session: AuthSession = Depends(get_current_session),
    client: Client = Depends(get_store),
):
    try:
        history_store.delete_entry(client, session, entry_id)
    except EntryNotFound as e:
        raise HTTPException(status.HTTP_404_NOT_FOUND, detail="History entry not found") from e
    except StoreUnavailable as e:
        raise HTTPException(status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(e)) from e
    return Response(status_code=status.HTTP_204_NO_CONTENT)
