"""Diagnosis history persisted in a Supabase table, scoped to the calling user."""

import structlog
from supabase import Client, PostgrestAPIError

from healthcheck.config import HISTORY_TABLE
from healthcheck.models.account import AuthSession
from healthcheck.models.history import HistoryCreate, HistoryEntry
from healthcheck.models.prediction import PredictionResult
from healthcheck.services.errors import EntryNotFound, StoreUnavailable

logger = structlog.get_logger(__name__)


def save_entry(
    client: Client,
    session: AuthSession,
    entry: HistoryCreate,
    result: PredictionResult,
) -> HistoryEntry:
    row = {
        "user_id": session.user.id,
        "symptoms": entry.symptoms,
        "vitals": entry.vitals,
        "result": result.model_dump(),
    }
    try:
        response = client.table(HISTORY_TABLE).insert(row).execute()
    except PostgrestAPIError as e:
        logger.error("history_save_failed", user_id=session.user.id, error=str(e))
        raise StoreUnavailable(str(e)) from e

    saved = HistoryEntry.model_validate(response.data[0])
    logger.info("history_saved", user_id=session.user.id, entry_id=saved.id)
    return saved


def list_entries(client: Client, session: AuthSession) -> list[HistoryEntry]:
    """Newest first."""
    try:
        response = (
            client.table(HISTORY_TABLE)
            .select("*")
            .eq("user_id", session.user.id)
            .order("created_at", desc=True)
            .execute()
        )
    except PostgrestAPIError as e:
        logger.error("history_list_failed", user_id=session.user.id, error=str(e))
        raise StoreUnavailable(str(e)) from e

    return [HistoryEntry.model_validate(row) for row in response.data]


def get_entry(client: Client, session: AuthSession, entry_id: str) -> HistoryEntry:
    try:
        response = (
            client.table(HISTORY_TABLE)
            .select("*")
            .eq("id", entry_id)
            .eq("user_id", session.user.id)
            .execute()
        )
    except PostgrestAPIError as e:
        logger.error("history_get_failed", entry_id=entry_id, error=str(e))
        raise StoreUnavailable(str(e)) from e

    if not response.data:
        raise EntryNotFound(entry_id)
    return HistoryEntry.model_validate(response.data[0])


def delete_entry(client: Client, session: AuthSession, entry_id: str) -> None:
    try:
        response = (
            client.table(HISTORY_TABLE)
            .delete()
            .eq("id", entry_id)
            .eq("user_id", session.user.id)
            .execute()
        )
    except PostgrestAPIError as e:
        logger.error("history_delete_failed", entry_id=entry_id, error=str(e))
        raise StoreUnavailable(str(e)) from e

    if not response.data:
        raise EntryNotFound(entry_id)
    logger.info("history_deleted", user_id=session.user.id, entry_id=entry_id)
