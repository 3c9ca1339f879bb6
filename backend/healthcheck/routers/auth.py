from fastapi import APIRouter, Depends, Header, HTTPException, status
from supabase import Client

from healthcheck.models.account import (
    AuthResponse,
    AuthSession,
    GoogleLoginRequest,
    LoginRequest,
    SignupRequest,
    UserProfile,
)
from healthcheck.services import accounts
from healthcheck.services.errors import AuthenticationFailed, RegistrationFailed, StoreUnavailable
from healthcheck.services.supabase_client import require_client

router = APIRouter()


def get_store() -> Client:
    """Supabase client or 503 when the auth store is not configured."""
    try:
        return require_client()
    except StoreUnavailable as e:
        raise HTTPException(status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(e)) from e


def get_current_session(
    authorization: str | None = Header(None),
    client: Client = Depends(get_store),
) -> AuthSession:
    """Resolve the ``Authorization: Bearer <token>`` header to a session."""
    scheme, _, token = (authorization or "").partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        raise HTTPException(status.HTTP_401_UNAUTHORIZED, detail="Missing bearer token")
    try:
        return accounts.resolve_session(client, token.strip())
    except AuthenticationFailed as e:
        raise HTTPException(status.HTTP_401_UNAUTHORIZED, detail=str(e)) from e


@router.post("/signup", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
def signup(request: SignupRequest, client: Client = Depends(get_store)):
    """Create an email/password account."""
    try:
        return accounts.sign_up(client, request)
    except (RegistrationFailed, AuthenticationFailed) as e:
        raise HTTPException(status.HTTP_400_BAD_REQUEST, detail=str(e)) from e


@router.post("/login", response_model=AuthResponse)
def login(request: LoginRequest, client: Client = Depends(get_store)):
    try:
        return accounts.log_in(client, request)
    except AuthenticationFailed as e:
        raise HTTPException(status.HTTP_401_UNAUTHORIZED, detail=str(e)) from e


@router.post("/google", response_model=AuthResponse)
def google_login(request: GoogleLoginRequest, client: Client = Depends(get_store)):
    """Exchange a Google ID token for a session."""
    try:
        return accounts.log_in_with_google(client, request)
    except AuthenticationFailed as e:
        raise HTTPException(
            status.HTTP_401_UNAUTHORIZED, detail="Google authentication failed"
        ) from e


@router.get("/me", response_model=UserProfile)
def me(session: AuthSession = Depends(get_current_session)):
    return session.user
