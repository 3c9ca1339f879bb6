"""
Account service backed by Supabase Auth.

Email/password signup and login, Google ID-token exchange, and resolving a
bearer token back to the user. Token issuance and verification are Supabase's
job; this module only adapts its responses to our models.
"""

import structlog
from supabase import AuthError, Client

from healthcheck.models.account import (
    AuthResponse,
    AuthSession,
    GoogleLoginRequest,
    LoginRequest,
    SignupRequest,
    UserProfile,
)
from healthcheck.services.errors import AuthenticationFailed, RegistrationFailed

logger = structlog.get_logger(__name__)


def _to_profile(user) -> UserProfile:
    metadata = getattr(user, "user_metadata", None) or {}
    return UserProfile(
        id=str(user.id),
        email=user.email or "",
        name=metadata.get("name") or metadata.get("full_name") or "",
    )


def _to_auth_response(response) -> AuthResponse:
    if response.user is None or response.session is None:
        raise AuthenticationFailed("No session returned by the auth provider")
    return AuthResponse(token=response.session.access_token, user=_to_profile(response.user))


def sign_up(client: Client, request: SignupRequest) -> AuthResponse:
    try:
        response = client.auth.sign_up({
            "email": request.email,
            "password": request.password,
            "options": {"data": {"name": request.name}},
        })
    except AuthError as e:
        logger.warning("signup_failed", email=request.email, error=str(e))
        raise RegistrationFailed(str(e)) from e

    if response.user is None:
        raise RegistrationFailed("Signup did not create a user")

    logger.info("user_signed_up", user_id=str(response.user.id))
    if response.session is None:
        # Email confirmation is enabled on the Supabase project
        return AuthResponse(
            token=None,
            user=_to_profile(response.user),
            message="Please confirm your email address before logging in",
        )
    return _to_auth_response(response)


def log_in(client: Client, request: LoginRequest) -> AuthResponse:
    try:
        response = client.auth.sign_in_with_password({
            "email": request.email,
            "password": request.password,
        })
    except AuthError as e:
        logger.warning("login_failed", email=request.email, error=str(e))
        raise AuthenticationFailed("Invalid email or password") from e

    auth = _to_auth_response(response)
    logger.info("user_logged_in", user_id=auth.user.id)
    return auth


def log_in_with_google(client: Client, request: GoogleLoginRequest) -> AuthResponse:
    try:
        response = client.auth.sign_in_with_id_token({
            "provider": "google",
            "token": request.credential,
        })
    except AuthError as e:
        logger.warning("google_login_failed", error=str(e))
        raise AuthenticationFailed("Google authentication failed") from e

    auth = _to_auth_response(response)
    logger.info("user_logged_in", user_id=auth.user.id, provider="google")
    return auth


def resolve_session(client: Client, token: str) -> AuthSession:
    try:
        response = client.auth.get_user(token)
    except AuthError as e:
        logger.info("session_rejected", error=str(e))
        raise AuthenticationFailed("Invalid or expired token") from e

    if response is None or response.user is None:
        raise AuthenticationFailed("Invalid or expired token")
    return AuthSession(user=_to_profile(response.user), access_token=token)
