from __future__ import annotations

import pytest

from healthcheck.models.account import GoogleLoginRequest, LoginRequest, SignupRequest
from healthcheck.services import accounts
from healthcheck.services.errors import AuthenticationFailed, RegistrationFailed


def test_sign_up_returns_token_and_profile(fake_supabase) -> None:
    auth = accounts.sign_up(
        fake_supabase, SignupRequest(name="Ada", email="ada@example.com", password="secret1")
    )

    assert auth.token == f"token-{auth.user.id}"
    assert auth.user.email == "ada@example.com"
    assert auth.user.name == "Ada"


def test_sign_up_duplicate_email(fake_supabase) -> None:
    fake_supabase.auth.add_account("ada@example.com", "secret1")

    with pytest.raises(RegistrationFailed, match="already registered"):
        accounts.sign_up(
            fake_supabase, SignupRequest(name="Ada", email="ada@example.com", password="secret1")
        )


def test_sign_up_pending_email_confirmation(fake_supabase) -> None:
    fake_supabase.auth.confirm_email = True

    auth = accounts.sign_up(
        fake_supabase, SignupRequest(name="Ada", email="ada@example.com", password="secret1")
    )

    assert auth.token is None
    assert auth.message


def test_log_in(fake_supabase) -> None:
    user = fake_supabase.auth.add_account("ada@example.com", "secret1", "Ada")

    auth = accounts.log_in(fake_supabase, LoginRequest(email="ada@example.com", password="secret1"))

    assert auth.user.id == user.id
    assert auth.token == f"token-{user.id}"


def test_log_in_wrong_password(fake_supabase) -> None:
    fake_supabase.auth.add_account("ada@example.com", "secret1")

    with pytest.raises(AuthenticationFailed, match="Invalid email or password"):
        accounts.log_in(fake_supabase, LoginRequest(email="ada@example.com", password="nope"))


def test_google_login(fake_supabase) -> None:
    from types import SimpleNamespace

    user = SimpleNamespace(id="g-1", email="grace@gmail.com", user_metadata={"full_name": "Grace"})
    fake_supabase.auth.google_tokens["google-id-token"] = user

    auth = accounts.log_in_with_google(fake_supabase, GoogleLoginRequest(credential="google-id-token"))

    assert auth.user.name == "Grace"
    assert auth.token == "token-g-1"


def test_google_login_bad_token(fake_supabase) -> None:
    with pytest.raises(AuthenticationFailed):
        accounts.log_in_with_google(fake_supabase, GoogleLoginRequest(credential="forged"))


def test_resolve_session(fake_supabase) -> None:
    user = fake_supabase.auth.add_account("ada@example.com", "secret1", "Ada")

    session = accounts.resolve_session(fake_supabase, f"token-{user.id}")

    assert session.user.id == user.id
    assert session.access_token == f"token-{user.id}"


def test_resolve_session_rejects_unknown_token(fake_supabase) -> None:
    with pytest.raises(AuthenticationFailed):
        accounts.resolve_session(fake_supabase, "token-nobody")
