"""
Shared fixtures: a valid health-data payload and an in-memory stand-in for the
Supabase client (auth + one table) so routes can run without a network.
"""

from __future__ import annotations

import itertools
from collections.abc import Iterator
from types import SimpleNamespace
from typing import Any

import pytest
from supabase import AuthError


class FakeAuthError(AuthError):
    def __init__(self, message: str) -> None:
        Exception.__init__(self, message)
        self.message = message


def _user(user_id: str, email: str, name: str = "") -> SimpleNamespace:
    return SimpleNamespace(id=user_id, email=email, user_metadata={"name": name})


class FakeAuth:
    """Accounts keyed by email; tokens are ``token-<user id>``."""

    def __init__(self) -> None:
        self.accounts: dict[str, dict[str, Any]] = {}
        self.google_tokens: dict[str, SimpleNamespace] = {}
        self.confirm_email = False
        self._ids = itertools.count(1)

    def add_account(self, email: str, password: str, name: str = "") -> SimpleNamespace:
        user = _user(f"user-{next(self._ids)}", email, name)
        self.accounts[email] = {"password": password, "user": user}
        return user

    def _auth_response(self, user: SimpleNamespace) -> SimpleNamespace:
        return SimpleNamespace(user=user, session=SimpleNamespace(access_token=f"token-{user.id}"))

    def sign_up(self, credentials: dict) -> SimpleNamespace:
        if credentials["email"] in self.accounts:
            raise FakeAuthError("User already registered")
        user = self.add_account(
            credentials["email"], credentials["password"], credentials["options"]["data"]["name"]
        )
        if self.confirm_email:
            return SimpleNamespace(user=user, session=None)
        return self._auth_response(user)

    def sign_in_with_password(self, credentials: dict) -> SimpleNamespace:
        account = self.accounts.get(credentials["email"])
        if account is None or account["password"] != credentials["password"]:
            raise FakeAuthError("Invalid login credentials")
        return self._auth_response(account["user"])

    def sign_in_with_id_token(self, credentials: dict) -> SimpleNamespace:
        user = self.google_tokens.get(credentials["token"])
        if credentials["provider"] != "google" or user is None:
            raise FakeAuthError("Bad ID token")
        return self._auth_response(user)

    def get_user(self, token: str) -> SimpleNamespace | None:
        users = [a["user"] for a in self.accounts.values()] + list(self.google_tokens.values())
        for user in users:
            if token == f"token-{user.id}":
                return SimpleNamespace(user=user)
        raise FakeAuthError("invalid JWT")


class FakeQuery:
    """Just enough of the postgrest builder for the history store."""

    def __init__(self, table: FakeTable) -> None:
        self.table = table
        self.action = "select"
        self.payload: dict | None = None
        self.filters: list[tuple[str, Any]] = []
        self.order_by: tuple[str, bool] | None = None

    def select(self, *_columns: str) -> FakeQuery:
        self.action = "select"
        return self

    def insert(self, row: dict) -> FakeQuery:
        self.action = "insert"
        self.payload = row
        return self

    def delete(self) -> FakeQuery:
        self.action = "delete"
        return self

    def eq(self, column: str, value: Any) -> FakeQuery:
        self.filters.append((column, value))
        return self

    def order(self, column: str, desc: bool = False) -> FakeQuery:
        self.order_by = (column, desc)
        return self

    def _matches(self, row: dict) -> bool:
        return all(str(row.get(col)) == str(val) for col, val in self.filters)

    def execute(self) -> SimpleNamespace:
        if self.table.fail_with is not None:
            raise self.table.fail_with
        if self.action == "insert":
            row = {
                **self.payload,
                "id": str(next(self.table.ids)),
                "created_at": f"2026-01-01T00:00:{len(self.table.rows):02d}+00:00",
            }
            self.table.rows.append(row)
            return SimpleNamespace(data=[row])
        matched = [row for row in self.table.rows if self._matches(row)]
        if self.action == "delete":
            self.table.rows = [row for row in self.table.rows if not self._matches(row)]
            return SimpleNamespace(data=matched)
        if self.order_by is not None:
            column, desc = self.order_by
            matched.sort(key=lambda row: row[column], reverse=desc)
        return SimpleNamespace(data=matched)


class FakeTable:
    def __init__(self) -> None:
        self.rows: list[dict] = []
        self.ids = itertools.count(1)
        self.fail_with: Exception | None = None


class FakeSupabase:
    def __init__(self) -> None:
        self.auth = FakeAuth()
        self.tables: dict[str, FakeTable] = {}

    def table(self, name: str) -> FakeQuery:
        return FakeQuery(self.tables.setdefault(name, FakeTable()))


@pytest.fixture
def fake_supabase() -> FakeSupabase:
    return FakeSupabase()


@pytest.fixture
def health_data() -> dict[str, Any]:
    """Scenario 1 payload: healthy vitals and a fever."""
    return {
        "Age": 25,
        "Heart_Rate_bpm": 72,
        "Body_Temperature_C": 37.0,
        "Oxygen_Saturation_": 98,
        "Gender_Male": 1,
        "Systolic": 120,
        "Diastolic": 80,
        "Fever": 1,
    }


@pytest.fixture
def prediction_payload() -> dict[str, Any]:
    return {
        "predictions": [
            {
                "disease": "Influenza",
                "description": "A contagious respiratory illness caused by influenza viruses.",
                "confidence": 82.5,
                "preventive": ["Rest", "Stay hydrated"],
            },
            {
                "disease": "Common Cold",
                "description": "A mild viral infection of the nose and throat.",
                "confidence": 41,
                "preventive": ["Wash hands often"],
            },
        ]
    }


@pytest.fixture
def api_client(fake_supabase: FakeSupabase) -> Iterator:
    """TestClient with Supabase replaced by the in-memory fake."""
    from fastapi.testclient import TestClient

    from healthcheck.main import app
    from healthcheck.routers.auth import get_store

    app.dependency_overrides[get_store] = lambda: fake_supabase
    with TestClient(app) as client:
        yield client
    app.dependency_overrides.clear()
