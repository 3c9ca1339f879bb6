"""Supabase client for accounts, sessions and diagnosis history."""

from supabase import create_client, Client

from healthcheck.config import SUPABASE_URL, SUPABASE_ANON_KEY
from healthcheck.services.errors import StoreUnavailable

_client: Client | None = None


def get_client() -> Client | None:
    global _client
    if _client is None and SUPABASE_URL and SUPABASE_ANON_KEY:
        _client = create_client(SUPABASE_URL, SUPABASE_ANON_KEY)
    return _client


def require_client() -> Client:
    """FastAPI dependency for routes that cannot work without Supabase."""
    client = get_client()
    if client is None:
        raise StoreUnavailable("Supabase is not configured (SUPABASE_URL / SUPABASE_ANON_KEY)")
    return client
