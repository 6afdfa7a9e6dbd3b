"""Supabase client factory.

Provides ``create_supabase()`` which builds a new Supabase client from the
connection parameters in ``Settings``.  Each request gets its own client;
nothing is cached at module level.
"""

from supabase import Client, create_client

from app.core.config import Settings, settings


def create_supabase(config: Settings | None = None) -> Client:
    """Return a fresh Supabase client for *config* (defaults to ``settings``)."""
    config = config or settings
    return create_client(config.SUPABASE_URL, config.SUPABASE_KEY)
