"""Supabase client for the simulation stores."""

import logging
from functools import lru_cache

from supabase import Client, create_client

from ..config import settings
from ..errors import RepositoryFetchError


@lru_cache()
def get_supabase_client() -> Client | None:
    """Get cached Supabase client instance, or None when credentials are missing.

    Creating the client does not test the connection; queries may still fail
    with network errors.
    """
    if not settings.supabase_url or not settings.supabase_key:
        logging.warning("Supabase credentials not configured (missing URL or key)")
        return None

    try:
        return create_client(settings.supabase_url, settings.supabase_key)
    except Exception as e:
        logging.error(f"Failed to create Supabase client: {e}")
        return None


def require_supabase_client() -> Client:
    client = get_supabase_client()
    if client is None:
        raise RepositoryFetchError(
            "Supabase is not configured. Set DSIM_SUPABASE_URL and DSIM_SUPABASE_KEY environment variables."
        )
    return client
