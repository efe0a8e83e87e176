"""Supabase client for style guide storage."""

from functools import lru_cache

from supabase import Client, create_client

from brandguide.core.config import get_settings
from brandguide.core.logging import get_logger

logger = get_logger(__name__)


class StorageUnavailableError(RuntimeError):
    """Supabase is not configured or the client could not be created."""


@lru_cache(maxsize=1)
def get_supabase() -> Client:
    """
    Get the service-role Supabase client (cached singleton).

    Every style guide query filters on the owner id itself; the service role
    bypasses row level security.

    Returns:
        Supabase client

    Raises:
        StorageUnavailableError: Missing credentials or client creation failed
    """
    settings = get_settings()
    if not settings.SUPABASE_URL or not settings.SUPABASE_SERVICE_ROLE_KEY:
        raise StorageUnavailableError(
            "Supabase is not configured (SUPABASE_URL, SUPABASE_SERVICE_ROLE_KEY)"
        )

    try:
        return create_client(settings.SUPABASE_URL, settings.SUPABASE_SERVICE_ROLE_KEY)
    except Exception as e:
        logger.error(f"Supabase client initialization failed: {e}")
        raise StorageUnavailableError(f"Failed to initialize Supabase client: {e}") from e
