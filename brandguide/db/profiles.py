"""Database operations for user profiles (subscription tier only)."""

from uuid import UUID

from brandguide.core.logging import get_logger
from brandguide.core.tiers import LOWEST_TIER, Tier, normalize_tier
from brandguide.db.supabase_client import get_supabase

logger = get_logger(__name__)


def get_subscription_tier(user_id: UUID) -> Tier:
    """
    Get a user's subscription tier.

    Missing profiles, unknown values and lookup errors all degrade to the
    lowest tier; the tier gates reads and must not fail a render.

    Args:
        user_id: Auth user UUID (profiles.id)

    Returns:
        The user's Tier
    """
    try:
        supabase = get_supabase()
        result = (
            supabase.table("profiles")
            .select("subscription_tier")
            .eq("id", str(user_id))
            .execute()
        )
    except Exception as e:
        logger.error(f"Failed to fetch subscription tier for user {user_id}: {e}")
        return LOWEST_TIER

    if not result.data:
        return LOWEST_TIER
    return normalize_tier(result.data[0].get("subscription_tier"))
