"""Database operations for style guides."""

from datetime import datetime, timezone
from typing import Any
from uuid import UUID

from brandguide.core.logging import get_logger
from brandguide.db.supabase_client import get_supabase

logger = get_logger(__name__)


def get_style_guide(guide_id: UUID, user_id: UUID) -> dict[str, Any] | None:
    """
    Get a style guide owned by a user.

    Args:
        guide_id: Style guide UUID
        user_id: Owner UUID

    Returns:
        Guide row (id, title, brand_name, content_md, ...) or None
    """
    supabase = get_supabase()
    result = (
        supabase.table("style_guides")
        .select("*")
        .eq("id", str(guide_id))
        .eq("user_id", str(user_id))
        .execute()
    )
    if not result.data:
        return None
    return result.data[0]


def update_style_guide_content(
    guide_id: UUID,
    user_id: UUID,
    content_md: str,
) -> dict[str, Any] | None:
    """
    Persist a guide's full markdown.

    Args:
        guide_id: Style guide UUID
        user_id: Owner UUID
        content_md: Full guide markdown

    Returns:
        Updated row, or None if the guide does not exist for this user
    """
    supabase = get_supabase()
    result = (
        supabase.table("style_guides")
        .update(
            {
                "content_md": content_md,
                "updated_at": datetime.now(timezone.utc).isoformat(),
            }
        )
        .eq("id", str(guide_id))
        .eq("user_id", str(user_id))
        .execute()
    )
    if not result.data:
        return None

    logger.info(
        f"Saved style guide {guide_id}",
        extra={"guide_id": str(guide_id), "extra_data": {"chars": len(content_md)}},
    )
    return result.data[0]
