"""Subscription tiers and section unlock checks.

Tiers:  starter → pro → agency

Only the ordering matters. Evaluation is pure and total: unknown or missing
tier values degrade to the lowest tier instead of raising, since the unlock
check runs on every render.
"""

from collections.abc import Callable
from enum import Enum


class Tier(str, Enum):
    """Subscription tier, lowest first."""

    STARTER = "starter"
    PRO = "pro"
    AGENCY = "agency"


TIER_ORDER: tuple[Tier, ...] = (Tier.STARTER, Tier.PRO, Tier.AGENCY)

LOWEST_TIER = TIER_ORDER[0]

# Stored plan names that map onto a tier (legacy free, billing team plan)
TIER_ALIASES: dict[str, Tier] = {
    "free": Tier.STARTER,
    "team": Tier.AGENCY,
}


def normalize_tier(value: Tier | str | None) -> Tier:
    """Coerce a stored or user-supplied tier value to a Tier.

    Accepts Tier members, strings (case and whitespace insensitive) and None.
    Anything unrecognised maps to the lowest tier.
    """
    if isinstance(value, Tier):
        return value
    if not isinstance(value, str):
        return LOWEST_TIER

    key = value.strip().lower()
    if key in TIER_ALIASES:
        return TIER_ALIASES[key]
    try:
        return Tier(key)
    except ValueError:
        return LOWEST_TIER


def tier_rank(value: Tier | str | None) -> int:
    """Position of a tier in TIER_ORDER (0 = lowest)."""
    return TIER_ORDER.index(normalize_tier(value))


def is_unlocked(user_tier: Tier | str | None, min_tier: Tier | str | None = None) -> bool:
    """Whether a user at ``user_tier`` may see and edit a section gated at ``min_tier``.

    A section with no minimum is always unlocked.
    """
    if min_tier is None:
        return True
    return tier_rank(user_tier) >= tier_rank(min_tier)


def unlock_checker(user_tier: Tier | str | None) -> Callable[[Tier | str | None], bool]:
    """Bind a user's tier, returning the ``min_tier -> bool`` predicate."""
    resolved = normalize_tier(user_tier)

    def _check(min_tier: Tier | str | None = None) -> bool:
        return is_unlocked(resolved, min_tier)

    return _check


PAID_FEATURE_TIER = Tier.PRO


def can_add_custom_sections(user_tier: Tier | str | None) -> bool:
    """Custom sections are a paid feature (pro and above)."""
    return is_unlocked(user_tier, PAID_FEATURE_TIER)


def can_use_ai_assist(user_tier: Tier | str | None) -> bool:
    """AI rewrites are a paid feature (pro and above)."""
    return is_unlocked(user_tier, PAID_FEATURE_TIER)
