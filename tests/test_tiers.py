"""Tests for subscription tier ordering and unlock checks."""

import pytest

from brandguide.core.section_catalog import STYLE_GUIDE_SECTIONS, match_catalog
from brandguide.core.tiers import (
    Tier,
    can_add_custom_sections,
    can_use_ai_assist,
    is_unlocked,
    normalize_tier,
    tier_rank,
    unlock_checker,
)


class TestNormalizeTier:
    @pytest.mark.parametrize(
        "value,expected",
        [
            (Tier.PRO, Tier.PRO),
            ("agency", Tier.AGENCY),
            (" PRO ", Tier.PRO),
            ("free", Tier.STARTER),
            ("team", Tier.AGENCY),
            (" Team ", Tier.AGENCY),
            ("enterprise", Tier.STARTER),
            ("", Tier.STARTER),
            (None, Tier.STARTER),
            (42, Tier.STARTER),
        ],
    )
    def test_values(self, value, expected):
        assert normalize_tier(value) == expected

    def test_total_order(self):
        assert tier_rank(Tier.STARTER) < tier_rank(Tier.PRO) < tier_rank(Tier.AGENCY)


class TestIsUnlocked:
    def test_pro_section(self):
        assert is_unlocked(Tier.AGENCY, Tier.PRO)
        assert is_unlocked(Tier.PRO, Tier.PRO)
        assert not is_unlocked(Tier.STARTER, Tier.PRO)

    def test_agency_section(self):
        assert is_unlocked("agency", "agency")
        assert not is_unlocked("pro", "agency")

    @pytest.mark.parametrize("tier", list(Tier) + ["free", "bogus", None])
    def test_no_minimum_always_unlocked(self, tier):
        assert is_unlocked(tier, None)

    @pytest.mark.parametrize("tier", list(Tier))
    def test_starter_minimum_always_unlocked(self, tier):
        assert is_unlocked(tier, Tier.STARTER)

    def test_unknown_user_tier_degrades_to_starter(self):
        assert not is_unlocked("platinum", Tier.PRO)
        assert is_unlocked("platinum", Tier.STARTER)

    def test_unknown_min_tier_degrades_to_starter(self):
        assert is_unlocked(Tier.STARTER, "mystery")

    def test_monotonic_over_all_pairs(self):
        for min_tier in Tier:
            unlocked = [is_unlocked(user, min_tier) for user in Tier]
            # once unlocked at some tier, unlocked at every higher tier
            assert unlocked == sorted(unlocked)


class TestUnlockChecker:
    def test_binds_user_tier(self):
        check = unlock_checker("pro")
        assert check(None)
        assert check(Tier.PRO)
        assert not check(Tier.AGENCY)

    def test_catalog_pro_sections_locked_for_starter(self):
        check = unlock_checker(Tier.STARTER)
        rules = match_catalog("25 Style Rules")
        assert rules is not None
        assert not check(rules.min_tier)
        assert check(match_catalog("Brand Voice").min_tier)

    def test_catalog_has_free_and_pro_entries(self):
        tiers = {entry.min_tier for entry in STYLE_GUIDE_SECTIONS}
        assert Tier.STARTER in tiers
        assert Tier.PRO in tiers


class TestPaidFeatures:
    def test_custom_sections(self):
        assert not can_add_custom_sections("starter")
        assert not can_add_custom_sections("free")
        assert can_add_custom_sections("pro")
        assert can_add_custom_sections(Tier.AGENCY)

    def test_ai_assist(self):
        assert not can_use_ai_assist(None)
        assert can_use_ai_assist("agency")
