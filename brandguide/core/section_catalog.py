"""Static catalog of known style guide sections.

Maps heading patterns to canonical section ids, display labels and the
minimum tier needed to see a section. Pure data: the parser receives the
catalog as an argument, so alternate catalogs can be used in tests.
"""

import re
from dataclasses import dataclass

from brandguide.core.tiers import Tier

# Reserved id for the rendered cover page. Never produced by real content
# unless a heading literally starts with "Cover".
COVER_SECTION_ID = "cover"


@dataclass(frozen=True)
class SectionCatalogEntry:
    id: str
    label: str
    min_tier: Tier
    match_heading: re.Pattern[str]

    def matches(self, title: str) -> bool:
        return bool(self.match_heading.search(title))


STYLE_GUIDE_SECTIONS: tuple[SectionCatalogEntry, ...] = (
    SectionCatalogEntry(
        id=COVER_SECTION_ID,
        label="Cover Page",
        min_tier=Tier.STARTER,
        match_heading=re.compile(r"^Cover", re.IGNORECASE),
    ),
    SectionCatalogEntry(
        id="about",
        label="About Brand",
        min_tier=Tier.STARTER,
        match_heading=re.compile(r"^About", re.IGNORECASE),
    ),
    SectionCatalogEntry(
        id="how-to-use",
        label="How to Use",
        min_tier=Tier.STARTER,
        match_heading=re.compile(r"^How to Use", re.IGNORECASE),
    ),
    SectionCatalogEntry(
        id="general-guidelines",
        label="General Guidelines",
        min_tier=Tier.STARTER,
        match_heading=re.compile(r"^General Guidelines", re.IGNORECASE),
    ),
    SectionCatalogEntry(
        id="brand-voice",
        label="Brand Voice",
        min_tier=Tier.STARTER,
        match_heading=re.compile(r"^Brand Voice", re.IGNORECASE),
    ),
    SectionCatalogEntry(
        id="style-rules",
        label="Style Rules",
        min_tier=Tier.PRO,
        match_heading=re.compile(r"^(?:25 )?(?:Core|Style) Rules", re.IGNORECASE),
    ),
    SectionCatalogEntry(
        id="examples",
        label="Before / After",
        min_tier=Tier.PRO,
        match_heading=re.compile(r"^Before.*After", re.IGNORECASE),
    ),
)


def match_catalog(
    title: str,
    catalog: tuple[SectionCatalogEntry, ...] = STYLE_GUIDE_SECTIONS,
) -> SectionCatalogEntry | None:
    """Return the first catalog entry whose pattern matches the heading text."""
    for entry in catalog:
        if entry.matches(title):
            return entry
    return None


def is_catalog_heading(
    title: str,
    catalog: tuple[SectionCatalogEntry, ...] = STYLE_GUIDE_SECTIONS,
) -> bool:
    return match_catalog(title, catalog) is not None


def get_catalog_entry(
    section_id: str,
    catalog: tuple[SectionCatalogEntry, ...] = STYLE_GUIDE_SECTIONS,
) -> SectionCatalogEntry | None:
    """Look up a catalog entry by its canonical id."""
    for entry in catalog:
        if entry.id == section_id:
            return entry
    return None
