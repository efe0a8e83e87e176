"""User-authored sections appended to a guide."""

from brandguide.core.logging import get_logger
from brandguide.core.section_catalog import (
    STYLE_GUIDE_SECTIONS,
    SectionCatalogEntry,
    is_catalog_heading,
)
from brandguide.core.section_parser import parse_sections, render_section

logger = get_logger(__name__)

CUSTOM_SECTION_LIMIT = 5
CUSTOM_SECTION_TITLE_MAX_CHARS = 60
CUSTOM_SECTION_PLACEHOLDER = "Add your content here."


def count_custom_sections(
    document: str,
    catalog: tuple[SectionCatalogEntry, ...] = STYLE_GUIDE_SECTIONS,
) -> int:
    """Number of sections whose heading matches no catalog entry."""
    return sum(
        1 for section in parse_sections(document, catalog)
        if not is_catalog_heading(section.title, catalog)
    )


def insert_custom_section(
    document: str,
    title: str,
    *,
    limit: int = CUSTOM_SECTION_LIMIT,
    max_title_chars: int = CUSTOM_SECTION_TITLE_MAX_CHARS,
    catalog: tuple[SectionCatalogEntry, ...] = STYLE_GUIDE_SECTIONS,
) -> str:
    """
    Append a new ``## title`` section with placeholder body.

    Does not deduplicate: calling twice with the same title appends two
    sections.

    Args:
        document: Full guide markdown
        title: Heading text; whitespace runs (newlines included) collapse to
            one space, then it is cut to ``max_title_chars``
        limit: Max custom (non-catalog) sections allowed in the document
        max_title_chars: Title length cap
        catalog: Catalog used to tell custom sections from known ones

    Returns:
        The new document, or ``document`` unchanged when the title is blank
        or the custom section limit is already reached
    """
    # One call adds exactly one heading
    clean_title = " ".join((title or "").split())[:max_title_chars].strip()
    if not clean_title:
        return document

    existing = count_custom_sections(document, catalog)
    if existing >= limit:
        logger.info(f"Custom section limit reached ({existing}/{limit}); not inserting")
        return document

    new_section = render_section(clean_title, CUSTOM_SECTION_PLACEHOLDER)
    base = (document or "").rstrip()
    if not base:
        return new_section
    return f"{base}\n\n{new_section}"
