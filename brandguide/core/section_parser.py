"""Split a style guide markdown document into addressable sections.

Only level 1 and level 2 headings (``#`` / ``##``) delimit sections; deeper
headings stay in the body. Parsing is a pure function of the document text
and the catalog, so the same document always yields the same ids.

Sections are a derived view. Any edit produces a new document that must be
parsed again; do not hold on to Section objects across edits.
"""

import re
from dataclasses import dataclass

from brandguide.core.section_catalog import (
    COVER_SECTION_ID,
    STYLE_GUIDE_SECTIONS,
    SectionCatalogEntry,
    get_catalog_entry,
    match_catalog,
)
from brandguide.core.tiers import LOWEST_TIER, Tier

HEADING_PATTERN = re.compile(r"^(#{1,2})[ \t]+(\S.*)$", re.MULTILINE)

# Synthetic section used when a document has no level 1/2 heading
UNSECTIONED_ID = "style-guide"
UNSECTIONED_TITLE = "Style Guide"

COVER_TITLE = "Cover Page"


@dataclass(frozen=True)
class HeadingSpan:
    """Location of one section heading inside a document."""

    level: int
    title: str
    start: int
    """Offset of the first character of the heading line."""

    body_start: int
    """Offset just past the heading line (and its newline, if any)."""


@dataclass(frozen=True)
class Section:
    """One heading-delimited span of a document."""

    id: str
    title: str
    content: str
    level: int
    catalog_match: SectionCatalogEntry | None = None
    min_tier: Tier = LOWEST_TIER

    @property
    def markdown(self) -> str:
        """Section rebuilt as ``## title`` plus body."""
        return render_section(self.title, self.content)


def find_headings(document: str) -> list[HeadingSpan]:
    """Locate every level 1/2 heading in document order."""
    spans: list[HeadingSpan] = []
    for match in HEADING_PATTERN.finditer(document):
        line_end = match.end()
        body_start = line_end + 1 if line_end < len(document) else line_end
        spans.append(
            HeadingSpan(
                level=len(match.group(1)),
                title=match.group(2).strip(),
                start=match.start(),
                body_start=body_start,
            )
        )
    return spans


def slugify_heading(title: str) -> str:
    """
    Generate a URL-safe id from heading text.

    Lowercases, drops anything other than letters, digits, whitespace and
    hyphens, turns whitespace runs into hyphens, then collapses and trims
    hyphens. May return an empty string.
    """
    slug = title.lower()
    slug = re.sub(r"[^a-z0-9\s-]", "", slug)
    slug = re.sub(r"\s+", "-", slug)
    slug = re.sub(r"-+", "-", slug)
    return slug.strip("-")


def section_id_from_heading(
    title: str,
    catalog: tuple[SectionCatalogEntry, ...] = STYLE_GUIDE_SECTIONS,
) -> str:
    """Id an editor heading would get, without positional context."""
    entry = match_catalog(title, catalog)
    if entry:
        return entry.id
    return slugify_heading(title) or "section"


def render_section(title: str, content: str) -> str:
    return f"## {title}\n\n{content}".strip()


def render_sections(sections: list[Section]) -> str:
    """Join sections back into one document, separated by a blank line."""
    return "\n\n".join(section.markdown for section in sections)


def parse_sections(
    document: str,
    catalog: tuple[SectionCatalogEntry, ...] = STYLE_GUIDE_SECTIONS,
) -> list[Section]:
    """
    Parse markdown into an ordered list of sections.

    Args:
        document: Markdown text (may be empty)
        catalog: Known sections used to assign ids and tiers

    Returns:
        Sections in document order. Empty or whitespace-only input yields an
        empty list; a document without headings yields a single synthetic
        ``style-guide`` section holding the whole trimmed text.
    """
    if not document or not document.strip():
        return []

    headings = find_headings(document)
    if not headings:
        return [
            Section(
                id=UNSECTIONED_ID,
                title=UNSECTIONED_TITLE,
                content=document.strip(),
                level=2,
            )
        ]

    sections: list[Section] = []
    seen_ids: set[str] = set()
    for index, heading in enumerate(headings):
        end = headings[index + 1].start if index + 1 < len(headings) else len(document)
        content = document[heading.body_start:end].strip()

        entry = match_catalog(heading.title, catalog)
        section_id = entry.id if entry else slugify_heading(heading.title)
        if not section_id:
            section_id = f"section-{index}"
        section_id = _dedupe_id(section_id, index, seen_ids)
        seen_ids.add(section_id)

        sections.append(
            Section(
                id=section_id,
                title=heading.title,
                content=content,
                level=heading.level,
                catalog_match=entry,
                min_tier=entry.min_tier if entry else LOWEST_TIER,
            )
        )

    return sections


def _dedupe_id(section_id: str, index: int, seen_ids: set[str]) -> str:
    if section_id not in seen_ids:
        return section_id
    candidate = f"{section_id}-{index}"
    suffix = 1
    while candidate in seen_ids:
        candidate = f"{section_id}-{index}-{suffix}"
        suffix += 1
    return candidate


def with_cover_section(
    sections: list[Section],
    catalog: tuple[SectionCatalogEntry, ...] = STYLE_GUIDE_SECTIONS,
) -> list[Section]:
    """Prepend the cover placeholder the guide view renders before the content."""
    entry = get_catalog_entry(COVER_SECTION_ID, catalog)
    cover = Section(
        id=COVER_SECTION_ID,
        title=COVER_TITLE,
        content="",
        level=1,
        catalog_match=entry,
        min_tier=entry.min_tier if entry else LOWEST_TIER,
    )
    return [cover, *sections]


def default_open_sections(sections: list[Section]) -> list[str]:
    """Sections expanded on first render: the first one, plus the voice section."""
    if not sections:
        return []

    defaults = [sections[0].id]
    for section in sections:
        if "voice" in section.title.lower():
            if section.id not in defaults:
                defaults.append(section.id)
            break
    return defaults
