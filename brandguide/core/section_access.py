"""Read and replace single sections of a style guide document.

Both operations are total: empty documents, empty ids and ids that are not
in the document are treated as "nothing to do" rather than errors. A stale
section id (for example after a concurrent edit) simply leaves the document
as it was.
"""

from brandguide.core.section_catalog import STYLE_GUIDE_SECTIONS, SectionCatalogEntry
from brandguide.core.section_parser import find_headings, parse_sections


def get_section(
    document: str,
    section_id: str,
    catalog: tuple[SectionCatalogEntry, ...] = STYLE_GUIDE_SECTIONS,
) -> str:
    """
    Get a section's markdown (heading + body) by id.

    Args:
        document: Full guide markdown
        section_id: Section id as produced by parse_sections
        catalog: Catalog used for parsing

    Returns:
        ``## Title\\n\\nbody`` for the section, or "" if not found
    """
    if not document or not section_id:
        return ""
    for section in parse_sections(document, catalog):
        if section.id == section_id:
            return section.markdown
    return ""


def section_spans(
    document: str,
    catalog: tuple[SectionCatalogEntry, ...] = STYLE_GUIDE_SECTIONS,
) -> dict[str, tuple[int, int]]:
    """
    Map each section id to its ``(start, end)`` character span.

    The span runs from the section's heading line to the next level 1/2
    heading (or end of document). A document without headings maps its
    synthetic section to the whole text.
    """
    if not document:
        return {}

    sections = parse_sections(document, catalog)
    headings = find_headings(document)
    if not headings:
        return {section.id: (0, len(document)) for section in sections}

    spans: dict[str, tuple[int, int]] = {}
    for index, (section, heading) in enumerate(zip(sections, headings)):
        end = headings[index + 1].start if index + 1 < len(headings) else len(document)
        spans[section.id] = (heading.start, end)
    return spans


def splice_section(document: str, start: int, end: int, new_markdown: str) -> str:
    """Put stripped ``new_markdown`` in place of ``document[start:end]``.

    Text before the span is kept verbatim; text after it is re-attached
    behind a blank line.
    """
    before = document[:start]
    after = document[end:]
    return before + new_markdown.strip() + ("\n\n" + after if after else "")


def replace_section(
    document: str,
    section_id: str,
    new_markdown: str,
    catalog: tuple[SectionCatalogEntry, ...] = STYLE_GUIDE_SECTIONS,
) -> str:
    """
    Replace one section's span with new markdown.

    Args:
        document: Full guide markdown
        section_id: Section to replace
        new_markdown: Full section markdown (heading + body); stripped before use
        catalog: Catalog used for parsing

    Returns:
        The new document, or ``document`` unchanged if the id is not present
    """
    if not document or not section_id:
        return document

    span = section_spans(document, catalog).get(section_id)
    if span is None:
        return document
    return splice_section(document, span[0], span[1], new_markdown)
