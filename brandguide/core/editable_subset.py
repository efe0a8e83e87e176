"""Editable subset of a guide and merging edits back into the full document.

The editor only ever sees the sections the user's tier unlocks. On change,
the edited subset is re-parsed and its sections are written back, position
by position, over the unlocked ids of the authoritative document. Locked
sections are never touched.
"""

from collections.abc import Callable
from dataclasses import dataclass, field

from brandguide.core.logging import get_logger
from brandguide.core.section_access import section_spans, splice_section
from brandguide.core.section_catalog import (
    COVER_SECTION_ID,
    STYLE_GUIDE_SECTIONS,
    SectionCatalogEntry,
)
from brandguide.core.section_parser import Section, parse_sections
from brandguide.core.tiers import Tier

logger = get_logger(__name__)

UnlockCheck = Callable[[Tier | None], bool]


@dataclass
class MergeReport:
    """Outcome of merging an edited subset into the full document."""

    document: str
    replaced_ids: list[str] = field(default_factory=list)
    skipped_ids: list[str] = field(default_factory=list)
    """Unlocked ids not written back (no edited counterpart, or absent from the
    document); those sections are left as they were."""

    extra_sections: int = 0
    """Sections in the edited subset beyond the unlocked ids (dropped)."""

    @property
    def has_drift(self) -> bool:
        return bool(self.skipped_ids) or self.extra_sections > 0


def _editable_sections(sections: list[Section], is_unlocked: UnlockCheck) -> list[Section]:
    return [
        section
        for section in sections
        if section.id != COVER_SECTION_ID and is_unlocked(section.min_tier)
    ]


def build_editable_subset(sections: list[Section], is_unlocked: UnlockCheck) -> str:
    """
    Build the markdown the editor works on.

    Args:
        sections: Parsed sections of the full document (cover may be included)
        is_unlocked: Predicate over a section's minimum tier

    Returns:
        Unlocked, non-cover sections joined by a blank line, in document order
    """
    editable = _editable_sections(sections, is_unlocked)
    return "\n\n".join(section.markdown for section in editable)


def unlocked_section_ids(sections: list[Section], is_unlocked: UnlockCheck) -> list[str]:
    """Ordered ids of the sections included in build_editable_subset."""
    return [section.id for section in _editable_sections(sections, is_unlocked)]


def build_locked_subset(sections: list[Section], is_unlocked: UnlockCheck) -> str:
    """Read-only markdown of the locked sections that have content."""
    locked = [
        section
        for section in sections
        if section.id != COVER_SECTION_ID
        and not is_unlocked(section.min_tier)
        and section.content.strip()
    ]
    return "\n\n".join(section.markdown for section in locked)


def merge_editable_with_report(
    full_document: str,
    edited_subset: str,
    ordered_unlocked_ids: list[str],
    catalog: tuple[SectionCatalogEntry, ...] = STYLE_GUIDE_SECTIONS,
) -> MergeReport:
    """
    Merge edited sections back into the full document, reporting what happened.

    Sections are paired by position: the i-th edited section replaces the
    i-th unlocked id. Every id is resolved to its span in ``full_document``
    before anything is written, so a renamed heading that now parses to a
    later unlocked id cannot be picked up by a later replacement. Only
    min(len(ids), len(edited)) sections are replaced; a count mismatch or a
    stale id is logged, never raised.

    Args:
        full_document: Authoritative guide markdown
        edited_subset: Markdown reported by the editor
        ordered_unlocked_ids: Ids the subset was built from, in order
        catalog: Catalog used for parsing

    Returns:
        MergeReport with the merged document
    """
    if not full_document or not edited_subset:
        return MergeReport(document=full_document)

    edited_sections = parse_sections(edited_subset, catalog)
    pair_count = min(len(ordered_unlocked_ids), len(edited_sections))
    spans = section_spans(full_document, catalog)

    planned: list[tuple[int, int, str]] = []
    replaced: list[str] = []
    skipped: list[str] = []
    for i in range(pair_count):
        section_id = ordered_unlocked_ids[i]
        span = spans.get(section_id)
        if span is None or section_id in replaced:
            skipped.append(section_id)
            continue
        planned.append((span[0], span[1], edited_sections[i].markdown))
        replaced.append(section_id)
    skipped.extend(ordered_unlocked_ids[pair_count:])

    # Last span first, so earlier offsets stay valid
    result = full_document
    for start, end, markdown in sorted(planned, key=lambda item: item[0], reverse=True):
        result = splice_section(result, start, end, markdown)

    report = MergeReport(
        document=result,
        replaced_ids=replaced,
        skipped_ids=skipped,
        extra_sections=max(0, len(edited_sections) - pair_count),
    )

    if report.has_drift:
        logger.warning(
            f"Editable subset drifted: {len(report.skipped_ids)} unlocked ids not written "
            f"back, {report.extra_sections} extra sections dropped",
            extra={
                "extra_data": {
                    "expected_sections": len(ordered_unlocked_ids),
                    "edited_sections": len(edited_sections),
                    "skipped_ids": report.skipped_ids,
                    "extra_sections": report.extra_sections,
                }
            },
        )

    return report


def merge_editable_into_full(
    full_document: str,
    edited_subset: str,
    ordered_unlocked_ids: list[str],
    catalog: tuple[SectionCatalogEntry, ...] = STYLE_GUIDE_SECTIONS,
) -> str:
    """Merge edited sections back into the full document (see merge_editable_with_report)."""
    return merge_editable_with_report(
        full_document, edited_subset, ordered_unlocked_ids, catalog
    ).document
