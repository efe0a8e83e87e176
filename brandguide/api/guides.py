"""API endpoints for style guide sections, editing and rewrites."""

import logging
from typing import Any
from uuid import UUID

from fastapi import APIRouter, HTTPException, Query

from brandguide.chains.rewrite_section import make_openai_rewriter
from brandguide.core.config import get_settings
from brandguide.core.custom_sections import count_custom_sections, insert_custom_section
from brandguide.core.editable_subset import (
    build_editable_subset,
    build_locked_subset,
    merge_editable_with_report,
    unlocked_section_ids,
)
from brandguide.core.logging import get_logger, log_with_context
from brandguide.core.rewrite_scope import (
    RewriteRequest,
    RewriteScopeResolver,
    RewriteServiceError,
    RewriteValidationError,
)
from brandguide.core.schemas_guides import (
    AddSectionRequest,
    AddSectionResponse,
    EditableSubsetResponse,
    GuideRewriteRequest,
    GuideRewriteResponse,
    GuideSectionsResponse,
    MergeEditsRequest,
    MergeEditsResponse,
    ReplaceSectionRequest,
    SectionContentResponse,
    SectionSummary,
)
from brandguide.core.section_access import get_section, replace_section
from brandguide.core.section_catalog import is_catalog_heading
from brandguide.core.section_parser import (
    default_open_sections,
    parse_sections,
    with_cover_section,
)
from brandguide.core.tiers import (
    can_add_custom_sections,
    can_use_ai_assist,
    is_unlocked,
    unlock_checker,
)
from brandguide.db.profiles import get_subscription_tier
from brandguide.db.style_guides import get_style_guide, update_style_guide_content
from brandguide.db.supabase_client import StorageUnavailableError

logger = get_logger(__name__)

router = APIRouter()


def _load_guide(guide_id: UUID, user_id: UUID) -> dict[str, Any]:
    guide = get_style_guide(guide_id, user_id)
    if not guide:
        raise HTTPException(status_code=404, detail="Guide not found or access denied")
    return guide


def _save_guide(guide_id: UUID, user_id: UUID, content_md: str) -> None:
    saved = update_style_guide_content(guide_id, user_id, content_md)
    if saved is None:
        raise HTTPException(status_code=404, detail="Guide not found or access denied")


@router.get("/guides/{guide_id}/sections", response_model=GuideSectionsResponse)
async def list_guide_sections(
    guide_id: UUID,
    user_id: UUID = Query(..., description="Requesting user"),
) -> GuideSectionsResponse:
    """
    List a guide's sections with lock state for the requesting user.

    The cover placeholder is always first.
    """
    try:
        guide = _load_guide(guide_id, user_id)
        tier = get_subscription_tier(user_id)
        settings = get_settings()

        content_md = guide.get("content_md") or ""
        sections = with_cover_section(parse_sections(content_md))

        summaries = [
            SectionSummary(
                id=section.id,
                title=section.title,
                level=section.level,
                min_tier=section.min_tier,
                locked=not is_unlocked(tier, section.min_tier),
                is_custom=not is_catalog_heading(section.title),
            )
            for section in sections
        ]

        return GuideSectionsResponse(
            guide_id=str(guide_id),
            subscription_tier=tier,
            sections=summaries,
            default_open=default_open_sections(sections),
            custom_section_count=count_custom_sections(content_md),
            custom_section_limit=settings.CUSTOM_SECTION_LIMIT,
            can_add_section=can_add_custom_sections(tier),
        )

    except (HTTPException, StorageUnavailableError):
        raise
    except Exception as e:
        logger.exception(f"Failed to list sections for guide {guide_id}")
        raise HTTPException(status_code=500, detail=f"Failed to list sections: {str(e)}") from e


@router.get("/guides/{guide_id}/editable", response_model=EditableSubsetResponse)
async def get_editable_subset(
    guide_id: UUID,
    user_id: UUID = Query(..., description="Requesting user"),
) -> EditableSubsetResponse:
    """Build the markdown the editor shows: unlocked sections only."""
    try:
        guide = _load_guide(guide_id, user_id)
        tier = get_subscription_tier(user_id)
        check = unlock_checker(tier)

        sections = parse_sections(guide.get("content_md") or "")
        return EditableSubsetResponse(
            guide_id=str(guide_id),
            subscription_tier=tier,
            editable_markdown=build_editable_subset(sections, check),
            unlocked_section_ids=unlocked_section_ids(sections, check),
            locked_markdown=build_locked_subset(sections, check),
        )

    except (HTTPException, StorageUnavailableError):
        raise
    except Exception as e:
        logger.exception(f"Failed to build editable subset for guide {guide_id}")
        raise HTTPException(status_code=500, detail=f"Failed to load guide: {str(e)}") from e


@router.put("/guides/{guide_id}/editable", response_model=MergeEditsResponse)
async def save_editable_subset(
    guide_id: UUID,
    request: MergeEditsRequest,
    user_id: UUID = Query(..., description="Requesting user"),
) -> MergeEditsResponse:
    """
    Merge editor changes back into the full guide and persist it.

    Locked sections are never modified. If the editor's heading count no
    longer matches the unlocked ids, only the paired sections are replaced.
    """
    try:
        guide = _load_guide(guide_id, user_id)
        tier = get_subscription_tier(user_id)
        content_md = guide.get("content_md") or ""

        # Only ids the user may actually edit are accepted
        allowed = set(unlocked_section_ids(parse_sections(content_md), unlock_checker(tier)))
        if any(section_id not in allowed for section_id in request.unlocked_section_ids):
            raise HTTPException(status_code=403, detail="Section is locked for your plan")

        report = merge_editable_with_report(
            content_md, request.edited_markdown, request.unlocked_section_ids
        )
        if report.document != content_md:
            _save_guide(guide_id, user_id, report.document)

        log_with_context(
            logger,
            logging.INFO,
            "Merged editor changes",
            guide_id=str(guide_id),
            replaced=len(report.replaced_ids),
            skipped=len(report.skipped_ids),
            extra_sections=report.extra_sections,
        )

        return MergeEditsResponse(
            guide_id=str(guide_id),
            content_md=report.document,
            replaced_section_ids=report.replaced_ids,
            skipped_section_ids=report.skipped_ids,
            extra_sections=report.extra_sections,
        )

    except (HTTPException, StorageUnavailableError):
        raise
    except Exception as e:
        logger.exception(f"Failed to merge edits for guide {guide_id}")
        raise HTTPException(status_code=500, detail=f"Failed to save guide: {str(e)}") from e


@router.get(
    "/guides/{guide_id}/sections/{section_id}",
    response_model=SectionContentResponse,
)
async def read_guide_section(
    guide_id: UUID,
    section_id: str,
    user_id: UUID = Query(..., description="Requesting user"),
) -> SectionContentResponse:
    """Get one section's markdown."""
    guide = _load_guide(guide_id, user_id)
    markdown = get_section(guide.get("content_md") or "", section_id)
    if not markdown:
        raise HTTPException(status_code=404, detail="Section not found")
    return SectionContentResponse(section_id=section_id, markdown=markdown)


@router.put(
    "/guides/{guide_id}/sections/{section_id}",
    response_model=SectionContentResponse,
)
async def replace_guide_section(
    guide_id: UUID,
    section_id: str,
    request: ReplaceSectionRequest,
    user_id: UUID = Query(..., description="Requesting user"),
) -> SectionContentResponse:
    """Replace one section and persist the guide."""
    guide = _load_guide(guide_id, user_id)
    tier = get_subscription_tier(user_id)
    content_md = guide.get("content_md") or ""

    section = next((s for s in parse_sections(content_md) if s.id == section_id), None)
    if section is None:
        raise HTTPException(status_code=404, detail="Section not found")
    if not is_unlocked(tier, section.min_tier):
        raise HTTPException(status_code=403, detail="Section is locked for your plan")

    new_content = replace_section(content_md, section_id, request.markdown)
    if new_content != content_md:
        _save_guide(guide_id, user_id, new_content)

    return SectionContentResponse(section_id=section_id, markdown=request.markdown.strip())


@router.post("/guides/{guide_id}/custom-sections", response_model=AddSectionResponse)
async def add_custom_section(
    guide_id: UUID,
    request: AddSectionRequest,
    user_id: UUID = Query(..., description="Requesting user"),
) -> AddSectionResponse:
    """
    Append a custom section to the guide.

    A blank title or a guide already at the custom section limit is a no-op
    (inserted=false), not an error.
    """
    guide = _load_guide(guide_id, user_id)
    tier = get_subscription_tier(user_id)
    if not can_add_custom_sections(tier):
        raise HTTPException(status_code=403, detail="Upgrade to add custom sections")

    settings = get_settings()
    content_md = guide.get("content_md") or ""
    new_content = insert_custom_section(
        content_md,
        request.title,
        limit=settings.CUSTOM_SECTION_LIMIT,
        max_title_chars=settings.CUSTOM_SECTION_TITLE_MAX_CHARS,
    )
    inserted = new_content != content_md
    if inserted:
        _save_guide(guide_id, user_id, new_content)

    return AddSectionResponse(
        guide_id=str(guide_id),
        inserted=inserted,
        content_md=new_content,
        custom_section_count=count_custom_sections(new_content),
    )


@router.post("/guides/{guide_id}/rewrite", response_model=GuideRewriteResponse)
async def rewrite_guide(
    guide_id: UUID,
    request: GuideRewriteRequest,
    user_id: UUID = Query(..., description="Requesting user"),
) -> GuideRewriteResponse:
    """
    Rewrite a section, selection or the whole guide with AI and persist it.

    Raises:
        HTTPException 400: Precondition failure (no section selected, empty instruction)
        HTTPException 403: Plan does not include AI assist, or section is locked
        HTTPException 502: Rewrite service failed; the guide is unchanged
    """
    guide = _load_guide(guide_id, user_id)
    tier = get_subscription_tier(user_id)
    if not can_use_ai_assist(tier):
        raise HTTPException(status_code=403, detail="Upgrade to use AI assist")

    content_md = guide.get("content_md") or ""
    if request.active_section_id:
        section = next(
            (s for s in parse_sections(content_md) if s.id == request.active_section_id),
            None,
        )
        if section is not None and not is_unlocked(tier, section.min_tier):
            raise HTTPException(status_code=403, detail="Section is locked for your plan")

    resolver = RewriteScopeResolver(
        make_openai_rewriter(brand_name=request.brand_name or guide.get("brand_name"))
    )
    rewrite_request = RewriteRequest(
        instruction=request.instruction,
        scope=request.scope,
        active_section_id=request.active_section_id,
        selected_text=request.selected_text,
    )

    try:
        outcome = resolver.submit(content_md, rewrite_request)
        outcome.raise_for_status()
    except RewriteValidationError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e
    except RewriteServiceError as e:
        log_with_context(
            logger,
            logging.WARNING,
            f"Rewrite failed: {e}",
            guide_id=str(guide_id),
            user_id=str(user_id),
            scope=outcome.scope.value,
        )
        raise HTTPException(status_code=502, detail=str(e)) from e

    if outcome.document != content_md:
        _save_guide(guide_id, user_id, outcome.document)

    return GuideRewriteResponse(
        guide_id=str(guide_id),
        scope=outcome.scope,
        content_md=outcome.document,
    )
