"""Stateless AI rewrite endpoint.

The client sends the text it wants rewritten and applies the result itself.
"""

from fastapi import APIRouter, HTTPException

from brandguide.chains.rewrite_section import rewrite_with_openai
from brandguide.core.logging import get_logger
from brandguide.core.rewrite_scope import RewriteScope
from brandguide.core.schemas_guides import RewriteSectionRequest, RewriteSectionResponse

logger = get_logger(__name__)

router = APIRouter()


@router.post("/rewrite-section", response_model=RewriteSectionResponse)
async def rewrite_section(request: RewriteSectionRequest) -> RewriteSectionResponse:
    """
    Rewrite markdown according to an instruction.

    Selection scope uses ``selected_text`` when it is non-empty; every other
    case rewrites ``current_content``.

    Raises:
        HTTPException 400: Missing instruction or content
        HTTPException 502: Rewrite service failed
    """
    if not request.instruction.strip():
        raise HTTPException(status_code=400, detail="Missing or invalid 'instruction' field")

    scope = request.scope
    selected = (request.selected_text or "").strip()
    if scope == RewriteScope.SELECTION and selected:
        target_text = selected
    else:
        if scope == RewriteScope.SELECTION:
            scope = RewriteScope.SECTION
        target_text = request.current_content or ""
        if not target_text.strip():
            raise HTTPException(
                status_code=400, detail="Missing or invalid 'current_content' field"
            )

    result = rewrite_with_openai(
        request.instruction.strip(),
        target_text,
        scope,
        brand_name=request.brand_name,
    )
    if not result.success or not result.content:
        logger.warning(f"Stateless rewrite failed: {result.error}")
        raise HTTPException(status_code=502, detail=result.error or "Failed to rewrite section")

    return RewriteSectionResponse(success=True, content=result.content)
