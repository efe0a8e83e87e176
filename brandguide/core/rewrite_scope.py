"""Edit-scope resolution for AI rewrites.

A rewrite request names a scope:

  section    the active section (never the cover page)
  selection  text the user highlighted in the editor; falls back to section
             when nothing is selected
  document   the whole guide

Each submission moves pending → submitted → success | failed. The resolver
decides what text goes to the rewrite service and how the reply is spliced
back. It keeps no state between submissions and never retries: a failed
rewrite leaves the document exactly as it was, and retrying is a new
submission by the user. Callers are responsible for not submitting twice
while a request is outstanding.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Protocol

from brandguide.core.llm import strip_markdown_fences
from brandguide.core.logging import get_logger
from brandguide.core.section_access import get_section, replace_section
from brandguide.core.section_catalog import (
    COVER_SECTION_ID,
    STYLE_GUIDE_SECTIONS,
    SectionCatalogEntry,
)

logger = get_logger(__name__)


class RewriteScope(str, Enum):
    SECTION = "section"
    SELECTION = "selection"
    DOCUMENT = "document"


class RewriteStatus(str, Enum):
    PENDING = "pending"
    SUBMITTED = "submitted"
    SUCCESS = "success"
    FAILED = "failed"


class RewriteError(Exception):
    """Base class for rewrite failures."""


class RewriteValidationError(RewriteError):
    """Request rejected before anything was sent to the rewrite service."""


class RewriteServiceError(RewriteError):
    """The rewrite service failed or returned no content."""


@dataclass(frozen=True)
class RewriteRequest:
    instruction: str
    scope: RewriteScope = RewriteScope.SECTION
    active_section_id: str | None = None
    selected_text: str | None = None


@dataclass(frozen=True)
class RewriteTarget:
    """What is sent for rewriting and where the result is committed."""

    scope: RewriteScope
    text: str
    section_id: str | None = None


@dataclass(frozen=True)
class RewriteResult:
    """Reply shape of the rewrite service."""

    success: bool
    content: str | None = None
    error: str | None = None


class Rewriter(Protocol):
    def __call__(
        self, instruction: str, target_text: str, scope: RewriteScope
    ) -> RewriteResult: ...


@dataclass
class RewriteOutcome:
    status: RewriteStatus
    scope: RewriteScope
    """Scope actually used (selection may have fallen back to section)."""

    document: str
    """New document on success, the untouched input otherwise."""

    error: str | None = None

    @property
    def succeeded(self) -> bool:
        return self.status == RewriteStatus.SUCCESS

    def raise_for_status(self) -> None:
        """Raise RewriteServiceError if the rewrite failed."""
        if self.status == RewriteStatus.FAILED:
            raise RewriteServiceError(self.error or "Rewrite failed")


def effective_scope(request: RewriteRequest) -> RewriteScope:
    """Scope after the empty-selection fallback."""
    try:
        scope = RewriteScope(request.scope)
    except ValueError:
        raise RewriteValidationError(f"Unknown rewrite scope: {request.scope}") from None
    if scope == RewriteScope.SELECTION and not (request.selected_text or "").strip():
        return RewriteScope.SECTION
    return scope


def resolve_rewrite_target(
    document: str,
    request: RewriteRequest,
    catalog: tuple[SectionCatalogEntry, ...] = STYLE_GUIDE_SECTIONS,
) -> RewriteTarget:
    """
    Decide what text a rewrite request operates on.

    Args:
        document: Full guide markdown
        request: Instruction, scope, active section and selection
        catalog: Catalog used for parsing

    Returns:
        RewriteTarget for the effective scope

    Raises:
        RewriteValidationError: Empty instruction, no usable section, or
            empty document
    """
    if not (request.instruction or "").strip():
        raise RewriteValidationError("Instruction is required")

    scope = effective_scope(request)

    if scope == RewriteScope.DOCUMENT:
        if not (document or "").strip():
            raise RewriteValidationError("Document is empty")
        return RewriteTarget(scope=scope, text=document)

    if scope == RewriteScope.SELECTION:
        return RewriteTarget(
            scope=scope,
            text=request.selected_text.strip(),
            section_id=request.active_section_id,
        )

    section_id = request.active_section_id
    if not section_id or section_id == COVER_SECTION_ID:
        raise RewriteValidationError("No section selected")

    section_markdown = get_section(document, section_id, catalog)
    if not section_markdown:
        raise RewriteValidationError("Section content not found")

    return RewriteTarget(scope=scope, text=section_markdown, section_id=section_id)


def apply_rewrite(
    document: str,
    target: RewriteTarget,
    new_text: str,
    catalog: tuple[SectionCatalogEntry, ...] = STYLE_GUIDE_SECTIONS,
) -> str:
    """
    Splice rewritten text back into the document.

    Document scope replaces everything. Section and selection scopes replace
    the originating section; narrowing a selection rewrite to the selected
    characters is left to the editor.
    """
    if target.scope == RewriteScope.DOCUMENT:
        return new_text
    if not target.section_id or target.section_id == COVER_SECTION_ID:
        return document
    return replace_section(document, target.section_id, new_text, catalog)


class RewriteScopeResolver:
    """Runs one rewrite submission against an injected rewrite service."""

    def __init__(
        self,
        rewriter: Rewriter,
        catalog: tuple[SectionCatalogEntry, ...] = STYLE_GUIDE_SECTIONS,
    ):
        self.rewriter = rewriter
        self.catalog = catalog

    def submit(self, document: str, request: RewriteRequest) -> RewriteOutcome:
        """
        Resolve, call the rewrite service once, and commit on success.

        Args:
            document: Full guide markdown
            request: Rewrite request

        Returns:
            RewriteOutcome; on failure the document is returned untouched

        Raises:
            RewriteValidationError: Precondition failure, raised before any
                service call
        """
        try:
            target = resolve_rewrite_target(document, request, self.catalog)
        except RewriteValidationError as e:
            logger.info(f"Rewrite rejected: {e}")
            raise

        if target.scope != RewriteScope(request.scope):
            logger.debug(
                f"No selection captured; rewriting section {target.section_id} instead"
            )

        logger.info(
            f"Rewrite {RewriteStatus.SUBMITTED.value}: scope={target.scope.value} "
            f"section={target.section_id} chars={len(target.text)}"
        )

        try:
            result = self.rewriter(request.instruction.strip(), target.text, target.scope)
        except Exception as e:
            logger.error(f"Rewrite service raised: {e}")
            return RewriteOutcome(
                status=RewriteStatus.FAILED,
                scope=target.scope,
                document=document,
                error=str(e) or "Rewrite failed",
            )

        content = strip_markdown_fences(result.content or "") if result.success else ""
        if not result.success or not content:
            error = result.error or "Rewrite service returned no content"
            logger.warning(f"Rewrite failed: {error}")
            return RewriteOutcome(
                status=RewriteStatus.FAILED,
                scope=target.scope,
                document=document,
                error=error,
            )

        new_document = apply_rewrite(document, target, content, self.catalog)
        return RewriteOutcome(
            status=RewriteStatus.SUCCESS,
            scope=target.scope,
            document=new_document,
        )
