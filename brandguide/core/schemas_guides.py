"""Pydantic schemas for style guide section and rewrite endpoints."""

from pydantic import BaseModel, Field

from brandguide.core.rewrite_scope import RewriteScope
from brandguide.core.tiers import Tier


class SectionSummary(BaseModel):
    """One section as listed in the guide sidebar."""

    id: str = Field(..., description="Section id, unique within the guide")
    title: str = Field(..., description="Heading text")
    level: int = Field(..., description="Heading level (1 or 2)")
    min_tier: Tier = Field(..., description="Lowest tier that unlocks this section")
    locked: bool = Field(..., description="Whether the requesting user's tier is too low")
    is_custom: bool = Field(default=False, description="Heading matches no catalog entry")


class GuideSectionsResponse(BaseModel):
    """Response body for the section list endpoint."""

    guide_id: str
    subscription_tier: Tier
    sections: list[SectionSummary] = Field(default_factory=list)
    default_open: list[str] = Field(default_factory=list)
    custom_section_count: int = 0
    custom_section_limit: int = 0
    can_add_section: bool = False


class SectionContentResponse(BaseModel):
    """Response body for single-section reads."""

    section_id: str
    markdown: str


class ReplaceSectionRequest(BaseModel):
    """Request body for replacing one section."""

    markdown: str = Field(..., description="Full section markdown (heading + body)")


class EditableSubsetResponse(BaseModel):
    """Markdown handed to the editor, plus the ids it was built from."""

    guide_id: str
    subscription_tier: Tier
    editable_markdown: str
    unlocked_section_ids: list[str] = Field(default_factory=list)
    locked_markdown: str = ""


class MergeEditsRequest(BaseModel):
    """Request body for saving editor changes."""

    edited_markdown: str = Field(..., description="Markdown reported by the editor")
    unlocked_section_ids: list[str] = Field(
        ..., description="Ordered ids the editable subset was built from"
    )


class MergeEditsResponse(BaseModel):
    guide_id: str
    content_md: str
    replaced_section_ids: list[str] = Field(default_factory=list)
    skipped_section_ids: list[str] = Field(default_factory=list)
    extra_sections: int = 0


class AddSectionRequest(BaseModel):
    """Request body for adding a custom section."""

    title: str = Field(..., description="Heading text for the new section")


class AddSectionResponse(BaseModel):
    guide_id: str
    inserted: bool
    content_md: str
    custom_section_count: int


class GuideRewriteRequest(BaseModel):
    """Request body for rewriting part of a stored guide."""

    instruction: str = Field(..., description="What to change")
    scope: RewriteScope = Field(default=RewriteScope.SECTION, description="Rewrite scope")
    active_section_id: str | None = Field(default=None, description="Section in view")
    selected_text: str | None = Field(default=None, description="Text selected in the editor")
    brand_name: str | None = Field(default=None, description="Brand name for prompt context")


class GuideRewriteResponse(BaseModel):
    guide_id: str
    scope: RewriteScope = Field(..., description="Scope actually used")
    content_md: str


class RewriteSectionRequest(BaseModel):
    """Request body for the stateless rewrite endpoint."""

    instruction: str = Field(..., description="What to change")
    current_content: str | None = Field(default=None, description="Section or document markdown")
    scope: RewriteScope = Field(default=RewriteScope.SECTION)
    selected_text: str | None = None
    brand_name: str | None = None


class RewriteSectionResponse(BaseModel):
    success: bool = True
    content: str
