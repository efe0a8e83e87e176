"""AI rewrite of a guide section, selection or whole document.

Sends one chat completion per call and never retries; the caller decides
what to do with a failed result.
"""

from openai import OpenAI

from brandguide.core.config import get_settings
from brandguide.core.llm import get_openai_client, strip_markdown_fences
from brandguide.core.logging import get_logger
from brandguide.core.rewrite_scope import Rewriter, RewriteResult, RewriteScope

logger = get_logger(__name__)

_SYSTEM = """You are an expert editor specializing in brand voice and style guides.
Preserve the exact markdown structure (headings, lists, formatting).
Maintain consistency with the brand's voice.

For style rules with examples:
- ✅ examples must demonstrate the rule CORRECTLY
- ❌ examples must show the rule VIOLATED
- Both examples should show the SAME sentence (correct vs incorrect)
- Examples must logically demonstrate what the rule states

Return ONLY the rewritten markdown content, no explanations or commentary."""

_SELECTION_NOTE = (
    "IMPORTANT: The user has selected a specific portion of text to rewrite. "
    "Apply the instruction to ONLY this selected text. "
    "Follow the user's instruction exactly."
)

SCOPE_LABELS: dict[RewriteScope, str] = {
    RewriteScope.SECTION: "section",
    RewriteScope.SELECTION: "selected text",
    RewriteScope.DOCUMENT: "entire document",
}


def build_rewrite_prompts(
    instruction: str,
    target_text: str,
    scope: RewriteScope,
    brand_name: str | None = None,
) -> tuple[str, str]:
    """
    Build the system and user prompts for a rewrite.

    Args:
        instruction: What the user wants changed
        target_text: Markdown to rewrite
        scope: Scope the text came from
        brand_name: Optional brand name for context

    Returns:
        (system_prompt, user_prompt)
    """
    scope_label = SCOPE_LABELS[RewriteScope(scope)]

    parts: list[str] = []
    if brand_name:
        parts.append(f"Brand: {brand_name}")
    if scope == RewriteScope.SELECTION:
        parts.append(_SELECTION_NOTE)
    parts.append(f"Current {scope_label} content:\n{target_text}")
    parts.append(f"User instruction: {instruction}")
    parts.append(f"Rewritten {scope_label} (preserve markdown structure):")

    return _SYSTEM, "\n\n".join(parts)


def rewrite_with_openai(
    instruction: str,
    target_text: str,
    scope: RewriteScope,
    *,
    brand_name: str | None = None,
    client: OpenAI | None = None,
) -> RewriteResult:
    """
    Rewrite markdown with the configured OpenAI model.

    Args:
        instruction: What the user wants changed
        target_text: Markdown to rewrite
        scope: Scope the text came from
        brand_name: Optional brand name for context
        client: OpenAI client override (defaults to the cached client)

    Returns:
        RewriteResult; success=False with an error message on any failure
    """
    settings = get_settings()
    system_prompt, user_prompt = build_rewrite_prompts(
        instruction, target_text, scope, brand_name
    )

    try:
        openai_client = client or get_openai_client()
        response = openai_client.chat.completions.create(
            model=settings.REWRITE_MODEL,
            messages=[
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_prompt},
            ],
            max_tokens=settings.REWRITE_MAX_TOKENS,
            temperature=settings.REWRITE_TEMPERATURE,
        )
    except Exception as e:
        logger.error(f"Rewrite completion failed: {e}")
        return RewriteResult(success=False, error=f"Rewrite service error: {e}")

    choice = response.choices[0] if response.choices else None
    if choice is not None and choice.finish_reason == "length":
        # A truncated rewrite must never be merged
        logger.warning("Rewrite completion hit the token limit; discarding")
        return RewriteResult(success=False, error="Rewrite was cut off before completion")

    raw = (choice.message.content if choice is not None else None) or ""
    content = strip_markdown_fences(raw)
    if not content:
        return RewriteResult(success=False, error="Rewrite service returned no content")

    usage = getattr(response, "usage", None)
    logger.info(
        f"Rewrote {SCOPE_LABELS[RewriteScope(scope)]} "
        f"(model={settings.REWRITE_MODEL}, chars_in={len(target_text)}, "
        f"chars_out={len(content)}, tokens={getattr(usage, 'prompt_tokens', None)}"
        f"/{getattr(usage, 'completion_tokens', None)})"
    )
    return RewriteResult(success=True, content=content)


def make_openai_rewriter(
    brand_name: str | None = None,
    client: OpenAI | None = None,
) -> Rewriter:
    """Bind brand context into a Rewriter for RewriteScopeResolver."""

    def _rewrite(instruction: str, target_text: str, scope: RewriteScope) -> RewriteResult:
        return rewrite_with_openai(
            instruction, target_text, scope, brand_name=brand_name, client=client
        )

    return _rewrite
