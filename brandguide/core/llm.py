"""LLM client utilities for the OpenAI SDK."""

import re
from functools import lru_cache

from openai import OpenAI

from brandguide.core.config import get_settings


@lru_cache(maxsize=1)
def get_openai_client() -> OpenAI:
    """
    Get configured OpenAI client (cached singleton).

    Returns:
        OpenAI client using the configured API key
    """
    settings = get_settings()
    return OpenAI(api_key=settings.OPENAI_API_KEY)


def strip_markdown_fences(raw_output: str) -> str:
    """Strip markdown code fences from LLM output.

    Handles: ```markdown ... ```, ```md ... ```, ``` ... ```, leading/trailing
    whitespace. Fences anywhere in the text are removed, the content between
    them is kept.
    """
    cleaned = raw_output.strip()
    cleaned = re.sub(r"```(?:markdown|md)?[ \t]*\n?", "", cleaned)
    return cleaned.strip()
