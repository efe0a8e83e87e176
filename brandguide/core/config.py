"""Configuration management for the brand guide service."""

from functools import lru_cache

from dotenv import load_dotenv
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Load environment variables from .env file (only if accessible)
try:
    load_dotenv()
except (PermissionError, OSError):
    # In sandboxed environments, .env might not be accessible
    # Environment variables should be set directly
    pass


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore",
    )

    # Supabase configuration (required)
    SUPABASE_URL: str = Field(..., description="Supabase project URL")
    SUPABASE_SERVICE_ROLE_KEY: str = Field(..., description="Supabase service role key")

    # OpenAI configuration (required)
    OPENAI_API_KEY: str = Field(..., description="OpenAI API key")

    # Environment
    BRANDGUIDE_ENV: str = Field(default="dev", description="Environment: dev, staging, prod")

    # Rewrite (AI assist) configuration
    REWRITE_MODEL: str = Field(default="gpt-4o-mini", description="Model for section rewrites")
    REWRITE_MAX_TOKENS: int = Field(
        default=2000, description="Max completion tokens for a rewrite"
    )
    REWRITE_TEMPERATURE: float = Field(default=0.4, description="Temperature for rewrites")

    # Custom sections
    CUSTOM_SECTION_LIMIT: int = Field(
        default=5, description="Max sections per guide that match no catalog heading"
    )
    CUSTOM_SECTION_TITLE_MAX_CHARS: int = Field(
        default=60, description="Max characters kept from a custom section title"
    )


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Returns:
        Settings instance

    Raises:
        ValidationError: If required environment variables are missing
    """
    return Settings()
