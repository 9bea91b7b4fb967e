"""Configuration management for the parent forum service."""

from functools import lru_cache
from typing import Literal

from dotenv import load_dotenv
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Load environment variables from .env file (only if accessible)
try:
    load_dotenv()
except (PermissionError, OSError):
    # In sandboxed environments, .env might not be accessible
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
    SUPABASE_SCHEMA: str = Field(default="public", description="Postgres schema holding forum tables")
    STORE_TIMEOUT_SECONDS: int = Field(default=30, description="Timeout for store queries")

    # OpenAI configuration (required)
    OPENAI_API_KEY: str = Field(..., description="OpenAI API key")

    # Environment
    FORUM_ENV: str = Field(default="dev", description="Environment: dev, staging, prod, test")

    # Model configuration
    FORUM_MODEL: str = Field(default="gpt-4.1-mini", description="Chat model for all prompts")
    ANSWER_TEMPERATURE: float = Field(default=0.4, description="Temperature for answer generation")
    CLASSIFIER_TEMPERATURE: float = Field(
        default=0.0, description="Temperature for duplicate, moderation and spelling prompts"
    )

    # Duplicate/answer pipeline
    DUPLICATE_CANDIDATES_LIMIT: int = Field(
        default=40, description="Most recent AI questions considered for duplicate detection"
    )
    SEMANTIC_DUPLICATE_CHECK_ENABLED: bool = Field(
        default=True, description="Ask the model for meaning-equivalent duplicates"
    )
    MIN_QUESTION_CHARS: int = Field(default=3, description="Minimum trimmed question length")
    SPELL_CORRECTION_ENABLED: bool = Field(
        default=False, description="Correct spelling before duplicate detection"
    )

    # Moderation
    MODERATION_FAIL_OPEN: bool = Field(
        default=True, description="Approve discussion topics when the moderation call fails"
    )

    # Like counters
    COUNTER_MODE: Literal["atomic", "read_modify_write"] = Field(
        default="atomic", description="How like counters are adjusted in the store"
    )

    # Prompt scope
    UNIVERSITY_NAME: str = Field(default="The University of Alabama")
    COMMUNITY_NAME: str = Field(default="Tuscaloosa")

    # Listing
    DEFAULT_PAGE_SIZE: int = Field(default=50, description="Page size when none is given")
    MAX_PAGE_SIZE: int = Field(default=200, description="Upper bound for list page sizes")

    # HTTP
    CORS_ALLOW_ORIGINS: str = Field(default="*", description="Comma separated allowed origins")

    @property
    def cors_origins(self) -> list[str]:
        return [o.strip() for o in self.CORS_ALLOW_ORIGINS.split(",") if o.strip()]


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
