"""Configuration management for the Resume Agent service."""

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

    # OpenAI configuration (required)
    OPENAI_API_KEY: str = Field(..., description="OpenAI API key")

    # Anthropic configuration (optional - only the OCR route needs it)
    ANTHROPIC_API_KEY: str | None = Field(default=None, description="Anthropic API key")

    # Environment
    RESUME_AGENT_ENV: str = Field(default="dev", description="Environment: dev, staging, prod")

    # Embedding configuration
    EMBEDDING_MODEL: str = Field(
        default="text-embedding-3-small", description="OpenAI embedding model"
    )
    EMBEDDING_DIM: int = Field(
        default=1536, description="Embedding vector dimension (0 disables the check)"
    )

    # Semantic search
    SEARCH_DEFAULT_TOP_K: int = Field(default=3, description="Results returned when topK is omitted")

    # Agent configuration
    AGENT_MODEL: str = Field(default="gpt-4.1", description="Model backing the resume agent")

    # OCR configuration
    OCR_MODEL: str = Field(
        default="claude-haiku-4-5-20251001", description="Claude model used for document OCR"
    )
    OCR_MAX_TOKENS: int = Field(default=8192, description="Max tokens for OCR output")
    STRUCTURE_MODEL: str = Field(
        default="gpt-4o-mini", description="Model that structures OCR text into sections"
    )
    MAX_UPLOAD_BYTES: int = Field(default=10_000_000, description="Max file upload size in bytes")

    # Admin
    ADMIN_TOKEN: str | None = Field(
        default=None, description="Shared secret for cache administration routes"
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
