"""
Application configuration using Pydantic Settings.

Provider and storage backends are selected by the LLM_PROVIDER and
STORAGE_BACKEND variables.
"""

from functools import lru_cache
from typing import List, Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # ===========================================
    # Environment
    # ===========================================
    ENVIRONMENT: Literal["local", "production"] = "local"
    DEBUG: bool = True
    LOG_LEVEL: str = "INFO"

    # ===========================================
    # LLM Configuration
    # ===========================================
    # LLM Provider: only the Gemini API (API Key) is supported
    LLM_PROVIDER: Literal["gemini-api"] = "gemini-api"

    # Google API Key (for gemini-api provider)
    GOOGLE_API_KEY: str = ""

    # Model used for response generation (handles attachments)
    GEMINI_MODEL: str = "gemini-1.5-pro-latest"

    # Lighter models for classification calls
    SENTIMENT_MODEL: str = "gemini-1.5-flash-latest"
    FILTER_MODEL: str = "gemini-1.5-pro-latest"

    LLM_TEMPERATURE: float = 0.7
    LLM_MAX_OUTPUT_TOKENS: int = 2048

    # Call policy for every model request
    LLM_TIMEOUT_SECONDS: float = 60.0
    LLM_MAX_RETRIES: int = 1
    LLM_RETRY_BACKOFF_SECONDS: float = 0.5

    # ===========================================
    # Chat
    # ===========================================
    MAX_PROMPT_LENGTH: int = 32000

    # ===========================================
    # Conversation Storage
    # ===========================================
    # "file": one file per key under STORAGE_BASE_PATH
    # "sqlite": key/value table in DATABASE_URL
    STORAGE_BACKEND: Literal["file", "sqlite"] = "file"
    STORAGE_BASE_PATH: str = "./storage"
    DATABASE_URL: str = "sqlite+aiosqlite:///./chatty.db"
    STORAGE_KEY: str = "chatty-conversations"

    # ===========================================
    # Server
    # ===========================================
    HOST: str = "0.0.0.0"
    PORT: int = 8000
    ALLOWED_ORIGINS: List[str] = Field(
        default=["http://localhost:3000", "http://localhost:9002"]
    )

    @property
    def uses_sqlite_storage(self) -> bool:
        """Check if conversations are stored in SQLite."""
        return self.STORAGE_BACKEND == "sqlite"


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Using lru_cache ensures settings are loaded only once.
    """
    return Settings()
