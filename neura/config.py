"""Application settings loaded from environment variables."""

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Strongly typed application configuration.

    ``GEMINI_API_KEY`` has no default: constructing settings without it fails,
    so the server refuses to start instead of calling upstream anonymously.
    """

    gemini_api_key: str = Field(alias="GEMINI_API_KEY", min_length=1)
    gemini_model: str = Field(default="gemini-2.0-flash", alias="GEMINI_MODEL")
    gemini_base_url: str = Field(
        default="https://generativelanguage.googleapis.com/v1beta",
        alias="GEMINI_BASE_URL",
    )
    gemini_timeout: float = Field(default=30.0, alias="GEMINI_TIMEOUT")
    gemini_max_retries: int = Field(default=3, ge=0, alias="GEMINI_MAX_RETRIES")
    gemini_retry_delay: float = Field(
        default=2.0, ge=0, alias="GEMINI_RETRY_DELAY", description="Seconds"
    )
    environment: str = Field(default="development", alias="ENVIRONMENT")
    log_level: Literal["debug", "info", "warning", "error", "critical"] = Field(
        default="info", alias="LOG_LEVEL"
    )
    host: str = Field(default="127.0.0.1", alias="HOST")
    port: int = Field(default=3001, alias="PORT")
    max_question_length: int = Field(default=4000, alias="MAX_QUESTION_LENGTH")

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)


@lru_cache
def get_settings() -> Settings:
    """Return a cached instance of settings."""

    return Settings()
