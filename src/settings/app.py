"""Application settings powered by Pydantic BaseSettings."""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from src.features.request.constants import DEFAULT_USER_AGENT


class RequestSettings(BaseSettings):
    """Centralized environment configuration.

    Values are read from ``REQUEST_``-prefixed environment variables or a
    ``.env`` file, e.g. ``REQUEST_USER_AGENT`` or ``REQUEST_LOG_LEVEL``.
    """

    model_config = SettingsConfigDict(
        env_prefix="REQUEST_",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    user_agent: str = Field(default=DEFAULT_USER_AGENT, min_length=1, max_length=500)
    log_level: str = Field(default="INFO")
    json_logs: bool = Field(default=False)


def get_settings() -> RequestSettings:
    """Get a settings instance."""
    return RequestSettings()
