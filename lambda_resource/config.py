"""
Resource configuration.

Loaded from environment variables prefixed with LAMBDA_RESOURCE_.
Per-invocation settings (credentials, function name) come from the
pipeline's source block instead, see lambda_resource.models.Source.
"""
from typing import Any, Literal, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class ResourceConfig(BaseSettings):
    """
    Process-level settings for the resource scripts.
    """

    LOG_LEVEL: LogLevel = Field(default="INFO", description="Log level")
    ENDPOINT_URL: Optional[str] = Field(
        default=None, description="Override for the Lambda API endpoint (e.g. a local emulator)"
    )

    model_config = SettingsConfigDict(
        env_prefix="LAMBDA_RESOURCE_", case_sensitive=True, extra="ignore"
    )

    @field_validator("LOG_LEVEL", mode="before")
    @classmethod
    def normalize_log_level(cls, value: Any) -> Any:
        return value.strip().upper() if isinstance(value, str) else value
