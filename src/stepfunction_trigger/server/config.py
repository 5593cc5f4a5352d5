"""Configuration for the HTTP server."""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import SettingsConfigDict

from stepfunction_trigger.trigger.config import TriggerSettings


class ServerSettings(TriggerSettings):
    """Trigger settings plus the listening address and CORS policy."""

    host: str = Field(default="127.0.0.1", validation_alias="TRIGGER_HOST")
    port: int = Field(default=8000, ge=1, le=65535, validation_alias="TRIGGER_PORT")

    # Empty disables CORS entirely. Override via TRIGGER_CORS_ORIGINS=...
    cors_origins: str = Field(
        default="",
        validation_alias="TRIGGER_CORS_ORIGINS",
        description="Comma-separated list of allowed CORS origins.",
    )

    model_config = SettingsConfigDict(env_prefix="", env_file=".env", extra="ignore")

    def parsed_cors_origins(self) -> list[str]:
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]
