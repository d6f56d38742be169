"""Central application settings using Pydantic."""

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Relay configuration loaded from environment variables.

    Built once at process start and treated as read-only afterwards.
    """

    # Core application
    log_level: str = Field("INFO", description="Root log level")
    host: str = Field("0.0.0.0", description="Listen address")
    port: int = Field(3000, description="Listen port")

    # Google
    google_api_key: str | None = Field(
        None, description="Credential attached to every upstream call"
    )
    places_text_search_url: str = Field(
        "https://maps.googleapis.com/maps/api/place/textsearch/json"
    )
    gemini_api_base_url: str = Field(
        "https://generativelanguage.googleapis.com/v1beta"
    )
    gemini_model: str = Field("gemini-2.5-flash-preview-09-2025")

    # Upstream calls
    upstream_timeout: float = Field(30.0, gt=0, description="Seconds")
    disconnect_poll_interval: float = Field(0.5, gt=0, description="Seconds")

    # CORS
    cors_allow_origins: list[str] = Field(default_factory=lambda: ["*"])

    model_config = SettingsConfigDict(env_file=".env", extra="ignore", frozen=True)

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        return str(v).upper()

    @field_validator("google_api_key", mode="before")
    @classmethod
    def blank_key_is_unset(cls, v: str | None) -> str | None:
        if v is None or not str(v).strip():
            return None
        return str(v).strip()


def get_settings() -> Settings:
    """Return application settings loaded from environment variables."""
    return Settings()
