"""
Application configuration models and helpers.

Settings are read from the process environment and an optional ``.env`` file
so the API server and the maintenance scripts share one configuration surface.
"""

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_SUPPLIER_BASE_URL = "https://web.nirax.ru/cross/api/v3"


class SupplierSettings(BaseSettings):
    """Credentials and endpoint for the auto-parts supplier API."""

    model_config = SettingsConfigDict(
        env_prefix="NIRAX_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    login: str = Field(..., description="Supplier account login.")
    password: str = Field(..., description="Supplier account password.")
    base_url: str = Field(DEFAULT_SUPPLIER_BASE_URL)
    request_timeout_seconds: float = Field(
        10.0,
        gt=0,
        description="Timeout applied to every supplier call, auth included.",
    )

    @field_validator("login", "password")
    @classmethod
    def _require_value(cls, value: str) -> str:
        if not value or not value.strip():
            raise ValueError("must not be blank")
        return value

    @field_validator("base_url")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")


class AppSettings(BaseSettings):
    """Root settings object for the FastAPI application."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    environment: str = Field("development", validation_alias="APP_ENV")
    log_level: str = Field("INFO", validation_alias="APP_LOG_LEVEL")
    host: str = Field("0.0.0.0", validation_alias="APP_HOST")
    port: int = Field(4000, validation_alias="PORT")
    cors_origins: str = Field(
        "*",
        validation_alias="APP_CORS_ORIGINS",
        description="Comma-separated list of origins allowed by CORS.",
    )
    supplier: SupplierSettings = Field(default_factory=SupplierSettings)

    @property
    def cors_origin_list(self) -> list[str]:
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]


@lru_cache()
def get_settings() -> AppSettings:
    """Return a cached settings object."""
    return AppSettings()  # type: ignore[call-arg]


__all__ = [
    "AppSettings",
    "DEFAULT_SUPPLIER_BASE_URL",
    "SupplierSettings",
    "get_settings",
]
