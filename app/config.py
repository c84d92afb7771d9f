from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Annotated, Literal

from pydantic import Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

PRODUCTION_API_ENDPOINT = "https://api.authorize.net/xml/v1/request.api"
SANDBOX_API_ENDPOINT = "https://apitest.authorize.net/xml/v1/request.api"
PRODUCTION_HOSTED_FORM_HOST = "https://accept.authorize.net"
SANDBOX_HOSTED_FORM_HOST = "https://test.authorize.net"


class Settings(BaseSettings):
    """Application settings loaded from environment variables with validation."""

    model_config = SettingsConfigDict(
        env_file=(str(Path(__file__).resolve().parents[1] / ".env"), ".env"),
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    app_name: str = Field(default="Authorize.Net Admin Console API", alias="APP_NAME")
    app_env: Literal["development", "staging", "production", "test"] = Field(
        default="production",
        alias="APP_ENV",
    )
    app_debug: bool = Field(default=False, alias="APP_DEBUG")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    api_prefix: str = Field(default="/api/authorize", alias="API_PREFIX")

    cors_origins: Annotated[list[str], NoDecode] = Field(
        default_factory=lambda: ["http://localhost:3000"],
        alias="CORS_ORIGINS",
    )

    api_login_id: str = Field(default="", alias="API_LOGIN_ID")
    transaction_key: SecretStr = Field(default=SecretStr(""), alias="TRANSACTION_KEY")
    authorize_net_env: Literal["sandbox", "production"] = Field(
        default="sandbox",
        alias="AUTHORIZE_NET_ENV",
    )
    authorize_net_timeout: float = Field(default=30.0, ge=1, le=120, alias="AUTHORIZE_NET_TIMEOUT")
    hosted_profile_validation_mode: Literal["testMode", "liveMode", "none"] = Field(
        default="testMode",
        alias="HOSTED_PROFILE_VALIDATION_MODE",
    )
    frontend_url: str = Field(default="http://localhost:3000", alias="FRONTEND_URL")

    @field_validator("api_prefix")
    @classmethod
    def validate_api_prefix(cls, value: str) -> str:
        """Ensure the API prefix starts with a slash and has no trailing slash."""
        normalized = value.strip()
        if not normalized.startswith("/"):
            raise ValueError("API_PREFIX must start with '/'.")
        if len(normalized) > 1 and normalized.endswith("/"):
            normalized = normalized.rstrip("/")
        return normalized

    @field_validator("cors_origins", mode="before")
    @classmethod
    def parse_cors_origins(cls, value: str | list[str]) -> list[str]:
        """Support comma-separated CORS origins from environment variables."""
        if isinstance(value, str):
            if not value.strip():
                return []
            return [origin.strip() for origin in value.split(",") if origin.strip()]
        return value

    @field_validator("authorize_net_env", mode="before")
    @classmethod
    def normalize_environment(cls, value: str) -> str:
        """Only an explicit 'production' leaves the sandbox."""
        if isinstance(value, str) and value.strip().lower() == "production":
            return "production"
        return "sandbox"

    @property
    def is_production(self) -> bool:
        return self.authorize_net_env == "production"

    @property
    def api_endpoint(self) -> str:
        return PRODUCTION_API_ENDPOINT if self.is_production else SANDBOX_API_ENDPOINT

    @property
    def hosted_form_host(self) -> str:
        return PRODUCTION_HOSTED_FORM_HOST if self.is_production else SANDBOX_HOSTED_FORM_HOST

    @property
    def vendor_configured(self) -> bool:
        return bool(self.api_login_id and self.transaction_key.get_secret_value())


@lru_cache
def get_settings() -> Settings:
    """Return a cached settings instance."""
    return Settings()


settings: Settings = get_settings()
