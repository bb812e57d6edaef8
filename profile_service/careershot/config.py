"""
Configuration for the profile lookup service.

Every value comes from the environment (or a local `.env` file) and is read
once at startup through `get_settings()`. The resolver itself never reads
configuration; the app factory hands it ready-made store clients.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

STORE_BACKENDS = ("filesystem", "azure")
AUTH_MODES = ("production", "bypass")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
        populate_by_name=True,
    )

    # === Stores ===
    store_backend: str = Field(
        default="filesystem",
        description="Backing store implementation: 'filesystem' or 'azure'",
    )
    data_root: Path = Field(
        default=Path("data"),
        validation_alias="PROFILE_DATA_ROOT",
        description="Root directory of the filesystem backend",
    )
    media_base_url: str = Field(
        default="",
        description="Public base URL for filesystem media (file URIs when empty)",
    )
    table_name: str = Field(
        default="careershotinformation",
        validation_alias="RECORD_TABLE_NAME",
        description="Record table holding profile entities",
    )
    container_name: str = Field(
        default="media-dev",
        validation_alias="MEDIA_CONTAINER_NAME",
        description="Object container holding photos and resumes",
    )
    max_partition_scan: int = Field(
        default=5000,
        ge=1,
        description="Maximum number of records examined per partition scan",
    )

    # === Azure ===
    blob_service_endpoint: str = Field(default="", description="Azure Blob service endpoint")
    blob_service_sas_token: str = Field(default="", description="SAS token for the blob service")
    storage_account_connection_string: str = Field(
        default="",
        description="Connection string for Azure Table Storage",
    )

    # === Authentication ===
    auth_mode: str = Field(
        default="production",
        description="'production' (bearer token validation) or 'bypass' (dev only)",
    )
    auth_authority: str = Field(default="", description="Expected token issuer")
    auth_audience: str = Field(default="", description="Expected token audience")
    auth_secret: str = Field(default="", description="HS256 signing secret for bearer tokens")

    # === HTTP ===
    use_https_redirection: bool = Field(default=False, description="Redirect plain HTTP to HTTPS")
    enable_docs: bool = Field(default=True, description="Serve the OpenAPI docs UI at /docs")
    allowed_origins_str: str = Field(
        default="*",
        alias="ALLOWED_ORIGINS",
        description="Allowed CORS origins (comma-separated)",
    )

    @field_validator("store_backend", "auth_mode", mode="before")
    @classmethod
    def _lowercase(cls, v: str) -> str:
        return v.strip().lower() if isinstance(v, str) else v

    @field_validator("store_backend")
    @classmethod
    def _known_backend(cls, v: str) -> str:
        if v not in STORE_BACKENDS:
            raise ValueError(f"STORE_BACKEND must be one of {', '.join(STORE_BACKENDS)}")
        return v

    @field_validator("auth_mode")
    @classmethod
    def _known_auth_mode(cls, v: str) -> str:
        if v not in AUTH_MODES:
            raise ValueError(f"AUTH_MODE must be one of {', '.join(AUTH_MODES)}")
        return v

    @model_validator(mode="after")
    def _required_for_mode(self) -> "Settings":
        if self.store_backend == "azure":
            missing = [
                name
                for name, value in (
                    ("BLOB_SERVICE_ENDPOINT", self.blob_service_endpoint),
                    ("BLOB_SERVICE_SAS_TOKEN", self.blob_service_sas_token),
                    ("STORAGE_ACCOUNT_CONNECTION_STRING", self.storage_account_connection_string),
                )
                if not value
            ]
            if missing:
                raise ValueError(f"One or more environment variables are not set: {', '.join(missing)}")
        if self.auth_mode == "production" and not self.auth_secret:
            raise ValueError("AUTH_SECRET must be set when AUTH_MODE=production")
        return self

    @property
    def allowed_origins(self) -> list[str]:
        return [o.strip() for o in self.allowed_origins_str.split(",") if o.strip()]


@lru_cache
def get_settings() -> Settings:
    """Load settings once per process."""
    return Settings()
