from __future__ import annotations

from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    database_url: str = "sqlite+aiosqlite:///./herd.db"
    # Every collection is scoped to the owner id carried in this header
    owner_header: str = "X-Owner-ID"
    log_level: str = "INFO"
    environment: str = "dev"
    # Printed in report headers
    farm_name: str = "Herd Records"
    proprietor_name: str = "Farm Management"
    # S3 image storage; uploads are unavailable until bucket and region are set
    s3_bucket: str | None = None
    s3_region: str | None = None
    s3_prefix: str = ""  # e.g. "dev/" or "prod/"
    s3_public_url_base: str | None = None
    # CORS
    cors_allow_origins: str = "*"

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    @field_validator("database_url")
    @classmethod
    def ensure_asyncpg_scheme(cls, value: str) -> str:
        if value.startswith("postgres://"):
            return value.replace("postgres://", "postgresql+asyncpg://", 1)
        if value.startswith("postgresql://") and "+" not in value.split("://", 1)[0]:
            return value.replace("postgresql://", "postgresql+asyncpg://", 1)
        return value

    @property
    def cors_allow_origins_list(self) -> list[str]:
        """Convert cors_allow_origins string to list"""
        return [v.strip() for v in self.cors_allow_origins.split(",") if v.strip()]

    @property
    def image_storage_enabled(self) -> bool:
        return bool(self.s3_bucket and self.s3_region)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
