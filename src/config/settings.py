from __future__ import annotations

from functools import lru_cache
from zoneinfo import ZoneInfo

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    database_url: str = "sqlite+aiosqlite:///./rebanho.db"
    # sql | local
    storage_backend: str = "sql"
    local_store_path: str = "./data/rebanho.json"
    log_level: str = "INFO"
    environment: str = "dev"
    # Farm calendar; "today" and default dates are computed here
    timezone: str = "America/Sao_Paulo"
    default_planned_time: str = "08:00"
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

    @field_validator("storage_backend")
    @classmethod
    def ensure_known_backend(cls, value: str) -> str:
        value = value.strip().lower()
        if value not in {"sql", "local"}:
            raise ValueError("storage_backend must be 'sql' or 'local'")
        return value

    @property
    def cors_allow_origins_list(self) -> list[str]:
        """Convert cors_allow_origins string to list"""
        return [v.strip() for v in self.cors_allow_origins.split(",") if v.strip()]

    @property
    def tz(self) -> ZoneInfo:
        return ZoneInfo(self.timezone)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
