# backend/archive_api/core/config.py
from __future__ import annotations
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Resolves to <repo-root>/backend/.env when this file is at backend/archive_api/core/config.py
BACKEND_DIR = Path(__file__).resolve().parents[2]
ENV_FILE = BACKEND_DIR / ".env"


@dataclass(frozen=True)
class ArchiveConfig:
    """Connection details for the upstream archive, handed to ArchiveClient."""
    base_url: str
    api_key: Optional[str]
    timeout: float


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=str(ENV_FILE),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # --- Upstream archive
    ARCHIVE_BASE_URL: str = "https://api.nytimes.com/svc/archive/v1/"
    ARCHIVE_API_KEY: Optional[str] = None
    REQUEST_TIMEOUT_SECONDS: float = 15.0

    # --- Query rules
    ARCHIVE_START_YEAR: int = 1851              # first year the archive covers
    MAX_ARTICLES: int = 10                      # cap applied to every response
    ARCHIVE_TIMEZONE: str = "UTC"               # calendar used for "today" and pub_date

    # --- Server (used by __main__ in archive_api/main.py)
    ENV: str = "development"
    HOST: str = "0.0.0.0"
    PORT: int = 3000
    RELOAD: bool = False
    CORS_ORIGINS: str = "*"                     # comma-separated

    # --- Logging
    LOG_LEVEL: str = "INFO"
    LOG_DIR: Path = BACKEND_DIR / "logs"

    @field_validator("ARCHIVE_BASE_URL")
    @classmethod
    def _ensure_trailing_slash(cls, v):
        return v if v.endswith("/") else v + "/"

    @field_validator("RELOAD", mode="before")
    @classmethod
    def _parse_reload_bool(cls, v):
        if isinstance(v, bool):
            return v
        return str(v).lower() in ("1", "true", "yes", "on")

    @field_validator("ARCHIVE_TIMEZONE")
    @classmethod
    def _validate_timezone(cls, v):
        try:
            ZoneInfo(v)
        except (ZoneInfoNotFoundError, ValueError):
            raise ValueError(f"ARCHIVE_TIMEZONE '{v}' is not a known IANA timezone")
        return v

    @field_validator("REQUEST_TIMEOUT_SECONDS")
    @classmethod
    def _validate_timeout(cls, v):
        if v <= 0:
            raise ValueError("REQUEST_TIMEOUT_SECONDS must be positive")
        return v

    @field_validator("MAX_ARTICLES")
    @classmethod
    def _validate_max_articles(cls, v):
        if v < 1:
            raise ValueError("MAX_ARTICLES must be at least 1")
        return v

    @property
    def cors_origins(self) -> List[str]:
        items = [o.strip() for o in self.CORS_ORIGINS.split(",") if o.strip()]
        return items or ["*"]

    @property
    def tz(self) -> ZoneInfo:
        return ZoneInfo(self.ARCHIVE_TIMEZONE)

    def archive_config(self) -> ArchiveConfig:
        return ArchiveConfig(
            base_url=self.ARCHIVE_BASE_URL,
            api_key=self.ARCHIVE_API_KEY,
            timeout=self.REQUEST_TIMEOUT_SECONDS,
        )


settings = Settings()
