"""
Configuration helpers for the user API.

Settings are read from environment variables once and cached so that
routers/services/stores never fetch os.environ directly.
"""

from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
import os

DEFAULT_DATA_FILE = Path(__file__).resolve().parents[1] / "users.json"


@dataclass(frozen=True)
class Settings:
    """Typed view of environment variables."""

    app_env: str
    store_backend: str
    data_file: Path
    database_url: str
    default_page_size: int
    max_page_size: int
    log_level: str
    log_file: str
    cors_origins: tuple[str, ...]
    host: str
    port: int


@lru_cache
def get_settings() -> Settings:
    """Read the current environment and build a Settings instance."""
    def _int(value: str | None, default: int = 0) -> int:
        try:
            return int(value)
        except (TypeError, ValueError):
            return default

    def _csv(value: str | None) -> tuple[str, ...]:
        return tuple(part.strip().rstrip("/") for part in (value or "").split(",") if part.strip())

    data_file = (os.getenv("USER_DATA_FILE") or "").strip()
    return Settings(
        app_env=(os.getenv("APP_ENV") or "dev").lower(),
        store_backend=(os.getenv("USER_STORE_BACKEND") or "json").strip().lower(),
        data_file=Path(data_file) if data_file else DEFAULT_DATA_FILE,
        database_url=os.getenv("DATABASE_URL", "").strip(),
        default_page_size=max(1, _int(os.getenv("DEFAULT_PAGE_SIZE", "10"), 10)),
        max_page_size=max(0, _int(os.getenv("MAX_PAGE_SIZE", "0"), 0)),
        log_level=(os.getenv("LOG_LEVEL") or "INFO").upper(),
        log_file=os.getenv("LOG_FILE", "").strip(),
        cors_origins=_csv(os.getenv("CORS_ORIGINS")),
        host=os.getenv("HOST", "127.0.0.1"),
        port=_int(os.getenv("PORT", "8000"), 8000),
    )
