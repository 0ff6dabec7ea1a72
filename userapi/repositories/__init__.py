"""
Persistence adapters for the user collection.

Services depend on the ``UserStore`` contract; ``build_store`` picks the
backing implementation (JSON file or SQL table) from the settings.
"""

from __future__ import annotations

from userapi.core.config import Settings
from userapi.repositories.user_store import StoreError, StorePersistenceError, UserStore

__all__ = ["StoreError", "StorePersistenceError", "UserStore", "build_store"]


def build_store(settings: Settings) -> UserStore:
    backend = settings.store_backend
    if backend == "json":
        from userapi.repositories.json_storage import JsonUserStore

        return JsonUserStore(settings.data_file)
    if backend == "sql":
        if not settings.database_url:
            raise RuntimeError("DATABASE_URL must be configured to use the SQL backend.")
        from userapi.repositories.sql_repository import SQLUserStore

        return SQLUserStore(settings.database_url)
    raise ValueError(f"Unknown user store backend: {backend!r}")
