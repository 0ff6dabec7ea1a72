#!/usr/bin/env python3
"""
Reset the configured user store to the demo roster.

Usage:
  python scripts/seed_users.py [--backend json|sql] [--data-file path] [--database-url url]
"""
from __future__ import annotations

import argparse
import dataclasses
import sys
from pathlib import Path

# Make the userapi package importable when run directly
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from userapi.core.config import get_settings
from userapi.core.logging_config import setup_logging
from userapi.repositories import build_store
from userapi.services.user_service import UserService


def main(argv: list[str] | None = None) -> int:
    ap = argparse.ArgumentParser(description="Reset the user store to the demo roster")
    ap.add_argument("--backend", choices=("json", "sql"), help="Store backend (default: USER_STORE_BACKEND)")
    ap.add_argument("--data-file", help="JSON file for the json backend (default: USER_DATA_FILE)")
    ap.add_argument("--database-url", help="SQLAlchemy URL for the sql backend (default: DATABASE_URL)")
    args = ap.parse_args(argv)

    settings = get_settings()
    overrides = {}
    if args.backend:
        overrides["store_backend"] = args.backend
    if args.data_file:
        overrides["data_file"] = Path(args.data_file)
    if args.database_url:
        overrides["database_url"] = args.database_url
    settings = dataclasses.replace(settings, **overrides)
    setup_logging(settings.log_level, settings.log_file or None)

    store = build_store(settings)
    svc = UserService(store=store, settings=settings)
    svc.init_demo_users()
    print(f"OK: {svc.count()} demo users written to {store.describe()}")
    return 0


if __name__ == "__main__":
    try:
        raise SystemExit(main())
    except Exception as exc:  # pragma: no cover - CLI usage
        sys.stderr.write(f"Error: {exc}\n")
        raise SystemExit(1)
