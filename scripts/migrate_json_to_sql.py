"""One-off migration script: JSON user file -> SQL table."""
from __future__ import annotations

import argparse
from pathlib import Path
import sys

# Make the userapi package importable when run directly
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from userapi.core.config import get_settings
from userapi.repositories.json_storage import JsonUserStore
from userapi.repositories.sql_repository import SQLUserStore


def migrate(data_file: Path, database_url: str) -> int:
    if not data_file.exists():
        raise SystemExit(f"File not found: {data_file}")
    source = JsonUserStore(data_file)
    target = SQLUserStore(database_url)
    with target.writing():
        target.clear()
        for user in source.snapshot():
            target.add(user)
        target.persist()
    return target.count()


def main() -> None:
    settings = get_settings()
    ap = argparse.ArgumentParser(description="Copy the JSON user file into the SQL store")
    ap.add_argument("--data-file", default=str(settings.data_file), help="Source JSON file")
    ap.add_argument("--database-url", default=settings.database_url, help="Target SQLAlchemy URL")
    args = ap.parse_args()
    if not args.database_url:
        raise SystemExit("DATABASE_URL (or --database-url) is required")
    count = migrate(Path(args.data_file), args.database_url)
    print(f"{count} users migrated to the SQL store successfully.")


if __name__ == "__main__":
    main()
