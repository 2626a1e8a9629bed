"""Show (and optionally create) the default BurnCloud database.

Prints the platform default location. With --init, opens the database there,
writes a sample row to a ``settings`` table and reads it back.

Usage:
    bin/show-default-db              # Print the default path only
    bin/show-default-db --init       # Create/open it and run a sample write
"""
from __future__ import annotations

import argparse
import asyncio
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(REPO_ROOT))

from burncloud_db import DatabaseError, create_default_database, default_database_path
from burncloud_db.config import AppConfig, configure_logging


async def init_default() -> None:
    db = await create_default_database()
    try:
        await db.execute("CREATE TABLE IF NOT EXISTS settings (key TEXT PRIMARY KEY, value TEXT)")
        await db.execute(
            "INSERT OR REPLACE INTO settings (key, value) VALUES (?, ?)",
            ("app_version", "1.0.0"),
        )
        row = await db.fetch_one("SELECT value FROM settings WHERE key = ?", ("app_version",))
        print(f"app_version = {row['value']}")
    finally:
        await db.close()


def main() -> int:
    parser = argparse.ArgumentParser(description="Show the default BurnCloud database location")
    parser.add_argument("--init", action="store_true", help="Create the database and run a sample write")
    args = parser.parse_args()

    configure_logging(AppConfig().log)

    try:
        print(f"Default path: {default_database_path()}")
        if args.init:
            asyncio.run(init_default())
    except DatabaseError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
