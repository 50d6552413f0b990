from __future__ import annotations

import sys
from pathlib import Path

from dotenv import load_dotenv

REPO_ROOT = Path(__file__).resolve().parents[1]
for path in (REPO_ROOT, REPO_ROOT / "src" / "attendance_bot"):
    if str(path) not in sys.path:
        sys.path.insert(0, str(path))

from attendance_bot.database.bootstrap import apply_schema, list_tables
from attendance_bot.database.connection import DBConfig, DatabaseConnection
from attendance_bot.settings import load_settings


def main() -> None:
    load_dotenv(override=False)
    settings = load_settings()

    conn = DatabaseConnection(DBConfig(url=settings.database_url))
    try:
        apply_schema(conn)
        tables = list_tables(conn)
    finally:
        conn.dispose()
    print(f"OK: schema applied -> {conn.backend} (tables={', '.join(tables)})")


if __name__ == "__main__":
    main()
