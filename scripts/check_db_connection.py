#!/usr/bin/env python3
import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from src.core.config import settings
from src.services.activity_service import validate_connection


def _masked(value: str) -> str:
    if not value:
        return "<empty>"
    if len(value) <= 2:
        return "*" * len(value)
    return f"{value[0]}{'*' * (len(value) - 2)}{value[-1]}"


def main() -> int:
    print("DB runtime settings:")
    if settings.database_url:
        print("- DATABASE_URL is set; MYSQL_* settings are ignored.")
    else:
        print(f"- MYSQL_HOST (raw): {settings.mysql_host!r}")
        print(f"- MYSQL_HOST (resolved): {settings.mysql_host_resolved!r}")
        print(f"- MYSQL_PORT: {settings.mysql_port}")
        print(f"- MYSQL_USER: {settings.mysql_user!r}")
        print(f"- MYSQL_DB: {settings.mysql_db!r}")
        print(f"- MYSQL_PASSWORD: {_masked(settings.mysql_password)}")

    ok, error = validate_connection()
    if ok:
        print("OK: Connected to the activity store and executed SELECT 1.")
        return 0
    print(f"ERROR: {error}")
    print("Tip: verify DATABASE_URL or the MYSQL_* values in .env.")
    return 1


if __name__ == "__main__":
    raise SystemExit(main())
