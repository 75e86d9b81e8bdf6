"""
Create the customer tables from the model metadata (idempotent).

This is not a migration tool: existing tables are left untouched.

Usage:
  python scripts/init_db.py
"""

from __future__ import annotations

import sys
from pathlib import Path

from sqlalchemy import create_engine

# Ensure repo root is on sys.path when running as a script.
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from app.crm.config import load_settings  # noqa: E402
from app.crm.models import Base  # noqa: E402


def create_all(*, database_url: str | None = None) -> list[str]:
    """Create missing tables; returns the table names known to the metadata."""
    db_url = (database_url or load_settings().database_url).strip()
    engine = create_engine(db_url, future=True)
    try:
        Base.metadata.create_all(bind=engine)
    finally:
        engine.dispose()
    return sorted(Base.metadata.tables)


def main() -> None:
    tables = create_all()
    print(f"Tables ready: {', '.join(tables)}", flush=True)


if __name__ == "__main__":
    main()
