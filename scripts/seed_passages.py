"""Seed sections and passages into the configured database.

Creates missing tables, then loads the built-in sample corpus or a JSON book
export ({"Sách": [...]}). Does nothing when sections already exist.

Usage:
    python -m scripts.seed_passages [path/to/books.json]

Requires: DATABASE_URL (defaults to the local SQLite file).
"""

from __future__ import annotations

import asyncio
import logging
import sys
from pathlib import Path

from dotenv import load_dotenv

from passage_search.core.config import get_settings
from passage_search.infrastructure.persistence import database
from passage_search.infrastructure.persistence.seed import DatabaseSeeder
from passage_search.shared.telemetry.logging import setup_logging


def _project_root() -> Path:
    return Path(__file__).resolve().parent.parent


def _load_env() -> None:
    """Load .env from project root so get_settings() sees DATABASE_URL when run as script."""
    load_dotenv(_project_root() / ".env", override=True)
    get_settings.cache_clear()


async def run(path: Path | None) -> None:
    _load_env()
    setup_logging()
    if path is not None and not path.exists():
        print(f"Seed file not found: {path}", file=sys.stderr)
        sys.exit(1)

    await database.create_schema()
    try:
        async with database.get_session_factory()() as session:
            sections, passages = await DatabaseSeeder(session, path).seed()
    finally:
        await database.dispose_engine()

    if sections:
        print(f"Seed completed: {sections} sections, {passages} passages.")
    else:
        print("Database already seeded; nothing to do.")


def main() -> None:
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    root = _project_root()
    path_arg = sys.argv[1] if len(sys.argv) > 1 else None
    path = Path(path_arg) if path_arg else None
    if path is not None and not path.is_absolute():
        path = (root / path).resolve()
    asyncio.run(run(path))


if __name__ == "__main__":
    main()
