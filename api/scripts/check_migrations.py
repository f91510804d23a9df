"""Fail if the users/profiles migrations drift from the SQLAlchemy models.

Usage:
    python -m scripts.check_migrations [--database-url URL]
"""

from __future__ import annotations

import argparse
import asyncio
import logging

from alembic.autogenerate import compare_metadata
from alembic.migration import MigrationContext
from sqlalchemy import text
from sqlalchemy.ext.asyncio import create_async_engine

from app import models  # noqa: F401  # Ensure models are registered
from app.config import settings
from app.database import Base
from app.logging_config import configure_logging

logger = logging.getLogger("app.scripts.check_migrations")


def _compare(connection) -> list[object]:
    context = MigrationContext.configure(connection, opts={"compare_type": True})
    return compare_metadata(context, Base.metadata)


async def check(database_url: str) -> list[object]:
    """Return the schema differences between the models and the database."""
    engine = create_async_engine(database_url)
    try:
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
            return await conn.run_sync(_compare)
    finally:
        await engine.dispose()


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("--database-url", default=settings.database_url)
    args = parser.parse_args(argv)

    configure_logging(settings.log_level)
    diffs = asyncio.run(check(args.database_url))

    if diffs:
        logger.error("Detected %d schema difference(s) between models and database:", len(diffs))
        for diff in diffs:
            logger.error("  %s", diff)
        return 1

    logger.info("No schema differences detected.")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
