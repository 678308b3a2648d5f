"""Schema bootstrap run at application startup.

Tables are created idempotently, then columns added after the first release
are patched onto databases that predate them.
"""

import logging

from sqlalchemy import inspect, text
from sqlalchemy.engine import Connection
from sqlalchemy.exc import OperationalError
from sqlalchemy.ext.asyncio import AsyncEngine

from hsa.models.base import Base

logger = logging.getLogger(__name__)

# (table, column, DDL fragment) for columns added after the initial schema.
LATE_COLUMNS: list[tuple[str, str, str]] = [
    ("transactions", "type", "VARCHAR(20) NOT NULL DEFAULT 'expense'"),
]


def _add_missing_columns(sync_conn: Connection) -> list[str]:
    inspector = inspect(sync_conn)
    added = []
    for table, column, ddl in LATE_COLUMNS:
        existing = {c["name"] for c in inspector.get_columns(table)}
        if column in existing:
            continue
        try:
            sync_conn.execute(text(f"ALTER TABLE {table} ADD COLUMN {column} {ddl}"))
            added.append(f"{table}.{column}")
        except OperationalError:
            # Another process may have added it between inspect and ALTER.
            logger.warning(
                "Column migration skipped",
                extra={"table": table, "column": column},
            )
    return added


async def init_db(engine: AsyncEngine) -> None:
    """Create all tables if missing and apply best-effort column migrations."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
        added = await conn.run_sync(_add_missing_columns)

    if added:
        logger.info("Schema migrated", extra={"columns_added": added})
    logger.info("Database initialized")
