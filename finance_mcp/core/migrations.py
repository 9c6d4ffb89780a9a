"""Startup compatibility shim for databases created with the old ``userid`` column.

Older files named the owner column ``userid``. When a table still has that
column and lacks ``ownerid``, it is renamed in place and the owner index is
created. Databases that already have the current layout are left untouched.
"""
from __future__ import annotations

import logging

from sqlalchemy import inspect, text
from sqlalchemy.engine import Connection
from sqlalchemy.exc import SQLAlchemyError

logger = logging.getLogger(__name__)

LEGACY_OWNER_COLUMN = "userid"
OWNER_COLUMN = "ownerid"

# table -> index over the owner column
OWNER_INDEXES = {
    "categories": "idx_categories_ownerid",
    "transactions": "idx_transactions_ownerid",
}


def _needs_rename(connection: Connection, table_name: str) -> bool:
    inspector = inspect(connection)
    if not inspector.has_table(table_name):
        return False
    columns = {column["name"] for column in inspector.get_columns(table_name)}
    return LEGACY_OWNER_COLUMN in columns and OWNER_COLUMN not in columns


def migrate_legacy_owner_columns(connection: Connection) -> list[str]:
    """Rename ``userid`` to ``ownerid`` where needed and return the migrated tables.

    Failures are logged and skipped so a broken legacy file never blocks startup.
    """
    migrated: list[str] = []
    for table_name, index_name in OWNER_INDEXES.items():
        try:
            if not _needs_rename(connection, table_name):
                continue
            connection.execute(
                text(f"ALTER TABLE {table_name} RENAME COLUMN {LEGACY_OWNER_COLUMN} TO {OWNER_COLUMN}")
            )
            connection.execute(
                text(f"CREATE INDEX IF NOT EXISTS {index_name} ON {table_name}({OWNER_COLUMN})")
            )
        except SQLAlchemyError:
            logger.warning("Skipping legacy owner column migration for %s", table_name, exc_info=True)
            continue
        migrated.append(table_name)
    return migrated


__all__ = ["migrate_legacy_owner_columns"]
