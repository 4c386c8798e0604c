"""
Runtime schema migrations.

Datasets written by earlier app versions have an `activities` table without
`comment` / `account_id` and a `route_points` table without `sequence`.
`ensure_schema` creates whatever tables are missing and adds those columns in
place, keeping existing rows. Alembic revisions under `alembic/versions`
describe the same steps for managed deployments.
"""

import logging

from sqlalchemy import inspect, text
from sqlalchemy.engine import Connection

from stridelog.models import Base, register_models

logger = logging.getLogger(__name__)


# table -> [(column, DDL type clause)]
ADDITIVE_COLUMNS: dict[str, list[tuple[str, str]]] = {
    "activities": [
        ("comment", "TEXT NOT NULL DEFAULT ''"),
        ("account_id", "INTEGER REFERENCES accounts(id)"),
    ],
    "route_points": [
        ("sequence", "INTEGER NOT NULL DEFAULT 0"),
    ],
}


def missing_columns(connection: Connection) -> list[tuple[str, str, str]]:
    """List additive columns absent from existing tables."""
    inspector = inspect(connection)
    existing_tables = set(inspector.get_table_names())
    missing = []
    for table_name, columns in ADDITIVE_COLUMNS.items():
        if table_name not in existing_tables:
            continue
        present = {column["name"] for column in inspector.get_columns(table_name)}
        for name, ddl in columns:
            if name not in present:
                missing.append((table_name, name, ddl))
    return missing


def ensure_schema(connection: Connection) -> list[str]:
    """
    Bring the database schema up to date without data loss.

    Works on a sync connection; use `conn.run_sync(ensure_schema)` from async
    code.

    Args:
        connection: Open connection inside a transaction

    Returns:
        Names of columns that were added ("table.column")
    """
    register_models()
    Base.metadata.create_all(bind=connection)

    added = []
    for table_name, name, ddl in missing_columns(connection):
        connection.execute(text(f"ALTER TABLE {table_name} ADD COLUMN {name} {ddl}"))
        added.append(f"{table_name}.{name}")
        logger.info(f"Added column {table_name}.{name}")

    return added
