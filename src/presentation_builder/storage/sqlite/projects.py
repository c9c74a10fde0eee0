"""
Schema helpers for the ``projects`` table.
"""

from __future__ import annotations

import sqlite3

__all__ = [
    "PROJECTS_TABLE",
    "PROJECT_TYPES",
    "DEFAULT_PROJECT_TYPE",
    "EXPECTED_COLUMNS",
    "OBSOLETE_COLUMNS",
    "TIMESTAMP_FORMAT",
    "ensure_legacy_table",
    "create_canonical_table",
    "add_type_column",
    "column_names",
]

PROJECTS_TABLE = "projects"
PROJECT_TYPES: tuple[str, ...] = ("document", "slides")
DEFAULT_PROJECT_TYPE = "document"

EXPECTED_COLUMNS: tuple[str, ...] = (
    "id",
    "name",
    "type",
    "description",
    "created_at",
    "updated_at",
)
OBSOLETE_COLUMNS: frozenset[str] = frozenset({"template_id"})

# Matches SQLite's datetime('now') output.
TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"

_TYPE_CHECK = "CHECK(type IN ({}))".format(", ".join(f"'{value}'" for value in PROJECT_TYPES))

_LEGACY_DDL = """
CREATE TABLE IF NOT EXISTS projects (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    name TEXT NOT NULL,
    description TEXT,
    created_at DATETIME DEFAULT CURRENT_TIMESTAMP,
    updated_at DATETIME DEFAULT CURRENT_TIMESTAMP
)
"""

_CANONICAL_DDL = f"""
CREATE TABLE projects (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    name TEXT NOT NULL,
    type TEXT NOT NULL DEFAULT '{DEFAULT_PROJECT_TYPE}' {_TYPE_CHECK},
    description TEXT,
    created_at DATETIME DEFAULT CURRENT_TIMESTAMP,
    updated_at DATETIME DEFAULT CURRENT_TIMESTAMP
)
"""

_ADD_TYPE_DDL = f"""
ALTER TABLE projects
ADD COLUMN type TEXT NOT NULL DEFAULT '{DEFAULT_PROJECT_TYPE}' {_TYPE_CHECK}
"""


def ensure_legacy_table(conn: sqlite3.Connection) -> None:
    """Create ``projects`` in its original (pre-``type``) shape if it is missing."""

    conn.execute(_LEGACY_DDL)


def create_canonical_table(conn: sqlite3.Connection) -> None:
    """Create ``projects`` with the canonical schema. The table must not exist."""

    conn.execute(_CANONICAL_DDL)


def add_type_column(conn: sqlite3.Connection) -> None:
    """Add the ``type`` column and its enumeration constraint in place."""

    conn.execute(_ADD_TYPE_DDL)


def column_names(conn: sqlite3.Connection, name: str = PROJECTS_TABLE) -> list[str]:
    """Return the column names of ``name`` in declaration order."""

    rows = conn.execute("SELECT name FROM pragma_table_info(?) ORDER BY cid", (name,)).fetchall()
    return [str(row[0]) for row in rows]
