"""Exceptions raised by the project store and table inspector."""

from __future__ import annotations

__all__ = [
    "ProjectStoreError",
    "ConstraintViolationError",
    "MigrationError",
    "StoreClosedError",
    "UnknownTableError",
    "TableQueryError",
]


class ProjectStoreError(RuntimeError):
    """Base class for storage-layer failures."""


class ConstraintViolationError(ProjectStoreError):
    """Raised when a write breaks a column or CHECK constraint."""


class MigrationError(ProjectStoreError):
    """Raised when the ``projects`` table cannot be brought to canonical shape."""


class StoreClosedError(ProjectStoreError):
    """Raised when a closed store is used."""


class UnknownTableError(ProjectStoreError, LookupError):
    """Raised when an inspected table name is not a user table of the database."""

    def __init__(self, table_name: str):
        self.table_name = table_name
        super().__init__(f"No such table: {table_name!r}")


class TableQueryError(ProjectStoreError):
    """Raised when a query against a known table fails."""

    def __init__(self, table_name: str, message: str):
        self.table_name = table_name
        super().__init__(f"Query against {table_name!r} failed: {message}")
