"""
Read-only introspection over any table in the project database.

Table names are never taken on trust: each call re-reads the list of user
tables and rejects names that are not in it before the name is quoted into
SQL.
"""

from __future__ import annotations

import logging
import sqlite3
from collections.abc import Callable
from typing import Any, TypeVar

import pandas as pd

from presentation_builder.core.models import ColumnDescriptor, TableStats
from presentation_builder.storage.errors import TableQueryError, UnknownTableError
from presentation_builder.storage.sqlite.utils import quote_identifier

log = logging.getLogger(__name__)

__all__ = ["TableInspector"]

T = TypeVar("T")


class TableInspector:
    """Diagnostic view of the tables stored alongside ``projects``."""

    def __init__(self, connection: sqlite3.Connection | Callable[[], sqlite3.Connection]):
        if isinstance(connection, sqlite3.Connection):
            self._connection: Callable[[], sqlite3.Connection] = lambda: connection
        else:
            self._connection = connection

    @property
    def conn(self) -> sqlite3.Connection:
        return self._connection()

    def list_tables(self) -> list[str]:
        """Names of all user tables, alphabetically. ``sqlite_*`` tables are excluded."""

        rows = self.conn.execute(
            """
            SELECT name FROM sqlite_master
            WHERE type='table' AND name NOT LIKE 'sqlite\\_%' ESCAPE '\\'
            ORDER BY name
            """
        ).fetchall()
        return [str(row[0]) for row in rows]

    def _checked(self, table_name: str) -> str:
        """Return ``table_name`` quoted for SQL once it is known to exist."""

        if not isinstance(table_name, str) or table_name not in self.list_tables():
            raise UnknownTableError(str(table_name))
        return quote_identifier(table_name)

    def _query(self, table_name: str, run: Callable[[], T]) -> T:
        try:
            return run()
        except (sqlite3.Error, pd.errors.DatabaseError) as exc:
            log.debug("Inspector query on %r failed", table_name, exc_info=True)
            raise TableQueryError(table_name, str(exc)) from exc

    def get_table_schema(self, table_name: str) -> list[ColumnDescriptor]:
        self._checked(table_name)
        rows = self._query(
            table_name,
            lambda: self.conn.execute(
                """
                SELECT cid, name, type, "notnull", dflt_value, pk
                FROM pragma_table_info(?)
                ORDER BY cid
                """,
                (table_name,),
            ).fetchall(),
        )
        return [ColumnDescriptor.from_pragma(row) for row in rows]

    def get_table_data(self, table_name: str) -> list[dict[str, Any]]:
        """All rows of ``table_name``, newest ``id`` first.

        Tables without an ``id`` column cannot be ordered and raise
        :class:`TableQueryError`.
        """

        quoted = self._checked(table_name)
        rows = self._query(
            table_name,
            lambda: self.conn.execute(f"SELECT * FROM {quoted} ORDER BY id DESC").fetchall(),
        )
        return [dict(row) for row in rows]

    def get_table_frame(self, table_name: str) -> pd.DataFrame:
        """Same rows as :meth:`get_table_data` as a DataFrame for tabular display."""

        quoted = self._checked(table_name)
        df = self._query(
            table_name,
            lambda: pd.read_sql_query(f"SELECT * FROM {quoted} ORDER BY id DESC", self.conn),
        )
        log.debug(
            "get_table_frame: table=%s rows=%s columns=%s",
            table_name,
            len(df.index),
            list(df.columns),
        )
        return df

    def get_table_stats(self, table_name: str) -> TableStats:
        quoted = self._checked(table_name)
        row = self._query(
            table_name,
            lambda: self.conn.execute(f"SELECT COUNT(*) AS count FROM {quoted}").fetchone(),
        )
        return TableStats(row_count=int(row[0]))
