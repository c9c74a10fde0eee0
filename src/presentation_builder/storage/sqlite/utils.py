"""
Utility helpers for the SQLite-backed project store.

Connection helpers, pragmas, transaction context managers and
identifier quoting.
"""

from __future__ import annotations

import sqlite3
from collections.abc import Iterator, Mapping
from contextlib import contextmanager
from typing import Any, cast

__all__ = [
    "open_db",
    "set_pragmas",
    "transaction",
    "savepoint",
    "quote_identifier",
]


# ---- Connections ------------------------------------------------------------


def open_db(
    path: str,
    *,
    mode: str = "rwc",
    pragmas: Mapping[str, object] | None = None,
) -> sqlite3.Connection:
    """
    Open a SQLite database in autocommit mode with ``sqlite3.Row`` rows.

    mode: "ro" (read-only), "rw", "rwc" (create if needed). Default: "rwc".
    Multi-statement writes must go through :func:`transaction`.
    """
    if path == ":memory:":
        conn = sqlite3.connect(":memory:", isolation_level=None)
    else:
        uri = f"file:{path}?mode={mode}"
        conn = sqlite3.connect(uri, uri=True, isolation_level=None)
    conn.row_factory = sqlite3.Row
    if pragmas:
        set_pragmas(conn, pragmas)
    return conn


def _to_int(value: object) -> int:
    return int(cast(Any, value))


def set_pragmas(conn: sqlite3.Connection, opts: Mapping[str, object]) -> None:
    """Apply selected pragmas.

    Only keys present in ``opts`` are applied. Supported keys are
    ``foreign_keys``, ``journal_mode``, ``synchronous`` and ``busy_timeout_ms``.
    """

    norm = {str(key).lower(): value for key, value in opts.items()}
    for key, value in norm.items():
        if key == "foreign_keys":
            conn.execute(f"PRAGMA foreign_keys={'ON' if value else 'OFF'}")
        elif key == "journal_mode":
            conn.execute(f"PRAGMA journal_mode={value}")
        elif key == "synchronous":
            conn.execute(f"PRAGMA synchronous={value}")
        elif key == "busy_timeout_ms":
            conn.execute(f"PRAGMA busy_timeout={_to_int(value)}")


# ---- Transactions -------------------------------------------------


@contextmanager
def transaction(
    conn: sqlite3.Connection,
    *,
    begin: str = "BEGIN IMMEDIATE",
) -> Iterator[sqlite3.Connection]:
    """
    Transaction wrapper that commits on success and rolls back on error.
    Uses BEGIN IMMEDIATE by default so the write lock is taken up-front.
    """

    conn.execute(begin)
    try:
        yield conn
        conn.execute("COMMIT")
    except BaseException:
        if conn.in_transaction:
            conn.execute("ROLLBACK")
        raise


# ---- Identifiers ------------------------------------------------------------


def quote_identifier(name: str) -> str:
    """Return ``name`` as a double-quoted SQL identifier."""

    if "\x00" in name:
        raise ValueError("Identifier must not contain NUL characters")
    return '"' + name.replace('"', '""') + '"'


@contextmanager
def savepoint(conn: sqlite3.Connection, name: str) -> Iterator[sqlite3.Connection]:
    """
    Nested unit of work inside an open transaction.

    On error the work since the savepoint is undone and the enclosing
    transaction stays usable.
    """

    label = quote_identifier(name)
    conn.execute(f"SAVEPOINT {label}")
    try:
        yield conn
    except BaseException:
        conn.execute(f"ROLLBACK TO SAVEPOINT {label}")
        conn.execute(f"RELEASE SAVEPOINT {label}")
        raise
    conn.execute(f"RELEASE SAVEPOINT {label}")
