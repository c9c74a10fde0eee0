"""
Startup reconciliation of the ``projects`` table.

Brings whatever ``projects`` table is on disk to the canonical schema while
keeping as many existing rows as possible. The routine is idempotent: once a
run succeeds, later runs report :attr:`MigrationKind.CANONICAL` and change
nothing.
"""

from __future__ import annotations

import logging
import sqlite3
from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Any

from presentation_builder.storage.errors import MigrationError
from presentation_builder.storage.sqlite import projects as _projects
from presentation_builder.storage.sqlite.utils import savepoint, transaction

log = logging.getLogger(__name__)

__all__ = [
    "MigrationKind",
    "MigrationOutcome",
    "TableState",
    "classify_columns",
    "reconcile_projects_table",
]

UNTITLED = "Untitled"

_RESTORE_SQL = """
INSERT INTO projects (id, name, type, description, created_at, updated_at)
VALUES (?, ?, ?, ?, ?, ?)
"""


class TableState(str, Enum):
    """Shape of an existing ``projects`` table."""

    CANONICAL = "canonical"
    MISSING_TYPE = "missing_type"
    INCOMPATIBLE = "incompatible"


class MigrationKind(str, Enum):
    """Which reconciliation path ran."""

    CANONICAL = "canonical"
    COLUMN_ADDED = "column_added"
    RECONSTRUCTED = "reconstructed"
    RESET = "reset"


@dataclass(frozen=True)
class MigrationOutcome:
    kind: MigrationKind
    restored_rows: int = 0
    dropped_rows: int = 0
    data_lost: bool = False


def classify_columns(columns: Iterable[str]) -> TableState:
    """Classify a ``projects`` column set.

    Any obsolete or unrecognised column makes the table incompatible, as does a
    missing column other than ``type`` (which can be added in place).
    """

    present = set(columns)
    expected = set(_projects.EXPECTED_COLUMNS)
    if present & _projects.OBSOLETE_COLUMNS or present - expected:
        return TableState.INCOMPATIBLE
    missing = expected - present
    if not missing:
        return TableState.CANONICAL
    if missing == {"type"}:
        return TableState.MISSING_TYPE
    return TableState.INCOMPATIBLE


def reconcile_projects_table(
    conn: sqlite3.Connection,
    *,
    now: Callable[[], str],
) -> MigrationOutcome:
    """
    Ensure ``projects`` exists in canonical shape and report what was done.

    ``now`` returns the timestamp text substituted for missing
    ``created_at``/``updated_at`` values of reconstructed rows. Everything runs
    in one transaction, so an interrupted run leaves the previous table intact.
    """

    with transaction(conn):
        _projects.ensure_legacy_table(conn)
        columns = _projects.column_names(conn)
        state = classify_columns(columns)
        log.debug("projects columns=%s state=%s", columns, state.value)

        if state is TableState.CANONICAL:
            return MigrationOutcome(MigrationKind.CANONICAL)

        if state is TableState.MISSING_TYPE:
            log.info("Running migration: adding type column to projects table")
            _projects.add_type_column(conn)
            log.info("Migration completed: type column added")
            return MigrationOutcome(MigrationKind.COLUMN_ADDED)

        log.info("Detected incompatible projects schema %s, recreating table", columns)
        try:
            with savepoint(conn, "reconstruct_projects"):
                outcome = _reconstruct(conn, now())
        except sqlite3.Error:
            log.warning(
                "Could not preserve existing projects, recreating an empty table",
                exc_info=True,
            )
            outcome = _reset(conn)
    return outcome


def _backup_rows(conn: sqlite3.Connection) -> list[dict[str, Any]]:
    """Read every existing ``projects`` row into memory."""

    cur = conn.execute(f"SELECT * FROM {_projects.PROJECTS_TABLE}")
    names = [desc[0] for desc in cur.description]
    return [dict(zip(names, row)) for row in cur.fetchall()]


def _restore_values(
    row: dict[str, Any], stamp: str, used_ids: set[int]
) -> tuple[object, ...]:
    row_id = row.get("id")
    if not isinstance(row_id, int) or isinstance(row_id, bool) or row_id in used_ids:
        row_id = None
    return (
        row_id,
        row.get("name") or UNTITLED,
        row.get("type") or _projects.DEFAULT_PROJECT_TYPE,
        row.get("description") or "",
        row.get("created_at") or stamp,
        row.get("updated_at") or stamp,
    )


def _restore_rows(
    conn: sqlite3.Connection, rows: Sequence[dict[str, Any]], stamp: str
) -> tuple[int, int]:
    restored = 0
    dropped = 0
    used_ids: set[int] = set()
    for row in rows:
        values = _restore_values(row, stamp, used_ids)
        try:
            cur = conn.execute(_RESTORE_SQL, values)
        except sqlite3.IntegrityError as exc:
            dropped += 1
            log.warning("Could not restore project row %r: %s", row, exc)
            continue
        used_ids.add(int(cur.lastrowid))
        restored += 1
    return restored, dropped


def _reconstruct(conn: sqlite3.Connection, stamp: str) -> MigrationOutcome:
    rows = _backup_rows(conn)
    conn.execute(f"DROP TABLE IF EXISTS {_projects.PROJECTS_TABLE}")
    _projects.create_canonical_table(conn)
    restored, dropped = _restore_rows(conn, rows, stamp)
    log.info(
        "projects table recreated: restored=%d dropped=%d of %d rows",
        restored,
        dropped,
        len(rows),
    )
    return MigrationOutcome(
        MigrationKind.RECONSTRUCTED,
        restored_rows=restored,
        dropped_rows=dropped,
    )


def _reset(conn: sqlite3.Connection) -> MigrationOutcome:
    try:
        conn.execute(f"DROP TABLE IF EXISTS {_projects.PROJECTS_TABLE}")
        _projects.create_canonical_table(conn)
    except sqlite3.Error as exc:
        raise MigrationError(f"Could not recreate projects table: {exc}") from exc
    log.warning("projects table recreated without data restoration")
    return MigrationOutcome(MigrationKind.RESET, data_lost=True)
