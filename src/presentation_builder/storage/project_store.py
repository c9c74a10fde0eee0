# Presentation Builder
# Copyright © 2025 Presentation Builder contributors
# Licensed under CC BY-NC-SA 4.0 International
# http://creativecommons.org/licenses/by-nc-sa/4.0/

"""
SQLite-backed store for presentation builder projects.

A :class:`ProjectStore` owns one database connection for the lifetime of the
process. Opening a store reconciles the ``projects`` table (see
:mod:`presentation_builder.storage.migration`) before any query runs; closing
it releases the connection.
"""

from __future__ import annotations

import logging
import os
import sqlite3
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path

from presentation_builder.core.models import Project
from presentation_builder.storage.errors import (
    ConstraintViolationError,
    ProjectStoreError,
    StoreClosedError,
)
from presentation_builder.storage.migration import MigrationOutcome, reconcile_projects_table
from presentation_builder.storage.sqlite import projects as _projects
from presentation_builder.storage.sqlite.utils import open_db

log = logging.getLogger(__name__)

__all__ = ["ProjectStore", "open_store", "utc_now"]

Clock = Callable[[], datetime]

_DEFAULT_PRAGMAS = {"foreign_keys": True, "busy_timeout_ms": 5000}


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class ProjectStore:
    """Open project database plus the outcome of its startup reconciliation."""

    path: Path
    conn: sqlite3.Connection | None
    migration: MigrationOutcome | None = None
    clock: Clock = field(default=utc_now, repr=False)

    # ------------------------------------------------------------------
    # Lifecycle

    @classmethod
    def open(
        cls,
        path: str | os.PathLike[str],
        *,
        clock: Clock | None = None,
    ) -> ProjectStore:
        """Open (creating if needed) the database at ``path`` and reconcile it."""

        db_path = Path(path)
        try:
            if db_path.as_posix() != ":memory:":
                db_path.parent.mkdir(parents=True, exist_ok=True)
            conn = open_db(db_path.as_posix(), pragmas=_DEFAULT_PRAGMAS)
        except (OSError, sqlite3.Error) as exc:
            log.error("Failed to open database at %s: %s", db_path, exc)
            raise ProjectStoreError(f"Could not open database at {db_path}: {exc}") from exc
        store = cls(path=db_path, conn=conn, clock=clock or utc_now)
        try:
            store.migration = reconcile_projects_table(conn, now=store.timestamp)
        except Exception:
            log.error("Failed to initialise database at %s", db_path, exc_info=True)
            conn.close()
            store.conn = None
            raise
        log.info(
            "Database initialized path=%s migration=%s",
            db_path,
            store.migration.kind.value,
        )
        return store

    @property
    def closed(self) -> bool:
        return self.conn is None

    def connection(self) -> sqlite3.Connection:
        """Return the live connection or raise :class:`StoreClosedError`."""

        if self.conn is None:
            raise StoreClosedError(f"Project store at {self.path} is closed")
        return self.conn

    def close(self) -> None:
        if self.conn is None:
            return
        try:
            self.conn.close()
        finally:
            self.conn = None
            log.debug("Database closed path=%s", self.path)

    def __enter__(self) -> ProjectStore:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def timestamp(self) -> str:
        """Current time as stored in ``created_at``/``updated_at``."""

        return self.clock().astimezone(timezone.utc).strftime(_projects.TIMESTAMP_FORMAT)

    # ------------------------------------------------------------------
    # Projects

    def create_project(
        self,
        name: str,
        type: str = _projects.DEFAULT_PROJECT_TYPE,
        description: str = "",
    ) -> Project:
        """Insert a project and return the stored row.

        ``type`` is validated by the table's CHECK constraint; a violation is
        raised as :class:`ConstraintViolationError` and nothing is inserted.
        """

        conn = self.connection()
        if name is not None and not isinstance(name, str):
            raise ConstraintViolationError(
                f"Project name must be text, not {name.__class__.__name__}"
            )
        if not name or not name.strip():
            raise ConstraintViolationError("Project name must not be empty")

        now = self.timestamp()
        try:
            cur = conn.execute(
                """
                INSERT INTO projects (name, type, description, created_at, updated_at)
                VALUES (?, ?, ?, ?, ?)
                """,
                (name, type, description if description is not None else "", now, now),
            )
        except sqlite3.IntegrityError as exc:
            raise ConstraintViolationError(f"Could not create project: {exc}") from exc

        project = self.get_project(int(cur.lastrowid))
        if project is None:  # pragma: no cover - the row was just written
            raise ConstraintViolationError("Inserted project could not be read back")
        log.info("Created project id=%s type=%s", project.id, project.type)
        return project

    def list_projects(self) -> list[Project]:
        """Return all projects, most recently created first."""

        rows = self.connection().execute(
            "SELECT * FROM projects ORDER BY created_at DESC"
        ).fetchall()
        return [Project.from_row(row) for row in rows]

    def get_project(self, project_id: int) -> Project | None:
        row = self.connection().execute(
            "SELECT * FROM projects WHERE id = ?", (project_id,)
        ).fetchone()
        return Project.from_row(row) if row is not None else None


def open_store(
    path: str | os.PathLike[str] | None = None,
    *,
    clock: Clock | None = None,
) -> ProjectStore:
    """Open the store at ``path`` or at the configured default database path."""

    if path is None:
        from presentation_builder.config import load_config

        path = load_config().db_path
    return ProjectStore.open(path, clock=clock)
