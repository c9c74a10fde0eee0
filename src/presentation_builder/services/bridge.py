# Presentation Builder
# Copyright © 2025 Presentation Builder contributors
# Licensed under CC BY-NC-SA 4.0 International
# http://creativecommons.org/licenses/by-nc-sa/4.0/

"""
Request/response boundary between the UI layer and the project store.

Every call is synchronous and returns plain, JSON-ready records. Failures are
logged here and re-raised; presenting them to the user is the caller's job.
"""

from __future__ import annotations

import functools
import logging
from collections.abc import Callable
from typing import Any, TypeVar, cast

from presentation_builder.storage.inspector import TableInspector
from presentation_builder.storage.project_store import ProjectStore
from presentation_builder.storage.sqlite.projects import DEFAULT_PROJECT_TYPE

from .types import ColumnRecord, ProjectRecord, TableRecord, TableRow, TableStatsRecord

log = logging.getLogger(__name__)

__all__ = ["Bridge", "ProjectsApi", "DatabaseApi", "UnknownChannelError", "CHANNELS"]

F = TypeVar("F", bound=Callable[..., Any])


class UnknownChannelError(LookupError):
    """Raised when :meth:`Bridge.invoke` is given an unregistered channel."""

    def __init__(self, channel: str):
        self.channel = channel
        super().__init__(f"Unknown channel: {channel!r}")


def _reported(message: str) -> Callable[[F], F]:
    """Log failures of the wrapped call with ``message`` and re-raise them."""

    def decorate(func: F) -> F:
        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            try:
                return func(*args, **kwargs)
            except Exception as e:
                log.error(f"{message}: {e}", exc_info=True)
                raise

        return cast(F, wrapper)

    return decorate


class ProjectsApi:
    def __init__(self, store: ProjectStore) -> None:
        self._store = store

    @_reported("Failed to get projects")
    def get_all(self) -> list[ProjectRecord]:
        return [
            cast(ProjectRecord, project.model_dump()) for project in self._store.list_projects()
        ]

    @_reported("Failed to create project")
    def create(
        self,
        name: str,
        type: str = DEFAULT_PROJECT_TYPE,
        description: str | None = None,
    ) -> ProjectRecord:
        project = self._store.create_project(name, type, description or "")
        return cast(ProjectRecord, project.model_dump())

    @_reported("Failed to get project")
    def get(self, project_id: int) -> ProjectRecord | None:
        project = self._store.get_project(project_id)
        return cast(ProjectRecord, project.model_dump()) if project is not None else None


class DatabaseApi:
    def __init__(self, inspector: TableInspector) -> None:
        self._inspector = inspector

    @_reported("Failed to get tables")
    def get_tables(self) -> list[TableRecord]:
        return [{"name": name} for name in self._inspector.list_tables()]

    @_reported("Failed to get table data")
    def get_table_data(self, table_name: str) -> list[TableRow]:
        return self._inspector.get_table_data(table_name)

    @_reported("Failed to get table schema")
    def get_table_schema(self, table_name: str) -> list[ColumnRecord]:
        return [
            cast(ColumnRecord, column.to_pragma_dict())
            for column in self._inspector.get_table_schema(table_name)
        ]

    @_reported("Failed to get table stats")
    def get_table_stats(self, table_name: str) -> TableStatsRecord:
        return cast(TableStatsRecord, self._inspector.get_table_stats(table_name).to_record())


CHANNELS: dict[str, tuple[str, str]] = {
    "projects:getAll": ("projects", "get_all"),
    "projects:create": ("projects", "create"),
    "projects:get": ("projects", "get"),
    "db:getTables": ("db", "get_tables"),
    "db:getTableData": ("db", "get_table_data"),
    "db:getTableSchema": ("db", "get_table_schema"),
    "db:getTableStats": ("db", "get_table_stats"),
}


class Bridge:
    """The ``projects`` and ``db`` APIs bound to one open store."""

    def __init__(self, store: ProjectStore) -> None:
        self.store = store
        self.projects = ProjectsApi(store)
        self.db = DatabaseApi(TableInspector(store.connection))

    def invoke(self, channel: str, *args: Any) -> Any:
        """Dispatch a ``group:operation`` channel name to its handler."""

        target = CHANNELS.get(channel)
        if target is None:
            raise UnknownChannelError(channel)
        group, method = target
        log.debug("invoke channel=%s args=%r", channel, args)
        return getattr(getattr(self, group), method)(*args)
