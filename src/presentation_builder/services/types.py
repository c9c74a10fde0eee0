"""Record shapes exchanged across the UI boundary."""

from __future__ import annotations

from typing import Any, TypedDict

__all__ = [
    "ProjectRecord",
    "TableRecord",
    "ColumnRecord",
    "TableStatsRecord",
    "TableRow",
]


class ProjectRecord(TypedDict):
    id: int
    name: str
    type: str
    description: str
    created_at: str
    updated_at: str


class TableRecord(TypedDict):
    name: str


class ColumnRecord(TypedDict):
    cid: int
    name: str
    type: str
    notnull: int
    dflt_value: str | None
    pk: int


class TableStatsRecord(TypedDict):
    rowCount: int


TableRow = dict[str, Any]
