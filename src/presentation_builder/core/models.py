from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, field_validator

from presentation_builder.storage.sqlite.projects import DEFAULT_PROJECT_TYPE

ProjectType = Literal["document", "slides"]


class Project(BaseModel):
    """A stored ``projects`` row."""

    model_config = ConfigDict(frozen=True)

    id: int
    name: str
    type: ProjectType = DEFAULT_PROJECT_TYPE
    description: str = ""
    created_at: str
    updated_at: str

    @field_validator("description", mode="before")
    def _null_description(cls, value: Any) -> Any:
        return "" if value is None else value

    @field_validator("created_at", "updated_at", mode="before")
    def _timestamp_text(cls, value: Any) -> Any:
        # rows kept from the original table may carry NULL timestamps
        return str(value) if value is not None else ""

    @classmethod
    def from_row(cls, row: Any) -> Project:
        return cls.model_validate(dict(row))


class ColumnDescriptor(BaseModel):
    """One column of a table as reported by ``pragma_table_info``."""

    model_config = ConfigDict(frozen=True)

    position: int
    name: str
    declared_type: str = ""
    not_null: bool = False
    default_value: str | None = None
    is_primary_key: bool = False

    @classmethod
    def from_pragma(cls, row: Any) -> ColumnDescriptor:
        cid, name, declared, notnull, default, pk = tuple(row)
        return cls(
            position=int(cid),
            name=str(name),
            declared_type=str(declared or ""),
            not_null=bool(notnull),
            default_value=None if default is None else str(default),
            is_primary_key=bool(pk),
        )

    def to_pragma_dict(self) -> dict[str, Any]:
        """Return the ``cid/name/type/notnull/dflt_value/pk`` record shape."""

        return {
            "cid": self.position,
            "name": self.name,
            "type": self.declared_type,
            "notnull": int(self.not_null),
            "dflt_value": self.default_value,
            "pk": int(self.is_primary_key),
        }


class TableStats(BaseModel):
    model_config = ConfigDict(frozen=True)

    row_count: int

    def to_record(self) -> dict[str, int]:
        return {"rowCount": self.row_count}
