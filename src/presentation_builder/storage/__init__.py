"""Project storage: the SQLite store, its startup migration and the table inspector."""

from importlib import import_module
from typing import Any

__all__ = [
    "ProjectStore",
    "open_store",
    "TableInspector",
    "MigrationKind",
    "MigrationOutcome",
    "reconcile_projects_table",
    "ProjectStoreError",
    "ConstraintViolationError",
    "MigrationError",
    "StoreClosedError",
    "UnknownTableError",
    "TableQueryError",
]

_LAZY_EXPORTS: dict[str, tuple[str, str]] = {
    "ProjectStore": ("presentation_builder.storage.project_store", "ProjectStore"),
    "open_store": ("presentation_builder.storage.project_store", "open_store"),
    "TableInspector": ("presentation_builder.storage.inspector", "TableInspector"),
    "MigrationKind": ("presentation_builder.storage.migration", "MigrationKind"),
    "MigrationOutcome": ("presentation_builder.storage.migration", "MigrationOutcome"),
    "reconcile_projects_table": (
        "presentation_builder.storage.migration",
        "reconcile_projects_table",
    ),
}
_LAZY_EXPORTS.update(
    {
        name: ("presentation_builder.storage.errors", name)
        for name in (
            "ProjectStoreError",
            "ConstraintViolationError",
            "MigrationError",
            "StoreClosedError",
            "UnknownTableError",
            "TableQueryError",
        )
    }
)


def __getattr__(name: str) -> Any:
    target = _LAZY_EXPORTS.get(name)
    if target is None:
        raise AttributeError(f"module 'presentation_builder.storage' has no attribute {name!r}")

    module_name, attr_name = target
    module = import_module(module_name)
    value = getattr(module, attr_name)
    globals()[name] = value
    return value
