# Presentation Builder
# Copyright © 2025 Presentation Builder contributors
# Licensed under CC BY-NC-SA 4.0 International
# http://creativecommons.org/licenses/by-nc-sa/4.0/

"""Public package interface for the presentation builder project store."""

from importlib import import_module

from presentation_builder.config import APP_VERSION as __version__

_EXPORTS = {
    "Project": ("presentation_builder.core.models", "Project"),
    "ColumnDescriptor": ("presentation_builder.core.models", "ColumnDescriptor"),
    "TableStats": ("presentation_builder.core.models", "TableStats"),
    "ProjectStore": ("presentation_builder.storage.project_store", "ProjectStore"),
    "open_store": ("presentation_builder.storage.project_store", "open_store"),
    "TableInspector": ("presentation_builder.storage.inspector", "TableInspector"),
    "MigrationKind": ("presentation_builder.storage.migration", "MigrationKind"),
    "MigrationOutcome": ("presentation_builder.storage.migration", "MigrationOutcome"),
    "Bridge": ("presentation_builder.services.bridge", "Bridge"),
}


def __getattr__(name: str):
    if name in _EXPORTS:
        module_name, attr = _EXPORTS[name]
        module = import_module(module_name)
        value = getattr(module, attr)
        globals()[name] = value
        return value
    raise AttributeError(f"module 'presentation_builder' has no attribute {name!r}")


__all__ = [
    "__version__",
    "Project",
    "ColumnDescriptor",
    "TableStats",
    "ProjectStore",
    "open_store",
    "TableInspector",
    "MigrationKind",
    "MigrationOutcome",
    "Bridge",
]
