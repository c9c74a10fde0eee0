"""Application services for the UI boundary."""

from importlib import import_module
from typing import Any

__all__ = [
    "Bridge",
    "ProjectsApi",
    "DatabaseApi",
    "UnknownChannelError",
    "service_types",
]

_LAZY_EXPORTS: dict[str, tuple[str, str]] = {
    "Bridge": ("presentation_builder.services.bridge", "Bridge"),
    "ProjectsApi": ("presentation_builder.services.bridge", "ProjectsApi"),
    "DatabaseApi": ("presentation_builder.services.bridge", "DatabaseApi"),
    "UnknownChannelError": ("presentation_builder.services.bridge", "UnknownChannelError"),
}


def __getattr__(name: str) -> Any:
    if name == "service_types":
        module = import_module("presentation_builder.services.types")
        globals()[name] = module
        return module

    target = _LAZY_EXPORTS.get(name)
    if target is None:
        raise AttributeError(f"module 'presentation_builder.services' has no attribute {name!r}")

    module_name, attr_name = target
    module = import_module(module_name)
    value = getattr(module, attr_name)
    globals()[name] = value
    return value
