"""SQLite helpers backing the presentation builder project store."""

from __future__ import annotations

__all__: list[str] = ["projects", "utils"]
