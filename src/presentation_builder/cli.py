"""
Command-line front end for the project store.

Usage:
    presentation-builder projects list
    presentation-builder projects create "Quarterly review" --type slides
    presentation-builder db tables
    presentation-builder db data projects --format table
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from dataclasses import asdict
from typing import Any

from presentation_builder.config import APP_VERSION, load_config
from presentation_builder.core.logging_config import setup_logging
from presentation_builder.services.bridge import Bridge
from presentation_builder.storage.errors import ProjectStoreError
from presentation_builder.storage.inspector import TableInspector
from presentation_builder.storage.project_store import ProjectStore, open_store
from presentation_builder.storage.sqlite.projects import DEFAULT_PROJECT_TYPE, PROJECT_TYPES

log = logging.getLogger(__name__)


def _json_default(value: Any) -> Any:
    if isinstance(value, (bytes, bytearray, memoryview)):
        return bytes(value).hex()
    if hasattr(value, "value"):
        return value.value
    return str(value)


def _emit(payload: Any) -> None:
    print(json.dumps(payload, indent=2, default=_json_default))


def cmd_projects_list(store: ProjectStore, args: argparse.Namespace) -> None:
    _emit(Bridge(store).projects.get_all())


def cmd_projects_create(store: ProjectStore, args: argparse.Namespace) -> None:
    _emit(Bridge(store).projects.create(args.name, args.type, args.description))


def cmd_projects_show(store: ProjectStore, args: argparse.Namespace) -> None:
    project = Bridge(store).projects.get(args.id)
    if project is None:
        print(f"No project with id {args.id}", file=sys.stderr)
        raise SystemExit(1)
    _emit(project)


def cmd_db_tables(store: ProjectStore, args: argparse.Namespace) -> None:
    _emit(Bridge(store).db.get_tables())


def cmd_db_schema(store: ProjectStore, args: argparse.Namespace) -> None:
    _emit(Bridge(store).db.get_table_schema(args.table))


def cmd_db_data(store: ProjectStore, args: argparse.Namespace) -> None:
    if args.format == "table":
        df = TableInspector(store.connection).get_table_frame(args.table)
        if df.empty:
            print(f"{args.table}: no rows")
        else:
            print(df.to_string(index=False))
        return
    _emit(Bridge(store).db.get_table_data(args.table))


def cmd_db_stats(store: ProjectStore, args: argparse.Namespace) -> None:
    _emit(Bridge(store).db.get_table_stats(args.table))


def cmd_migrate(store: ProjectStore, args: argparse.Namespace) -> None:
    outcome = store.migration
    _emit(asdict(outcome) if outcome is not None else None)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser("presentation-builder")
    parser.add_argument("--db", default=None, help="Database file (default: per-user data dir)")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log INFO to the console")
    parser.add_argument("--version", action="version", version=f"%(prog)s {APP_VERSION}")
    sub = parser.add_subparsers(dest="cmd", required=True)

    projects = sub.add_parser("projects", help="List, create and show projects")
    psub = projects.add_subparsers(dest="action", required=True)

    sp = psub.add_parser("list")
    sp.set_defaults(func=cmd_projects_list)

    sp = psub.add_parser("create")
    sp.add_argument("name")
    sp.add_argument("--type", default=DEFAULT_PROJECT_TYPE, help=f"One of {', '.join(PROJECT_TYPES)}")
    sp.add_argument("--description", default="")
    sp.set_defaults(func=cmd_projects_create)

    sp = psub.add_parser("show")
    sp.add_argument("id", type=int)
    sp.set_defaults(func=cmd_projects_show)

    db = sub.add_parser("db", help="Inspect raw database tables")
    dsub = db.add_subparsers(dest="action", required=True)

    sp = dsub.add_parser("tables")
    sp.set_defaults(func=cmd_db_tables)

    sp = dsub.add_parser("schema")
    sp.add_argument("table")
    sp.set_defaults(func=cmd_db_schema)

    sp = dsub.add_parser("data")
    sp.add_argument("table")
    sp.add_argument("--format", choices=("json", "table"), default="json")
    sp.set_defaults(func=cmd_db_data)

    sp = dsub.add_parser("stats")
    sp.add_argument("table")
    sp.set_defaults(func=cmd_db_stats)

    sp = sub.add_parser("migrate", help="Reconcile the projects table and report the outcome")
    sp.set_defaults(func=cmd_migrate)

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    try:
        setup_logging(load_config(), console_level=logging.INFO if args.verbose else logging.WARNING)
    except OSError as e:
        logging.basicConfig(level=logging.WARNING)
        log.error(f"Failed to setup logging: {e}", exc_info=True)

    try:
        with open_store(args.db) as store:
            args.func(store, args)
    except ProjectStoreError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":  # pragma: no cover - import guard
    sys.exit(main(sys.argv[1:]))
