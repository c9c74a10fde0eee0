import pandas as pd
import pytest

from presentation_builder.core.models import ColumnDescriptor
from presentation_builder.storage.errors import StoreClosedError, TableQueryError, UnknownTableError
from presentation_builder.storage.inspector import TableInspector
from presentation_builder.storage.project_store import ProjectStore


def _make_store(tmp_path) -> ProjectStore:
    store = ProjectStore.open(tmp_path / "pb.db")
    for name, kind in [("Intro", "slides"), ("Spec", "document"), ("Outro", "slides")]:
        store.create_project(name, kind)
    conn = store.connection()
    conn.execute("CREATE TABLE slides (id INTEGER PRIMARY KEY, project_id INTEGER, title TEXT)")
    conn.executemany(
        "INSERT INTO slides (project_id, title) VALUES (?, ?)",
        [(1, "Welcome"), (1, "Agenda")],
    )
    conn.execute("CREATE TABLE assets (id INTEGER PRIMARY KEY, blob BLOB)")
    return store


def test_list_tables_is_sorted_and_hides_internal_tables(tmp_path):
    with _make_store(tmp_path) as store:
        inspector = TableInspector(store.connection())
        internal = {
            row[0]
            for row in store.connection().execute(
                "SELECT name FROM sqlite_master WHERE type='table' AND name LIKE 'sqlite%'"
            )
        }
        tables = inspector.list_tables()

    assert "sqlite_sequence" in internal
    assert tables == ["assets", "projects", "slides"]
    assert not any(name.startswith("sqlite_") for name in tables)


def test_projects_schema_descriptors(tmp_path):
    with _make_store(tmp_path) as store:
        schema = TableInspector(store.connection()).get_table_schema("projects")

    assert [c.position for c in schema] == list(range(len(schema)))
    by_name = {c.name: c for c in schema}
    assert set(by_name) == {"id", "name", "type", "description", "created_at", "updated_at"}
    assert by_name["id"] == ColumnDescriptor(
        position=by_name["id"].position,
        name="id",
        declared_type="INTEGER",
        not_null=False,
        default_value=None,
        is_primary_key=True,
    )
    assert by_name["name"].not_null
    assert by_name["type"].default_value == "'document'"
    assert not by_name["description"].is_primary_key


def test_table_data_is_newest_id_first(tmp_path):
    with _make_store(tmp_path) as store:
        rows = TableInspector(store.connection()).get_table_data("projects")

    assert [r["name"] for r in rows] == ["Outro", "Spec", "Intro"]
    assert [r["id"] for r in rows] == sorted((r["id"] for r in rows), reverse=True)


def test_row_count_matches_data_for_every_table(tmp_path):
    with _make_store(tmp_path) as store:
        inspector = TableInspector(store.connection())
        for table in inspector.list_tables():
            stats = inspector.get_table_stats(table)
            assert stats.row_count == len(inspector.get_table_data(table))
        assert inspector.get_table_stats("slides").row_count == 2
        assert inspector.get_table_stats("assets").row_count == 0


def test_unknown_table_is_rejected(tmp_path):
    with _make_store(tmp_path) as store:
        inspector = TableInspector(store.connection())
        with pytest.raises(UnknownTableError):
            inspector.get_table_data("missing")
        with pytest.raises(UnknownTableError):
            inspector.get_table_schema("missing")
        with pytest.raises(UnknownTableError):
            inspector.get_table_stats("sqlite_sequence")


def test_injected_table_name_never_reaches_sql(tmp_path):
    with _make_store(tmp_path) as store:
        inspector = TableInspector(store.connection())
        with pytest.raises(UnknownTableError):
            inspector.get_table_data("projects; DROP TABLE projects")
        with pytest.raises(UnknownTableError):
            inspector.get_table_stats('projects" --')
        assert "projects" in inspector.list_tables()
        assert inspector.get_table_stats("projects").row_count == 3


def test_quoted_table_names_are_supported(tmp_path):
    with _make_store(tmp_path) as store:
        store.connection().execute('CREATE TABLE "odd ""name""" (id INTEGER PRIMARY KEY, v TEXT)')
        store.connection().execute('INSERT INTO "odd ""name""" (v) VALUES (\'x\')')
        inspector = TableInspector(store.connection())

        assert 'odd "name"' in inspector.list_tables()
        assert inspector.get_table_data('odd "name"') == [{"id": 1, "v": "x"}]
        assert [c.name for c in inspector.get_table_schema('odd "name"')] == ["id", "v"]


def test_table_without_id_column_surfaces_query_error(tmp_path):
    with _make_store(tmp_path) as store:
        store.connection().execute("CREATE TABLE settings (key TEXT PRIMARY KEY, value TEXT)")
        inspector = TableInspector(store.connection())

        with pytest.raises(TableQueryError) as excinfo:
            inspector.get_table_data("settings")
        assert excinfo.value.table_name == "settings"
        assert inspector.get_table_stats("settings").row_count == 0


def test_table_frame_matches_rows(tmp_path):
    with _make_store(tmp_path) as store:
        inspector = TableInspector(store.connection())
        df = inspector.get_table_frame("projects")
        rows = inspector.get_table_data("projects")

    assert isinstance(df, pd.DataFrame)
    assert len(df.index) == len(rows)
    assert df["name"].tolist() == [r["name"] for r in rows]


def test_inspector_follows_a_connection_factory(tmp_path):
    store = _make_store(tmp_path)
    inspector = TableInspector(store.connection)
    assert inspector.get_table_stats("projects").row_count == 3
    store.close()
    with pytest.raises(StoreClosedError):
        inspector.list_tables()
