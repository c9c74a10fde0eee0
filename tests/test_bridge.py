import json
import logging
from datetime import datetime, timedelta, timezone

import pytest

from presentation_builder.services.bridge import CHANNELS, Bridge, UnknownChannelError
from presentation_builder.storage.errors import ConstraintViolationError, UnknownTableError
from presentation_builder.storage.project_store import ProjectStore


def _make_bridge(tmp_path) -> Bridge:
    ticks = iter(datetime(2025, 1, 1, tzinfo=timezone.utc) + timedelta(seconds=i) for i in range(100))
    store = ProjectStore.open(tmp_path / "pb.db", clock=lambda: next(ticks))
    return Bridge(store)


def test_project_channels_round_trip(tmp_path):
    bridge = _make_bridge(tmp_path)
    try:
        created = bridge.invoke("projects:create", "Demo", "slides")
        assert created["name"] == "Demo"
        assert created["type"] == "slides"
        assert created["description"] == ""
        assert created["updated_at"] == created["created_at"]

        assert bridge.invoke("projects:get", created["id"]) == created
        assert bridge.invoke("projects:get", created["id"] + 1) is None

        bridge.invoke("projects:create", "Later", "document", "second one")
        assert [p["name"] for p in bridge.invoke("projects:getAll")] == ["Later", "Demo"]
    finally:
        bridge.store.close()


def test_records_are_json_ready(tmp_path):
    bridge = _make_bridge(tmp_path)
    try:
        bridge.projects.create("Serialisable")
        payload = {
            "projects": bridge.projects.get_all(),
            "tables": bridge.db.get_tables(),
            "schema": bridge.db.get_table_schema("projects"),
            "data": bridge.db.get_table_data("projects"),
            "stats": bridge.db.get_table_stats("projects"),
        }
    finally:
        bridge.store.close()

    decoded = json.loads(json.dumps(payload))
    assert decoded["tables"] == [{"name": "projects"}]
    assert decoded["stats"] == {"rowCount": 1}
    assert set(decoded["schema"][0]) == {"cid", "name", "type", "notnull", "dflt_value", "pk"}
    assert decoded["data"][0]["name"] == "Serialisable"


def test_db_channels(tmp_path):
    bridge = _make_bridge(tmp_path)
    try:
        bridge.projects.create("a")
        bridge.projects.create("b")
        assert bridge.invoke("db:getTables") == [{"name": "projects"}]
        assert bridge.invoke("db:getTableStats", "projects") == {"rowCount": 2}
        assert [r["name"] for r in bridge.invoke("db:getTableData", "projects")] == ["b", "a"]
        pk_columns = [c["name"] for c in bridge.invoke("db:getTableSchema", "projects") if c["pk"]]
        assert pk_columns == ["id"]
    finally:
        bridge.store.close()


def test_create_treats_missing_description_as_empty(tmp_path):
    bridge = _make_bridge(tmp_path)
    try:
        assert bridge.projects.create("No description", "document", None)["description"] == ""
    finally:
        bridge.store.close()


def test_every_channel_is_bound(tmp_path):
    bridge = _make_bridge(tmp_path)
    try:
        for group, method in CHANNELS.values():
            assert callable(getattr(getattr(bridge, group), method))
    finally:
        bridge.store.close()


def test_unknown_channel(tmp_path):
    bridge = _make_bridge(tmp_path)
    try:
        with pytest.raises(UnknownChannelError):
            bridge.invoke("projects:delete", 1)
    finally:
        bridge.store.close()


def test_failures_are_logged_and_reraised(tmp_path, caplog):
    bridge = _make_bridge(tmp_path)
    try:
        with caplog.at_level(logging.ERROR, logger="presentation_builder"):
            with pytest.raises(ConstraintViolationError):
                bridge.invoke("projects:create", "Bad", "invalid-type")
            with pytest.raises(UnknownTableError):
                bridge.invoke("db:getTableData", "nope")
        assert bridge.invoke("projects:getAll") == []
    finally:
        bridge.store.close()

    messages = [record.getMessage() for record in caplog.records]
    assert any(m.startswith("Failed to create project") for m in messages)
    assert any(m.startswith("Failed to get table data") for m in messages)
