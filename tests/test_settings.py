"""
Tests for runtime settings, the activity log and the data model.
"""

from scanbench.activity import ActivityLog
from scanbench.models import Item, ItemKind, ProductType
from scanbench.rotation import ManualTimer, RotationController
from scanbench.settings import DEFAULT_SETTINGS, load_settings


class TestLoadSettings:
    """Environment overrides."""

    def test_defaults(self):
        settings = load_settings({})
        assert settings == DEFAULT_SETTINGS
        assert settings is not DEFAULT_SETTINGS

    def test_overrides(self):
        settings = load_settings({
            "SCANBENCH_INTERVAL": "1.5",
            "SCANBENCH_TICK": "0.05",
            "SCANBENCH_TEMPLATE": "type2",
            "SCANBENCH_ACTIVITY_LIMIT": "20",
            "SCANBENCH_LOG_LEVEL": "debug",
        })
        assert settings["interval_seconds"] == 1.5
        assert settings["tick_seconds"] == 0.05
        assert settings["default_template"] == "type2"
        assert settings["activity_limit"] == 20
        assert settings["log_level"] == "DEBUG"

    def test_bad_values_fall_back(self):
        settings = load_settings({
            "SCANBENCH_INTERVAL": "-3",
            "SCANBENCH_TICK": "fast",
            "SCANBENCH_ACTIVITY_LIMIT": "many",
            "SCANBENCH_TEMPLATE": "",
        })
        assert settings["interval_seconds"] == DEFAULT_SETTINGS["interval_seconds"]
        assert settings["tick_seconds"] == DEFAULT_SETTINGS["tick_seconds"]
        assert settings["activity_limit"] == DEFAULT_SETTINGS["activity_limit"]
        assert settings["default_template"] == "type1"

    def test_negative_activity_limit_falls_back(self, monkeypatch):
        assert load_settings({"SCANBENCH_ACTIVITY_LIMIT": "-1"})["activity_limit"] == 500
        assert load_settings({"SCANBENCH_ACTIVITY_LIMIT": "0"})["activity_limit"] == 0

        monkeypatch.setenv("SCANBENCH_ACTIVITY_LIMIT", "-5")
        controller = RotationController(timer_factory=ManualTimer)
        controller.activity_log.add("dm", "x")
        assert len(controller.activity_log) == 1

    def test_nan_interval_falls_back(self):
        assert load_settings({"SCANBENCH_INTERVAL": "nan"})["interval_seconds"] == 3.0

    def test_defaults_are_not_modified(self):
        load_settings({"SCANBENCH_INTERVAL": "9"})
        assert DEFAULT_SETTINGS["interval_seconds"] == 3.0


class TestActivityLog:
    """Generated-payload log."""

    def test_add_records_kind_value(self):
        log = ActivityLog()
        entry = log.add(ItemKind.GS1, "payload")
        assert entry.kind == "GS1"
        assert entry.to_dict()["payload"] == "payload"
        assert len(entry.timestamp) == len("2024-01-01 00:00:00")

    def test_limit_drops_oldest(self):
        log = ActivityLog(max_entries=2)
        for payload in ("a", "b", "c"):
            log.add("DM", payload)
        assert [e.payload for e in log.entries] == ["b", "c"]

    def test_unbounded(self):
        log = ActivityLog(max_entries=None)
        for i in range(600):
            log.add("DM", str(i))
        assert len(log) == 600
        log.clear()
        assert len(log) == 0


class TestItem:
    """Catalog item helpers."""

    def test_describe(self):
        item = Item(source_value="12345", kind=ItemKind.GS1, product_type=ProductType.PIECE,
                    quantity=2.5, discount=10)
        assert item.describe() == "GS1 12345 | qty 2.5 | -10%"

    def test_ids_are_unique(self):
        first = Item(source_value="1", kind=ItemKind.SIMPLE)
        second = Item(source_value="1", kind=ItemKind.SIMPLE)
        assert first.id != second.id

    def test_to_dict(self):
        data = Item(source_value="1", kind=ItemKind.WEIGHT, prefix="77", weight=500).to_dict()
        assert data["kind"] == "WEIGHT"
        assert data["format"] == "CODE128"
        assert data["product_type"] is None
        assert data["weight"] == 500
