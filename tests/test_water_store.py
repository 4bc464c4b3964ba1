"""喝水存储测试。"""
import json
import tempfile
from datetime import date, datetime, time
from pathlib import Path

import pytest
from pydantic import ValidationError

from reminder_app.water.models import WaterReminderSettings
from reminder_app.water.store import WaterStore


def test_defaults_when_file_missing() -> None:
    with tempfile.TemporaryDirectory() as tmp:
        store = WaterStore(data_dir=Path(tmp))
        assert store.get_daily_goal() == 2000
        settings = store.get_reminder_settings()
        assert settings.enabled is False
        assert settings.interval_minutes == 60
        assert settings.day_start == time(9, 0)
        assert settings.day_end == time(2, 0)
        assert settings.crosses_midnight
        assert store.get_manual_end_until() is None


def test_entries_range_is_half_open_and_sorted() -> None:
    with tempfile.TemporaryDirectory() as tmp:
        store = WaterStore(data_dir=Path(tmp))
        store.add_entry(300, datetime(2026, 3, 10, 12, 0))
        store.add_entry(200, datetime(2026, 3, 10, 9, 0))
        store.add_entry(100, datetime(2026, 3, 10, 21, 0))
        entries = store.get_entries_in_range(datetime(2026, 3, 10, 9, 0), datetime(2026, 3, 10, 21, 0))
        assert [e.amount_ml for e in entries] == [200, 300]
        assert store.total_for_date(date(2026, 3, 10)) == 600


def test_persist_and_reload() -> None:
    with tempfile.TemporaryDirectory() as tmp:
        store = WaterStore(data_dir=Path(tmp))
        entry = store.add_entry(250, datetime(2026, 3, 10, 10, 0))
        store.set_daily_goal(2500)
        store.set_reminder_settings(
            WaterReminderSettings(enabled=True, interval_minutes=90, day_start="08:30", day_end="22:00")
        )
        store.set_manual_end_until(datetime(2026, 3, 11, 8, 30))

        reloaded = WaterStore(data_dir=Path(tmp))
        assert reloaded.get_daily_goal() == 2500
        assert [e.id for e in reloaded.get_entries_for_date(date(2026, 3, 10))] == [entry.id]
        settings = reloaded.get_reminder_settings()
        assert settings.enabled is True
        assert settings.interval_minutes == 90
        assert settings.day_start == time(8, 30)
        assert settings.day_end == time(22, 0)
        assert reloaded.get_manual_end_until() == datetime(2026, 3, 11, 8, 30)

        assert reloaded.delete_entry(entry.id) is True
        assert reloaded.delete_entry(entry.id) is False
        assert WaterStore(data_dir=Path(tmp)).get_entries_for_date(date(2026, 3, 10)) == []


def test_invalid_settings_in_file_are_normalized() -> None:
    with tempfile.TemporaryDirectory() as tmp:
        path = Path(tmp) / "water.json"
        path.write_text(
            json.dumps({"water_reminder_interval_minutes": 0, "day_start_time": "xx", "day_end_time": "23:15"}),
            encoding="utf-8",
        )
        settings = WaterStore(data_dir=Path(tmp)).get_reminder_settings()
        assert settings.interval_minutes == 60
        assert settings.day_start == time(9, 0)
        assert settings.day_end == time(23, 15)


def test_corrupt_file_falls_back_to_defaults() -> None:
    with tempfile.TemporaryDirectory() as tmp:
        (Path(tmp) / "water.json").write_text("{not json", encoding="utf-8")
        store = WaterStore(data_dir=Path(tmp))
        assert store.get_daily_goal() == 2000
        assert store.get_entries_for_date(date(2026, 3, 10)) == []


def test_non_positive_entry_is_rejected() -> None:
    with tempfile.TemporaryDirectory() as tmp:
        store = WaterStore(data_dir=Path(tmp))
        with pytest.raises(ValidationError):
            store.add_entry(0, datetime(2026, 3, 10, 10, 0))


def test_failed_save_keeps_memory_unchanged() -> None:
    with tempfile.TemporaryDirectory() as tmp:
        store = WaterStore(data_dir=Path(tmp))
        kept = store.add_entry(300, datetime(2026, 3, 10, 9, 0))

        def fail(data) -> None:
            raise OSError("disk full")

        store._save = fail
        with pytest.raises(OSError):
            store.add_entry(500, datetime(2026, 3, 10, 10, 0))
        with pytest.raises(OSError):
            store.delete_entry(kept.id)
        with pytest.raises(OSError):
            store.set_daily_goal(1500)
        with pytest.raises(OSError):
            store.set_manual_end_until(datetime(2026, 3, 11, 9, 0))

        assert [e.id for e in store.get_entries_for_date(date(2026, 3, 10))] == [kept.id]
        assert store.get_daily_goal() == 2000
        assert store.get_manual_end_until() is None
        # 文件内容与内存一致
        reloaded = WaterStore(data_dir=Path(tmp))
        assert [e.id for e in reloaded.get_entries_for_date(date(2026, 3, 10))] == [kept.id]
