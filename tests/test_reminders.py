"""一次性/重复提醒测试。"""
import tempfile
from datetime import date, datetime, timedelta
from pathlib import Path

import pytest

from reminder_app.reminders.models import NotificationLevel, NotificationSettings, ReminderType, create_reminder
from reminder_app.reminders.scheduler import ReminderScheduler
from reminder_app.reminders.store import ReminderStore

NOW = datetime(2026, 3, 10, 14, 0)


def test_create_reminder_with_lead_time() -> None:
    r = create_reminder("开会", NOW + timedelta(hours=1), minutes_before=10, now=NOW)
    assert r.type == ReminderType.ONE_TIME
    assert r.next_trigger_time == NOW + timedelta(minutes=50)
    assert r.is_active


def test_create_reminder_lead_time_in_past_falls_back_to_schedule() -> None:
    scheduled = NOW + timedelta(minutes=5)
    r = create_reminder("喝药", scheduled, minutes_before=10, now=NOW)
    assert r.next_trigger_time == scheduled
    assert create_reminder("x", scheduled, minutes_before=-3, now=NOW).minutes_before == 0


def test_create_repeating_reminder() -> None:
    r = create_reminder("站起来活动", NOW, repeat_interval_minutes=45, now=NOW)
    assert r.type == ReminderType.REPEATING
    assert r.is_repeating
    with pytest.raises(ValueError):
        create_reminder("bad", NOW, repeat_interval_minutes=0, now=NOW)


def test_store_due_by_date_and_reload() -> None:
    with tempfile.TemporaryDirectory() as tmp:
        store = ReminderStore(data_dir=Path(tmp))
        later = create_reminder("晚饭", NOW + timedelta(hours=4), now=NOW)
        due = create_reminder(
            "交报告",
            NOW,
            notification_settings=NotificationSettings(level=NotificationLevel.CRITICAL),
            now=NOW,
        )
        tomorrow = create_reminder("早起", NOW + timedelta(days=1), now=NOW)
        for r in (later, due, tomorrow):
            store.add(r)

        assert [r.id for r in store.get_due(NOW)] == [due.id]
        assert [r.title for r in store.get_by_date(date(2026, 3, 10))] == ["交报告", "晚饭"]

        reloaded = ReminderStore(data_dir=Path(tmp))
        assert len(reloaded.get_all()) == 3
        assert reloaded.get(due.id).notification_settings.level == NotificationLevel.CRITICAL
        assert reloaded.delete(later.id) is True
        assert reloaded.delete(later.id) is False
        assert ReminderStore(data_dir=Path(tmp)).get(later.id) is None


def test_corrupt_store_starts_empty() -> None:
    with tempfile.TemporaryDirectory() as tmp:
        (Path(tmp) / "reminders.json").write_text("[[[", encoding="utf-8")
        assert ReminderStore(data_dir=Path(tmp)).get_all() == []


def test_scheduler_fires_and_rearms(qapp) -> None:
    with tempfile.TemporaryDirectory() as tmp:
        store = ReminderStore(data_dir=Path(tmp))
        once = create_reminder("一次", NOW, now=NOW)
        repeat = create_reminder("重复", NOW - timedelta(minutes=1), repeat_interval_minutes=30, now=NOW - timedelta(minutes=1))
        pending = create_reminder("未到", NOW + timedelta(minutes=5), now=NOW)
        for r in (once, repeat, pending):
            store.add(r)

        scheduler = ReminderScheduler(store, clock=lambda: NOW)
        emitted = []
        scheduler.reminderDue.connect(emitted.append)

        fired = scheduler.tick()
        assert {r.id for r in fired} == {once.id, repeat.id}
        assert {r.id for r in emitted} == {once.id, repeat.id}

        reloaded = ReminderStore(data_dir=Path(tmp))
        assert reloaded.get(once.id).is_active is False
        assert reloaded.get(repeat.id).is_active is True
        assert reloaded.get(repeat.id).next_trigger_time == NOW + timedelta(minutes=30)

        # 同一时刻再轮询不会重复触发
        assert scheduler.tick() == []
        assert [r.id for r in scheduler.tick(NOW + timedelta(minutes=5))] == [pending.id]
