"""「今日结束」暂停测试。"""
from datetime import datetime, time

from reminder_app.water.pause import PauseTracker


def test_end_today_before_day_start_pauses_until_today(water_store) -> None:
    tracker = PauseTracker(water_store)
    until = tracker.end_today(datetime(2026, 3, 10, 7, 0), time(9, 0))
    assert until == datetime(2026, 3, 10, 9, 0)
    assert water_store.get_manual_end_until() == until


def test_end_today_after_day_start_pauses_until_tomorrow(water_store) -> None:
    tracker = PauseTracker(water_store)
    until = tracker.end_today(datetime(2026, 3, 10, 10, 0), time(9, 0))
    assert until == datetime(2026, 3, 11, 9, 0)
    # 重启后从存储恢复
    assert PauseTracker(water_store).until == until


def test_check_and_clear(water_store) -> None:
    tracker = PauseTracker(water_store)
    assert tracker.check_and_clear(datetime(2026, 3, 10, 8, 0)) is False

    tracker.end_today(datetime(2026, 3, 10, 7, 0), time(9, 0))
    assert tracker.check_and_clear(datetime(2026, 3, 10, 8, 59)) is True
    assert tracker.until is not None

    assert tracker.check_and_clear(datetime(2026, 3, 10, 9, 0)) is False
    assert tracker.until is None
    assert water_store.get_manual_end_until() is None
