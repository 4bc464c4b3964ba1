"""喝水提醒定时驱动测试（直接调用 tick，不启动事件循环）。"""
from datetime import datetime

from reminder_app.water.driver import WaterReminderDriver
from reminder_app.water.service import WaterReminder, WaterReminderService
from reminder_app.water.store import WaterStore


class FlakyWaterStore(WaterStore):
    """读取目标时可模拟磁盘故障。"""
    fail = False

    def get_daily_goal(self) -> int:
        if self.fail:
            raise OSError("disk gone")
        return super().get_daily_goal()


def test_tick_emits_reminder(qapp, water_store, clock) -> None:
    service = WaterReminderService(water_store, clock=clock)
    service.apply_settings(True, 60, "09:00", "21:00")
    driver = WaterReminderDriver(service)
    received = []
    statuses = []
    driver.reminderRequested.connect(received.append)
    driver.statusChanged.connect(statuses.append)

    reminder = driver.tick()
    assert isinstance(reminder, WaterReminder)
    assert received == [reminder]
    assert statuses == ["reminded"]

    assert driver.tick() is None
    assert statuses[-1] == "waiting"
    assert len(received) == 1


def test_tick_survives_evaluation_errors(qapp, tmp_path, clock) -> None:
    store = FlakyWaterStore(data_dir=tmp_path)
    service = WaterReminderService(store, clock=clock)
    service.apply_settings(True, 60, "09:00", "21:00")
    driver = WaterReminderDriver(service)

    store.fail = True
    assert driver.tick() is None
    assert service.status == "error: disk gone"

    store.fail = False
    assert driver.tick() is not None
    assert service.status == "reminded"


def test_settings_changes_reevaluate_immediately(qapp, water_store, clock) -> None:
    service = WaterReminderService(water_store, clock=clock)
    driver = WaterReminderDriver(service)
    received = []
    driver.reminderRequested.connect(received.append)

    driver.apply_settings(True, 60, "09:00", "21:00")
    assert len(received) == 1

    until = driver.end_today()
    assert until == datetime(2026, 3, 11, 9, 0)
    assert service.status == "manually_ended"

    driver.reset_manual_end()
    assert len(received) == 2


def test_start_and_stop(qapp, water_store, clock) -> None:
    service = WaterReminderService(water_store, clock=clock)
    driver = WaterReminderDriver(service, interval_ms=60_000)
    driver.start()
    assert driver.is_running()
    assert service.status == "disabled"
    driver.stop()
    assert not driver.is_running()
