"""入口：加载存储 → 启动提醒轮询与喝水提醒定时器 → 打开主窗口。"""
import logging
import sys

from PyQt6.QtWidgets import QApplication

from reminder_app import __version__
from reminder_app.config import WINDOW_TITLE, ensure_dirs
from reminder_app.notify.service import NotificationService
from reminder_app.notify.settings_store import NotificationSettingsStore
from reminder_app.reminders.scheduler import ReminderScheduler
from reminder_app.reminders.store import ReminderStore
from reminder_app.ui.main_window import MainWindow
from reminder_app.water.driver import WaterReminderDriver
from reminder_app.water.service import WaterReminderService
from reminder_app.water.store import WaterStore


def main() -> None:
    logging.basicConfig(
        level=logging.INFO,
        format="[提醒助手] %(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )
    ensure_dirs()
    app = QApplication(sys.argv)
    app.setApplicationName(WINDOW_TITLE)
    app.setApplicationVersion(__version__)

    notification_service = NotificationService(NotificationSettingsStore())

    # 1. 普通提醒：每秒轮询到期项
    reminder_store = ReminderStore()
    scheduler = ReminderScheduler(reminder_store)
    scheduler.reminderDue.connect(notification_service.show_reminder)

    # 2. 喝水提醒：设置从 water.json 读取，启动时立即评估一次
    water_store = WaterStore()
    settings = water_store.get_reminder_settings()
    water_service = WaterReminderService(water_store, settings=settings)
    driver = WaterReminderDriver(water_service)
    driver.reminderRequested.connect(notification_service.show_water_reminder)

    # 3. 主窗口
    window = MainWindow(water_store, driver, reminder_store)
    scheduler.reminderDue.connect(window.reminders_panel.refresh)
    window.show()

    scheduler.start()
    driver.start()
    sys.exit(app.exec())


if __name__ == "__main__":
    main()
