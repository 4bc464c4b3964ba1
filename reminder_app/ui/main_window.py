"""主窗口：喝水页与提醒页。"""
from typing import Optional

from PyQt6.QtWidgets import QMainWindow, QTabWidget, QWidget

from reminder_app.config import WINDOW_HEIGHT, WINDOW_TITLE, WINDOW_WIDTH
from reminder_app.reminders.store import ReminderStore
from reminder_app.ui.reminders_panel import RemindersPanel
from reminder_app.ui.water_panel import WaterPanel
from reminder_app.water.driver import WaterReminderDriver
from reminder_app.water.store import WaterStore


class MainWindow(QMainWindow):
    def __init__(
        self,
        water_store: WaterStore,
        water_driver: WaterReminderDriver,
        reminder_store: ReminderStore,
        parent: Optional[QWidget] = None,
    ):
        super().__init__(parent)
        self.setWindowTitle(WINDOW_TITLE)
        self.resize(WINDOW_WIDTH, WINDOW_HEIGHT)
        tabs = QTabWidget()
        self.water_panel = WaterPanel(water_store, water_driver)
        self.reminders_panel = RemindersPanel(reminder_store)
        tabs.addTab(self.water_panel, "喝水")
        tabs.addTab(self.reminders_panel, "提醒")
        self.setCentralWidget(tabs)
        self.statusBar().showMessage("提醒已在后台运行")
