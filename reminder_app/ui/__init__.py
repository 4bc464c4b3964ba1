"""主窗口、喝水页与提醒页。"""
from reminder_app.ui.main_window import MainWindow
from reminder_app.ui.reminders_panel import ReminderEditorDialog, RemindersPanel
from reminder_app.ui.water_panel import WaterPanel

__all__ = [
    "MainWindow",
    "ReminderEditorDialog",
    "RemindersPanel",
    "WaterPanel",
]
