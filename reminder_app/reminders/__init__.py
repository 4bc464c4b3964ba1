"""一次性与重复提醒。"""
from reminder_app.reminders.models import (
    NotificationLevel,
    NotificationSettings,
    Reminder,
    ReminderType,
    create_reminder,
)
from reminder_app.reminders.store import ReminderStore

__all__ = [
    "NotificationLevel",
    "NotificationSettings",
    "Reminder",
    "ReminderType",
    "create_reminder",
    "ReminderStore",
]
