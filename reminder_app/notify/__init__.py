"""弹窗设置与通知展示。"""
from reminder_app.notify.models import AppNotificationSettings, NotificationPosition, PopupSettings
from reminder_app.notify.settings_store import NotificationSettingsStore

__all__ = [
    "AppNotificationSettings",
    "NotificationPosition",
    "PopupSettings",
    "NotificationSettingsStore",
]
