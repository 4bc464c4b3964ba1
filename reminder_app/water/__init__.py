"""喝水记录与喝水提醒。"""
from reminder_app.water.models import WaterDebugInfo, WaterEntry, WaterReminderSettings
from reminder_app.water.quota import plan_quota, round_up_to_step, suggest_amount
from reminder_app.water.service import WaterReminder, WaterReminderService, WaterStatus
from reminder_app.water.store import WaterStore
from reminder_app.water.window import WaterDayWindow, describe_window, next_day_start, resolve_window

__all__ = [
    "WaterDebugInfo",
    "WaterEntry",
    "WaterReminderSettings",
    "plan_quota",
    "round_up_to_step",
    "suggest_amount",
    "WaterReminder",
    "WaterReminderService",
    "WaterStatus",
    "WaterStore",
    "WaterDayWindow",
    "describe_window",
    "next_day_start",
    "resolve_window",
]
