"""喝水提醒定时驱动：QTimer 周期性评估，评估异常只记录状态，不中断定时器。"""
import logging
from datetime import datetime
from typing import Optional

from PyQt6.QtCore import QObject, QTimer, pyqtSignal

from reminder_app.config import WATER_TICK_INTERVAL_MS
from reminder_app.water.service import WaterReminderService

logger = logging.getLogger(__name__)


class WaterReminderDriver(QObject):
    """持有定时器；到期的提醒通过 reminderRequested 发出，由通知服务展示。"""
    reminderRequested = pyqtSignal(object)  # WaterReminder
    statusChanged = pyqtSignal(str)

    def __init__(
        self,
        service: WaterReminderService,
        interval_ms: int = WATER_TICK_INTERVAL_MS,
        parent: Optional[QObject] = None,
    ):
        super().__init__(parent)
        self._service = service
        self._interval_ms = interval_ms
        self._timer: Optional[QTimer] = None

    @property
    def service(self) -> WaterReminderService:
        return self._service

    def start(self) -> None:
        """启动定时器并立即评估一次。"""
        if self._timer is None:
            self._timer = QTimer(self)
            self._timer.timeout.connect(self.tick)
        self._timer.start(self._interval_ms)
        self.tick()

    def stop(self) -> None:
        if self._timer is not None:
            self._timer.stop()

    def is_running(self) -> bool:
        return self._timer is not None and self._timer.isActive()

    def tick(self, now: Optional[datetime] = None) -> Optional[object]:
        """评估一次；返回发出的 WaterReminder（没有则 None）。"""
        try:
            result = self._service.evaluate(now)
            if result.reminder is not None:
                self.reminderRequested.emit(result.reminder)
        except Exception as e:
            logger.exception("喝水提醒评估失败")
            self._service.record_error(str(e))
            self.statusChanged.emit(self._service.status)
            return None
        self.statusChanged.emit(self._service.status)
        return result.reminder

    # 设置变化后立即重新评估，不等下一个节拍

    def apply_settings(self, enabled: bool, interval, day_start, day_end) -> None:
        self._service.apply_settings(enabled, interval, day_start, day_end)
        self.tick()

    def end_today(self) -> datetime:
        until = self._service.end_today()
        self.tick()
        return until

    def reset_manual_end(self) -> None:
        self._service.reset_manual_end()
        self.tick()
