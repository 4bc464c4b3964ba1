"""提醒轮询：每秒检查到期提醒，一次性提醒触发后停用，重复提醒顺延一个间隔。"""
import logging
from datetime import datetime, timedelta
from typing import Callable, List, Optional

from PyQt6.QtCore import QObject, QTimer, pyqtSignal

from reminder_app.config import REMINDER_TICK_INTERVAL_MS
from reminder_app.reminders.models import Reminder
from reminder_app.reminders.store import ReminderStore

logger = logging.getLogger(__name__)


class ReminderScheduler(QObject):
    """到期提醒通过 reminderDue 发出。"""
    reminderDue = pyqtSignal(object)  # Reminder

    def __init__(
        self,
        store: ReminderStore,
        interval_ms: int = REMINDER_TICK_INTERVAL_MS,
        clock: Callable[[], datetime] = datetime.now,
        parent: Optional[QObject] = None,
    ):
        super().__init__(parent)
        self._store = store
        self._clock = clock
        self._timer = QTimer(self)
        self._timer.setInterval(interval_ms)
        self._timer.timeout.connect(self.tick)

    def start(self) -> None:
        self._timer.start()

    def stop(self) -> None:
        self._timer.stop()

    def tick(self, now: Optional[datetime] = None) -> List[Reminder]:
        """处理一次到期提醒；异常只记录日志，下一秒重试。"""
        try:
            return self.process_due(now or self._clock())
        except Exception:
            logger.exception("提醒轮询失败")
            return []

    def process_due(self, now: datetime) -> List[Reminder]:
        fired = []
        for reminder in self._store.get_due(now):
            self.reminderDue.emit(reminder)
            if reminder.is_repeating:
                reminder.next_trigger_time = now + timedelta(minutes=reminder.repeat_interval_minutes)
            else:
                reminder.is_active = False
            self._store.update(reminder)
            logger.info("提醒触发：%s", reminder.title or reminder.id)
            fired.append(reminder)
        return fired
