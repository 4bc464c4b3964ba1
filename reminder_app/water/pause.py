"""「今日结束」暂停：到下一个喝水日开始前不再提醒。"""
import logging
from datetime import datetime, time
from typing import Optional

from reminder_app.water.window import next_day_start

logger = logging.getLogger(__name__)


class PauseTracker:
    """持有 manual_end_until，并通过存储持久化。"""

    def __init__(self, store):
        self._store = store
        self._until: Optional[datetime] = store.get_manual_end_until()

    @property
    def until(self) -> Optional[datetime]:
        return self._until

    def end_today(self, now: datetime, day_start: time) -> datetime:
        """暂停到下一个喝水日开始，返回恢复时间。"""
        until = next_day_start(now, day_start)
        self._store.set_manual_end_until(until)
        self._until = until
        logger.info("今日喝水提醒已结束，%s 恢复", until.isoformat(timespec="minutes"))
        return until

    def check_and_clear(self, now: datetime) -> bool:
        """仍在暂停中返回 True；到点后清除并返回 False。"""
        if self._until is None:
            return False
        if now < self._until:
            return True
        logger.info("暂停已到期（%s），恢复喝水提醒", self._until.isoformat(timespec="minutes"))
        self.clear()
        return False

    def clear(self) -> None:
        self._store.set_manual_end_until(None)
        self._until = None
