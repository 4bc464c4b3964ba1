"""提醒的本地存储（reminders.json）。"""
import json
import logging
from datetime import date, datetime
from pathlib import Path
from typing import List, Optional

from pydantic import ValidationError

from reminder_app.config import REMINDERS_DATA_DIR
from reminder_app.reminders.models import Reminder

logger = logging.getLogger(__name__)


class ReminderStore:
    """提醒列表常驻内存，增删改后写回文件。"""
    _filename = "reminders.json"

    def __init__(self, data_dir: Optional[Path] = None):
        self.data_dir = data_dir or REMINDERS_DATA_DIR
        self.data_dir.mkdir(parents=True, exist_ok=True)
        self._reminders: List[Reminder] = self._load()

    def _path(self) -> Path:
        return self.data_dir / self._filename

    def _load(self) -> List[Reminder]:
        path = self._path()
        if not path.exists():
            return []
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            logger.warning("reminders.json 无法解析，从空列表开始: %s", e)
            return []
        if not isinstance(data, dict):
            logger.warning("reminders.json 格式不对，从空列表开始")
            return []
        out = []
        for item in data.get("reminders", []):
            try:
                out.append(Reminder.model_validate(item))
            except ValidationError as e:
                logger.warning("跳过无效提醒: %s", e)
        return out

    def _save(self) -> None:
        data = {"reminders": [r.model_dump(mode="json") for r in self._reminders]}
        path = self._path()
        tmp = path.with_suffix(".tmp")
        with open(tmp, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2, ensure_ascii=False)
        tmp.replace(path)

    def get_all(self) -> List[Reminder]:
        return list(self._reminders)

    def get(self, reminder_id: str) -> Optional[Reminder]:
        return next((r for r in self._reminders if r.id == reminder_id), None)

    def get_due(self, now: datetime) -> List[Reminder]:
        """已到期且仍启用的提醒。"""
        return [r for r in self._reminders if r.is_due(now)]

    def get_by_date(self, day: date) -> List[Reminder]:
        """某天的提醒，按日程时间排序。"""
        return sorted(
            (r for r in self._reminders if r.scheduled_time.date() == day),
            key=lambda r: r.scheduled_time,
        )

    def add(self, reminder: Reminder) -> None:
        self._reminders.append(reminder)
        self._save()

    def update(self, reminder: Reminder) -> None:
        """按 ID 替换；不存在则追加。"""
        self._reminders = [r for r in self._reminders if r.id != reminder.id]
        self._reminders.append(reminder)
        self._save()

    def delete(self, reminder_id: str) -> bool:
        before = len(self._reminders)
        self._reminders = [r for r in self._reminders if r.id != reminder_id]
        if len(self._reminders) == before:
            return False
        self._save()
        return True
