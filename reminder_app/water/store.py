"""喝水目标、提醒设置与饮水记录的本地存储（water.json）。"""
import json
import logging
from datetime import date, datetime
from pathlib import Path
from typing import Callable, List, Optional

from pydantic import ValidationError

from reminder_app.config import WATER_DATA_DIR
from reminder_app.water.models import WaterData, WaterEntry, WaterReminderSettings

logger = logging.getLogger(__name__)


class WaterStore:
    """整份数据常驻内存，每次修改后整体写回文件；写入失败时内存数据回滚。"""
    _filename = "water.json"

    def __init__(self, data_dir: Optional[Path] = None):
        self.data_dir = data_dir or WATER_DATA_DIR
        self.data_dir.mkdir(parents=True, exist_ok=True)
        self._data = self._load()

    def _path(self) -> Path:
        return self.data_dir / self._filename

    def _load(self) -> WaterData:
        path = self._path()
        if not path.exists():
            return WaterData()
        try:
            with open(path, "r", encoding="utf-8") as f:
                return WaterData.model_validate(json.load(f))
        except (json.JSONDecodeError, ValidationError) as e:
            logger.warning("water.json 无法解析，使用默认数据: %s", e)
            return WaterData()

    def _save(self, data: WaterData) -> None:
        path = self._path()
        tmp = path.with_suffix(".tmp")
        with open(tmp, "w", encoding="utf-8") as f:
            f.write(data.model_dump_json(indent=2))
        tmp.replace(path)

    def _commit(self, change: Callable[[WaterData], None]) -> None:
        """在副本上修改并写盘，成功后才替换内存数据。"""
        data = self._data.model_copy(deep=True)
        change(data)
        self._save(data)
        self._data = data

    # --- 目标 ---

    def get_daily_goal(self) -> int:
        return self._data.daily_goal_ml

    def set_daily_goal(self, goal_ml: int) -> None:
        def change(data: WaterData) -> None:
            data.daily_goal_ml = goal_ml

        self._commit(change)

    # --- 提醒设置 ---

    def get_reminder_settings(self) -> WaterReminderSettings:
        """读取提醒设置；非法的间隔或时间会被规范化。"""
        return WaterReminderSettings(
            enabled=self._data.water_reminder_enabled,
            interval_minutes=self._data.water_reminder_interval_minutes,
            day_start=self._data.day_start_time,
            day_end=self._data.day_end_time,
        )

    def set_reminder_settings(self, settings: WaterReminderSettings) -> None:
        def change(data: WaterData) -> None:
            data.water_reminder_enabled = settings.enabled
            data.water_reminder_interval_minutes = settings.interval_minutes
            data.day_start_time = settings.day_start.strftime("%H:%M")
            data.day_end_time = settings.day_end.strftime("%H:%M")

        self._commit(change)

    # --- 今日结束 ---

    def get_manual_end_until(self) -> Optional[datetime]:
        return self._data.manual_end_until

    def set_manual_end_until(self, until: Optional[datetime]) -> None:
        def change(data: WaterData) -> None:
            data.manual_end_until = until

        self._commit(change)

    # --- 饮水记录 ---

    def get_entries_for_date(self, day: date) -> List[WaterEntry]:
        """某个自然日的记录，按时间排序。"""
        return sorted(
            (e for e in self._data.entries if e.timestamp.date() == day),
            key=lambda e: e.timestamp,
        )

    def get_entries_in_range(self, start: datetime, end: datetime) -> List[WaterEntry]:
        """[start, end) 内的记录，按时间排序。"""
        return sorted(
            (e for e in self._data.entries if start <= e.timestamp < end),
            key=lambda e: e.timestamp,
        )

    def total_for_date(self, day: date) -> int:
        return sum(e.amount_ml for e in self.get_entries_for_date(day))

    def add_entry(self, amount_ml: int, timestamp: datetime) -> WaterEntry:
        entry = WaterEntry(amount_ml=amount_ml, timestamp=timestamp)
        self._commit(lambda data: data.entries.append(entry))
        logger.debug("记录饮水 %d ml @ %s", amount_ml, timestamp.isoformat(timespec="minutes"))
        return entry

    def delete_entry(self, entry_id: str) -> bool:
        if not any(e.id == entry_id for e in self._data.entries):
            return False

        def change(data: WaterData) -> None:
            data.entries = [e for e in data.entries if e.id != entry_id]

        self._commit(change)
        return True
