"""弹窗设置的本地存储（notification_settings.json）。"""
import json
import logging
from pathlib import Path
from typing import Optional

from pydantic import ValidationError

from reminder_app.config import SETTINGS_DATA_DIR
from reminder_app.notify.models import AppNotificationSettings

logger = logging.getLogger(__name__)


class NotificationSettingsStore:
    _filename = "notification_settings.json"

    def __init__(self, data_dir: Optional[Path] = None):
        self.data_dir = data_dir or SETTINGS_DATA_DIR
        self.data_dir.mkdir(parents=True, exist_ok=True)
        self._settings = self._load()

    def _path(self) -> Path:
        return self.data_dir / self._filename

    def _load(self) -> AppNotificationSettings:
        path = self._path()
        if not path.exists():
            return AppNotificationSettings()
        try:
            with open(path, "r", encoding="utf-8") as f:
                return AppNotificationSettings.model_validate(json.load(f))
        except (json.JSONDecodeError, ValidationError) as e:
            logger.warning("弹窗设置无法解析，使用默认值: %s", e)
            return AppNotificationSettings()

    def get(self) -> AppNotificationSettings:
        return self._settings

    def update(self, settings: Optional[AppNotificationSettings]) -> None:
        settings = settings or AppNotificationSettings()
        path = self._path()
        tmp = path.with_suffix(".tmp")
        with open(tmp, "w", encoding="utf-8") as f:
            f.write(settings.model_dump_json(indent=2))
        tmp.replace(path)
        self._settings = settings
