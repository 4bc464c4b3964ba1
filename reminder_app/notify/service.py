"""通知服务：按全局弹窗设置与单条提醒设置展示弹窗、播放提示音。"""
import logging
from pathlib import Path
from typing import List

from PyQt6.QtCore import QTimer, QUrl
from PyQt6.QtWidgets import QApplication, QWidget

from reminder_app.notify.popup import ReminderPopup, WaterPopup
from reminder_app.notify.settings_store import NotificationSettingsStore
from reminder_app.reminders.models import NotificationLevel, NotificationSettings, Reminder
from reminder_app.water.service import WaterReminder

# 可选：自定义 WAV 提示音
try:
    from PyQt6.QtMultimedia import QSoundEffect
    _HAS_SOUND_EFFECT = True
except Exception:
    _HAS_SOUND_EFFECT = False
    QSoundEffect = None

logger = logging.getLogger(__name__)


class NotificationService:
    """持有已打开的弹窗，避免被回收；弹窗关闭后自动移除。"""

    def __init__(self, settings_store: NotificationSettingsStore):
        self._settings_store = settings_store
        self._popups: List[QWidget] = []
        self._effects: list = []

    def show_reminder(self, reminder: Reminder) -> None:
        popup_settings = self._settings_store.get().reminder_popup
        per_reminder = reminder.notification_settings
        if per_reminder.use_overlay:
            self._show(ReminderPopup(reminder, popup_settings))
        # 全局与单条设置都允许时才出声
        if popup_settings.play_sound and per_reminder.play_sound:
            self._play_reminder_sound(per_reminder)

    def show_water_reminder(self, event: WaterReminder) -> None:
        popup_settings = self._settings_store.get().water_popup
        self._show(WaterPopup(event, popup_settings))
        if popup_settings.play_sound:
            QApplication.beep()

    def _show(self, popup: QWidget) -> None:
        self._popups.append(popup)
        popup.destroyed.connect(lambda *_: self._forget(popup))
        popup.show()

    def _forget(self, popup: QWidget) -> None:
        if popup in self._popups:
            self._popups.remove(popup)

    def _play_reminder_sound(self, settings: NotificationSettings) -> None:
        if settings.sound_path and self._play_file(settings.sound_path, settings.volume):
            return
        QApplication.beep()
        if NotificationLevel(settings.level) == NotificationLevel.CRITICAL:
            QTimer.singleShot(500, QApplication.beep)

    def _play_file(self, sound_path: str, volume: float) -> bool:
        path = Path(sound_path)
        if not _HAS_SOUND_EFFECT or not path.exists():
            return False
        effect = QSoundEffect()
        effect.setSource(QUrl.fromLocalFile(str(path.resolve())))
        effect.setVolume(volume)
        effect.play()
        # 播放结束前需保持引用
        self._effects = [e for e in self._effects if e.isPlaying()] + [effect]
        logger.debug("播放提示音 %s", path)
        return True
