"""提醒弹窗：无边框、置顶，按设置停靠在屏幕角落或居中。"""
from typing import Optional

from PyQt6.QtCore import QPoint, QRect, Qt
from PyQt6.QtWidgets import QApplication, QHBoxLayout, QLabel, QPushButton, QVBoxLayout, QWidget

from reminder_app.config import POPUP_MARGIN
from reminder_app.notify.models import NotificationPosition, PopupSettings
from reminder_app.reminders.models import NotificationLevel, Reminder
from reminder_app.water.service import WaterReminder

# 按重要程度区分背景色
LEVEL_COLORS = {
    NotificationLevel.NORMAL: "#f5f9ff",
    NotificationLevel.IMPORTANT: "#fff6e0",
    NotificationLevel.CRITICAL: "#ffe5e5",
}
WATER_COLOR = "#e8f6ff"


def popup_geometry(
    area: QRect,
    width: int,
    height: int,
    position: NotificationPosition,
    margin: int = POPUP_MARGIN,
) -> QPoint:
    """弹窗左上角坐标。area 为屏幕可用区域。"""
    position = NotificationPosition(position)
    left = area.x() + area.width() - width - margin
    top = area.y() + area.height() - height - margin
    if position == NotificationPosition.BOTTOM_LEFT:
        left = area.x() + margin
    elif position == NotificationPosition.TOP_RIGHT:
        top = area.y() + margin
    elif position == NotificationPosition.TOP_LEFT:
        left = area.x() + margin
        top = area.y() + margin
    elif position == NotificationPosition.CENTER:
        left = area.x() + (area.width() - width) // 2
        top = area.y() + (area.height() - height) // 2
    return QPoint(left, top)


class _PopupWindow(QWidget):
    def __init__(self, settings: PopupSettings, background: str, parent: Optional[QWidget] = None):
        super().__init__(parent)
        self._settings = settings
        self.setWindowFlags(
            Qt.WindowType.FramelessWindowHint
            | Qt.WindowType.WindowStaysOnTopHint
            | Qt.WindowType.Tool
        )
        self.setAttribute(Qt.WidgetAttribute.WA_DeleteOnClose, True)
        self.setFixedSize(settings.width, settings.height)
        self.setStyleSheet(
            f"QWidget {{ background: {background}; }}"
            "QLabel { font-size: 13px; }"
            "QPushButton { padding: 4px 12px; border: 1px solid #ccc; border-radius: 4px; background: white; }"
        )

    def showEvent(self, event) -> None:
        super().showEvent(event)
        screen = self.screen() or QApplication.primaryScreen()
        if screen is not None:
            self.move(popup_geometry(screen.availableGeometry(), self.width(), self.height(), self._settings.position))


class ReminderPopup(_PopupWindow):
    """普通提醒弹窗：标题、内容、日程时间，点「知道了」关闭。"""

    def __init__(self, reminder: Reminder, settings: PopupSettings, parent: Optional[QWidget] = None):
        level = NotificationLevel(reminder.notification_settings.level)
        super().__init__(settings, LEVEL_COLORS.get(level, LEVEL_COLORS[NotificationLevel.NORMAL]), parent)
        self.setWindowTitle("提醒")
        layout = QVBoxLayout(self)

        title = QLabel(reminder.title.strip() or "提醒")
        title.setStyleSheet("font-size: 15px; font-weight: bold;")
        layout.addWidget(title)
        message = QLabel(reminder.message or "")
        message.setWordWrap(True)
        layout.addWidget(message)
        layout.addWidget(QLabel(reminder.scheduled_time.strftime("%Y-%m-%d %H:%M")))

        btn_ok = QPushButton("知道了")
        btn_ok.clicked.connect(self.close)
        layout.addWidget(btn_ok, alignment=Qt.AlignmentFlag.AlignRight)


class WaterPopup(_PopupWindow):
    """喝水提醒弹窗：「喝了」记录建议量，「稍后」按间隔顺延。直接关闭等同于不处理。"""

    def __init__(self, event: WaterReminder, settings: PopupSettings, parent: Optional[QWidget] = None):
        super().__init__(settings, WATER_COLOR, parent)
        self._event = event
        self.setWindowTitle("喝水提醒")
        layout = QVBoxLayout(self)

        text = QLabel(f"该喝水啦，现在喝 {event.suggested_amount_ml} ml 吧。")
        text.setStyleSheet("font-size: 15px; font-weight: bold;")
        text.setWordWrap(True)
        layout.addWidget(text)
        layout.addWidget(QLabel(f"喝完后今天还差 {event.remaining_after_ml} ml（目标 {event.daily_goal_ml} ml）"))

        row = QHBoxLayout()
        btn_skip = QPushButton("稍后")
        btn_skip.clicked.connect(self._on_skip)
        btn_confirm = QPushButton("喝了")
        btn_confirm.setDefault(True)
        btn_confirm.clicked.connect(self._on_confirm)
        row.addStretch()
        row.addWidget(btn_skip)
        row.addWidget(btn_confirm)
        layout.addLayout(row)

    def _on_confirm(self) -> None:
        self._event.confirm()
        self.close()

    def _on_skip(self) -> None:
        self._event.skip()
        self.close()
