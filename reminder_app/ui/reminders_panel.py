"""提醒页：列表、新建与删除。"""
from datetime import datetime, timedelta
from typing import Optional

from PyQt6.QtCore import QDateTime, Qt
from PyQt6.QtWidgets import (
    QCheckBox,
    QComboBox,
    QDateTimeEdit,
    QDialog,
    QDialogButtonBox,
    QFormLayout,
    QHBoxLayout,
    QLineEdit,
    QListWidget,
    QListWidgetItem,
    QMessageBox,
    QPushButton,
    QSpinBox,
    QVBoxLayout,
    QWidget,
)

from reminder_app.reminders.models import NotificationLevel, NotificationSettings, Reminder, create_reminder
from reminder_app.reminders.store import ReminderStore

LEVEL_LABELS = {
    NotificationLevel.NORMAL: "普通",
    NotificationLevel.IMPORTANT: "重要",
    NotificationLevel.CRITICAL: "紧急",
}
REPEAT_UNITS = {"分钟": 1, "小时": 60, "天": 1440}


class ReminderEditorDialog(QDialog):
    """新建提醒；标题必填，重复提醒需填写正整数间隔。"""

    def __init__(self, parent: Optional[QWidget] = None):
        super().__init__(parent)
        self._reminder: Optional[Reminder] = None
        self.setup_ui()

    def setup_ui(self) -> None:
        self.setWindowTitle("新建提醒")
        self.setMinimumWidth(360)
        form = QFormLayout(self)

        self._title = QLineEdit()
        form.addRow("标题", self._title)
        self._message = QLineEdit()
        form.addRow("内容", self._message)

        self._when = QDateTimeEdit(QDateTime.currentDateTime().addSecs(5 * 60))
        self._when.setDisplayFormat("yyyy-MM-dd HH:mm")
        self._when.setCalendarPopup(True)
        form.addRow("时间", self._when)

        self._before = QSpinBox()
        self._before.setRange(0, 7 * 1440)
        self._before.setSuffix(" 分钟")
        form.addRow("提前提醒", self._before)

        repeat_row = QHBoxLayout()
        self._repeat = QCheckBox("重复")
        self._repeat_value = QSpinBox()
        self._repeat_value.setRange(1, 1000)
        self._repeat_unit = QComboBox()
        self._repeat_unit.addItems(list(REPEAT_UNITS))
        repeat_row.addWidget(self._repeat)
        repeat_row.addWidget(self._repeat_value)
        repeat_row.addWidget(self._repeat_unit)
        form.addRow("重复", repeat_row)

        self._level = QComboBox()
        for level, label in LEVEL_LABELS.items():
            self._level.addItem(label, level.value)
        form.addRow("重要程度", self._level)
        self._sound = QCheckBox("播放提示音")
        self._sound.setChecked(True)
        form.addRow("", self._sound)

        buttons = QDialogButtonBox(QDialogButtonBox.StandardButton.Ok | QDialogButtonBox.StandardButton.Cancel)
        buttons.accepted.connect(self._on_accept)
        buttons.rejected.connect(self.reject)
        form.addRow(buttons)

    def _on_accept(self) -> None:
        title = self._title.text().strip()
        if not title:
            QMessageBox.warning(self, "校验", "请输入标题")
            return
        repeat_minutes = None
        if self._repeat.isChecked():
            repeat_minutes = self._repeat_value.value() * REPEAT_UNITS[self._repeat_unit.currentText()]
        scheduled = self._when.dateTime().toPyDateTime().replace(second=0, microsecond=0)
        self._reminder = create_reminder(
            title=title,
            scheduled_time=scheduled,
            message=self._message.text(),
            minutes_before=self._before.value(),
            repeat_interval_minutes=repeat_minutes,
            notification_settings=NotificationSettings(
                play_sound=self._sound.isChecked(),
                level=self._level.currentData(),
            ),
        )
        self.accept()

    def reminder(self) -> Optional[Reminder]:
        return self._reminder


class RemindersPanel(QWidget):
    def __init__(self, store: ReminderStore, parent: Optional[QWidget] = None):
        super().__init__(parent)
        self._store = store
        self.setup_ui()
        self.refresh()

    def setup_ui(self) -> None:
        layout = QVBoxLayout(self)
        self._list = QListWidget()
        layout.addWidget(self._list)
        row = QHBoxLayout()
        btn_add = QPushButton("新建提醒")
        btn_add.clicked.connect(self._on_add)
        btn_delete = QPushButton("删除")
        btn_delete.clicked.connect(self._on_delete)
        row.addStretch()
        row.addWidget(btn_add)
        row.addWidget(btn_delete)
        layout.addLayout(row)

    def refresh(self, *_) -> None:
        self._list.clear()
        today = datetime.now().replace(hour=0, minute=0, second=0, microsecond=0)
        for r in sorted(self._store.get_all(), key=lambda r: r.next_trigger_time):
            if not r.is_active and r.scheduled_time < today - timedelta(days=7):
                continue
            state = "" if r.is_active else "（已完成）"
            repeat = f"，每 {r.repeat_interval_minutes} 分钟" if r.is_repeating else ""
            item = QListWidgetItem(f"{r.scheduled_time:%m-%d %H:%M}  {r.title}{repeat}{state}")
            item.setData(Qt.ItemDataRole.UserRole, r.id)
            self._list.addItem(item)

    def _on_add(self) -> None:
        dialog = ReminderEditorDialog(self)
        if dialog.exec() != dialog.DialogCode.Accepted:
            return
        reminder = dialog.reminder()
        if reminder is not None:
            self._store.add(reminder)
            self.refresh()

    def _on_delete(self) -> None:
        item = self._list.currentItem()
        if item is None:
            QMessageBox.information(self, "删除提醒", "请先选择一条提醒")
            return
        self._store.delete(item.data(Qt.ItemDataRole.UserRole))
        self.refresh()
