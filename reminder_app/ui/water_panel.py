"""喝水页：目标与提醒设置、今日结束、快速记录、今日汇总。"""
from datetime import datetime
from typing import Optional

from PyQt6.QtCore import QTimer, Qt
from PyQt6.QtWidgets import (
    QCheckBox,
    QComboBox,
    QFormLayout,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QListWidget,
    QListWidgetItem,
    QMessageBox,
    QPushButton,
    QSpinBox,
    QVBoxLayout,
    QWidget,
)

from reminder_app.config import WATER_QUICK_AMOUNTS
from reminder_app.water.driver import WaterReminderDriver
from reminder_app.water.models import WaterReminderSettings, parse_time_of_day
from reminder_app.water.window import describe_window
from reminder_app.water.store import WaterStore

UNIT_MINUTES = "分钟"
UNIT_HOURS = "小时"


class WaterPanel(QWidget):
    """设置修改后写入 water.json 并立即应用到调度器。"""

    def __init__(self, store: WaterStore, driver: WaterReminderDriver, parent: Optional[QWidget] = None):
        super().__init__(parent)
        self._store = store
        self._driver = driver
        self.setup_ui()
        self._load_settings()
        self.refresh()
        self._driver.statusChanged.connect(lambda *_: self.refresh())

        # 调试信息里的倒计时每秒刷新
        self._debug_timer = QTimer(self)
        self._debug_timer.timeout.connect(self._refresh_debug)
        self._debug_timer.start(1000)

    def setup_ui(self) -> None:
        layout = QVBoxLayout(self)
        form = QFormLayout()

        self._goal = QSpinBox()
        self._goal.setRange(0, 10000)
        self._goal.setSingleStep(100)
        self._goal.setSuffix(" ml")
        form.addRow("每日目标", self._goal)

        self._enabled = QCheckBox("开启喝水提醒")
        form.addRow("", self._enabled)

        interval_row = QHBoxLayout()
        self._interval = QSpinBox()
        self._interval.setRange(1, 1440)
        self._unit = QComboBox()
        self._unit.addItems([UNIT_MINUTES, UNIT_HOURS])
        interval_row.addWidget(self._interval)
        interval_row.addWidget(self._unit)
        form.addRow("提醒间隔", interval_row)

        self._day_start = QLineEdit()
        self._day_start.setPlaceholderText("09:00")
        self._day_end = QLineEdit()
        self._day_end.setPlaceholderText("02:00（早于开始时间表示次日）")
        form.addRow("喝水日开始", self._day_start)
        form.addRow("喝水日结束", self._day_end)
        layout.addLayout(form)

        buttons = QHBoxLayout()
        btn_save = QPushButton("保存设置")
        btn_save.clicked.connect(self._on_save)
        btn_end = QPushButton("今日结束")
        btn_end.setToolTip("今天不再提醒，到下一个喝水日开始时恢复")
        btn_end.clicked.connect(self._on_end_today)
        btn_resume = QPushButton("恢复提醒")
        btn_resume.clicked.connect(self._on_resume)
        buttons.addWidget(btn_save)
        buttons.addWidget(btn_end)
        buttons.addWidget(btn_resume)
        layout.addLayout(buttons)

        quick = QHBoxLayout()
        for amount in WATER_QUICK_AMOUNTS:
            btn = QPushButton(f"+{amount} ml")
            btn.clicked.connect(lambda _=False, a=amount: self._add_amount(a))
            quick.addWidget(btn)
        self._custom = QSpinBox()
        self._custom.setRange(0, 5000)
        self._custom.setSingleStep(50)
        self._custom.setSuffix(" ml")
        btn_custom = QPushButton("记录")
        btn_custom.clicked.connect(self._on_add_custom)
        quick.addWidget(self._custom)
        quick.addWidget(btn_custom)
        layout.addLayout(quick)

        self._summary = QLabel()
        layout.addWidget(self._summary)
        self._entries = QListWidget()
        layout.addWidget(self._entries)
        btn_delete = QPushButton("删除所选记录")
        btn_delete.clicked.connect(self._on_delete_entry)
        layout.addWidget(btn_delete, alignment=Qt.AlignmentFlag.AlignRight)

        self._debug = QLabel()
        self._debug.setStyleSheet("color: #888; font-size: 11px;")
        self._debug.setWordWrap(True)
        layout.addWidget(self._debug)

    def _load_settings(self) -> None:
        s = self._store.get_reminder_settings()
        self._goal.setValue(self._store.get_daily_goal())
        self._enabled.setChecked(s.enabled)
        if s.interval_minutes % 60 == 0:
            self._unit.setCurrentText(UNIT_HOURS)
            self._interval.setValue(s.interval_minutes // 60)
        else:
            self._unit.setCurrentText(UNIT_MINUTES)
            self._interval.setValue(s.interval_minutes)
        self._day_start.setText(s.day_start.strftime("%H:%M"))
        self._day_end.setText(s.day_end.strftime("%H:%M"))

    def _interval_minutes(self) -> int:
        value = self._interval.value()
        return value * 60 if self._unit.currentText() == UNIT_HOURS else value

    def _on_save(self) -> None:
        current = self._store.get_reminder_settings()
        start_text = self._day_start.text().strip()
        end_text = self._day_end.text().strip()
        # 输入格式不对时保留原值
        day_start = parse_time_of_day(start_text, current.day_start.strftime("%H:%M"))
        day_end = parse_time_of_day(end_text, current.day_end.strftime("%H:%M"))
        if self._goal.value() <= 0:
            QMessageBox.warning(self, "每日目标", "请输入大于 0 的目标饮水量")
            return

        self._store.set_daily_goal(self._goal.value())
        settings = WaterReminderSettings(
            enabled=self._enabled.isChecked(),
            interval_minutes=self._interval_minutes(),
            day_start=day_start,
            day_end=day_end,
        )
        self._store.set_reminder_settings(settings)
        self._driver.apply_settings(settings.enabled, settings.interval_minutes, settings.day_start, settings.day_end)
        self._load_settings()
        self.refresh()

    def _on_end_today(self) -> None:
        until = self._driver.end_today()
        QMessageBox.information(self, "今日结束", f"今天的喝水提醒已结束，将在 {until:%m-%d %H:%M} 恢复。")
        self.refresh()

    def _on_resume(self) -> None:
        self._driver.reset_manual_end()
        self.refresh()

    def _add_amount(self, amount: int) -> None:
        self._store.add_entry(amount, datetime.now())
        self.refresh()

    def _on_add_custom(self) -> None:
        amount = self._custom.value()
        if amount <= 0:
            QMessageBox.information(self, "提示", "请输入饮水量")
            return
        self._add_amount(amount)

    def _on_delete_entry(self) -> None:
        item = self._entries.currentItem()
        if item is None:
            QMessageBox.information(self, "删除记录", "请先选择一条记录")
            return
        self._store.delete_entry(item.data(Qt.ItemDataRole.UserRole))
        self.refresh()

    def refresh(self) -> None:
        info = self._driver.service.get_debug_info()
        self._summary.setText(
            f"本喝水日（{describe_window(info.day_start, info.day_end)}）已喝 {info.total_today} ml，"
            f"目标 {info.daily_goal} ml，还差 {info.remaining} ml"
        )
        self._entries.clear()
        for entry in self._store.get_entries_in_range(info.window_start, info.window_end):
            item = QListWidgetItem(f"{entry.timestamp:%H:%M}  {entry.amount_ml} ml")
            item.setData(Qt.ItemDataRole.UserRole, entry.id)
            self._entries.addItem(item)
        self._refresh_debug()

    def _refresh_debug(self) -> None:
        info = self._driver.service.get_debug_info()
        next_at = f"{info.next_reminder_at:%m-%d %H:%M}" if info.next_reminder_at else "-"
        countdown = str(info.countdown).split(".")[0] if info.countdown is not None else "-"
        self._debug.setText(
            f"状态 {info.status}｜下次 {next_at}（{countdown}）｜"
            f"上次建议 {info.last_suggested_amount or '-'} ml｜"
            f"{'在' if info.in_window else '不在'}喝水日内"
        )
