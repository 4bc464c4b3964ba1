"""喝水提醒调度：每次评估都从设置与饮水记录重新推导，决定是否提醒、提醒多少。

评估按顺序匹配第一个成立的状态：
已关闭 → 今日已结束 → 不在喝水日内 → 未设置目标 → 目标已达成 → 等待 → 到期提醒。
评估与确认/跳过回调共用一把锁。
"""
import logging
import threading
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from enum import Enum
from typing import Callable, Optional

from reminder_app.config import NO_GOAL_RETRY_MINUTES, WATER_ROUND_STEP_ML
from reminder_app.water.models import WaterDebugInfo, WaterReminderSettings
from reminder_app.water.pause import PauseTracker
from reminder_app.water.quota import suggest_amount
from reminder_app.water.window import WaterDayWindow, next_day_start, resolve_window

logger = logging.getLogger(__name__)


class WaterStatus(str, Enum):
    """最近一次评估的结论。"""
    UNKNOWN = "unknown"
    DISABLED = "disabled"
    MANUALLY_ENDED = "manually_ended"
    OUTSIDE_WINDOW = "outside_window"
    NO_GOAL = "no_goal"
    GOAL_MET = "goal_met"
    WAITING = "waiting"
    NO_SUGGESTION = "no_suggestion"
    REMINDED = "reminded"


@dataclass
class WaterReminder:
    """发给通知界面的一次喝水提醒；确认与跳过只会生效其一，且只生效一次。"""
    suggested_amount_ml: int
    remaining_after_ml: int
    daily_goal_ml: int
    on_confirm: Callable[[], None]
    on_skip: Callable[[Optional[int]], None]
    created_at: datetime = field(default_factory=datetime.now)
    _handled: bool = field(default=False, repr=False)
    _guard: threading.Lock = field(default_factory=threading.Lock, repr=False, compare=False)

    @property
    def handled(self) -> bool:
        return self._handled

    def _claim(self) -> bool:
        with self._guard:
            if self._handled:
                return False
            self._handled = True
            return True

    def confirm(self) -> bool:
        if not self._claim():
            return False
        self.on_confirm()
        return True

    def skip(self, snooze_minutes: Optional[int] = None) -> bool:
        if not self._claim():
            return False
        self.on_skip(snooze_minutes)
        return True


@dataclass
class Evaluation:
    status: WaterStatus
    next_reminder_at: Optional[datetime]
    reminder: Optional[WaterReminder] = None


class WaterReminderService:
    """调度状态只有 next_reminder_at 与暂停时间，其余每次从存储重新读取。"""

    def __init__(
        self,
        store,
        settings: Optional[WaterReminderSettings] = None,
        clock: Callable[[], datetime] = datetime.now,
        round_step_ml: int = WATER_ROUND_STEP_ML,
    ):
        self._store = store
        self._clock = clock
        self._round_step = round_step_ml
        self._lock = threading.RLock()
        self._settings = settings or WaterReminderSettings()
        self._pause = PauseTracker(store)
        self._next_reminder_at: Optional[datetime] = None
        self._status: str = WaterStatus.UNKNOWN.value
        self._last_suggested_amount: Optional[int] = None

    @property
    def settings(self) -> WaterReminderSettings:
        return self._settings

    @property
    def next_reminder_at(self) -> Optional[datetime]:
        return self._next_reminder_at

    @property
    def status(self) -> str:
        return self._status

    # --- 配置 ---

    def apply_settings(
        self,
        enabled: bool,
        interval,
        day_start,
        day_end,
    ) -> WaterReminderSettings:
        """应用新设置并清空 next_reminder_at，下次评估重新推导。

        interval 可以是分钟数或 timedelta；day_start/day_end 可以是 time 或 "HH:MM"。
        """
        settings = WaterReminderSettings(
            enabled=enabled,
            interval_minutes=interval,
            day_start=day_start,
            day_end=day_end,
        )
        with self._lock:
            self._settings = settings
            self._next_reminder_at = None
            self._status = WaterStatus.UNKNOWN.value
        logger.info(
            "喝水提醒设置：%s，每 %d 分钟，%s-%s",
            "开启" if settings.enabled else "关闭",
            settings.interval_minutes,
            settings.day_start.strftime("%H:%M"),
            settings.day_end.strftime("%H:%M"),
        )
        return settings

    def end_today(self, now: Optional[datetime] = None) -> datetime:
        """结束今天的提醒，直到下一个喝水日开始。"""
        with self._lock:
            now = now or self._clock()
            until = self._pause.end_today(now, self._settings.day_start)
            self._next_reminder_at = until
            self._status = WaterStatus.MANUALLY_ENDED.value
            return until

    def reset_manual_end(self) -> None:
        """取消「今日结束」，立即恢复评估。"""
        with self._lock:
            self._pause.clear()
            self._next_reminder_at = None
            self._status = WaterStatus.UNKNOWN.value

    def record_error(self, message: str) -> None:
        with self._lock:
            self._status = f"error: {message}"

    # --- 评估 ---

    def evaluate(self, now: Optional[datetime] = None) -> Evaluation:
        """执行一次评估；到期时返回待展示的 WaterReminder。"""
        with self._lock:
            now = now or self._clock()
            result = self._evaluate_locked(now)
            self._status = result.status.value
            self._next_reminder_at = result.next_reminder_at
            logger.debug(
                "喝水评估 %s: %s，下次 %s",
                now.isoformat(timespec="seconds"),
                result.status.value,
                result.next_reminder_at.isoformat(timespec="seconds") if result.next_reminder_at else "-",
            )
            return result

    def _evaluate_locked(self, now: datetime) -> Evaluation:
        s = self._settings
        if not s.enabled or s.interval_minutes <= 0:
            return Evaluation(WaterStatus.DISABLED, None)

        if self._pause.check_and_clear(now):
            return Evaluation(WaterStatus.MANUALLY_ENDED, self._pause.until)

        window = resolve_window(now, s.day_start, s.day_end)
        if not window.in_window:
            if now < window.start:
                return Evaluation(WaterStatus.OUTSIDE_WINDOW, window.start)
            return Evaluation(WaterStatus.OUTSIDE_WINDOW, next_day_start(now, s.day_start))

        goal = self._store.get_daily_goal()
        if goal <= 0:
            return Evaluation(WaterStatus.NO_GOAL, now + timedelta(minutes=NO_GOAL_RETRY_MINUTES))

        remaining = goal - self._total_in(window)
        if remaining <= 0:
            return Evaluation(WaterStatus.GOAL_MET, next_day_start(now, s.day_start))

        next_at = self._next_reminder_at
        if next_at is None:
            next_at = now
        if now < next_at:
            return Evaluation(WaterStatus.WAITING, next_at)

        amount = suggest_amount(remaining, now, window.end, s.interval_minutes, self._round_step)
        if amount is None:
            return Evaluation(WaterStatus.NO_SUGGESTION, now + s.interval)

        self._last_suggested_amount = amount
        reminder = WaterReminder(
            suggested_amount_ml=amount,
            remaining_after_ml=max(0, remaining - amount),
            daily_goal_ml=goal,
            on_confirm=lambda: self.confirm(amount),
            on_skip=self.skip,
            created_at=now,
        )
        logger.info("喝水提醒：建议 %d ml，之后还差 %d ml（目标 %d ml）", amount, reminder.remaining_after_ml, goal)
        return Evaluation(WaterStatus.REMINDED, now + s.interval, reminder)

    def _total_in(self, window: WaterDayWindow) -> int:
        return sum(e.amount_ml for e in self._store.get_entries_in_range(window.start, window.end))

    # --- 提醒回调 ---

    def confirm(self, amount_ml: int, now: Optional[datetime] = None) -> datetime:
        """用户确认已喝：记录饮水并从现在起重新计时。写入失败只记录状态，照常顺延。"""
        with self._lock:
            now = now or self._clock()
            try:
                self._store.add_entry(amount_ml, now)
            except OSError as e:
                logger.exception("记录饮水失败")
                self.record_error(str(e))
            self._next_reminder_at = now + self._settings.interval
            logger.info("确认喝水 %d ml，下次提醒 %s", amount_ml, self._next_reminder_at.isoformat(timespec="minutes"))
            return self._next_reminder_at

    def skip(self, interval_minutes: Optional[int] = None, now: Optional[datetime] = None) -> datetime:
        """用户跳过：不记录饮水，interval_minutes 后再提醒（默认使用设置的间隔）。"""
        with self._lock:
            now = now or self._clock()
            minutes = interval_minutes if interval_minutes and interval_minutes > 0 else self._settings.interval_minutes
            self._next_reminder_at = now + timedelta(minutes=minutes)
            logger.info("跳过喝水提醒，%d 分钟后再提醒", minutes)
            return self._next_reminder_at

    # --- 诊断 ---

    def get_debug_info(self, now: Optional[datetime] = None) -> WaterDebugInfo:
        """当前设置、时间窗、进度与调度状态的只读快照。"""
        with self._lock:
            now = now or self._clock()
            s = self._settings
            window = resolve_window(now, s.day_start, s.day_end)
            goal = self._store.get_daily_goal()
            total = self._total_in(window)
            countdown = None
            if self._next_reminder_at is not None:
                countdown = max(timedelta(0), self._next_reminder_at - now)
            return WaterDebugInfo(
                enabled=s.enabled,
                interval_minutes=s.interval_minutes,
                day_start=s.day_start,
                day_end=s.day_end,
                manual_end_until=self._pause.until,
                next_reminder_at=self._next_reminder_at,
                window_start=window.start,
                window_end=window.end,
                in_window=window.in_window,
                daily_goal=goal,
                total_today=total,
                remaining=max(0, goal - total),
                countdown=countdown,
                status=self._status,
                last_suggested_amount=self._last_suggested_amount,
                now=now,
            )

