"""每次提醒的建议饮水量：把剩余目标平均分到窗口内剩余的提醒次数上。"""
from datetime import datetime
from typing import NamedTuple, Optional

from reminder_app.config import WATER_ROUND_STEP_ML


class QuotaPlan(NamedTuple):
    reminders_left: int
    raw_amount: int
    amount: int


def _ceil_div(a: int, b: int) -> int:
    return -(-a // b)


def round_up_to_step(value: int, step: int = WATER_ROUND_STEP_ML) -> int:
    """向上取整到 step 的倍数；value <= 0 时为 0。"""
    if value <= 0:
        return 0
    return _ceil_div(value, step) * step


def plan_quota(
    remaining_ml: int,
    now: datetime,
    window_end: datetime,
    interval_minutes: int,
    step: int = WATER_ROUND_STEP_ML,
) -> QuotaPlan:
    """计算剩余提醒次数、未取整量与最终建议量（不超过剩余量）。"""
    remaining_minutes = max(1, int((window_end - now).total_seconds() / 60))
    interval_minutes = max(1, interval_minutes)
    reminders_left = max(1, _ceil_div(remaining_minutes, interval_minutes))
    raw = _ceil_div(remaining_ml, reminders_left) if remaining_ml > 0 else 0
    amount = min(round_up_to_step(raw, step), max(0, remaining_ml))
    return QuotaPlan(reminders_left, raw, amount)


def suggest_amount(
    remaining_ml: int,
    now: datetime,
    window_end: datetime,
    interval_minutes: int,
    step: int = WATER_ROUND_STEP_ML,
) -> Optional[int]:
    """本次建议量；为 0 时返回 None，表示本轮不提醒。"""
    amount = plan_quota(remaining_ml, now, window_end, interval_minutes, step).amount
    if amount <= 0:
        return None
    return amount
