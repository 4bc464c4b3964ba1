"""喝水记录、提醒设置与诊断快照数据模型。"""
import math
import uuid
from datetime import datetime, time, timedelta
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator

from reminder_app.config import (
    WATER_DAILY_GOAL_ML,
    WATER_DAY_END,
    WATER_DAY_START,
    WATER_REMIND_INTERVAL,
)


def parse_time_of_day(value, default: str) -> time:
    """解析 "HH:MM" 或 time；无法解析时回退到默认值。"""
    if isinstance(value, time):
        return value.replace(second=0, microsecond=0)
    if isinstance(value, timedelta):
        minutes = int(value.total_seconds() // 60) % (24 * 60)
        return time(minutes // 60, minutes % 60)
    if isinstance(value, str):
        try:
            hour, minute = value.strip().split(":")[:2]
            return time(int(hour), int(minute))
        except (TypeError, ValueError):
            pass
    return parse_time_of_day(default, default)


def normalize_interval_minutes(value) -> int:
    """间隔分钟：非法或非正数回退为默认 60，正数至少 1 分钟。"""
    if isinstance(value, timedelta):
        seconds = value.total_seconds()
        if seconds <= 0:
            return WATER_REMIND_INTERVAL
        return max(1, int(seconds // 60))
    try:
        minutes = float(value)
    except (TypeError, ValueError, OverflowError):
        return WATER_REMIND_INTERVAL
    if not math.isfinite(minutes) or minutes <= 0:
        return WATER_REMIND_INTERVAL
    return max(1, int(minutes))


class WaterEntry(BaseModel):
    """一次饮水记录。"""
    id: str = Field(default_factory=lambda: str(uuid.uuid4()), description="记录 ID")
    amount_ml: int = Field(..., gt=0, description="饮水量 ml")
    timestamp: datetime = Field(..., description="记录时间（本地时间）")


class WaterReminderSettings(BaseModel):
    """喝水提醒设置：开关、间隔与「喝水日」时间窗。"""
    enabled: bool = Field(False, description="是否启用喝水提醒")
    interval_minutes: int = Field(WATER_REMIND_INTERVAL, description="提醒间隔分钟")
    day_start: time = Field(default_factory=lambda: parse_time_of_day(WATER_DAY_START, WATER_DAY_START))
    day_end: time = Field(default_factory=lambda: parse_time_of_day(WATER_DAY_END, WATER_DAY_END))

    @field_validator("interval_minutes", mode="before")
    @classmethod
    def _normalize_interval(cls, v):
        return normalize_interval_minutes(v)

    @field_validator("day_start", mode="before")
    @classmethod
    def _normalize_day_start(cls, v):
        return parse_time_of_day(v, WATER_DAY_START)

    @field_validator("day_end", mode="before")
    @classmethod
    def _normalize_day_end(cls, v):
        return parse_time_of_day(v, WATER_DAY_END)

    @property
    def interval(self) -> timedelta:
        return timedelta(minutes=self.interval_minutes)

    @property
    def crosses_midnight(self) -> bool:
        return self.day_end <= self.day_start


class WaterData(BaseModel):
    """water.json 的完整内容。"""
    daily_goal_ml: int = Field(WATER_DAILY_GOAL_ML, description="每日目标 ml")
    entries: List[WaterEntry] = Field(default_factory=list)
    water_reminder_enabled: bool = Field(False)
    water_reminder_interval_minutes: int = Field(WATER_REMIND_INTERVAL)
    day_start_time: str = Field(WATER_DAY_START, description="喝水日开始 HH:MM")
    day_end_time: str = Field(WATER_DAY_END, description="喝水日结束 HH:MM，可跨午夜")
    # 「今日结束」后恢复提醒的时间；此前不提醒
    manual_end_until: Optional[datetime] = Field(None)


class WaterDebugInfo(BaseModel):
    """调度器诊断快照，供界面与测试查看。"""
    enabled: bool
    interval_minutes: int
    day_start: time
    day_end: time
    manual_end_until: Optional[datetime] = None
    next_reminder_at: Optional[datetime] = None
    window_start: datetime
    window_end: datetime
    in_window: bool
    daily_goal: int
    total_today: int
    remaining: int
    countdown: Optional[timedelta] = None
    status: str
    last_suggested_amount: Optional[int] = None
    now: datetime
