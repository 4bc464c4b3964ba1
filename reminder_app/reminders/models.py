"""一次性/重复提醒数据模型。"""
import uuid
from datetime import datetime, timedelta
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class ReminderType(str, Enum):
    """提醒类型。"""
    ONE_TIME = "one_time"     # 一次性
    REPEATING = "repeating"   # 按间隔重复


class NotificationLevel(str, Enum):
    """重要程度，影响弹窗颜色与提示音。"""
    NORMAL = "normal"
    IMPORTANT = "important"
    CRITICAL = "critical"


class NotificationSettings(BaseModel):
    """单条提醒的通知方式。"""
    use_overlay: bool = Field(True, description="是否弹窗")
    play_sound: bool = Field(True, description="是否播放提示音")
    sound_path: Optional[str] = Field(None, description="自定义 WAV 路径，空则用默认提示音")
    volume: float = Field(1.0, ge=0.0, le=1.0)
    level: NotificationLevel = Field(NotificationLevel.NORMAL)

    model_config = ConfigDict(use_enum_values=True)


class Reminder(BaseModel):
    """单条提醒：日历上的时间与实际下次触发时间分开保存。"""
    id: str = Field(default_factory=lambda: str(uuid.uuid4()), description="提醒 ID")
    title: str = Field("", description="标题")
    message: str = Field("", description="内容")
    scheduled_time: datetime = Field(..., description="日程时间")
    next_trigger_time: datetime = Field(..., description="下次触发时间")
    type: ReminderType = Field(ReminderType.ONE_TIME)
    repeat_interval_minutes: Optional[int] = Field(None, gt=0, description="重复间隔分钟")
    minutes_before: int = Field(0, ge=0, description="提前几分钟提醒")
    is_active: bool = Field(True)
    notification_settings: NotificationSettings = Field(default_factory=NotificationSettings)

    model_config = ConfigDict(use_enum_values=True)

    @property
    def is_repeating(self) -> bool:
        return self.type == ReminderType.REPEATING and self.repeat_interval_minutes is not None

    def is_due(self, now: datetime) -> bool:
        return self.is_active and self.next_trigger_time <= now


def create_reminder(
    title: str,
    scheduled_time: datetime,
    message: str = "",
    minutes_before: int = 0,
    repeat_interval_minutes: Optional[int] = None,
    notification_settings: Optional[NotificationSettings] = None,
    now: Optional[datetime] = None,
) -> Reminder:
    """新建提醒：首次触发为日程时间减提前量；若已过去则回退到日程时间本身。"""
    now = now or datetime.now()
    minutes_before = max(0, minutes_before)
    first_trigger = scheduled_time - timedelta(minutes=minutes_before)
    if first_trigger < now:
        first_trigger = scheduled_time
    if repeat_interval_minutes is not None and repeat_interval_minutes <= 0:
        raise ValueError("重复间隔必须为正数")
    return Reminder(
        title=title.strip(),
        message=message.strip(),
        scheduled_time=scheduled_time,
        next_trigger_time=first_trigger,
        type=ReminderType.REPEATING if repeat_interval_minutes else ReminderType.ONE_TIME,
        repeat_interval_minutes=repeat_interval_minutes,
        minutes_before=minutes_before,
        notification_settings=notification_settings or NotificationSettings(),
    )
