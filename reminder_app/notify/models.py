"""弹窗设置数据模型。"""
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from reminder_app.config import POPUP_HEIGHT, POPUP_WIDTH


class NotificationPosition(str, Enum):
    """弹窗在屏幕可用区域中的位置。"""
    BOTTOM_RIGHT = "bottom_right"
    BOTTOM_LEFT = "bottom_left"
    TOP_RIGHT = "top_right"
    TOP_LEFT = "top_left"
    CENTER = "center"


class PopupSettings(BaseModel):
    width: int = Field(POPUP_WIDTH, gt=0)
    height: int = Field(POPUP_HEIGHT, gt=0)
    position: NotificationPosition = Field(NotificationPosition.BOTTOM_RIGHT)
    play_sound: bool = Field(True)

    model_config = ConfigDict(use_enum_values=True)


class AppNotificationSettings(BaseModel):
    """普通提醒与喝水提醒各自的弹窗设置。"""
    reminder_popup: PopupSettings = Field(default_factory=PopupSettings)
    water_popup: PopupSettings = Field(default_factory=PopupSettings)
