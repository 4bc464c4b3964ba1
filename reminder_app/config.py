"""全局配置与路径。"""
import os
from pathlib import Path

# 项目根目录（reminder_app 包所在目录的上一级）
ROOT_DIR = Path(__file__).resolve().parent.parent
# 数据目录：提醒、喝水记录、弹窗设置
DATA_DIR = Path(os.environ.get("REMINDER_APP_DATA_DIR") or ROOT_DIR / "data")
WATER_DATA_DIR = DATA_DIR / "water"
REMINDERS_DATA_DIR = DATA_DIR / "reminders"
SETTINGS_DATA_DIR = DATA_DIR / "settings"

# 主窗口
WINDOW_TITLE = "提醒助手"
WINDOW_WIDTH = 560
WINDOW_HEIGHT = 480

# 喝水默认
WATER_DAILY_GOAL_ML = 2000
WATER_REMIND_INTERVAL = 60  # 分钟
WATER_DAY_START = "09:00"
WATER_DAY_END = "02:00"  # 早于开始时间表示跨过午夜
WATER_ROUND_STEP_ML = 50  # 建议量向上取整到 50 ml
WATER_QUICK_AMOUNTS = (100, 200, 300)
NO_GOAL_RETRY_MINUTES = 10

# 定时器节拍（毫秒）
WATER_TICK_INTERVAL_MS = 30_000
REMINDER_TICK_INTERVAL_MS = 1_000

# 弹窗默认
POPUP_WIDTH = 320
POPUP_HEIGHT = 160
POPUP_MARGIN = 10


def ensure_dirs() -> None:
    """确保数据目录存在。"""
    for d in (DATA_DIR, WATER_DATA_DIR, REMINDERS_DATA_DIR, SETTINGS_DATA_DIR):
        d.mkdir(parents=True, exist_ok=True)
