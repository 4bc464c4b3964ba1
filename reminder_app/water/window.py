"""「喝水日」时间窗计算，支持跨午夜（如 09:00 到次日 02:00）。"""
from datetime import datetime, time, timedelta
from typing import NamedTuple


class WaterDayWindow(NamedTuple):
    """某一时刻对应的当前（或即将开始的）喝水日，区间为 [start, end)。"""
    start: datetime
    end: datetime
    in_window: bool


def _at(day: datetime, moment: time) -> datetime:
    return datetime.combine(day.date(), moment)


def resolve_window(now: datetime, day_start: time, day_end: time) -> WaterDayWindow:
    """返回 now 所在的喝水日；不在任何窗口内时返回下一个窗口，in_window=False。

    day_end <= day_start 视为跨午夜，相等即 24 小时窗口。
    """
    one_day = timedelta(days=1)

    if day_end > day_start:
        start = _at(now, day_start)
        end = _at(now, day_end)
        if now < start:
            return WaterDayWindow(start, end, False)
        if now < end:
            return WaterDayWindow(start, end, True)
        return WaterDayWindow(start + one_day, end + one_day, False)

    # 跨午夜：昨天开始今天结束，或今天开始明天结束
    yesterday_start = _at(now, day_start) - one_day
    yesterday_end = _at(now, day_end)
    if yesterday_start <= now < yesterday_end:
        return WaterDayWindow(yesterday_start, yesterday_end, True)

    today_start = _at(now, day_start)
    today_end = _at(now, day_end) + one_day
    if today_start <= now < today_end:
        return WaterDayWindow(today_start, today_end, True)

    if now < today_start:
        return WaterDayWindow(today_start, today_end, False)
    return WaterDayWindow(today_start + one_day, today_end + one_day, False)


def next_day_start(now: datetime, day_start: time) -> datetime:
    """严格晚于 now 的下一个喝水日开始时间。"""
    today_start = _at(now, day_start)
    if now < today_start:
        return today_start
    return today_start + timedelta(days=1)


def describe_window(day_start: time, day_end: time) -> str:
    """时间窗的显示文本，跨午夜时标注次日。"""
    text = f"{day_start.strftime('%H:%M')}-{day_end.strftime('%H:%M')}"
    if day_end <= day_start:
        text += "（次日）"
    return text
