"""桌面提醒：一次性/重复提醒与喝水提醒。"""
__version__ = "0.1.0"
