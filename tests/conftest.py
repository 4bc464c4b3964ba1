"""共用夹具：固定时钟、临时喝水存储、Qt 核心应用（不启动事件循环）。"""
import tempfile
from datetime import datetime
from pathlib import Path

import pytest
from PyQt6.QtCore import QCoreApplication

from reminder_app.water.store import WaterStore


class FakeClock:
    """可手动拨动的时钟。"""

    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now


@pytest.fixture(scope="session")
def qapp():
    app = QCoreApplication.instance() or QCoreApplication([])
    yield app


@pytest.fixture
def water_store():
    with tempfile.TemporaryDirectory() as tmp:
        yield WaterStore(data_dir=Path(tmp))


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock(datetime(2026, 3, 10, 9, 0))
