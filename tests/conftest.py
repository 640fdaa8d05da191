"""测试公共夹具。"""
import os
from datetime import datetime, timedelta, timezone

import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from PyQt6.QtCore import QCoreApplication  # noqa: E402

from pet_sitter.auth.session import Session  # noqa: E402
from pet_sitter.service.memory import InMemoryDataService  # noqa: E402


class FakeClock:
    """可手动推进的时钟。"""

    def __init__(self, start: datetime = datetime(2025, 1, 1, 12, 0, tzinfo=timezone.utc)):
        self.current = start

    def __call__(self) -> datetime:
        return self.current

    def advance(self, **kwargs) -> None:
        self.current += timedelta(**kwargs)


@pytest.fixture(scope="session")
def qapp():
    app = QCoreApplication.instance() or QCoreApplication([])
    yield app


@pytest.fixture(autouse=True)
def reset_session():
    Session.set_current(None)
    yield
    Session.set_current(None)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def service(clock: FakeClock) -> InMemoryDataService:
    return InMemoryDataService(clock=clock)
