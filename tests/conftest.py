import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from typing import AsyncGenerator, Callable, List, Tuple

from clausereview.main import app
from clausereview.locator.service import DOCUMENT_LOCATORS
from clausereview.perspective.store import perspective_store


class FakeViewer:
    """Viewer whose match counts are scripted per search string."""

    def __init__(self, counts=None, default: int = 0):
        self.counts = counts or {}
        self.default = default
        self.finds: List[str] = []
        self.navigations: List[int] = []
        self.clears = 0

    def find(self, text: str) -> int:
        self.finds.append(text)
        return self.counts.get(text, self.default)

    def navigate(self, index: int) -> None:
        self.navigations.append(index)

    def clear_highlight(self) -> None:
        self.clears += 1


class FakeTimer:
    def __init__(self, delay: float, callback: Callable[[], None]):
        self.delay = delay
        self.callback = callback
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True

    def fire(self) -> None:
        if not self.cancelled:
            self.callback()


class FakeScheduler:
    def __init__(self):
        self.timers: List[FakeTimer] = []

    def call_later(self, delay: float, callback: Callable[[], None]) -> FakeTimer:
        timer = FakeTimer(delay, callback)
        self.timers.append(timer)
        return timer


@pytest.fixture
def fake_viewer_cls():
    return FakeViewer


@pytest.fixture
def scheduler() -> FakeScheduler:
    return FakeScheduler()


@pytest.fixture
def events() -> List[Tuple[str, dict]]:
    return []


@pytest.fixture(autouse=True)
def _reset_state():
    """In-memory stores are module level; isolate every test."""
    DOCUMENT_LOCATORS.clear()
    perspective_store._sessions.clear()
    yield
    DOCUMENT_LOCATORS.clear()
    perspective_store._sessions.clear()


@pytest_asyncio.fixture(scope="function")
async def async_client() -> AsyncGenerator[AsyncClient, None]:
    """Client for testing API endpoints."""
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client
