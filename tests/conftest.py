import asyncio
from datetime import datetime, timedelta, timezone

import pytest

from innerpeace.memory.record_store import RecordStore
from innerpeace.memory.schemas import MoodEntry

BASE_TIME = datetime(2025, 3, 1, 9, 0, tzinfo=timezone.utc)


@pytest.fixture(autouse=True)
def offline_env(monkeypatch):
    """No store credentials and no oracle key unless a test opts in."""
    monkeypatch.setenv("DATABASE_URL", "")
    monkeypatch.setenv("GEMINI_API_KEY", "")
    monkeypatch.setenv("DEMO_MODE", "false")


@pytest.fixture
def demo_store():
    return RecordStore(demo_mode=lambda: True)


@pytest.fixture
def sqlite_url(tmp_path):
    return f"sqlite+aiosqlite:///{tmp_path / 'store.db'}"


class FailingRemote:
    """Remote store whose every call blows up."""

    def __init__(self):
        self.calls = 0

    async def _fail(self, *args, **kwargs):
        self.calls += 1
        raise ConnectionError("document store unreachable")

    insert = query = update_by_id = delete_by_id = put_profile = get_profile = _fail


class SlowRemote:
    """Remote store that answers long after any sane timeout."""

    def __init__(self, delay=0.3):
        self.delay = delay
        self.completed = []

    async def _slow(self, name, result=None):
        await asyncio.sleep(self.delay)
        self.completed.append(name)
        return result

    async def insert(self, kind, record):
        return await self._slow("insert", "remote-id")

    async def query(self, kind, user_id, limit):
        return await self._slow("query", [])

    async def update_by_id(self, kind, record_id, fields):
        return await self._slow("update")

    async def delete_by_id(self, kind, record_id):
        return await self._slow("delete")

    async def put_profile(self, user_id, profile):
        return await self._slow("put_profile")

    async def get_profile(self, user_id):
        return await self._slow("get_profile")


@pytest.fixture
def failing_remote():
    return FailingRemote()


@pytest.fixture
def slow_remote():
    return SlowRemote()


def make_mood(user_id="u1", mood=3, emotions=(), days_ago=0, **extra):
    return MoodEntry(
        user_id=user_id,
        mood=mood,
        emotions=list(emotions),
        timestamp=BASE_TIME - timedelta(days=days_ago),
        **extra,
    )


def run(coro):
    return asyncio.run(coro)
