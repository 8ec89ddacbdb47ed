"""
Pytest configuration and shared fixtures.

Redis is replaced by an in-memory double handed to RedisManager through
``connection_factory``; it understands only the commands the store uses.
"""

from typing import Any, Dict, List, Optional

import pytest

from core.enums import Language
from core.models import Job, JobData
from core.redis_client import RedisManager
from core.services import JobStore


class FakeRedis:
    """In-memory stand-in for redis.Redis (PING/SET/GET/DEL)."""

    def __init__(self, **kwargs: Any):
        self.kwargs = kwargs
        self.data: Dict[str, str] = {}
        self.closed = False
        # When set, every command raises this exception
        self.fail_with: Optional[Exception] = None

    def _check(self) -> None:
        if self.fail_with is not None:
            raise self.fail_with

    def ping(self) -> bool:
        self._check()
        return True

    def set(self, key: str, value: str) -> bool:
        self._check()
        self.data[key] = value
        return True

    def get(self, key: str) -> Optional[str]:
        self._check()
        return self.data.get(key)

    def delete(self, *keys: str) -> int:
        self._check()
        return sum(1 for key in keys if self.data.pop(key, None) is not None)

    def close(self) -> None:
        self.closed = True


class FakeRedisFactory:
    """Records every client it creates."""

    def __init__(self):
        self.instances: List[FakeRedis] = []
        self.connect_error: Optional[Exception] = None
        # Shared by all clients so data survives reconnects, like a server
        self.data: Dict[str, str] = {}

    def __call__(self, **kwargs: Any) -> FakeRedis:
        client = FakeRedis(**kwargs)
        client.data = self.data
        client.fail_with = self.connect_error
        self.instances.append(client)
        return client

    @property
    def client(self) -> FakeRedis:
        return self.instances[-1]


@pytest.fixture
def redis_factory() -> FakeRedisFactory:
    return FakeRedisFactory()


@pytest.fixture
def redis_manager(redis_factory) -> RedisManager:
    return RedisManager(connection_factory=redis_factory)


@pytest.fixture
def job_store(redis_manager):
    """A JobStore already connected to a fresh fake Redis."""
    store = JobStore(redis_manager)
    assert store.connect("localhost", 6379).ok
    yield store
    if store.is_connected:
        store.disconnect()


@pytest.fixture
def command_job() -> Job:
    return Job(
        id="job-1",
        description="demo",
        data=JobData(content="echo hi", is_command=True, lang=Language.NONE),
    )


@pytest.fixture
def script_job() -> Job:
    return Job(
        id="job-2",
        description="nightly report",
        data=JobData(
            content="import sys\nprint(sys.version)\n",
            is_command=False,
            lang=Language.PYTHON,
        ),
    )
