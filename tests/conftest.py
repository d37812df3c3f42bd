from datetime import date

import pytest
import structlog
from fastapi.testclient import TestClient

from forecasty.context import AppContext
from forecasty.model.series import Observation
from forecasty.series_store import SeriesStore
from main import app, get_context, Settings


class FakeRedis:
    """The slice of redis.asyncio.Redis that SeriesStore uses."""

    def __init__(self):
        self.data = {}
        self.closed = False

    async def get(self, key):
        return self.data.get(key)

    async def set(self, key, value, ex=None):
        self.data[key] = value if isinstance(value, bytes) else str(value).encode()
        return True

    async def delete(self, key):
        return 1 if self.data.pop(key, None) is not None else 0

    async def aclose(self):
        self.closed = True


@pytest.fixture()
def fake_redis():
    return FakeRedis()


@pytest.fixture()
def store(fake_redis):
    return SeriesStore(fake_redis, structlog.get_logger())


@pytest.fixture()
def monthly_series():
    return [
        Observation(date=date(2025, 1, 1), value=100),
        Observation(date=date(2025, 2, 1), value=120),
        Observation(date=date(2025, 3, 1), value=140),
        Observation(date=date(2025, 4, 1), value=160),
    ]


@pytest.fixture()
def client(store):
    def override_get_context():
        return AppContext(Settings(), structlog.get_logger(), store)

    app.dependency_overrides[get_context] = override_get_context
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
