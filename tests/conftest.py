"""Shared fixtures: a temporary data file, a controllable clock and the app."""
from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient

from inventory_api.app.core.config import Settings
from inventory_api.app.core.store import ProductStore
from inventory_api.app.main import create_app


class TickingClock:
    """Returns a time one ``step`` later on every call."""

    def __init__(self, start=None, step=timedelta(seconds=1)):
        self.current = start or datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)
        self.step = step

    def __call__(self):
        now = self.current
        self.current = self.current + self.step
        return now


@pytest.fixture
def data_file(tmp_path):
    return tmp_path / "data" / "products.json"


@pytest.fixture
def clock():
    return TickingClock()


@pytest.fixture
def store(data_file, clock):
    return ProductStore(data_file, clock=clock)


@pytest.fixture
def settings(data_file):
    return Settings(data_file=str(data_file))


@pytest.fixture
def app(settings, store):
    return create_app(settings=settings, store=store)


@pytest.fixture
def client(app):
    with TestClient(app) as c:
        yield c


@pytest.fixture
def widget():
    return {"name": "Widget", "price": 9.5, "quantity": 3}
