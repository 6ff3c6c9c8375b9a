import pytest
from fastapi.testclient import TestClient

from billsplit.core.config import Settings
from billsplit.main import create_app


@pytest.fixture
def settings():
    return Settings(LOG_ENABLED=False)


@pytest.fixture
def client(settings):
    return TestClient(create_app(settings))
