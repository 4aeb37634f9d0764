"""Fixtures for API tests."""

import pytest
from fastapi.testclient import TestClient

from usermgmt.config import Settings
from usermgmt.interface.api.app import create_app
from tests.di import build_test_container


@pytest.fixture
def client():
    """Create test client backed by the in-memory test container."""
    app_instance = create_app(container=build_test_container(), settings=Settings())
    return TestClient(app_instance)
