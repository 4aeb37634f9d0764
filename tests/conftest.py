"""Test configuration and fixtures."""

from datetime import datetime, timedelta, timezone

import logfire
import pytest
from sqlalchemy.exc import OperationalError

from usermgmt.domain.model import User


@pytest.fixture(scope="session", autouse=True)
def _quiet_logfire():
    """Keep logfire local and silent during tests."""
    logfire.configure(send_to_logfire=False, console=False)


@pytest.fixture(autouse=True)
def _test_environment(monkeypatch):
    """Run every test with test settings and the default cooldown."""
    monkeypatch.setenv("ENVIRONMENT", "test")
    monkeypatch.delenv("VOTING__COOLDOWN_MINUTES", raising=False)


def make_user(email: str = "ada@example.com", **overrides) -> User:
    """Build an unsaved user with sensible defaults."""
    fields = {
        "email": email,
        "first_name": "Ada",
        "last_name": "Lovelace",
        "password": "opaque-hash",
    }
    fields.update(overrides)
    return User(**fields)


def minutes_ago(minutes: float) -> datetime:
    """Aware UTC timestamp ``minutes`` in the past."""
    return datetime.now(timezone.utc) - timedelta(minutes=minutes)


def storage_failure(statement: str = "SELECT") -> OperationalError:
    """A driver-level failure as SQLAlchemy would raise it."""
    return OperationalError(statement, None, Exception("connection reset"))
