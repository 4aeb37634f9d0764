"""Unit tests for UserPatch presence rules."""

from datetime import datetime, timezone

from usermgmt.domain.model import UserPatch
from usermgmt.domain.value import RoleId


def test_empty_patch_has_no_changes():
    assert UserPatch().changes() == {}


def test_empty_strings_and_non_positive_role_are_absent():
    patch = UserPatch(first_name="", last_name="", password="", role_id=RoleId(0))

    assert patch.changes() == {}


def test_populated_fields_are_reported():
    deleted_at = datetime(2026, 1, 2, tzinfo=timezone.utc)
    patch = UserPatch(
        first_name="Grace",
        last_name="Hopper",
        password="hash",
        role_id=RoleId(4),
        deleted_at=deleted_at,
    )

    assert patch.changes() == {
        "first_name": "Grace",
        "last_name": "Hopper",
        "password": "hash",
        "role_id": 4,
        "deleted_at": deleted_at,
    }


def test_email_is_left_to_the_service():
    """Email needs a uniqueness check, so it is not part of changes()."""
    assert UserPatch(email="new@example.com").changes() == {}
