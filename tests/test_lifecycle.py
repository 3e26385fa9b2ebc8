# tests/test_lifecycle.py

from __future__ import annotations

from datetime import datetime, timezone

import pytest

from taskdesk.core.errors import (
    FieldRestrictionViolation,
    InvalidCompletion,
    InvalidDueDate,
    InvalidPriority,
    InvalidTitle,
    UnknownAssignee,
)
from taskdesk.core.lifecycle import validate_for_create, validate_for_update

NOW = datetime(2025, 3, 1, 12, 0, tzinfo=timezone.utc)
LATER = datetime(2025, 3, 2, 12, 0, tzinfo=timezone.utc)


def test_create_applies_defaults(accounts, manager) -> None:
    doc = validate_for_create({"title": "  Buy milk "}, accounts, manager.id, NOW)
    assert doc["title"] == "Buy milk"
    assert doc["priority"] == "Medium"
    assert doc["assignedTo"] == "Unassigned"
    assert doc["completed"] is False
    assert doc["description"] == ""
    assert doc["dueDate"] is None
    assert doc["createdBy"] == manager.id
    assert doc["createdAt"] == doc["updatedAt"] == NOW


@pytest.mark.parametrize("title", [None, "", "   ", 42, ["x"]])
def test_create_rejects_bad_titles(accounts, manager, title) -> None:
    with pytest.raises(InvalidTitle):
        validate_for_create({"title": title}, accounts, manager.id, NOW)


def test_create_rejects_missing_title(accounts, manager) -> None:
    with pytest.raises(InvalidTitle):
        validate_for_create({}, accounts, manager.id, NOW)


def test_create_rejects_unknown_priority(accounts, manager) -> None:
    with pytest.raises(InvalidPriority):
        validate_for_create({"title": "Buy milk", "priority": "Urgent"}, accounts, manager.id, NOW)


def test_assignee_must_be_an_existing_employee(accounts, manager, alice) -> None:
    with pytest.raises(UnknownAssignee):
        validate_for_create({"title": "x", "assignedTo": "nobody@x.com"}, accounts, manager.id, NOW)
    # Managers are accounts, but not assignable.
    with pytest.raises(UnknownAssignee):
        validate_for_create({"title": "x", "assignedTo": manager.email}, accounts, manager.id, NOW)

    doc = validate_for_create({"title": "x", "assignedTo": " Alice@X.com"}, accounts, manager.id, NOW)
    assert doc["assignedTo"] == "alice@x.com"


def test_due_date_is_a_calendar_date(accounts, manager) -> None:
    doc = validate_for_create({"title": "x", "dueDate": "2025-04-30"}, accounts, manager.id, NOW)
    assert doc["dueDate"] == "2025-04-30"
    with pytest.raises(InvalidDueDate):
        validate_for_create({"title": "x", "dueDate": "next week"}, accounts, manager.id, NOW)
    with pytest.raises(InvalidDueDate):
        validate_for_create({"title": "x", "dueDate": "2025-02-30"}, accounts, manager.id, NOW)


def _existing() -> dict:
    return {
        "_id": "t1",
        "createdBy": "m1",
        "assignedTo": "Unassigned",
        "title": "Old",
        "description": "",
        "dueDate": None,
        "priority": "Medium",
        "completed": False,
        "createdAt": NOW,
        "updatedAt": NOW,
    }


def test_update_applies_patch_without_mutating_input(accounts, alice) -> None:
    existing = _existing()
    updated = validate_for_update(
        existing, {"title": "New", "priority": "High", "assignedTo": alice.email}, accounts, LATER
    )
    assert updated["title"] == "New"
    assert updated["priority"] == "High"
    assert updated["assignedTo"] == alice.email
    assert updated["updatedAt"] == LATER
    assert updated["createdAt"] == NOW
    assert existing["title"] == "Old"


def test_empty_update_leaves_timestamp(accounts) -> None:
    assert validate_for_update(_existing(), {}, accounts, LATER)["updatedAt"] == NOW


def test_update_validates_every_present_field(accounts) -> None:
    with pytest.raises(InvalidTitle):
        validate_for_update(_existing(), {"title": " "}, accounts, LATER)
    with pytest.raises(InvalidPriority):
        validate_for_update(_existing(), {"priority": "Urgent"}, accounts, LATER)
    with pytest.raises(UnknownAssignee):
        validate_for_update(_existing(), {"assignedTo": "nobody@x.com"}, accounts, LATER)
    with pytest.raises(InvalidCompletion):
        validate_for_update(_existing(), {"completed": "yes"}, accounts, LATER)


@pytest.mark.parametrize("field", ["createdBy", "createdAt", "_id", "owner"])
def test_update_refuses_fixed_or_unknown_fields(accounts, field) -> None:
    with pytest.raises(FieldRestrictionViolation):
        validate_for_update(_existing(), {field: "x", "title": "New"}, accounts, LATER)


def test_clearing_assignment_goes_back_to_sentinel(accounts, alice) -> None:
    existing = dict(_existing(), assignedTo=alice.email)
    assert validate_for_update(existing, {"assignedTo": ""}, accounts, LATER)["assignedTo"] == "Unassigned"


@pytest.mark.parametrize("blank", [None, ""])
def test_blank_priority_means_medium_on_create_and_update(accounts, manager, blank) -> None:
    created = validate_for_create({"title": "x", "priority": blank}, accounts, manager.id, NOW)
    assert created["priority"] == "Medium"

    existing = dict(_existing(), priority="High")
    assert validate_for_update(existing, {"priority": blank}, accounts, LATER)["priority"] == "Medium"
