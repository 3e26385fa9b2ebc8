# lifecycle.py
"""
Validation and application of task create/update requests.

These functions only check that values are well formed and keep the task
invariants; who may send which fields is decided by ``policy`` beforehand.
"""
from datetime import date

from ..models.models import (
    PRIORITIES, MEDIUM, UNASSIGNED, MUTABLE_FIELDS, create_task, normalize_email,
)
from .errors import (
    ValidationError, InvalidTitle, InvalidPriority, UnknownAssignee,
    InvalidDueDate, InvalidCompletion, FieldRestrictionViolation,
)


def _blank(value):
    return value is None or value == ""


def clean_title(value):
    if not isinstance(value, str) or not value.strip():
        raise InvalidTitle()
    return value.strip()


def clean_priority(value):
    if _blank(value):
        return MEDIUM
    if value not in PRIORITIES:
        raise InvalidPriority()
    return value


def clean_description(value):
    if value is None:
        return ""
    if not isinstance(value, str):
        raise ValidationError("Description must be a string")
    return value.strip()


def clean_due_date(value):
    """Accepts an ISO calendar date string; returns it normalized or None."""
    if _blank(value):
        return None
    if not isinstance(value, str):
        raise InvalidDueDate()
    try:
        return date.fromisoformat(value.strip()).isoformat()
    except ValueError:
        raise InvalidDueDate() from None


def clean_assignee(value, accounts):
    if _blank(value) or value == UNASSIGNED:
        return UNASSIGNED
    if not isinstance(value, str):
        raise UnknownAssignee()
    email = normalize_email(value)
    if accounts.find_employee(email) is None:
        raise UnknownAssignee()
    return email


def clean_completed(value):
    if not isinstance(value, bool):
        raise InvalidCompletion()
    return value


def validate_for_create(data, accounts, created_by, now):
    """Build a new task document from a create request, or raise."""
    data = data or {}
    title = clean_title(data.get("title"))
    priority = clean_priority(data.get("priority"))
    assigned_to = clean_assignee(data.get("assignedTo"), accounts)
    return create_task(
        title,
        created_by,
        now,
        description=clean_description(data.get("description")),
        due_date=clean_due_date(data.get("dueDate")),
        priority=priority,
        assigned_to=assigned_to,
    )


def validate_for_update(existing, patch, accounts, now):
    """
    Return a copy of ``existing`` with ``patch`` applied. Every present key
    is validated before anything is applied.
    """
    patch = patch or {}
    fixed = sorted(set(patch) - MUTABLE_FIELDS)
    if fixed:
        raise FieldRestrictionViolation(f"field {fixed[0]!r} cannot be changed")

    changes = {}
    if "title" in patch:
        changes["title"] = clean_title(patch["title"])
    if "description" in patch:
        changes["description"] = clean_description(patch["description"])
    if "dueDate" in patch:
        changes["dueDate"] = clean_due_date(patch["dueDate"])
    if "priority" in patch:
        changes["priority"] = clean_priority(patch["priority"])
    if "assignedTo" in patch:
        changes["assignedTo"] = clean_assignee(patch["assignedTo"], accounts)
    if "completed" in patch:
        changes["completed"] = clean_completed(patch["completed"])

    updated = dict(existing)
    if changes:
        updated.update(changes)
        updated["updatedAt"] = now
    return updated
