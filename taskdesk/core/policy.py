# policy.py
"""
Authorization rules for tasks.

``decide`` is a pure function of the actor, the requested action, the task
(when there is one) and the fields a request wants to change. It never
touches a store; callers raise ``decision.error()`` when it denies.
"""
from dataclasses import dataclass

from ..models.models import MANAGER, EMPLOYEE, MUTABLE_FIELDS, UNASSIGNED
from .errors import Unauthorized, FieldRestrictionViolation

CREATE = "create"
LIST = "list"
LIST_EMPLOYEES = "list_employees"
UPDATE = "update"
DELETE = "delete"

EMPLOYEE_FIELDS = frozenset(["completed"])


@dataclass(frozen=True)
class Decision:
    allowed: bool
    allowed_fields: frozenset = frozenset()
    reason: str = ""
    error_class: type = Unauthorized

    def error(self):
        return self.error_class(self.reason)


def _allow(fields=frozenset(), reason="allowed"):
    return Decision(True, frozenset(fields), reason)


def _deny(reason, error_class=Unauthorized):
    return Decision(False, frozenset(), reason, error_class)


def is_assignee(actor, task):
    assigned_to = task.get("assignedTo")
    if not assigned_to or assigned_to == UNASSIGNED:
        return False
    return assigned_to == actor.email


def decide(actor, action, task=None, requested_fields=()):
    role = getattr(actor, "role", None)
    if role not in (MANAGER, EMPLOYEE):
        return _deny("unknown role")

    if action == CREATE:
        if role == MANAGER:
            return _allow(MUTABLE_FIELDS)
        return _deny("not authorized to create tasks")

    if action == LIST:
        # Employees are narrowed by visibility_filter, never refused.
        return _allow()

    if action == LIST_EMPLOYEES:
        if role == MANAGER:
            return _allow()
        return _deny("only managers can view users")

    if action == UPDATE:
        if role == MANAGER:
            return _allow(MUTABLE_FIELDS)
        if task is None or not is_assignee(actor, task):
            return _deny("not authorized to update this task")
        if set(requested_fields) - EMPLOYEE_FIELDS:
            return _deny("employees may only update completion status",
                         FieldRestrictionViolation)
        return _allow(EMPLOYEE_FIELDS)

    if action == DELETE:
        if role == MANAGER:
            return _allow()
        return _deny("only managers can delete tasks")

    return _deny(f"unknown action {action!r}")


def visibility_filter(actor):
    """
    Store filter narrowing a task listing to what the actor may see.
    Raises Unauthorized for actors without a known role.
    """
    decision = decide(actor, LIST)
    if not decision.allowed:
        raise decision.error()
    if actor.role == MANAGER:
        return {}
    return {"assignedTo": actor.email}


def can_see(actor, task):
    if not decide(actor, LIST).allowed:
        return False
    return actor.role == MANAGER or is_assignee(actor, task)


def capabilities(actor, task):
    """
    Per-task flags for the presentation layer, so it never repeats the
    role rules itself.
    """
    return {
        "can_edit": decide(actor, UPDATE, task, MUTABLE_FIELDS).allowed,
        "can_toggle_complete": decide(actor, UPDATE, task, EMPLOYEE_FIELDS).allowed,
        "can_delete": decide(actor, DELETE, task).allowed,
    }
