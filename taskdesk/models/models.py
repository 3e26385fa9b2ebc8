# models.py
from dataclasses import dataclass
from datetime import datetime, timezone

MANAGER = "manager"
EMPLOYEE = "employee"
ROLES = (MANAGER, EMPLOYEE)

HIGH = "High"
MEDIUM = "Medium"
LOW = "Low"
PRIORITIES = (HIGH, MEDIUM, LOW)

UNASSIGNED = "Unassigned"

# Fields a task update may touch; everything else is fixed at creation.
MUTABLE_FIELDS = frozenset(
    ["title", "description", "dueDate", "priority", "assignedTo", "completed"]
)


@dataclass(frozen=True)
class Actor:
    """The authenticated account performing an operation."""
    id: str
    email: str
    role: str


def utcnow():
    return datetime.now(timezone.utc)


def normalize_email(email):
    return email.strip().lower()


# Task Models
def create_task(title, created_by, now, description="", due_date=None,
                priority=MEDIUM, assigned_to=UNASSIGNED):
    return {
        "createdBy": created_by,  # manager account id, never changes
        "assignedTo": assigned_to,  # employee email or UNASSIGNED
        "title": title.strip(),
        "description": description.strip() if description else "",
        "dueDate": due_date,
        "priority": priority,
        "completed": False,
        "createdAt": now,
        "updatedAt": now,
    }


# User Models
def create_user(name, email, hashed_password, role, now=None):
    return {
        "name": name.strip() if name else "",
        "email": normalize_email(email),
        "password": hashed_password,
        "role": role,  # manager | employee
        "createdAt": now or utcnow(),
    }
