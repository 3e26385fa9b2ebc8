# errors.py
"""
Error kinds raised by the core task operations.

Every failure carries a machine-distinguishable ``kind`` and a human
readable message. The API layer maps kinds to HTTP status codes; the core
itself never logs or formats responses.
"""


class TaskError(Exception):
    kind = "TaskError"
    default_message = "Task operation failed"

    def __init__(self, message=None):
        self.message = message or self.default_message
        super().__init__(self.message)

    def to_dict(self):
        return {"error": self.message, "kind": self.kind}


class Unauthorized(TaskError):
    kind = "Unauthorized"
    default_message = "Not authorized"


class FieldRestrictionViolation(TaskError):
    kind = "FieldRestrictionViolation"
    default_message = "employees may only update completion status"


class NotFound(TaskError):
    kind = "NotFound"
    default_message = "Task not found"


class ValidationError(TaskError):
    """Base for input validation failures."""
    kind = "ValidationError"
    default_message = "Invalid task data"


class InvalidTitle(ValidationError):
    kind = "InvalidTitle"
    default_message = "Title is required and must be a non-empty string"


class InvalidPriority(ValidationError):
    kind = "InvalidPriority"
    default_message = "Priority must be High, Medium, or Low"


class UnknownAssignee(ValidationError):
    kind = "UnknownAssignee"
    default_message = "Assigned user must be a valid employee or Unassigned"


class InvalidDueDate(ValidationError):
    kind = "InvalidDueDate"
    default_message = "Due date must be a calendar date (YYYY-MM-DD)"


class InvalidCompletion(ValidationError):
    kind = "InvalidCompletion"
    default_message = "Completed must be true or false"
