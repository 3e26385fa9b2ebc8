# service.py
"""
The four task operations exposed to the API layer, plus the employee
listing used to fill assignment choices.

Each operation takes the acting account explicitly and either returns its
payload or raises one ``TaskError``.
"""
from ..models.models import utcnow
from . import policy
from .errors import NotFound, ValidationError
from .lifecycle import validate_for_create, validate_for_update


class TaskService:
    def __init__(self, tasks, accounts, clock=utcnow):
        self.tasks = tasks
        self.accounts = accounts
        self.clock = clock

    def _authorize(self, actor, action, task=None, requested_fields=()):
        decision = policy.decide(actor, action, task, requested_fields)
        if not decision.allowed:
            raise decision.error()
        return decision

    def create_task(self, actor, data):
        self._authorize(actor, policy.CREATE)
        if data is not None and not isinstance(data, dict):
            raise ValidationError("Request body must be a JSON object")
        document = validate_for_create(data, self.accounts, actor.id, self.clock())
        return self.tasks.create(document)

    def list_tasks(self, actor):
        query = policy.visibility_filter(actor)
        return [t for t in self.tasks.find_many(query) if policy.can_see(actor, t)]

    def update_task(self, actor, task_id, patch):
        # Unknown roles are refused before the lookup so they learn nothing.
        self._authorize(actor, policy.LIST)
        if patch is None:
            patch = {}
        if not isinstance(patch, dict):
            raise ValidationError("Request body must be a JSON object")

        existing = self.tasks.find_by_id(task_id)
        if existing is None:
            raise NotFound()
        self._authorize(actor, policy.UPDATE, existing, patch.keys())

        updated = validate_for_update(existing, patch, self.accounts, self.clock())
        if updated != existing and self.tasks.replace(task_id, updated) == 0:
            raise NotFound()
        return updated

    def delete_task(self, actor, task_id):
        self._authorize(actor, policy.DELETE)
        if self.tasks.delete_by_id(task_id) == 0:
            raise NotFound("Task not found or already deleted")

    def list_employees(self, actor):
        self._authorize(actor, policy.LIST_EMPLOYEES)
        return self.accounts.list_employees()
