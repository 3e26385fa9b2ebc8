# query.py
"""
Pure filtering and ordering over a task list the actor is already allowed
to see. Nothing here queries a store.
"""
from ..models.models import PRIORITIES
from .errors import ValidationError

STATUS_FILTERS = ("all", "completed", "active")
SORT_KEYS = ("createdAt", "dueDate", "priority")

_PRIORITY_RANK = {p: i for i, p in enumerate(PRIORITIES)}


def _matches_status(task, status):
    if status == "completed":
        return bool(task.get("completed"))
    if status == "active":
        return not task.get("completed")
    return True


def _matches_search(task, needle):
    if not needle:
        return True
    haystack = f"{task.get('title', '')}\n{task.get('description') or ''}"
    return needle in haystack.lower()


def filter_tasks(tasks, search=None, status="all", sort="createdAt"):
    """
    Returns a new list; ``tasks`` is left untouched so the same input can be
    filtered again with different options.
    """
    status = status or "all"
    sort = sort or "createdAt"
    if status not in STATUS_FILTERS:
        raise ValidationError(f"status must be one of {', '.join(STATUS_FILTERS)}")
    if sort not in SORT_KEYS:
        raise ValidationError(f"sort must be one of {', '.join(SORT_KEYS)}")

    needle = (search or "").strip().lower()
    result = [t for t in tasks if _matches_status(t, status) and _matches_search(t, needle)]

    # Newest first, then a stable sort on the requested key keeps recency
    # as the tie-break whatever order the input came in.
    result.sort(key=lambda t: t["createdAt"], reverse=True)
    if sort == "dueDate":
        # Undated tasks go last; ISO date strings order chronologically.
        result.sort(key=lambda t: (t.get("dueDate") is None, t.get("dueDate") or ""))
    elif sort == "priority":
        result.sort(key=lambda t: _PRIORITY_RANK.get(t.get("priority"), len(PRIORITIES)))
    return result


def summarize(tasks):
    completed = sum(1 for t in tasks if t.get("completed"))
    return {"total": len(tasks), "completed": completed, "pending": len(tasks) - completed}
