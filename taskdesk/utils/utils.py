# utils.py
from flask import current_app, jsonify
from flask_jwt_extended import get_jwt, get_jwt_identity
from bson import ObjectId, errors as bson_errors
from datetime import datetime

from ..models.models import Actor
from ..core.policy import capabilities

TASK_FIELDS = ("createdBy", "assignedTo", "title", "description", "dueDate",
               "priority", "completed")


def get_db():
    """
    Access the MongoDB database from the current Flask app context.
    """
    return current_app.config["DB"]


def get_actor():
    """
    Build the acting account from the verified JWT. Core operations receive
    this explicitly instead of reading request state themselves.
    """
    claims = get_jwt()
    return Actor(id=get_jwt_identity(), email=claims.get("email", ""), role=claims.get("role"))


def validate_objectid(id_str):
    """
    Validate whether a given string is a valid MongoDB ObjectId.
    Returns ObjectId if valid, None if invalid.
    """
    try:
        return ObjectId(id_str)
    except (bson_errors.InvalidId, TypeError):
        return None


def format_error(message, code=400, kind=None):
    """
    Return a formatted error response.
    """
    body = {"error": message}
    if kind:
        body["kind"] = kind
    return jsonify(body), code


def format_datetime(dt):
    """
    Format datetime in ISO 8601 format (e.g., 2025-07-22T12:00:00Z).
    """
    if not isinstance(dt, datetime):
        return str(dt)
    return dt.strftime('%Y-%m-%dT%H:%M:%SZ')


def serialize_task(task, actor=None):
    """
    Wire form of a task document: ``_id`` becomes ``id`` and timestamps are
    ISO strings. With an actor, the task's capabilities are attached.
    """
    out = {"id": str(task["_id"])}
    for field in TASK_FIELDS:
        out[field] = task.get(field)
    out["createdAt"] = format_datetime(task.get("createdAt"))
    out["updatedAt"] = format_datetime(task.get("updatedAt"))
    if actor is not None:
        out["capabilities"] = capabilities(actor, task)
    return out


def public_user(user, with_role=True):
    out = {"id": str(user["_id"]), "name": user.get("name", ""), "email": user["email"]}
    if with_role:
        out["role"] = user.get("role")
    return out
