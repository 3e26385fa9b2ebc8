# task_routes.py
import logging

from flask import Blueprint, request, jsonify
from flask_jwt_extended import jwt_required
from pymongo.errors import PyMongoError

from ..core.errors import TaskError, Unauthorized, FieldRestrictionViolation, NotFound
from ..core.query import filter_tasks, summarize
from ..stores.stores import get_task_service
from ..utils.utils import get_actor, format_error, serialize_task

logger = logging.getLogger(__name__)

task_bp = Blueprint('tasks', __name__, url_prefix="/tasks")


def status_for(error):
    if isinstance(error, (Unauthorized, FieldRestrictionViolation)):
        return 403
    if isinstance(error, NotFound):
        return 404
    return 400


@task_bp.app_errorhandler(TaskError)
def handle_task_error(error):
    status = status_for(error)
    if status == 403:
        logger.info("denied %s %s: %s", request.method, request.path, error.message)
    return format_error(error.message, status, error.kind)


@task_bp.app_errorhandler(PyMongoError)
def handle_store_error(error):
    logger.exception("store failure on %s %s", request.method, request.path)
    return format_error("Internal server error", 500)


# List tasks visible to the caller
@task_bp.route('', methods=['GET'])
@jwt_required()
def list_tasks():
    actor = get_actor()
    tasks = get_task_service().list_tasks(actor)
    tasks = filter_tasks(
        tasks,
        search=request.args.get("search"),
        status=request.args.get("status"),
        sort=request.args.get("sort"),
    )
    return jsonify({
        "tasks": [serialize_task(t, actor) for t in tasks],
        "summary": summarize(tasks),
    }), 200


# Create a new task
@task_bp.route('', methods=['POST'])
@jwt_required()
def create_task():
    actor = get_actor()
    task = get_task_service().create_task(actor, request.get_json(silent=True))
    logger.info("task %s created by %s", task["_id"], actor.email)
    return jsonify({"message": "Task created successfully", "task": serialize_task(task, actor)}), 201


@task_bp.route('/<task_id>', methods=['PUT'])
@jwt_required()
def update_task(task_id):
    actor = get_actor()
    task = get_task_service().update_task(actor, task_id, request.get_json(silent=True))
    logger.info("task %s updated by %s", task_id, actor.email)
    return jsonify({"message": "Task updated successfully", "task": serialize_task(task, actor)}), 200


@task_bp.route('/<task_id>', methods=['DELETE'])
@jwt_required()
def delete_task(task_id):
    actor = get_actor()
    get_task_service().delete_task(actor, task_id)
    logger.info("task %s deleted by %s", task_id, actor.email)
    return jsonify({"message": "Task deleted successfully"}), 200
