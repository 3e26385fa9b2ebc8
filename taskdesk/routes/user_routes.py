# user_routes.py
from flask import Blueprint, jsonify
from flask_jwt_extended import jwt_required

from ..stores.stores import get_task_service
from ..utils.utils import get_actor, public_user

user_bp = Blueprint('users', __name__)


# Employees a manager can assign tasks to
@user_bp.route('/users', methods=['GET'])
@jwt_required()
def list_employees():
    employees = get_task_service().list_employees(get_actor())
    return jsonify([public_user(u, with_role=False) for u in employees]), 200
