# auth.py
import logging
import re

from flask import Blueprint, request, jsonify
from werkzeug.security import generate_password_hash, check_password_hash
from flask_jwt_extended import create_access_token
from pymongo.errors import DuplicateKeyError

from ..utils.utils import format_error, public_user
from ..models.models import ROLES, create_user, normalize_email
from ..stores.stores import get_account_store

logger = logging.getLogger(__name__)

auth_bp = Blueprint('auth', __name__, url_prefix="/auth")

EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
MIN_PASSWORD_LENGTH = 6


def issue_token(user):
    return create_access_token(
        identity=str(user["_id"]),
        additional_claims={"email": user["email"], "role": user["role"]},
    )


# Register route
@auth_bp.route('/register', methods=['POST'])
def register():
    accounts = get_account_store()
    data = request.get_json(silent=True)
    if data is None:
        data = {}
    if not isinstance(data, dict):
        return format_error("Request body must be a JSON object", 400)

    name = data.get("name")
    email = data.get("email")
    raw_password = data.get("password")
    role = data.get("role")

    if not email or not raw_password or not role:
        return format_error("Email, password, and role are required", 400)
    if role not in ROLES:
        return format_error("Role must be manager or employee", 400)
    if not isinstance(email, str) or not EMAIL_RE.match(email.strip()):
        return format_error("Invalid email format", 400)
    if not isinstance(raw_password, str) or len(raw_password) < MIN_PASSWORD_LENGTH:
        return format_error(f"Password must be at least {MIN_PASSWORD_LENGTH} characters", 400)
    if name is not None and not isinstance(name, str):
        return format_error("Name must be a string", 400)

    email = normalize_email(email)
    if accounts.find_by_email(email):
        return format_error("User with this email already exists", 400)

    user_doc = create_user(name, email, generate_password_hash(raw_password), role)
    try:
        user = accounts.create(user_doc)
    except DuplicateKeyError:
        return format_error("User with this email already exists", 400)

    logger.info("registered %s as %s", user["email"], role)
    return jsonify({
        "message": "User registered successfully",
        "token": issue_token(user),
        "user": public_user(user),
    }), 201


# Login route
@auth_bp.route('/login', methods=['POST'])
def login():
    accounts = get_account_store()
    data = request.get_json(silent=True)
    if data is None:
        data = {}
    if not isinstance(data, dict):
        return format_error("Request body must be a JSON object", 400)
    email = data.get("email")
    password = data.get("password")

    if not email or not password or not isinstance(email, str):
        return format_error("Email and password are required", 400)

    user = accounts.find_by_email(email)
    if not user or not check_password_hash(user["password"], str(password)):
        logger.info("failed login for %s", normalize_email(email))
        return format_error("Invalid email or password", 401)

    logger.info("login %s", user["email"])
    return jsonify({
        "message": "Login successful",
        "token": issue_token(user),
        "user": public_user(user),
    }), 200
