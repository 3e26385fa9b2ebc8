import logging

from flask import Flask, jsonify
from flask_cors import CORS
from flask_jwt_extended import JWTManager
from pymongo import MongoClient

from .config import Config
from .utils.utils import format_error
from .stores.stores import TaskStore, AccountStore
from .auth.auth import auth_bp
from .routes.task_routes import task_bp
from .routes.user_routes import user_bp

logger = logging.getLogger(__name__)


def create_app(config=None, db=None):
    """
    Build the Flask app. ``config`` overrides settings from the environment;
    ``db`` replaces the MongoDB database (anything exposing ``users`` and
    ``tasks`` collections).
    """
    app = Flask(__name__)
    app.config.from_object(Config)
    if config:
        app.config.update(config)
    CORS(app)

    # JWT config
    jwt = JWTManager(app)

    @jwt.unauthorized_loader
    def missing_token(reason):
        return format_error("Missing authorization header", 401)

    @jwt.invalid_token_loader
    def invalid_token(reason):
        return format_error("Invalid or expired token", 401)

    @jwt.expired_token_loader
    def expired_token(jwt_header, jwt_payload):
        return format_error("Invalid or expired token", 401)

    # MongoDB connection
    if db is None:
        client = MongoClient(app.config["MONGO_URI"])
        db = client[app.config["MONGO_DB_NAME"]]
    app.config["DB"] = db
    AccountStore(db.users).ensure_indexes()
    TaskStore(db.tasks).ensure_indexes()

    @app.route('/health', methods=['GET'])
    def health():
        return jsonify({"message": "Server is running", "ok": True}), 200

    # Register routes
    app.register_blueprint(auth_bp)
    app.register_blueprint(task_bp)
    app.register_blueprint(user_bp)

    logger.debug("app created (db=%s)", getattr(db, "name", db))
    return app
