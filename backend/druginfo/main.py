"""
Druginfo – Flask Application Factory
Serves the drug catalog REST API.
"""

import logging
import sys
from typing import Optional

from flask import Flask, jsonify, request
from flask_cors import CORS
from werkzeug.exceptions import HTTPException, RequestEntityTooLarge

from druginfo.config import Config
from druginfo.database import db
from druginfo.exceptions import DrugInfoError, ValidationError
from druginfo.middleware.request_logger import log_after_request, start_timer
from druginfo.routes.bookmarks import bookmarks_bp
from druginfo.routes.drugs import drugs_bp
from druginfo.routes.users import users_bp
from druginfo.services.store import init_store

logger = logging.getLogger("druginfo")


def setup_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )
    # SQL echo is noisy; keep it off unless explicitly debugging
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)


def register_error_handlers(app: Flask) -> None:
    """Map application and HTTP errors onto the {"message", "error"} JSON shape."""

    @app.errorhandler(DrugInfoError)
    def handle_app_error(exc: DrugInfoError):
        if exc.status_code >= 500:
            logger.error("%s: %s | context=%s", type(exc).__name__, exc.message, exc.context)
        else:
            logger.info("%s: %s | context=%s", type(exc).__name__, exc.message, exc.context)
        return jsonify({"message": exc.message, "error": exc.detail()}), exc.status_code

    @app.errorhandler(HTTPException)
    def handle_http_error(exc: HTTPException):
        if isinstance(exc, RequestEntityTooLarge):
            return handle_app_error(ValidationError(
                f"Request body exceeds the {app.config['MAX_CONTENT_LENGTH']} byte limit.",
                context={"content_length": request.content_length},
            ))
        return jsonify({
            "message": exc.description,
            "error": exc.name.lower().replace(" ", "_"),
        }), exc.code

    @app.errorhandler(Exception)
    def handle_unexpected(exc: Exception):
        logger.exception("Unhandled error: %s", exc)
        db.session.rollback()
        return jsonify({"message": "Internal server error.", "error": "internal_error"}), 500


def create_app(overrides: Optional[dict] = None) -> Flask:
    Config.validate()
    setup_logging(Config.LOG_LEVEL)

    app = Flask(__name__)
    app.config["SECRET_KEY"] = Config.FLASK_SECRET_KEY
    app.config["SQLALCHEMY_DATABASE_URI"] = Config.DATABASE_URL
    app.config["SQLALCHEMY_TRACK_MODIFICATIONS"] = False
    app.config["DEBUG"] = Config.APP_ENV == "development"
    app.config["MAX_PHOTO_BYTES"] = Config.MAX_PHOTO_BYTES
    if overrides:
        app.config.update(overrides)
    # Hard ceiling on request size; photo limit is enforced separately with a 400
    if "MAX_CONTENT_LENGTH" not in (overrides or {}):
        app.config["MAX_CONTENT_LENGTH"] = app.config["MAX_PHOTO_BYTES"] + 1024 * 1024

    # Extensions
    CORS(app, resources={r"/*": {"origins": Config.cors_origins_list()}})
    db.init_app(app)
    init_store(app, db)

    # Create tables if they don't already exist
    with app.app_context():
        from druginfo.models import models as _models  # noqa: F401 – ensure all models are registered
        db.create_all()

    # Middleware
    app.before_request(start_timer)
    app.after_request(log_after_request)

    register_error_handlers(app)

    # Blueprints
    app.register_blueprint(users_bp)
    app.register_blueprint(bookmarks_bp)
    app.register_blueprint(drugs_bp)

    @app.route("/")
    def index():
        return "Hello, World!"

    # Health check
    @app.route("/health")
    def health():
        return {"status": "ok", "service": "druginfo"}

    logger.info("Druginfo app created (env=%s)", Config.APP_ENV)
    return app
