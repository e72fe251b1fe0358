import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

from flask import Flask, jsonify

from .config import Config
from .extensions import db, migrate, login_manager, csrf

# Blueprints
from .blueprints.errors import errors_bp
from .blueprints.auth import auth_bp
from .blueprints.projects import projects_bp
from .blueprints.public import public_bp
from .blueprints.user import user_bp

FORMAT = "[%(asctime)s] %(levelname)s in %(module)s: %(message)s"


def _init_logging(app):
    # Base level
    level_name = str(app.config.get("LOG_LEVEL", "INFO")).upper()
    level = getattr(logging, level_name, logging.INFO)
    app.logger.setLevel(level)

    formatter = logging.Formatter(FORMAT)

    # app.logger is the "testimonialhub" logger, so service module loggers
    # propagate into it. Drop handlers left by an earlier create_app().
    for old in [h for h in app.logger.handlers if getattr(h, "_testimonialhub", False)]:
        app.logger.removeHandler(old)
        old.close()

    handlers = []
    if app.config.get("LOG_TO_FILE", True):
        log_dir = Path(app.config.get("LOG_DIR", "logs"))
        log_dir.mkdir(parents=True, exist_ok=True)
        log_path = log_dir / app.config.get("LOG_FILENAME", "testimonialhub.log")

        # Rotating file handler (5MB x 5)
        handlers.append(RotatingFileHandler(log_path, maxBytes=5_000_000, backupCount=5, encoding="utf-8"))

    # Stream to stderr as well (dev/docker)
    handlers.append(logging.StreamHandler())

    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
        handler._testimonialhub = True
        app.logger.addHandler(handler)

    app.logger.info("Logging initialized.")


def create_app(config_object=None):
    app = Flask(__name__, instance_relative_config=True)
    app.config.from_object(config_object or Config)
    app.json.sort_keys = False

    # Logging must come before blueprints so errors during register are captured
    _init_logging(app)

    # Extensions
    db.init_app(app)
    migrate.init_app(app, db)
    login_manager.init_app(app)
    csrf.init_app(app)

    # registers user_loader / unauthorized handler on login_manager
    from . import security  # noqa: F401
    from . import models  # noqa: F401

    # Blueprints
    app.register_blueprint(errors_bp)  # error handlers
    app.register_blueprint(auth_bp)
    app.register_blueprint(projects_bp)
    app.register_blueprint(public_bp)
    app.register_blueprint(user_bp)

    # anonymous share-form and widget calls carry no session or token
    csrf.exempt(public_bp)

    @app.get("/api/health")
    def health():
        return jsonify({"status": "ok", "version": app.config.get("APP_VERSION")})

    return app
