# testimonialhub/blueprints/errors/routes.py
from flask import current_app, jsonify, request
from flask_wtf.csrf import CSRFError
from werkzeug.exceptions import HTTPException

from ...exceptions import AppError
from ...extensions import db
from . import errors_bp


def _rollback():
    # leave the session usable for the next request
    try:
        db.session.rollback()
    except Exception:
        current_app.logger.exception("Rollback failed")


# Validation / auth / not found / conflict raised by services
@errors_bp.app_errorhandler(AppError)
def err_app(e: AppError):
    _rollback()
    if e.status_code >= 500:
        current_app.logger.error("%s %s failed: %s", request.method, request.path, e.message)
    return jsonify(e.to_dict()), e.status_code


# CSRF: treated as 400 Bad Request
@errors_bp.app_errorhandler(CSRFError)
def err_csrf(e):
    current_app.logger.warning("CSRF check failed on %s: %s", request.path, e.description)
    return jsonify({"error": e.description or "CSRF token missing or invalid"}), 400


# 404 / 405 / 413 and friends
@errors_bp.app_errorhandler(HTTPException)
def err_http(e: HTTPException):
    if e.code == 404:
        return jsonify({"error": "Not found"}), 404
    return jsonify({"error": e.name}), e.code


# Last resort: never leak internals
@errors_bp.app_errorhandler(Exception)
def err_unexpected(e):
    _rollback()
    current_app.logger.exception("Unhandled error on %s %s", request.method, request.path)
    return jsonify({"error": "Internal server error"}), 500
