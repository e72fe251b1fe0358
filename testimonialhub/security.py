# testimonialhub/security.py
from flask import jsonify, request

from .extensions import db, login_manager
from .exceptions import AuthenticationRequired
from .models.user import User


@login_manager.user_loader
def load_user(user_id):
    try:
        return db.session.get(User, int(user_id))
    except (TypeError, ValueError):
        return None


@login_manager.unauthorized_handler
def unauthorized():
    # API clients get a JSON 401 instead of a redirect to a login page
    return jsonify(AuthenticationRequired().to_dict()), 401


def json_body():
    """Decoded JSON body, or None when it is missing or malformed."""
    return request.get_json(silent=True)
