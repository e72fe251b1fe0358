# testimonialhub/blueprints/auth/routes.py
from flask import jsonify, current_app
from flask_login import login_user, logout_user, login_required, current_user
from flask_wtf.csrf import generate_csrf

from ...exceptions import AuthenticationRequired
from ...security import json_body
from ...services import accounts
from . import auth_bp


@auth_bp.get("/csrf")
def csrf_token():
    return jsonify({"csrfToken": generate_csrf()})


# -----------------
# Signup
# -----------------

@auth_bp.post("/signup")
def signup():
    user = accounts.register_user(json_body())
    return jsonify({"success": True, "message": "User created successfully", "user": user.to_dict()}), 201


# -----------------
# Signin / Signout
# -----------------

@auth_bp.post("/signin")
def signin():
    payload = json_body()
    user = accounts.authenticate(payload)
    remember = bool(isinstance(payload, dict) and payload.get("remember"))
    login_user(user, remember=remember)
    current_app.logger.info("user %s signed in", user.id)
    return jsonify({"success": True, "user": user.to_dict()})


@auth_bp.post("/signout")
@login_required
def signout():
    user_id = current_user.id
    logout_user()
    current_app.logger.info("user %s signed out", user_id)
    return jsonify({"success": True})


@auth_bp.get("/session")
def session_info():
    if not current_user.is_authenticated:
        raise AuthenticationRequired()
    return jsonify({"user": current_user.to_dict()})
