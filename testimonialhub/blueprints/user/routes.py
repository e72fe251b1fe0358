# testimonialhub/blueprints/user/routes.py
from flask import jsonify
from flask_login import current_user, login_required, logout_user

from ...security import json_body
from ...services import accounts
from . import user_bp


@user_bp.before_request
@login_required
def _require_login():
    pass


# -----------------
# Profile
# -----------------

@user_bp.get("/profile")
def profile():
    return jsonify({"success": True, "user": current_user.to_dict()})


@user_bp.patch("/profile")
def update_profile():
    user = accounts.update_profile(current_user, json_body())
    return jsonify({"success": True, "message": "Profile updated successfully", "user": user.to_dict()})


@user_bp.patch("/password")
def change_password():
    accounts.change_password(current_user, json_body())
    return jsonify({"success": True, "message": "Password updated successfully"})


# -----------------
# Notifications
# -----------------

@user_bp.get("/notifications")
def notifications():
    return jsonify({"success": True, "settings": accounts.get_notification_settings(current_user)})


@user_bp.patch("/notifications")
def update_notifications():
    settings = accounts.update_notification_settings(current_user, json_body())
    return jsonify({"success": True, "message": "Notification settings updated", "settings": settings})


# -----------------
# Account
# -----------------

@user_bp.delete("/account")
def delete_account():
    user = current_user._get_current_object()
    logout_user()
    accounts.delete_account(user)
    return jsonify({"success": True, "message": "Account deleted successfully"})
