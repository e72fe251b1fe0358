# testimonialhub/services/accounts.py
import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import undefer

from ..extensions import db
from ..exceptions import AuthenticationRequired, Conflict, NotFound, ValidationFailed
from ..models.user import User, default_notification_settings
from ..validation import (
    NotificationSettingsForm,
    PasswordChangeForm,
    ProfileForm,
    SigninForm,
    SignupForm,
    validate_payload,
)

log = logging.getLogger(__name__)

DUPLICATE_EMAIL = "User with this email already exists"


def _email_taken(email: str, exclude_id: int | None = None) -> bool:
    qry = User.query.filter(User.email == email.strip().lower())
    if exclude_id is not None:
        qry = qry.filter(User.id != exclude_id)
    return qry.first() is not None


def _commit_or_conflict(message: str):
    try:
        db.session.commit()
    except IntegrityError:
        db.session.rollback()
        raise Conflict(message)


def get_user(user_id: int, with_password: bool = False) -> User:
    qry = User.query
    if with_password:
        qry = qry.options(undefer(User.password_hash))
    user = qry.filter(User.id == user_id).first()
    if user is None:
        raise NotFound("User")
    return user


def register_user(payload) -> User:
    data = validate_payload(SignupForm, payload)
    email = data["email"].lower()

    # the unique index is the real guard; this just gives a friendlier error
    if _email_taken(email):
        log.info("signup rejected, duplicate email")
        raise Conflict(DUPLICATE_EMAIL)

    user = User(
        name=data["name"],
        email=email,
        password=data["password"],
        company=data.get("company") or "",
    )
    db.session.add(user)
    _commit_or_conflict(DUPLICATE_EMAIL)
    log.info("user %s signed up", user.id)
    return user


def authenticate(payload) -> User:
    data = validate_payload(SigninForm, payload)
    user = (
        User.query.options(undefer(User.password_hash))
        .filter(User.email == data["email"].lower())
        .first()
    )
    if not user or not user.check_password(data["password"]):
        log.warning("failed sign-in attempt")
        raise AuthenticationRequired("Invalid email or password")
    return user


def update_profile(user: User, payload) -> User:
    data = validate_payload(ProfileForm, payload)
    email = data["email"].lower()
    if email != user.email and _email_taken(email, exclude_id=user.id):
        raise Conflict("Email already in use")

    user.name = data["name"]
    user.email = email
    _commit_or_conflict("Email already in use")
    return user


def change_password(user: User, payload) -> None:
    data = validate_payload(PasswordChangeForm, payload)
    user = get_user(user.id, with_password=True)
    if not user.check_password(data["currentPassword"]):
        raise ValidationFailed([{"field": "currentPassword", "message": "Current password is incorrect"}])

    user.set_password(data["newPassword"])
    db.session.commit()
    log.info("user %s changed password", user.id)


def get_notification_settings(user: User) -> dict:
    return dict(user.notification_settings or default_notification_settings())


def update_notification_settings(user: User, payload) -> dict:
    data = validate_payload(NotificationSettingsForm, payload)
    # replaced wholesale; absent keys are stored as False
    user.notification_settings = {key: bool(value) for key, value in data.items()}
    db.session.commit()
    return get_notification_settings(user)


def delete_account(user: User) -> None:
    """Remove the user with every project and testimonial they own."""
    user_id = user.id
    project_count = user.projects.count()
    db.session.delete(user)
    db.session.commit()
    log.info("user %s deleted with %s project(s)", user_id, project_count)
