# testimonialhub/models/user.py
import re

from flask import current_app, has_app_context
from flask_login import UserMixin
from sqlalchemy.orm import deferred, validates
from werkzeug.security import generate_password_hash, check_password_hash

from ..extensions import db
from ..exceptions import ModelValidationError
from ..utils import utcnow, isoformat

PLANS = ("free", "pro", "enterprise")
EMAIL_PATTERN = re.compile(r"^\S+@\S+\.\S+$")


def default_notification_settings() -> dict:
    return {
        "emailOnNewTestimonial": True,
        "emailOnApproval": False,
        "emailWeeklyReport": True,
        "emailMonthlyReport": False,
    }


def _hash_method() -> str:
    if has_app_context():
        return current_app.config.get("PASSWORD_HASH_METHOD", "scrypt")
    return "scrypt"


class User(UserMixin, db.Model):
    __tablename__ = "user"

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(60), nullable=False)
    email = db.Column(db.String(255), unique=True, nullable=False, index=True)

    # deferred: only loaded when a caller touches it (sign-in, password change)
    password_hash = deferred(db.Column(db.String(255), nullable=False))

    company = db.Column(db.String(100))
    website = db.Column(db.String(200))
    avatar = db.Column(db.String(500))

    # free|pro|enterprise
    plan = db.Column(db.String(20), nullable=False, default="free")
    notification_settings = db.Column(db.JSON, nullable=False, default=default_notification_settings)

    created_at = db.Column(db.DateTime, default=utcnow, nullable=False)
    updated_at = db.Column(db.DateTime, default=utcnow, onupdate=utcnow, nullable=False)

    projects = db.relationship(
        "Project",
        back_populates="owner",
        lazy="dynamic",
        cascade="all, delete-orphan",
    )
    testimonials = db.relationship(
        "Testimonial",
        back_populates="owner",
        lazy="dynamic",
        cascade="all, delete",
    )

    def __init__(self, password=None, **kwargs):
        kwargs.setdefault("plan", "free")
        kwargs.setdefault("notification_settings", default_notification_settings())
        super().__init__(**kwargs)
        for field, message in (("name", "Please provide a name"), ("email", "Please provide an email")):
            if not getattr(self, field):
                raise ModelValidationError(field, message)
        if password is not None:
            self.set_password(password)
        if not self.password_hash:
            raise ModelValidationError("password", "Please provide a password")

    # --- Storage-level constraints ---
    @validates("name")
    def _validate_name(self, key, value):
        value = (value or "").strip()
        if not value:
            raise ModelValidationError("name", "Please provide a name")
        if len(value) > 60:
            raise ModelValidationError("name", "Name cannot be more than 60 characters")
        return value

    @validates("email")
    def _validate_email(self, key, value):
        value = (value or "").strip().lower()
        if not value:
            raise ModelValidationError("email", "Please provide an email")
        if not EMAIL_PATTERN.match(value):
            raise ModelValidationError("email", "Please provide a valid email")
        return value

    @validates("company")
    def _validate_company(self, key, value):
        if value and len(value) > 100:
            raise ModelValidationError("company", "Company name cannot be more than 100 characters")
        return value

    @validates("website")
    def _validate_website(self, key, value):
        if value and len(value) > 200:
            raise ModelValidationError("website", "Website URL cannot be more than 200 characters")
        return value

    @validates("plan")
    def _validate_plan(self, key, value):
        if value not in PLANS:
            raise ModelValidationError("plan", f"Plan must be one of {', '.join(PLANS)}")
        return value

    # --- Auth helpers ---
    def set_password(self, password: str):
        if not password or len(password) < 6:
            raise ModelValidationError("password", "Password must be at least 6 characters")
        self.password_hash = generate_password_hash(password, method=_hash_method())

    def check_password(self, password: str) -> bool:
        return bool(password) and check_password_hash(self.password_hash, password)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "email": self.email,
            "company": self.company or "",
            "website": self.website or "",
            "avatar": self.avatar,
            "plan": self.plan,
            "notificationSettings": dict(self.notification_settings or default_notification_settings()),
            "createdAt": isoformat(self.created_at),
            "updatedAt": isoformat(self.updated_at),
        }

    def __repr__(self):
        return f"<User {self.id} {self.email}>"
