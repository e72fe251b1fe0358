# testimonialhub/models/project.py
import secrets
import string

from flask import current_app, has_app_context
from sqlalchemy.orm import validates

from ..extensions import db
from ..exceptions import ModelValidationError
from ..utils import utcnow, isoformat

# same alphabet as nanoid: URL-safe without escaping
SHARE_ID_ALPHABET = string.ascii_letters + string.digits + "_-"
DEFAULT_SHARE_ID_LENGTH = 10


def generate_share_id(length: int | None = None) -> str:
    if length is None:
        length = (
            current_app.config.get("SHARE_ID_LENGTH", DEFAULT_SHARE_ID_LENGTH)
            if has_app_context()
            else DEFAULT_SHARE_ID_LENGTH
        )
    return "".join(secrets.choice(SHARE_ID_ALPHABET) for _ in range(length))


def default_form_settings() -> dict:
    return {
        "collectEmail": True,
        "collectCompany": True,
        "collectPosition": True,
        "allowVideo": True,
        "allowPhoto": True,
        "requireApproval": True,
        "customQuestions": [],
    }


def default_widget_settings() -> dict:
    return {
        "layout": "carousel",
        "theme": {
            "primaryColor": "#0ea5e9",
            "backgroundColor": "#ffffff",
            "textColor": "#1f2937",
            "fontFamily": "Inter, sans-serif",
        },
        "showRatings": True,
        "showPhotos": True,
        "showCompany": True,
        "maxTestimonials": 10,
    }


class Project(db.Model):
    __tablename__ = "project"

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey("user.id", ondelete="CASCADE"), nullable=False, index=True)

    name = db.Column(db.String(100), nullable=False)
    description = db.Column(db.String(500))
    website = db.Column(db.String(200))

    # public token for the submission form; fixed once assigned
    share_id = db.Column(db.String(32), unique=True, nullable=False, index=True)

    form_settings = db.Column(db.JSON, nullable=False, default=default_form_settings)
    widget_settings = db.Column(db.JSON, nullable=False, default=default_widget_settings)

    active = db.Column(db.Boolean, default=True, nullable=False)

    # denormalised counts, recomputed from testimonials (services.stats)
    total_submissions = db.Column(db.Integer, default=0, nullable=False)
    approved_count = db.Column(db.Integer, default=0, nullable=False)
    rejected_count = db.Column(db.Integer, default=0, nullable=False)

    created_at = db.Column(db.DateTime, default=utcnow, nullable=False, index=True)
    updated_at = db.Column(db.DateTime, default=utcnow, onupdate=utcnow, nullable=False)

    owner = db.relationship("User", back_populates="projects")
    testimonials = db.relationship(
        "Testimonial",
        back_populates="project",
        lazy="dynamic",
        cascade="all, delete-orphan",
    )

    def __init__(self, **kwargs):
        kwargs.setdefault("share_id", generate_share_id())
        kwargs.setdefault("form_settings", default_form_settings())
        kwargs.setdefault("widget_settings", default_widget_settings())
        kwargs.setdefault("active", True)
        kwargs.setdefault("total_submissions", 0)
        kwargs.setdefault("approved_count", 0)
        kwargs.setdefault("rejected_count", 0)
        super().__init__(**kwargs)
        if not self.name:
            raise ModelValidationError("name", "Please provide a project name")

    @validates("name")
    def _validate_name(self, key, value):
        value = (value or "").strip()
        if not value:
            raise ModelValidationError("name", "Please provide a project name")
        if len(value) > 100:
            raise ModelValidationError("name", "Project name cannot be more than 100 characters")
        return value

    @validates("description")
    def _validate_description(self, key, value):
        if value and len(value) > 500:
            raise ModelValidationError("description", "Description cannot be more than 500 characters")
        return value

    @validates("website")
    def _validate_website(self, key, value):
        if value and len(value) > 200:
            raise ModelValidationError("website", "Website URL cannot be more than 200 characters")
        return value

    @validates("share_id")
    def _validate_share_id(self, key, value):
        if self.share_id is not None and value != self.share_id:
            raise ModelValidationError("shareId", "Share id cannot be changed")
        if not value:
            raise ModelValidationError("shareId", "Share id is required")
        return value

    # --- Stats ---
    @property
    def pending_count(self) -> int:
        return (self.total_submissions or 0) - (self.approved_count or 0) - (self.rejected_count or 0)

    @property
    def stats(self) -> dict:
        return {
            "totalSubmissions": self.total_submissions or 0,
            "approvedCount": self.approved_count or 0,
            "rejectedCount": self.rejected_count or 0,
        }

    @property
    def require_approval(self) -> bool:
        return bool((self.form_settings or {}).get("requireApproval", True))

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "userId": self.user_id,
            "name": self.name,
            "description": self.description or "",
            "website": self.website or "",
            "shareId": self.share_id,
            "formSettings": self.form_settings,
            "widgetSettings": self.widget_settings,
            "active": bool(self.active),
            "stats": self.stats,
            "createdAt": isoformat(self.created_at),
            "updatedAt": isoformat(self.updated_at),
        }

    def __repr__(self):
        return f"<Project {self.id} {self.share_id}>"
