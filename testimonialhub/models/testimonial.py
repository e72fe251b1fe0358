# testimonialhub/models/testimonial.py
from sqlalchemy.orm import validates

from ..extensions import db
from ..exceptions import ModelValidationError
from ..utils import utcnow, isoformat

STATUSES = ("pending", "approved", "rejected")


class Testimonial(db.Model):
    __tablename__ = "testimonial"

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey("user.id", ondelete="CASCADE"), nullable=False)
    project_id = db.Column(db.Integer, db.ForeignKey("project.id", ondelete="CASCADE"), nullable=False)

    name = db.Column(db.String(100), nullable=False)
    email = db.Column(db.String(255), nullable=False)
    company = db.Column(db.String(100))
    position = db.Column(db.String(100))
    rating = db.Column(db.Integer, nullable=False)  # 1..5
    testimonial = db.Column(db.Text, nullable=False)

    # media URLs
    photo = db.Column(db.String(500))
    video = db.Column(db.String(500))

    # pending|approved|rejected
    status = db.Column(db.String(20), default="pending", nullable=False)
    featured = db.Column(db.Boolean, default=False, nullable=False)

    # spam auditing
    ip_address = db.Column(db.String(64))
    user_agent = db.Column(db.String(300))

    created_at = db.Column(db.DateTime, default=utcnow, nullable=False, index=True)
    updated_at = db.Column(db.DateTime, default=utcnow, onupdate=utcnow, nullable=False)
    approved_at = db.Column(db.DateTime)

    owner = db.relationship("User", back_populates="testimonials")
    project = db.relationship("Project", back_populates="testimonials")

    __table_args__ = (
        db.Index("ix_testimonial_user_status", "user_id", "status"),
        db.Index("ix_testimonial_project_status", "project_id", "status"),
    )

    def __init__(self, **kwargs):
        kwargs.setdefault("status", "pending")
        kwargs.setdefault("featured", False)
        super().__init__(**kwargs)
        required = (
            ("name", "Please provide a name"),
            ("email", "Please provide an email"),
            ("rating", "Please provide a rating"),
            ("testimonial", "Please provide testimonial text"),
        )
        for field, message in required:
            if getattr(self, field) is None:
                raise ModelValidationError(field, message)

    @validates("name")
    def _validate_name(self, key, value):
        value = (value or "").strip()
        if not value:
            raise ModelValidationError("name", "Please provide a name")
        if len(value) > 100:
            raise ModelValidationError("name", "Name cannot be more than 100 characters")
        return value

    @validates("email")
    def _validate_email(self, key, value):
        value = (value or "").strip().lower()
        if not value:
            raise ModelValidationError("email", "Please provide an email")
        return value

    @validates("company", "position")
    def _validate_short_text(self, key, value):
        if value and len(value) > 100:
            label = "Company name" if key == "company" else "Position"
            raise ModelValidationError(key, f"{label} cannot be more than 100 characters")
        return value

    @validates("rating")
    def _validate_rating(self, key, value):
        if isinstance(value, bool) or not isinstance(value, int) or not 1 <= value <= 5:
            raise ModelValidationError("rating", "Rating must be between 1 and 5")
        return value

    @validates("testimonial")
    def _validate_text(self, key, value):
        value = (value or "").strip()
        if not value:
            raise ModelValidationError("testimonial", "Please provide testimonial text")
        if len(value) < 10:
            raise ModelValidationError("testimonial", "Testimonial must be at least 10 characters")
        if len(value) > 1000:
            raise ModelValidationError("testimonial", "Testimonial cannot be more than 1000 characters")
        return value

    @validates("status")
    def _validate_status(self, key, value):
        if value not in STATUSES:
            raise ModelValidationError("status", "Status must be pending, approved or rejected")
        # any status may follow any other; only the approval timestamp tracks it
        if value == "approved":
            if self.status != "approved" or self.approved_at is None:
                self.approved_at = utcnow()
        else:
            self.approved_at = None
        return value

    def to_dict(self, include_audit: bool = True) -> dict:
        data = {
            "id": self.id,
            "projectId": self.project_id,
            "name": self.name,
            "email": self.email,
            "company": self.company or "",
            "position": self.position or "",
            "rating": self.rating,
            "testimonial": self.testimonial,
            "photo": self.photo or "",
            "video": self.video or "",
            "status": self.status,
            "featured": bool(self.featured),
            "createdAt": isoformat(self.created_at),
            "updatedAt": isoformat(self.updated_at),
            "approvedAt": isoformat(self.approved_at),
        }
        if include_audit:
            data["ipAddress"] = self.ip_address
            data["userAgent"] = self.user_agent
        return data

    def to_public_dict(self) -> dict:
        data = self.to_dict(include_audit=False)
        for key in ("email", "status", "approvedAt", "updatedAt"):
            data.pop(key, None)
        return data

    def __repr__(self):
        return f"<Testimonial {self.id} {self.status}>"
