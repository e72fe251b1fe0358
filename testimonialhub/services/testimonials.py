# testimonialhub/services/testimonials.py
import logging

from ..extensions import db
from ..exceptions import NotFound, ValidationFailed
from ..models.project import Project, default_widget_settings
from ..models.testimonial import STATUSES, Testimonial
from ..validation import ModerationForm, TestimonialForm, validate_payload
from .projects import find_active_by_share_id
from .stats import record_submission, recompute_project_stats

log = logging.getLogger(__name__)

STATUS_FILTERS = STATUSES + ("all",)


def list_for_project(project: Project, status: str | None = None) -> list[Testimonial]:
    status = (status or "all").strip().lower()
    if status not in STATUS_FILTERS:
        raise ValidationFailed([{"field": "status", "message": "Status must be pending, approved, rejected or all"}])

    qry = Testimonial.query.filter(Testimonial.project_id == project.id)
    if status != "all":
        qry = qry.filter(Testimonial.status == status)
    return qry.order_by(Testimonial.created_at.desc(), Testimonial.id.desc()).all()


def get_project_testimonial(project: Project, testimonial_id) -> Testimonial:
    testimonial = Testimonial.query.filter_by(id=testimonial_id, project_id=project.id).first()
    if testimonial is None:
        raise NotFound("Testimonial")
    return testimonial


def submit_public(share_id: str, payload, ip_address: str = "unknown", user_agent: str = "unknown") -> Testimonial:
    """Store a testimonial sent through a project's public form.

    The payload is checked before the project is looked up, so a bad body is
    a 400 even for an unknown share id. The status follows the project's
    ``requireApproval`` setting.
    """
    data = validate_payload(TestimonialForm, payload)
    project = find_active_by_share_id(share_id)

    status = "pending" if project.require_approval else "approved"
    testimonial = Testimonial(
        user_id=project.user_id,
        project_id=project.id,
        name=data["name"],
        email=data["email"],
        company=data.get("company") or "",
        position=data.get("position") or "",
        rating=data["rating"],
        testimonial=data["testimonial"],
        photo=data.get("photo") or "",
        video=data.get("video") or "",
        status=status,
        ip_address=ip_address,
        user_agent=user_agent,
    )
    db.session.add(testimonial)
    db.session.flush()
    record_submission(project, status)
    db.session.commit()

    log.info("testimonial %s submitted to project %s (%s)", testimonial.id, project.id, status)
    return testimonial


def moderate(project: Project, payload) -> Testimonial:
    data = validate_payload(ModerationForm, payload)
    testimonial = get_project_testimonial(project, data["testimonialId"])

    # null counts as absent, same as in the form
    if payload.get("status") is not None:
        testimonial.status = data["status"]
    if payload.get("featured") is not None:
        testimonial.featured = bool(data["featured"])

    db.session.flush()
    recompute_project_stats(project)
    log.info(
        "testimonial %s moderated: status=%s featured=%s",
        testimonial.id, testimonial.status, testimonial.featured,
    )
    return testimonial


def delete_testimonial(project: Project, testimonial_id) -> None:
    if testimonial_id in (None, ""):
        raise ValidationFailed([{"field": "testimonialId", "message": "Testimonial id is required"}])
    try:
        testimonial_id = int(testimonial_id)
    except (TypeError, ValueError):
        raise NotFound("Testimonial")

    testimonial = get_project_testimonial(project, testimonial_id)
    db.session.delete(testimonial)
    db.session.flush()
    recompute_project_stats(project)
    log.info("testimonial %s deleted from project %s", testimonial_id, project.id)


def widget_feed(share_id: str) -> tuple[Project, list[Testimonial]]:
    """Approved testimonials for the embeddable widget, featured ones first."""
    project = find_active_by_share_id(share_id)
    settings = project.widget_settings or default_widget_settings()
    limit = settings.get("maxTestimonials") or default_widget_settings()["maxTestimonials"]

    testimonials = (
        Testimonial.query.filter_by(project_id=project.id, status="approved")
        .order_by(Testimonial.featured.desc(), Testimonial.created_at.desc(), Testimonial.id.desc())
        .limit(int(limit))
        .all()
    )
    return project, testimonials
