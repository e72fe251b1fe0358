# testimonialhub/services/projects.py
import logging

from sqlalchemy.exc import IntegrityError

from ..extensions import db
from ..exceptions import NotFound, ValidationFailed, Conflict
from ..models.project import Project, default_form_settings, generate_share_id
from ..models.user import User
from ..validation import (
    FormSettingsForm,
    ProjectForm,
    ProjectUpdateForm,
    WidgetCustomizationForm,
    validate_payload,
)

log = logging.getLogger(__name__)

SHARE_ID_ATTEMPTS = 5

# JSON name -> column for the plain project fields a PATCH may touch
UPDATABLE_FIELDS = {
    "name": "name",
    "description": "description",
    "website": "website",
    "active": "active",
}


def list_projects(user: User) -> list[Project]:
    return user.projects.order_by(Project.created_at.desc(), Project.id.desc()).all()


def get_owned_project(user: User, project_id: int) -> Project:
    # someone else's project is reported exactly like a missing one
    project = Project.query.filter_by(id=project_id, user_id=user.id).first()
    if project is None:
        raise NotFound("Project")
    return project


def find_active_by_share_id(share_id: str) -> Project:
    project = Project.query.filter_by(share_id=share_id, active=True).first()
    if project is None:
        raise NotFound(message="Invalid or inactive testimonial form")
    return project


def _unique_share_id() -> str:
    for _ in range(SHARE_ID_ATTEMPTS):
        candidate = generate_share_id()
        if not Project.query.filter_by(share_id=candidate).first():
            return candidate
    raise Conflict("Could not allocate a share id")


def create_project(user: User, payload) -> Project:
    data = validate_payload(ProjectForm, payload)
    project = Project(
        owner=user,
        name=data["name"],
        description=data.get("description") or "",
        website=data.get("website") or "",
        share_id=_unique_share_id(),
    )
    db.session.add(project)
    try:
        db.session.commit()
    except IntegrityError:
        db.session.rollback()
        raise Conflict("Could not allocate a share id")
    log.info("project %s created by user %s", project.id, user.id)
    return project


def _merge_form_settings(current: dict | None, data: dict) -> dict:
    merged = dict(default_form_settings())
    merged.update(current or {})
    for key, value in data.items():
        if key == "customQuestions":
            merged[key] = [{"question": q["question"], "required": bool(q["required"])} for q in value]
        else:
            merged[key] = bool(value)
    return merged


def update_project(project: Project, payload) -> Project:
    """Apply a partial update.

    Plain fields go through ProjectUpdateForm, ``formSettings`` is merged key
    by key into the stored settings, and ``widgetSettings`` must be complete
    and replaces the stored object with its validated values. ``null`` for
    any of these keys leaves the stored value alone. Errors from every part are
    reported together and nothing is written unless all parts pass.
    """
    if payload is None:
        payload = {}
    if not isinstance(payload, dict):
        raise ValidationFailed([{"field": "body", "message": "Expected a JSON object"}])

    errors: list[dict] = []
    # echoing the current shareId back is allowed; stats keys are ignored
    if "shareId" in payload and payload["shareId"] != project.share_id:
        errors.append({"field": "shareId", "message": "Share id cannot be changed"})
    fields = {k: v for k, v in payload.items() if k in UPDATABLE_FIELDS}

    field_data = form_data = widget_data = None
    try:
        field_data = validate_payload(ProjectUpdateForm, fields, partial=True)
    except ValidationFailed as e:
        errors.extend(e.errors)

    if payload.get("formSettings") is not None:
        try:
            form_data = validate_payload(FormSettingsForm, payload["formSettings"], partial=True)
        except ValidationFailed as e:
            errors.extend({"field": f"formSettings.{err['field']}", "message": err["message"]} for err in e.errors)

    if payload.get("widgetSettings") is not None:
        try:
            # stored as cleaned: trimmed strings, real booleans, an int count
            widget_data = validate_payload(WidgetCustomizationForm, payload["widgetSettings"])
        except ValidationFailed as e:
            errors.extend({"field": f"widgetSettings.{err['field']}", "message": err["message"]} for err in e.errors)

    if errors:
        raise ValidationFailed(errors)

    for key, value in (field_data or {}).items():
        if key == "active":
            value = bool(value)
        elif value is None:
            value = ""
        setattr(project, UPDATABLE_FIELDS[key], value)
    if form_data is not None:
        project.form_settings = _merge_form_settings(project.form_settings, form_data)
    if widget_data is not None:
        project.widget_settings = widget_data

    db.session.commit()
    log.info("project %s updated (%s)", project.id, ", ".join(sorted(payload)) or "no fields")
    return project


def delete_project(project: Project) -> None:
    project_id = project.id
    db.session.delete(project)
    db.session.commit()
    log.info("project %s deleted with its testimonials", project_id)
