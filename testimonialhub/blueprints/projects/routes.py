# testimonialhub/blueprints/projects/routes.py
from flask import current_app, jsonify, request
from flask_login import current_user, login_required

from ...security import json_body
from ...services import projects as project_service
from ...services import testimonials as testimonial_service
from ...services.embed import build_embed_code
from . import projects_bp


@projects_bp.before_request
@login_required
def _require_login():
    # every route in this blueprint is owner-only
    pass


# -----------------
# Projects
# -----------------

@projects_bp.get("")
def list_projects():
    items = project_service.list_projects(current_user)
    return jsonify({"success": True, "projects": [p.to_dict() for p in items]})


@projects_bp.post("")
def create_project():
    project = project_service.create_project(current_user, json_body())
    return jsonify({"success": True, "project": project.to_dict(), "message": "Project created successfully"}), 201


@projects_bp.get("/<int:project_id>")
def get_project(project_id: int):
    project = project_service.get_owned_project(current_user, project_id)
    return jsonify({"success": True, "project": project.to_dict()})


@projects_bp.patch("/<int:project_id>")
def update_project(project_id: int):
    project = project_service.get_owned_project(current_user, project_id)
    project = project_service.update_project(project, json_body())
    return jsonify({"success": True, "project": project.to_dict()})


@projects_bp.delete("/<int:project_id>")
def delete_project(project_id: int):
    project = project_service.get_owned_project(current_user, project_id)
    project_service.delete_project(project)
    return jsonify({"success": True, "message": "Project deleted successfully"})


@projects_bp.get("/<int:project_id>/embed")
def embed_code(project_id: int):
    project = project_service.get_owned_project(current_user, project_id)
    base_url = current_app.config.get("EXTERNAL_BASE_URL") or request.host_url
    return jsonify({
        "success": True,
        "shareId": project.share_id,
        "embedCode": build_embed_code(project, base_url),
    })


# -----------------
# Moderation
# -----------------

@projects_bp.get("/<int:project_id>/testimonials")
def list_testimonials(project_id: int):
    project = project_service.get_owned_project(current_user, project_id)
    items = testimonial_service.list_for_project(project, request.args.get("status"))
    return jsonify({"success": True, "testimonials": [t.to_dict() for t in items]})


@projects_bp.patch("/<int:project_id>/testimonials")
def moderate_testimonial(project_id: int):
    project = project_service.get_owned_project(current_user, project_id)
    testimonial = testimonial_service.moderate(project, json_body())
    return jsonify({"success": True, "testimonial": testimonial.to_dict(), "stats": project.stats})


@projects_bp.delete("/<int:project_id>/testimonials")
def delete_testimonial(project_id: int):
    project = project_service.get_owned_project(current_user, project_id)
    testimonial_service.delete_testimonial(project, request.args.get("testimonialId"))
    return jsonify({"success": True, "message": "Testimonial deleted successfully", "stats": project.stats})
