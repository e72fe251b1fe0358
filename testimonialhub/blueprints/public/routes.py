# testimonialhub/blueprints/public/routes.py
from flask import jsonify

from ...models.project import default_widget_settings
from ...security import json_body
from ...services import projects as project_service
from ...services import testimonials as testimonial_service
from ...utils import client_ip, client_user_agent
from . import public_bp


@public_bp.get("/submit/<share_id>")
def form_settings(share_id: str):
    project = project_service.find_active_by_share_id(share_id)
    widget = project.widget_settings or default_widget_settings()
    return jsonify({
        "success": True,
        "project": {
            "name": project.name,
            "description": project.description or "",
            "formSettings": project.form_settings,
            "theme": widget.get("theme", default_widget_settings()["theme"]),
        },
    })


@public_bp.post("/submit/<share_id>")
def submit(share_id: str):
    testimonial = testimonial_service.submit_public(
        share_id,
        json_body(),
        ip_address=client_ip(),
        user_agent=client_user_agent(),
    )
    return jsonify({
        "success": True,
        "message": "Thank you! Your testimonial has been submitted.",
        "testimonial": {"id": testimonial.id, "status": testimonial.status},
    }), 201


@public_bp.get("/widget/<share_id>")
def widget(share_id: str):
    project, items = testimonial_service.widget_feed(share_id)
    return jsonify({
        "success": True,
        "project": {"name": project.name, "shareId": project.share_id},
        "settings": project.widget_settings,
        "testimonials": [t.to_public_dict() for t in items],
    })
