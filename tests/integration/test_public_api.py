"""Anonymous share-form submission and the widget feed."""

import pytest

from testimonialhub.extensions import db
from testimonialhub.models import Testimonial

SUBMISSION = {
    "name": "Happy Customer",
    "email": "Happy@Example.com",
    "company": "Initech",
    "position": "CTO",
    "rating": 5,
    "testimonial": "Setup took five minutes and support was great.",
}


@pytest.fixture
def anon(app):
    """A second client with no session, like a visitor on the share page."""
    return app.test_client()


def project_stats(client, project_id):
    return client.get(f"/api/projects/{project_id}").get_json()["project"]["stats"]


class TestSubmitForm:
    def test_form_settings(self, anon, project):
        body = anon.get(f"/api/submit/{project['shareId']}").get_json()
        assert body["project"]["name"] == project["name"]
        assert body["project"]["formSettings"]["collectEmail"] is True
        assert body["project"]["theme"]["primaryColor"] == "#0ea5e9"
        assert "stats" not in body["project"]

    def test_unknown_share_id(self, anon):
        resp = anon.get("/api/submit/doesnotexist")
        assert resp.status_code == 404
        assert resp.get_json() == {"error": "Invalid or inactive testimonial form"}


class TestSubmitTestimonial:
    def test_requires_approval_end_to_end(self, app, client, anon, project):
        """Pending status, total +1, approved unchanged, spam fields captured.

        The stored IP is the peer address; a client-sent X-Forwarded-For is ignored.
        """
        before = project_stats(client, project["id"])

        resp = anon.post(
            f"/api/submit/{project['shareId']}",
            json=SUBMISSION,
            headers={"X-Forwarded-For": "198.51.100.66", "User-Agent": "pytest-browser"},
            environ_base={"REMOTE_ADDR": "203.0.113.7"},
        )
        assert resp.status_code == 201
        body = resp.get_json()
        assert body["testimonial"]["status"] == "pending"
        assert body["message"] == "Thank you! Your testimonial has been submitted."

        after = project_stats(client, project["id"])
        assert after["totalSubmissions"] == before["totalSubmissions"] + 1
        assert after["approvedCount"] == before["approvedCount"]

        with app.app_context():
            stored = db.session.get(Testimonial, body["testimonial"]["id"])
            assert stored.email == "happy@example.com"
            assert stored.ip_address == "203.0.113.7"
            assert stored.user_agent == "pytest-browser"
            assert stored.project_id == project["id"]

    def test_auto_approve(self, client, anon, project):
        client.patch(f"/api/projects/{project['id']}", json={"formSettings": {"requireApproval": False}})
        resp = anon.post(f"/api/submit/{project['shareId']}", json=SUBMISSION)
        assert resp.get_json()["testimonial"]["status"] == "approved"
        assert project_stats(client, project["id"]) == {"totalSubmissions": 1, "approvedCount": 1, "rejectedCount": 0}

    def test_invalid_submission_writes_nothing(self, app, anon, project):
        resp = anon.post(f"/api/submit/{project['shareId']}", json=dict(SUBMISSION, rating=6, testimonial="too short"))
        assert resp.status_code == 400
        fields = {d["field"] for d in resp.get_json()["details"]}
        assert fields == {"rating", "testimonial"}
        with app.app_context():
            assert Testimonial.query.count() == 0

    def test_inactive_project(self, client, anon, project):
        client.patch(f"/api/projects/{project['id']}", json={"active": False})
        resp = anon.post(f"/api/submit/{project['shareId']}", json=SUBMISSION)
        assert resp.status_code == 404
        assert resp.get_json() == {"error": "Invalid or inactive testimonial form"}


class TestWidgetFeed:
    def test_only_approved_featured_first(self, client, anon, project, add_testimonial):
        add_testimonial(project["id"], status="approved", name="Older Approved")
        add_testimonial(project["id"], status="approved", name="Featured Fan", featured=True)
        add_testimonial(project["id"], status="approved", name="Newest Approved")
        add_testimonial(project["id"], status="pending", name="Still Pending")
        add_testimonial(project["id"], status="rejected", name="Was Rejected")

        body = anon.get(f"/api/widget/{project['shareId']}").get_json()
        names = [t["name"] for t in body["testimonials"]]
        assert names == ["Featured Fan", "Newest Approved", "Older Approved"]
        assert body["settings"] == project["widgetSettings"]
        assert all("email" not in t for t in body["testimonials"])

    def test_capped_by_max_testimonials(self, client, anon, project, add_testimonial):
        settings = dict(project["widgetSettings"], maxTestimonials=2)
        assert client.patch(f"/api/projects/{project['id']}", json={"widgetSettings": settings}).status_code == 200
        for i in range(4):
            add_testimonial(project["id"], status="approved", name=f"Customer {chr(65 + i)}")

        body = anon.get(f"/api/widget/{project['shareId']}").get_json()
        assert len(body["testimonials"]) == 2
