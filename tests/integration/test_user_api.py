"""Profile, password, notification settings and account deletion."""

from testimonialhub.models import Project, Testimonial, User

OTHER_USER_EMAIL = "mallory@example.com"
TEST_USER_EMAIL = "jane@example.com"
TEST_USER_PASSWORD = "secret123"


class TestProfile:
    def test_get(self, client, owner):
        user = client.get("/api/user/profile").get_json()["user"]
        assert user["id"] == owner
        assert user["email"] == TEST_USER_EMAIL
        assert "password" not in user

    def test_update(self, client, owner):
        resp = client.patch("/api/user/profile", json={"name": "Jane Q Public", "email": "Jane.Q@Example.com"})
        assert resp.status_code == 200
        user = resp.get_json()["user"]
        assert user["name"] == "Jane Q Public"
        assert user["email"] == "jane.q@example.com"

    def test_name_and_email_required(self, client, owner):
        resp = client.patch("/api/user/profile", json={"name": "  "})
        assert resp.status_code == 400
        messages = {d["message"] for d in resp.get_json()["details"]}
        assert "Name and email are required" in messages

    def test_email_taken(self, client, owner, make_user):
        make_user(name="Mallory Smith", email=OTHER_USER_EMAIL)
        resp = client.patch("/api/user/profile", json={"name": "Jane Doe", "email": OTHER_USER_EMAIL})
        assert resp.status_code == 409
        assert resp.get_json() == {"error": "Email already in use"}

    def test_keeping_own_email(self, client, owner):
        resp = client.patch("/api/user/profile", json={"name": "Jane Renamed", "email": TEST_USER_EMAIL})
        assert resp.status_code == 200


class TestPassword:
    def test_change(self, client, owner, login):
        resp = client.patch(
            "/api/user/password",
            json={"currentPassword": TEST_USER_PASSWORD, "newPassword": "brand-new-pass"},
        )
        assert resp.status_code == 200
        client.post("/api/auth/signout")
        login(password="brand-new-pass")

    def test_wrong_current(self, client, owner):
        resp = client.patch("/api/user/password", json={"currentPassword": "nope-nope", "newPassword": "brand-new"})
        assert resp.status_code == 400
        assert resp.get_json()["details"] == [
            {"field": "currentPassword", "message": "Current password is incorrect"}
        ]

    def test_short_new_password(self, client, owner):
        resp = client.patch("/api/user/password", json={"currentPassword": TEST_USER_PASSWORD, "newPassword": "123"})
        assert resp.status_code == 400
        assert resp.get_json()["details"] == [
            {"field": "newPassword", "message": "New password must be at least 6 characters"}
        ]


class TestNotifications:
    def test_defaults_then_replace(self, client, owner):
        settings = client.get("/api/user/notifications").get_json()["settings"]
        assert settings["emailOnNewTestimonial"] is True
        assert settings["emailOnApproval"] is False

        resp = client.patch(
            "/api/user/notifications",
            json={"emailOnNewTestimonial": False, "emailOnApproval": True, "emailWeeklyReport": True},
        )
        assert resp.get_json()["settings"] == {
            "emailOnNewTestimonial": False,
            "emailOnApproval": True,
            "emailWeeklyReport": True,
            "emailMonthlyReport": False,
        }
        assert client.get("/api/user/notifications").get_json()["settings"]["emailOnApproval"] is True

    def test_non_boolean(self, client, owner):
        resp = client.patch("/api/user/notifications", json={"emailOnApproval": "sometimes"})
        assert resp.status_code == 400


class TestDeleteAccount:
    def test_cascades_and_signs_out(self, app, client, project, add_testimonial):
        add_testimonial(project["id"])
        resp = client.delete("/api/user/account")
        assert resp.status_code == 200
        assert client.get("/api/auth/session").status_code == 401

        with app.app_context():
            assert User.query.count() == 0
            assert Project.query.count() == 0
            assert Testimonial.query.count() == 0
