"""Shared pytest fixtures.

Each test gets a fresh app built from TestConfig with its own in-memory
SQLite database. Requests made through ``client`` run in their own app
context, so fixtures that touch the database open a short one themselves
and hand back plain ids or JSON rather than live ORM objects.
"""

import pytest

from testimonialhub import create_app
from testimonialhub.config import TestConfig
from testimonialhub.extensions import db
from testimonialhub.models import Project, Testimonial, User

TEST_USER_NAME = "Jane Doe"
TEST_USER_EMAIL = "jane@example.com"
TEST_USER_PASSWORD = "secret123"

OTHER_USER_EMAIL = "mallory@example.com"

PROJECT_NAME = "My Awesome Product Launch Testimonials"


@pytest.fixture
def app():
    """Application with tables created, dropped again after the test."""
    app = create_app(TestConfig)
    with app.app_context():
        db.create_all()
    yield app
    with app.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture
def ctx(app):
    """An active app context for tests that use models and services directly."""
    with app.app_context():
        yield app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def make_user(app):
    """Factory that stores a user and returns its id."""

    def _make(name=TEST_USER_NAME, email=TEST_USER_EMAIL, password=TEST_USER_PASSWORD, **extra):
        with app.app_context():
            user = User(name=name, email=email, password=password, **extra)
            db.session.add(user)
            db.session.commit()
            return user.id

    return _make


@pytest.fixture
def login(client):
    """Sign in through the API so the test client carries the session cookie."""

    def _login(email=TEST_USER_EMAIL, password=TEST_USER_PASSWORD):
        resp = client.post("/api/auth/signin", json={"email": email, "password": password})
        assert resp.status_code == 200, resp.get_json()
        return resp

    return _login


@pytest.fixture
def owner(make_user, login):
    """Id of a signed-in user."""
    user_id = make_user()
    login()
    return user_id


@pytest.fixture
def project(client, owner):
    """JSON of a project created by the signed-in owner."""
    resp = client.post(
        "/api/projects",
        json={"name": PROJECT_NAME, "description": "Collected after launch", "website": "https://acme.io"},
    )
    assert resp.status_code == 201, resp.get_json()
    return resp.get_json()["project"]


@pytest.fixture
def add_testimonial(app):
    """Factory that stores a testimonial for a project id and returns its id."""

    def _add(project_id, status="pending", featured=False, name="Happy Customer", rating=5, **extra):
        with app.app_context():
            project = db.session.get(Project, project_id)
            testimonial = Testimonial(
                user_id=project.user_id,
                project_id=project.id,
                name=name,
                email="customer@example.com",
                rating=rating,
                testimonial=extra.pop("testimonial", "Great product, would recommend it."),
                status=status,
                featured=featured,
                **extra,
            )
            db.session.add(testimonial)
            db.session.commit()
            return testimonial.id

    return _add
