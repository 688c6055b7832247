"""
Shared fixtures: an in-memory application, a session on the same database,
service instances and helpers to create users and log them in.
"""
import itertools

import pytest
from fastapi.testclient import TestClient

from task_management.core.config import Settings
from task_management.core.database import Base
from task_management.main import create_app
from task_management.schemas.project import ProjectCreate
from task_management.schemas.user import UserCreate
from task_management.services import (
    CommentService, NotificationService, ProjectService, TaskService, UserService,
)

API = "/api/v1"
PASSWORD = "secret123"


@pytest.fixture
def settings():
    return Settings(
        database_url="sqlite://",
        secret_key="test-secret-key",
        access_token_expire_minutes=60,
        comment_edit_grace_minutes=15,
    )


@pytest.fixture
def app(settings):
    application = create_app(settings)
    Base.metadata.create_all(bind=application.state.engine)
    yield application
    Base.metadata.drop_all(bind=application.state.engine)
    application.state.engine.dispose()


@pytest.fixture
def client(app):
    return TestClient(app)


@pytest.fixture
def db(app):
    session = app.state.session_factory()
    yield session
    session.close()


@pytest.fixture
def policy(app):
    return app.state.policy


@pytest.fixture
def user_service(db, policy):
    return UserService(db, policy)


@pytest.fixture
def project_service(db, policy):
    return ProjectService(db, policy)


@pytest.fixture
def notification_service(db, policy):
    return NotificationService(db, policy)


@pytest.fixture
def task_service(db, policy, notification_service):
    return TaskService(db, policy, notification_service)


@pytest.fixture
def comment_service(db, policy, notification_service):
    return CommentService(db, policy, notification_service)


@pytest.fixture
def make_user(user_service):
    counter = itertools.count(1)

    def _make_user(role="user", password=PASSWORD, **fields):
        n = next(counter)
        data = {
            "email": f"user{n}@example.com",
            "password": password,
            "first_name": f"User{n}",
            "last_name": "Tester",
            "role": role,
        }
        data.update(fields)
        return user_service.register(UserCreate(**data))

    return _make_user


@pytest.fixture
def make_project(project_service):
    def _make_project(owner, members=(), name="Apollo"):
        project_in = ProjectCreate(name=name, member_ids=[member.id for member in members])
        return project_service.create(owner, project_in)

    return _make_project


@pytest.fixture
def auth_headers(client):
    def _auth_headers(user, password=PASSWORD):
        response = client.post(f"{API}/auth/login", json={"email": user.email, "password": password})
        assert response.status_code == 200, response.text
        return {"Authorization": f"Bearer {response.json()['access_token']}"}

    return _auth_headers
