"""
Tests for the auth gateway: login, token validation and the bearer dependency.
"""
import pytest
from freezegun import freeze_time

from task_management.core.exceptions import AuthenticationError
from task_management.services.auth import AuthService
from task_management.utils.security import create_access_token

from .conftest import API, PASSWORD


@pytest.fixture
def auth_service(db, settings):
    return AuthService(db, settings)


class TestLogin:

    def test_login_issues_token_and_records_last_login(self, make_user, auth_service):
        user = make_user()

        token, logged_in = auth_service.login(user.email, PASSWORD)

        assert token
        assert logged_in.id == user.id
        assert logged_in.last_login is not None
        assert auth_service.authenticate(token).id == user.id

    def test_wrong_password_does_not_touch_last_login(self, make_user, auth_service, db):
        user = make_user()

        with pytest.raises(AuthenticationError):
            auth_service.login(user.email, "wrong-password")

        db.refresh(user)
        assert user.last_login is None

    def test_unknown_email(self, auth_service):
        with pytest.raises(AuthenticationError):
            auth_service.login("ghost@example.com", PASSWORD)

    def test_inactive_account_rejected(self, make_user, auth_service, db):
        user = make_user()
        user.is_active = False
        db.commit()

        with pytest.raises(AuthenticationError):
            auth_service.login(user.email, PASSWORD)

        db.refresh(user)
        assert user.last_login is None

    def test_email_lookup_ignores_case(self, make_user, auth_service):
        user = make_user(email="mixed@example.com")

        token, _ = auth_service.login("MIXED@example.com", PASSWORD)

        assert auth_service.authenticate(token).id == user.id


class TestTokens:

    def test_expired_token_rejected(self, make_user, auth_service):
        user = make_user()

        with freeze_time("2026-03-01 09:00:00") as frozen:
            token, _ = auth_service.login(user.email, PASSWORD)
            assert auth_service.authenticate(token).id == user.id

            frozen.move_to("2026-03-01 10:01:00")
            with pytest.raises(AuthenticationError):
                auth_service.authenticate(token)

    def test_token_signed_with_other_key_rejected(self, make_user, auth_service):
        user = make_user()
        forged = create_access_token({"sub": str(user.id)}, "some-other-key")

        with pytest.raises(AuthenticationError):
            auth_service.authenticate(forged)

    def test_token_for_missing_user_rejected(self, auth_service, settings):
        token = create_access_token({"sub": "4242"}, settings.secret_key)

        with pytest.raises(AuthenticationError):
            auth_service.authenticate(token)

    def test_token_without_subject_rejected(self, auth_service, settings):
        token = create_access_token({"role": "admin"}, settings.secret_key)

        with pytest.raises(AuthenticationError):
            auth_service.authenticate(token)


class TestEndpoints:

    def test_login_endpoint(self, client, make_user):
        user = make_user()

        response = client.post(f"{API}/auth/login", json={"email": user.email, "password": PASSWORD})

        assert response.status_code == 200
        body = response.json()
        assert body["token_type"] == "bearer"
        assert body["expires_in"] == 3600

    def test_login_endpoint_wrong_password(self, client, make_user):
        user = make_user()

        response = client.post(f"{API}/auth/login", json={"email": user.email, "password": "nope-nope"})

        assert response.status_code == 401
        assert response.headers["WWW-Authenticate"] == "Bearer"
        assert response.json()["error"]["type"] == "authentication_error"

    def test_me(self, client, make_user, auth_headers):
        user = make_user()

        response = client.get(f"{API}/auth/me", headers=auth_headers(user))

        assert response.status_code == 200
        assert response.json()["id"] == user.id
        assert response.json()["lastLogin"] is not None

    def test_missing_token(self, client):
        response = client.get(f"{API}/projects")

        assert response.status_code == 401

    def test_garbage_token(self, client):
        response = client.get(f"{API}/projects", headers={"Authorization": "Bearer not-a-jwt"})

        assert response.status_code == 401
