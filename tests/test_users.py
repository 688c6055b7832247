"""
Tests for the user directory: registration, partial updates and deactivation.
"""
import pydantic
import pytest

from task_management.core.exceptions import AuthorizationError, ConflictError, NotFoundError
from task_management.schemas.user import UserCreate, UserUpdate
from task_management.utils.security import verify_password

from .conftest import API, PASSWORD


class TestRegister:

    def test_password_is_hashed(self, make_user):
        """The stored credential never equals the submitted plaintext."""
        user = make_user(password="plaintext-password")

        assert user.hashed_password != "plaintext-password"
        assert verify_password("plaintext-password", user.hashed_password)
        assert not verify_password("other-password", user.hashed_password)

    def test_defaults_applied(self, make_user):
        user = make_user()

        assert user.role == "user"
        assert user.is_active is True
        assert user.avatar is None
        assert user.last_login is None
        assert user.created_at is not None

    def test_duplicate_email_conflicts(self, make_user):
        make_user(email="dup@example.com")

        with pytest.raises(ConflictError):
            make_user(email="dup@example.com")

    def test_duplicate_email_is_case_insensitive(self, make_user):
        make_user(email="case@example.com")

        with pytest.raises(ConflictError):
            make_user(email="Case@Example.com")

    @pytest.mark.parametrize("field,value", [
        ("email", "not-an-email"),
        ("password", "12345"),
        ("role", "superuser"),
    ])
    def test_invalid_input_rejected(self, field, value):
        data = {
            "email": "valid@example.com",
            "password": PASSWORD,
            "firstName": "Ada",
            "lastName": "Lovelace",
        }
        data[field] = value

        with pytest.raises(pydantic.ValidationError):
            UserCreate.model_validate(data)

    def test_register_endpoint(self, client):
        response = client.post(f"{API}/auth/register", json={
            "email": "ada@example.com",
            "password": PASSWORD,
            "firstName": "Ada",
            "lastName": "Lovelace",
        })

        assert response.status_code == 201
        body = response.json()
        assert body["email"] == "ada@example.com"
        assert body["firstName"] == "Ada"
        assert body["role"] == "user"
        assert "password" not in body
        assert "hashedPassword" not in body

    def test_long_password_registers_and_logs_in(self, client):
        password = "correct-horse-battery-staple-" * 3

        registered = client.post(f"{API}/auth/register", json={
            "email": "long@example.com",
            "password": password,
            "firstName": "Long",
            "lastName": "Passphrase",
        })
        login = client.post(f"{API}/auth/login", json={"email": "long@example.com", "password": password})

        assert len(password) > 72
        assert registered.status_code == 201
        assert login.status_code == 200
        assert login.json()["access_token"]

    def test_first_admin_can_self_register(self, client):
        response = client.post(f"{API}/auth/register", json={
            "email": "root@example.com",
            "password": PASSWORD,
            "firstName": "Root",
            "lastName": "Admin",
            "role": "admin",
        })

        assert response.status_code == 201
        assert response.json()["role"] == "admin"

    def test_admin_registration_needs_admin_once_one_exists(self, client, make_user, auth_headers):
        admin, user = make_user(role="admin"), make_user()
        payload = {
            "email": "second-admin@example.com",
            "password": PASSWORD,
            "firstName": "Second",
            "lastName": "Admin",
            "role": "admin",
        }

        anonymous = client.post(f"{API}/auth/register", json=payload)
        by_user = client.post(f"{API}/auth/register", json=payload, headers=auth_headers(user))
        by_admin = client.post(f"{API}/auth/register", json=payload, headers=auth_headers(admin))

        assert anonymous.status_code == 403
        assert anonymous.json()["error"]["type"] == "authorization_error"
        assert by_user.status_code == 403
        assert by_admin.status_code == 201

    def test_register_endpoint_conflict(self, client, make_user):
        user = make_user()

        response = client.post(f"{API}/auth/register", json={
            "email": user.email,
            "password": PASSWORD,
            "firstName": "Again",
            "lastName": "Again",
        })

        assert response.status_code == 409
        assert response.json()["error"]["type"] == "conflict"

    def test_register_endpoint_reports_field_errors(self, client):
        response = client.post(f"{API}/auth/register", json={
            "email": "bad",
            "password": "123",
            "firstName": "Ada",
        })

        assert response.status_code == 422
        error = response.json()["error"]
        assert error["type"] == "validation_error"
        fields = {item["field"] for item in error["errors"]}
        assert {"email", "password", "lastName"} <= fields


class TestUpdate:

    def test_unknown_fields_are_ignored(self, make_user, user_service):
        user = make_user()
        update = UserUpdate.model_validate({"firstName": "Grace", "favouriteColour": "blue"})

        updated = user_service.update(user, user.id, update)

        assert updated.first_name == "Grace"
        assert not hasattr(updated, "favouriteColour")
        assert "favouriteColour" not in update.model_dump()

    def test_invalid_role_rejected(self):
        with pytest.raises(pydantic.ValidationError):
            UserUpdate.model_validate({"role": "owner"})

    def test_is_active_must_be_boolean(self):
        with pytest.raises(pydantic.ValidationError):
            UserUpdate.model_validate({"isActive": "yes"})

    def test_required_name_cannot_be_nulled(self):
        with pytest.raises(pydantic.ValidationError):
            UserUpdate.model_validate({"firstName": None})

    def test_other_user_cannot_update(self, make_user, user_service):
        user, other = make_user(), make_user()

        with pytest.raises(AuthorizationError):
            user_service.update(other, user.id, UserUpdate(first_name="Mallory"))

    def test_admin_can_update_anyone(self, make_user, user_service):
        user, admin = make_user(), make_user(role="admin")

        updated = user_service.update(admin, user.id, UserUpdate(role="admin", avatar="a.png"))

        assert updated.role == "admin"
        assert updated.avatar == "a.png"

    def test_user_cannot_promote_self(self, make_user, user_service):
        user = make_user()

        with pytest.raises(AuthorizationError):
            user_service.update(user, user.id, UserUpdate(role="admin"))

    def test_update_missing_user(self, make_user, user_service):
        admin = make_user(role="admin")

        with pytest.raises(NotFoundError):
            user_service.update(admin, 9999, UserUpdate(first_name="Nobody"))

    def test_patch_endpoint_with_bad_enum(self, client, make_user, auth_headers):
        user = make_user()

        response = client.patch(
            f"{API}/users/{user.id}",
            json={"role": "root"},
            headers=auth_headers(user),
        )

        assert response.status_code == 422
        assert response.json()["error"]["errors"][0]["field"] == "role"

    def test_patch_endpoint_ignores_unknown_fields(self, client, make_user, auth_headers):
        user = make_user()

        response = client.patch(
            f"{API}/users/{user.id}",
            json={"lastName": "Hopper", "email": "changed@example.com"},
            headers=auth_headers(user),
        )

        assert response.status_code == 200
        assert response.json()["lastName"] == "Hopper"
        assert response.json()["email"] == user.email


class TestDeactivate:

    def test_self_deactivation(self, make_user, user_service):
        user = make_user()

        user_service.deactivate(user, user.id)

        assert user.is_active is False

    def test_other_user_cannot_deactivate(self, make_user, user_service):
        user, other = make_user(), make_user()

        with pytest.raises(AuthorizationError):
            user_service.deactivate(other, user.id)

    def test_deactivated_token_rejected(self, client, make_user, auth_headers):
        user = make_user()
        headers = auth_headers(user)

        assert client.delete(f"{API}/users/{user.id}", headers=headers).status_code == 200
        response = client.get(f"{API}/auth/me", headers=headers)

        assert response.status_code == 401
