"""
Tests for registration, login and bearer-token verification.
"""

from datetime import timedelta

import pytest

from budgetapp.errors import AuthError, ConflictError, NotFoundError, ValidationError
from budgetapp.users import service as user_service
from budgetapp.users.auth import create_access_token, verify_token
from budgetapp.users.models import Role, User


class TestRegister:
    """Tests for user registration."""

    def test_register_returns_token_and_user_role(self, db):
        """A new user gets role USER and a bearer token."""
        auth = user_service.register(db, "carol", "carol@example.com", "pw-1234")
        assert auth.access_token
        assert auth.token_type == "bearer"
        assert auth.role == Role.USER
        assert verify_token(db, auth.access_token).username == "carol"

    def test_password_is_stored_hashed(self, db, alice):
        user = db.query(User).filter(User.username == "alice").one()
        assert user.hashed_password != "alice-password"
        assert "alice-password" not in user.hashed_password

    def test_duplicate_username_conflicts(self, db, alice):
        with pytest.raises(ConflictError):
            user_service.register(db, "alice", "other@example.com", "pw")

    def test_duplicate_email_conflicts_with_different_username(self, db, alice):
        """Email uniqueness is checked on its own."""
        with pytest.raises(ConflictError):
            user_service.register(db, "alice2", "alice@example.com", "pw")

    def test_missing_fields_rejected(self, db):
        with pytest.raises(ValidationError):
            user_service.register(db, "  ", "x@example.com", "pw")


class TestLogin:
    """Tests for login."""

    def test_login_success_issues_token(self, db, alice):
        auth = user_service.login(db, "alice", "alice-password")
        assert verify_token(db, auth.access_token).id == alice.id

    def test_wrong_password_and_unknown_user_look_the_same(self, db, alice):
        """The error must not reveal whether the username exists."""
        with pytest.raises(AuthError) as wrong_password:
            user_service.login(db, "alice", "not-the-password")
        with pytest.raises(AuthError) as unknown_user:
            user_service.login(db, "nobody", "alice-password")

        assert wrong_password.value.message == unknown_user.value.message
        assert wrong_password.value.status_code == unknown_user.value.status_code == 401


class TestVerifyToken:
    """Tests for bearer-token verification."""

    def test_expired_token_rejected(self, db, alice):
        token = create_access_token({"sub": "alice"}, expires_delta=timedelta(seconds=-5))
        with pytest.raises(AuthError):
            verify_token(db, token)

    def test_malformed_token_rejected(self, db):
        with pytest.raises(AuthError):
            verify_token(db, "not-a-jwt")

    def test_missing_token_rejected(self, db):
        with pytest.raises(AuthError):
            verify_token(db, None)

    def test_token_without_subject_rejected(self, db):
        token = create_access_token({"role": "USER"})
        with pytest.raises(AuthError):
            verify_token(db, token)

    def test_token_for_removed_user_rejected(self, db, alice):
        db.query(User).filter(User.id == alice.id).delete()
        db.commit()
        with pytest.raises(AuthError):
            verify_token(db, alice.access_token)


class TestCurrentUser:
    def test_current_user_has_no_secret(self, db, alice):
        user = user_service.current_user(db, alice.id)
        assert user.username == "alice"
        assert user.email == "alice@example.com"
        assert "hashed_password" not in user.model_dump()

    def test_unknown_identity_not_found(self, db):
        with pytest.raises(NotFoundError):
            user_service.current_user(db, 9999)


class TestAuthEndpoints:
    """Tests for the /auth routes."""

    def test_register_login_and_me(self, client):
        response = client.post(
            "/auth/register",
            json={"username": "dave", "email": "dave@example.com", "password": "pw-dave"},
        )
        assert response.status_code == 200

        response = client.post("/auth/login", json={"username": "dave", "password": "pw-dave"})
        assert response.status_code == 200
        token = response.json()["access_token"]

        response = client.get("/auth/me", headers={"Authorization": f"Bearer {token}"})
        assert response.status_code == 200
        body = response.json()
        assert body["username"] == "dave"
        assert body["email"] == "dave@example.com"
        assert body["role"] == "USER"
        assert set(body) == {"id", "username", "email", "role"}

    def test_duplicate_email_returns_400_with_message(self, client, make_user):
        make_user("erin")
        response = client.post(
            "/auth/register",
            json={"username": "someone-else", "email": "erin@example.com", "password": "pw"},
        )
        assert response.status_code == 400
        assert response.json() == {"message": "Email already exists"}

    def test_bad_login_returns_401(self, client, make_user):
        make_user("frank")
        response = client.post("/auth/login", json={"username": "frank", "password": "wrong"})
        assert response.status_code == 401
        assert response.json() == {"message": "Invalid username or password"}

    def test_me_without_token_returns_401(self, client):
        response = client.get("/auth/me")
        assert response.status_code == 401
        assert "message" in response.json()

    def test_me_with_garbage_token_returns_401(self, client):
        response = client.get("/auth/me", headers={"Authorization": "Bearer garbage"})
        assert response.status_code == 401

    def test_missing_body_field_returns_400(self, client):
        response = client.post("/auth/login", json={"username": "x"})
        assert response.status_code == 400
        assert "message" in response.json()
