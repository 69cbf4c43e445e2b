"""Tests for authentication routes."""

from collections.abc import Callable

import pytest
from fastapi.testclient import TestClient
from tenantkit.adapters.store import InMemoryStore
from tenantkit.core.auth.password import PasswordHasher
from tenantkit.core.identity import CallerContext

Headers = Callable[[CallerContext], dict[str, str]]


@pytest.fixture(autouse=True)
def seeded(store: InMemoryStore, hasher: PasswordHasher, new_user, new_org) -> None:
    """One tenant with one admin whose password is known."""
    store.organizations.append(new_org("org_ACME", "Acme Corp"))
    store.users.append(
        new_user(
            "usr_ACME001",
            email="john.smith@acme.com",
            name="John Smith",
            user_type="org_admin",
            password_hash=hasher.hash_password("john_john"),
        )
    )


@pytest.fixture
def john() -> CallerContext:
    """Caller context matching the seeded admin."""
    return CallerContext(
        user_id="usr_ACME001",
        org_id="org_ACME",
        user_type="org_admin",
        role="org_admin",
        org_name="Acme Corp",
        email="john.smith@acme.com",
    )


class TestLogin:
    """Tests for the login endpoint."""

    def test_login_success(self, client: TestClient) -> None:
        """Valid credentials return a bearer token."""
        response = client.post(
            "/api/v1/auth/login",
            json={"email": "john.smith@acme.com", "password": "john_john"},
        )

        assert response.status_code == 200
        body = response.json()
        assert body["message"] == "Login successful"
        data = body["data"]
        assert data["tokenType"] == "Bearer"
        assert data["expiresIn"] == 3600
        assert data["user"]["orgId"] == "org_ACME"
        assert data["user"]["userType"] == "org_admin"

    def test_login_wrong_password(self, client: TestClient) -> None:
        """Bad credentials are 401 with the shared message."""
        response = client.post(
            "/api/v1/auth/login",
            json={"email": "john.smith@acme.com", "password": "nope"},
        )

        assert response.status_code == 401
        assert response.json()["message"] == "Invalid username or password"

    def test_login_missing_fields(self, client: TestClient) -> None:
        """Missing fields fail request validation."""
        response = client.post("/api/v1/auth/login", json={"email": "john.smith@acme.com"})

        assert response.status_code == 400
        assert response.json()["errorCode"] == "VALIDATION_ERROR"

    def test_token_from_login_authenticates(self, client: TestClient) -> None:
        """The issued token is accepted by protected routes."""
        token = client.post(
            "/api/v1/auth/login",
            json={"email": "john.smith@acme.com", "password": "john_john"},
        ).json()["data"]["token"]

        response = client.get("/api/v1/auth/me", headers={"Authorization": f"Bearer {token}"})

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["userId"] == "usr_ACME001"
        assert data["orgName"] == "Acme Corp"
        assert data["email"] == "john.smith@acme.com"


class TestMe:
    """Tests for the identity endpoint."""

    def test_invalid_token(self, client: TestClient) -> None:
        """Garbage tokens are 401."""
        response = client.get("/api/v1/auth/me", headers={"Authorization": "Bearer garbage"})

        assert response.status_code == 401
        assert response.json()["message"].startswith("Invalid token")


class TestChangePassword:
    """Tests for the change password endpoint."""

    def test_change_password(
        self, client: TestClient, auth_headers: Headers, john: CallerContext
    ) -> None:
        """After a change only the new password logs in."""
        response = client.post(
            "/api/v1/auth/change-password",
            json={
                "currentPassword": "john_john",
                "newPassword": "s3cret-pass",
                "confirmPassword": "s3cret-pass",
            },
            headers=auth_headers(john),
        )

        assert response.status_code == 200
        assert response.json()["message"] == "Password changed successfully"
        old = client.post(
            "/api/v1/auth/login",
            json={"email": "john.smith@acme.com", "password": "john_john"},
        )
        assert old.status_code == 401

    def test_confirmation_mismatch(
        self, client: TestClient, auth_headers: Headers, john: CallerContext
    ) -> None:
        """Mismatched confirmation fails validation."""
        response = client.post(
            "/api/v1/auth/change-password",
            json={
                "currentPassword": "john_john",
                "newPassword": "s3cret-pass",
                "confirmPassword": "other-pass",
            },
            headers=auth_headers(john),
        )

        assert response.status_code == 400

    def test_wrong_current_password(
        self, client: TestClient, auth_headers: Headers, john: CallerContext
    ) -> None:
        """The current password must verify."""
        response = client.post(
            "/api/v1/auth/change-password",
            json={
                "currentPassword": "wrong",
                "newPassword": "s3cret-pass",
                "confirmPassword": "s3cret-pass",
            },
            headers=auth_headers(john),
        )

        assert response.status_code == 401
        assert response.json()["message"] == "Current password is incorrect"
