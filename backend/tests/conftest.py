"""Shared fixtures for tenantkit tests."""

import pytest
from tenantkit.adapters.store.memory import (
    InMemoryOrganizationRepository,
    InMemoryStore,
    InMemoryUserRepository,
)
from tenantkit.config import PLATFORM_ORG_ID, JwtSettings, PasswordSettings
from tenantkit.core.auth.jwt import TokenService
from tenantkit.core.auth.password import PasswordHasher
from tenantkit.core.identity import CallerContext
from tenantkit.core.types import Organization, User


@pytest.fixture
def password_settings() -> PasswordSettings:
    """Password settings with a low iteration count to keep tests fast."""
    return PasswordSettings(secret_key="test-pepper", iterations=1000, salt_size=16, hash_size=32)


@pytest.fixture
def hasher(password_settings: PasswordSettings) -> PasswordHasher:
    """Create a password hasher."""
    return PasswordHasher(password_settings)


@pytest.fixture
def jwt_settings() -> JwtSettings:
    """JWT settings for tests."""
    return JwtSettings(
        secret_key="test-secret-key-with-enough-length-for-hs256",
        issuer="tenantkit-test",
        audience="tenantkit-test-api",
        expiration_minutes=60,
    )


@pytest.fixture
def token_service(jwt_settings: JwtSettings) -> TokenService:
    """Create a token service."""
    return TokenService(jwt_settings)


@pytest.fixture
def store() -> InMemoryStore:
    """Create an empty in-memory store."""
    return InMemoryStore()


@pytest.fixture
def user_repo(store: InMemoryStore) -> InMemoryUserRepository:
    """Create a user repository over the shared store."""
    return InMemoryUserRepository(store)


@pytest.fixture
def org_repo(store: InMemoryStore) -> InMemoryOrganizationRepository:
    """Create an organization repository over the shared store."""
    return InMemoryOrganizationRepository(store)


@pytest.fixture
def platform_admin() -> CallerContext:
    """Caller with no tenant scope."""
    return CallerContext(
        user_id="usr_PLATFORM01",
        org_id=PLATFORM_ORG_ID,
        user_type="platform_admin",
        role="platform_admin",
        org_name="Platform",
    )


@pytest.fixture
def acme_admin() -> CallerContext:
    """Organization admin of Acme."""
    return CallerContext(
        user_id="usr_ACME001",
        org_id="org_ACME",
        user_type="org_admin",
        role="org_admin",
        org_name="Acme Corp",
    )


@pytest.fixture
def globex_admin() -> CallerContext:
    """Organization admin of Globex."""
    return CallerContext(
        user_id="usr_GLOBEX01",
        org_id="org_GLOBEX",
        user_type="org_admin",
        role="org_admin",
        org_name="Globex",
    )


def make_user(
    user_id: str = "",
    org_id: str = "org_ACME",
    email: str = "jane.doe@acme.com",
    name: str = "Jane Doe",
    user_type: str = "org_user",
    status: str = "active",
    password_hash: str = "",
) -> User:
    """Build a user record for tests."""
    return User(
        id=user_id,
        org_id=org_id,
        org_name="Acme Corp" if org_id == "org_ACME" else "Other",
        user_type=user_type,
        role=user_type,
        status=status,
        name=name,
        email=email,
        password_hash=password_hash,
    )


def make_org(org_id: str = "", name: str = "Acme Corp", status: str = "active") -> Organization:
    """Build an organization record for tests."""
    return Organization(id=org_id, org_id=org_id, name=name, status=status)


@pytest.fixture
def new_user():  # type: ignore[no-untyped-def]
    """Factory for user records."""
    return make_user


@pytest.fixture
def new_org():  # type: ignore[no-untyped-def]
    """Factory for organization records."""
    return make_org
