"""Fixtures for API tests.

The app is built without running its lifespan; services are wired to an
in-memory store through dependency overrides and callers authenticate
with real tokens from the test token service.
"""

from collections.abc import Callable

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from tenantkit.adapters.search import InMemorySearchRepository
from tenantkit.adapters.store import (
    InMemoryOrganizationRepository,
    InMemoryStore,
    InMemoryUserRepository,
)
from tenantkit.config import Settings
from tenantkit.core.auth.jwt import TokenService
from tenantkit.core.auth.password import PasswordHasher
from tenantkit.core.auth.service import AuthService
from tenantkit.core.identity import CallerContext
from tenantkit.core.organizations import OrganizationService
from tenantkit.core.search import SearchService
from tenantkit.core.users import UserService
from tenantkit.demo.catalog import build_catalog
from tenantkit.entrypoints.api.app import create_app
from tenantkit.entrypoints.api.deps import (
    get_auth_service,
    get_organization_service,
    get_search_service,
    get_token_service,
    get_user_service,
)


@pytest.fixture
def app(
    store: InMemoryStore,
    user_repo: InMemoryUserRepository,
    org_repo: InMemoryOrganizationRepository,
    hasher: PasswordHasher,
    token_service: TokenService,
) -> FastAPI:
    """Create test app over the shared in-memory store."""
    app = create_app(Settings())
    auth_service = AuthService(user_repo, org_repo, hasher, token_service)
    user_service = UserService(user_repo, org_repo, hasher)
    organization_service = OrganizationService(org_repo)
    search_service = SearchService(InMemorySearchRepository(build_catalog()))

    app.dependency_overrides[get_token_service] = lambda: token_service
    app.dependency_overrides[get_auth_service] = lambda: auth_service
    app.dependency_overrides[get_user_service] = lambda: user_service
    app.dependency_overrides[get_organization_service] = lambda: organization_service
    app.dependency_overrides[get_search_service] = lambda: search_service
    return app


@pytest.fixture
def client(app: FastAPI) -> TestClient:
    """Create test client."""
    return TestClient(app)


@pytest.fixture
def auth_headers(token_service: TokenService) -> Callable[[CallerContext], dict[str, str]]:
    """Build bearer headers for a caller."""

    def build(caller: CallerContext) -> dict[str, str]:
        issued = token_service.create_token(
            user_id=caller.user_id,
            email=caller.email or f"{caller.user_id}@example.com",
            role=caller.role,
            org_id=caller.org_id,
            org_name=caller.org_name,
            user_type=caller.user_type,
        )
        return {"Authorization": f"Bearer {issued.token}"}

    return build
