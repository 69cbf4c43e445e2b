"""Dependency injection and application lifespan management."""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import AsyncExitStack, asynccontextmanager
from typing import TYPE_CHECKING

import structlog
from fastapi import Request

from tenantkit.adapters.search.azure import AzureSearchRepository
from tenantkit.adapters.search.memory import InMemorySearchRepository
from tenantkit.adapters.store.memory import (
    InMemoryOrganizationRepository,
    InMemoryStore,
    InMemoryUserRepository,
)
from tenantkit.adapters.store.mongo import (
    MongoOrganizationRepository,
    MongoStore,
    MongoUserRepository,
)
from tenantkit.config import Settings
from tenantkit.core.auth.jwt import TokenService
from tenantkit.core.auth.password import PasswordHasher
from tenantkit.core.auth.service import AuthService
from tenantkit.core.organizations.service import OrganizationService
from tenantkit.core.repositories import OrganizationRepository, UserRepository
from tenantkit.core.search.interfaces import SearchRepository
from tenantkit.core.search.service import SearchService
from tenantkit.core.users.service import UserService
from tenantkit.demo.catalog import build_catalog
from tenantkit.demo.seed import seed_store

if TYPE_CHECKING:
    from fastapi import FastAPI

logger = structlog.get_logger()


async def open_repositories(
    settings: Settings,
    stack: AsyncExitStack,
    hasher: PasswordHasher,
) -> tuple[UserRepository, OrganizationRepository]:
    """Pick the entity store by configuration presence.

    MongoDB when a URI and database are configured, otherwise a
    process-owned in-memory store, seeded in demo mode.
    """
    if settings.mongo.is_configured:
        mongo = MongoStore(settings.mongo)
        await mongo.connect()
        stack.push_async_callback(mongo.close)
        logger.info("entity_store_selected", backend="mongodb")
        return MongoUserRepository(mongo.users), MongoOrganizationRepository(mongo.organizations)

    store = InMemoryStore()
    if settings.demo_mode:
        seed_store(store, hasher)
    logger.info("entity_store_selected", backend="memory", demo=settings.demo_mode)
    return InMemoryUserRepository(store), InMemoryOrganizationRepository(store)


def open_search(settings: Settings, stack: AsyncExitStack) -> SearchRepository:
    """Pick the search backend by configuration presence."""
    if settings.search.is_configured:
        repository = AzureSearchRepository(settings.search)
        stack.push_async_callback(repository.close)
        logger.info(
            "search_backend_selected",
            backend="azure",
            index=settings.search.index_name,
            vector=settings.search.vector_search_enabled,
        )
        return repository

    logger.info("search_backend_selected", backend="memory")
    return InMemorySearchRepository(build_catalog() if settings.demo_mode else [])


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan - build services on startup, release clients on shutdown."""
    settings: Settings = app.state.settings

    async with AsyncExitStack() as stack:
        hasher = PasswordHasher(settings.password)
        tokens = TokenService(settings.jwt)
        users, organizations = await open_repositories(settings, stack, hasher)
        search = open_search(settings, stack)

        app.state.token_service = tokens
        app.state.auth_service = AuthService(users, organizations, hasher, tokens)
        app.state.user_service = UserService(users, organizations, hasher)
        app.state.organization_service = OrganizationService(organizations)
        app.state.search_service = SearchService(search)

        logger.info("application_started", env=settings.app_env)
        yield

    logger.info("application_stopped")


def get_settings(request: Request) -> Settings:
    """Get the application settings from app state."""
    settings: Settings = request.app.state.settings
    return settings


def get_token_service(request: Request) -> TokenService:
    """Get the token service from app state."""
    service: TokenService = request.app.state.token_service
    return service


def get_auth_service(request: Request) -> AuthService:
    """Get the auth service from app state."""
    service: AuthService = request.app.state.auth_service
    return service


def get_user_service(request: Request) -> UserService:
    """Get the user service from app state."""
    service: UserService = request.app.state.user_service
    return service


def get_organization_service(request: Request) -> OrganizationService:
    """Get the organization service from app state."""
    service: OrganizationService = request.app.state.organization_service
    return service


def get_search_service(request: Request) -> SearchService:
    """Get the search service from app state."""
    service: SearchService = request.app.state.search_service
    return service
