"""API route modules."""

from fastapi import APIRouter

from tenantkit.entrypoints.api.routes.auth import router as auth_router
from tenantkit.entrypoints.api.routes.organizations import router as organizations_router
from tenantkit.entrypoints.api.routes.search import router as search_router
from tenantkit.entrypoints.api.routes.users import router as users_router

# Create main API router
api_router = APIRouter()

api_router.include_router(auth_router)
api_router.include_router(users_router)
api_router.include_router(organizations_router)
api_router.include_router(search_router)

__all__ = ["api_router"]
