"""Organization management routes, restricted to platform admins."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request, status

from tenantkit.core.organizations.service import OrganizationService
from tenantkit.core.organizations.types import OrganizationCreate, OrganizationUpdate
from tenantkit.entrypoints.api.deps import get_organization_service
from tenantkit.entrypoints.api.middleware.jwt_auth import RequirePlatformAdmin
from tenantkit.entrypoints.api.responses import (
    ApiResponse,
    OrganizationResponse,
    PageResponse,
    ok,
)

router = APIRouter(prefix="/organizations", tags=["organizations"])

OrganizationServiceDep = Annotated[OrganizationService, Depends(get_organization_service)]


@router.get("", response_model=ApiResponse[PageResponse[OrganizationResponse]])
async def list_organizations(
    request: Request,
    caller: RequirePlatformAdmin,
    service: OrganizationServiceDep,
    page: Annotated[int, Query()] = 1,
    page_size: Annotated[int, Query(alias="pageSize")] = 20,
) -> ApiResponse[PageResponse[OrganizationResponse]]:
    """List organizations, newest first."""
    result = await service.list_organizations(caller, page=page, page_size=page_size)
    items = [OrganizationResponse.from_organization(o) for o in result.items]
    return ok(request, PageResponse.build(items, result))


@router.get("/{org_id}", response_model=ApiResponse[OrganizationResponse])
async def get_organization(
    request: Request,
    org_id: str,
    caller: RequirePlatformAdmin,
    service: OrganizationServiceDep,
) -> ApiResponse[OrganizationResponse]:
    """Get a single organization."""
    organization = await service.get_organization(caller, org_id)
    return ok(request, OrganizationResponse.from_organization(organization))


@router.post(
    "",
    response_model=ApiResponse[OrganizationResponse],
    status_code=status.HTTP_201_CREATED,
)
async def create_organization(
    request: Request,
    body: OrganizationCreate,
    caller: RequirePlatformAdmin,
    service: OrganizationServiceDep,
) -> ApiResponse[OrganizationResponse]:
    """Create an organization."""
    organization = await service.create_organization(caller, body)
    return ok(
        request,
        OrganizationResponse.from_organization(organization),
        message="Organization created successfully",
    )


@router.put("/{org_id}", response_model=ApiResponse[OrganizationResponse])
async def update_organization(
    request: Request,
    org_id: str,
    body: OrganizationUpdate,
    caller: RequirePlatformAdmin,
    service: OrganizationServiceDep,
) -> ApiResponse[OrganizationResponse]:
    """Update an organization."""
    organization = await service.update_organization(caller, org_id, body)
    return ok(
        request,
        OrganizationResponse.from_organization(organization),
        message="Organization updated successfully",
    )


@router.delete("/{org_id}", response_model=ApiResponse[None])
async def delete_organization(
    request: Request,
    org_id: str,
    caller: RequirePlatformAdmin,
    service: OrganizationServiceDep,
) -> ApiResponse[None]:
    """Soft delete an organization."""
    await service.delete_organization(caller, org_id)
    return ok(request, None, message="Organization deleted successfully")
