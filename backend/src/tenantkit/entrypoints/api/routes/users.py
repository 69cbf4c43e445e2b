"""User management routes for platform and organization admins."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request, status
from pydantic import EmailStr, Field

from tenantkit.core.types import DocumentModel
from tenantkit.core.users.service import UserService
from tenantkit.core.users.types import UserCreate, UserUpdate
from tenantkit.entrypoints.api.deps import get_user_service
from tenantkit.entrypoints.api.middleware.jwt_auth import RequireAdmin
from tenantkit.entrypoints.api.responses import ApiResponse, PageResponse, UserResponse, ok

router = APIRouter(prefix="/users", tags=["users"])

UserServiceDep = Annotated[UserService, Depends(get_user_service)]


class CreateUserRequest(DocumentModel):
    """Request to create a user. The initial password is derived server-side."""

    name: str = Field(..., min_length=1, max_length=200)
    email: EmailStr
    user_type: str
    role: str | None = Field(None, max_length=50)


class UpdateUserRequest(DocumentModel):
    """Request to update a user. Omitted fields are unchanged."""

    name: str | None = Field(None, min_length=1, max_length=200)
    email: EmailStr | None = None
    status: str | None = None
    user_type: str | None = None
    role: str | None = Field(None, max_length=50)


@router.get("", response_model=ApiResponse[PageResponse[UserResponse]])
async def list_users(
    request: Request,
    caller: RequireAdmin,
    user_service: UserServiceDep,
    org_id: Annotated[str | None, Query(alias="orgId")] = None,
    page: Annotated[int, Query()] = 1,
    page_size: Annotated[int, Query(alias="pageSize")] = 20,
) -> ApiResponse[PageResponse[UserResponse]]:
    """List users. Page size is clamped to [1, 100]."""
    result = await user_service.list_users(caller, page=page, page_size=page_size, org_id=org_id)
    items = [UserResponse.from_user(u) for u in result.items]
    return ok(request, PageResponse.build(items, result))


@router.get("/{user_id}", response_model=ApiResponse[UserResponse])
async def get_user(
    request: Request,
    user_id: str,
    caller: RequireAdmin,
    user_service: UserServiceDep,
) -> ApiResponse[UserResponse]:
    """Get a single user."""
    user = await user_service.get_user(caller, user_id)
    return ok(request, UserResponse.from_user(user))


@router.post(
    "",
    response_model=ApiResponse[UserResponse],
    status_code=status.HTTP_201_CREATED,
)
async def create_user(
    request: Request,
    body: CreateUserRequest,
    caller: RequireAdmin,
    user_service: UserServiceDep,
    org_id: Annotated[str | None, Query(alias="orgId")] = None,
) -> ApiResponse[UserResponse]:
    """Create a user in the caller's organization, or in ``orgId`` for platform admins."""
    user = await user_service.create_user(
        caller,
        UserCreate(
            name=body.name,
            email=str(body.email),
            user_type=body.user_type,
            role=body.role,
        ),
        org_id=org_id,
    )
    return ok(request, UserResponse.from_user(user), message="User created successfully")


@router.put("/{user_id}", response_model=ApiResponse[UserResponse])
async def update_user(
    request: Request,
    user_id: str,
    body: UpdateUserRequest,
    caller: RequireAdmin,
    user_service: UserServiceDep,
) -> ApiResponse[UserResponse]:
    """Update a user."""
    user = await user_service.update_user(
        caller,
        user_id,
        UserUpdate(
            name=body.name,
            email=str(body.email) if body.email is not None else None,
            status=body.status,
            user_type=body.user_type,
            role=body.role,
        ),
    )
    return ok(request, UserResponse.from_user(user), message="User updated successfully")


@router.delete("/{user_id}", response_model=ApiResponse[None])
async def delete_user(
    request: Request,
    user_id: str,
    caller: RequireAdmin,
    user_service: UserServiceDep,
) -> ApiResponse[None]:
    """Soft delete a user."""
    await user_service.delete_user(caller, user_id)
    return ok(request, None, message="User deleted successfully")


@router.post("/{user_id}/reset-password", response_model=ApiResponse[None])
async def reset_password(
    request: Request,
    user_id: str,
    caller: RequireAdmin,
    user_service: UserServiceDep,
) -> ApiResponse[None]:
    """Reset a user's password to the derived initial password."""
    await user_service.reset_password(caller, user_id)
    return ok(
        request,
        None,
        message="Password reset successfully. The user can sign in with their initial password.",
    )
