"""Authentication routes."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Request
from pydantic import Field, model_validator

from tenantkit.core.auth.jwt import TokenClaims
from tenantkit.core.auth.service import AuthService
from tenantkit.core.types import DocumentModel
from tenantkit.core.users.service import MIN_PASSWORD_LENGTH, UserService
from tenantkit.entrypoints.api.deps import get_auth_service, get_user_service
from tenantkit.entrypoints.api.middleware.jwt_auth import CurrentCaller, get_token_claims
from tenantkit.entrypoints.api.responses import ApiResponse, ok

router = APIRouter(prefix="/auth", tags=["auth"])

AuthServiceDep = Annotated[AuthService, Depends(get_auth_service)]
UserServiceDep = Annotated[UserService, Depends(get_user_service)]
ClaimsDep = Annotated[TokenClaims, Depends(get_token_claims)]


class LoginRequest(DocumentModel):
    email: str = Field(..., min_length=1, max_length=320)
    password: str = Field(..., min_length=1)


class LoginUser(DocumentModel):
    id: str
    name: str
    email: str
    user_type: str
    role: str
    org_id: str
    org_name: str


class LoginResponse(DocumentModel):
    token: str
    token_type: str
    expires_in: int
    user: LoginUser


class ChangePasswordRequest(DocumentModel):
    current_password: str = Field(..., min_length=1)
    new_password: str = Field(..., min_length=MIN_PASSWORD_LENGTH)
    confirm_password: str

    @model_validator(mode="after")
    def passwords_match(self) -> ChangePasswordRequest:
        if self.new_password != self.confirm_password:
            raise ValueError("New password and confirmation do not match")
        return self


class MeResponse(DocumentModel):
    user_id: str
    email: str
    role: str
    user_type: str
    org_id: str
    org_name: str
    expires_at: int


@router.post("/login", response_model=ApiResponse[LoginResponse])
async def login(
    request: Request,
    body: LoginRequest,
    auth_service: AuthServiceDep,
) -> ApiResponse[LoginResponse]:
    """Log in with email and password and receive a bearer token."""
    result = await auth_service.login(body.email, body.password)
    user = result.user
    return ok(
        request,
        LoginResponse(
            token=result.token,
            token_type=result.token_type,
            expires_in=result.expires_in,
            user=LoginUser(
                id=user.id,
                name=user.name,
                email=user.email,
                user_type=user.user_type,
                role=user.role,
                org_id=user.org_id,
                org_name=user.org_name,
            ),
        ),
        message="Login successful",
    )


@router.get("/me", response_model=ApiResponse[MeResponse])
async def me(request: Request, claims: ClaimsDep) -> ApiResponse[MeResponse]:
    """Describe the identity carried by the presented token."""
    return ok(
        request,
        MeResponse(
            user_id=claims.sub,
            email=claims.email,
            role=claims.role,
            user_type=claims.user_type,
            org_id=claims.org_id,
            org_name=claims.org_name,
            expires_at=claims.exp,
        ),
    )


@router.post("/change-password", response_model=ApiResponse[None])
async def change_password(
    request: Request,
    body: ChangePasswordRequest,
    caller: CurrentCaller,
    user_service: UserServiceDep,
) -> ApiResponse[None]:
    """Change the caller's own password."""
    await user_service.change_password(caller, body.current_password, body.new_password)
    return ok(request, None, message="Password changed successfully")
