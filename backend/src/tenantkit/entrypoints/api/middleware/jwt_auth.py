"""JWT authentication dependencies."""

from collections.abc import Callable
from typing import Annotated, Any

import structlog
from fastapi import Depends, Request, Security
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from tenantkit.core.auth.jwt import TokenClaims, TokenError, TokenService
from tenantkit.core.errors import ForbiddenError, UnauthorizedError
from tenantkit.core.identity import CallerContext
from tenantkit.core.types import UserType
from tenantkit.entrypoints.api.deps import get_token_service

logger = structlog.get_logger()

# Use Bearer token authentication
bearer_scheme = HTTPBearer(auto_error=False)


def decode_bearer(
    credentials: HTTPAuthorizationCredentials | None,
    tokens: TokenService,
) -> TokenClaims:
    """Decode a bearer credential.

    Raises:
        UnauthorizedError: If the token is missing or invalid.
    """
    if not credentials:
        raise UnauthorizedError("Missing authentication token")

    try:
        return tokens.decode_token(credentials.credentials)
    except TokenError as e:
        logger.warning("jwt_validation_failed", error=str(e))
        raise UnauthorizedError(str(e)) from None


async def get_token_claims(
    credentials: HTTPAuthorizationCredentials | None = Security(bearer_scheme),  # noqa: B008
    tokens: TokenService = Depends(get_token_service),  # noqa: B008
) -> TokenClaims:
    """Verify the bearer token and return its claims."""
    return decode_bearer(credentials, tokens)


async def verify_jwt(
    request: Request,
    claims: Annotated[TokenClaims, Depends(get_token_claims)],
) -> CallerContext:
    """Verify the bearer token and build the caller context.

    Args:
        request: The current request.
        claims: Verified token claims.

    Returns:
        CallerContext for the authenticated user.
    """
    caller = CallerContext(
        user_id=claims.sub,
        org_id=claims.org_id,
        user_type=claims.user_type,
        role=claims.role,
        org_name=claims.org_name,
        email=claims.email,
    )

    request.state.user_id = caller.user_id
    structlog.contextvars.bind_contextvars(user_id=caller.user_id, org_id=caller.org_id)

    logger.debug("jwt_verified", user_type=caller.user_type)
    return caller


def require_user_type(*allowed: UserType) -> Callable[..., Any]:
    """Dependency requiring the caller to be one of the given user types.

    Usage:
        @router.get("/")
        async def list_things(
            caller: Annotated[CallerContext, Depends(require_user_type(UserType.ORG_ADMIN))],
        ):
            ...

    Args:
        allowed: Accepted user types.

    Returns:
        Dependency function that validates the user type.
    """
    allowed_values = {t.value for t in allowed}

    async def user_type_checker(
        caller: Annotated[CallerContext, Depends(verify_jwt)],
    ) -> CallerContext:
        if caller.user_type not in allowed_values:
            logger.warning(
                "user_type_denied",
                user_type=caller.user_type,
                required=sorted(allowed_values),
            )
            raise ForbiddenError("You do not have permission to perform this action")
        return caller

    return user_type_checker


# Common caller dependencies for convenience
CurrentCaller = Annotated[CallerContext, Depends(verify_jwt)]
RequireAdmin = Annotated[
    CallerContext,
    Depends(require_user_type(UserType.PLATFORM_ADMIN, UserType.ORG_ADMIN)),
]
RequirePlatformAdmin = Annotated[
    CallerContext,
    Depends(require_user_type(UserType.PLATFORM_ADMIN)),
]
