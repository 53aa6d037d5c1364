"""FastAPI dependencies for authentication."""

from typing import Callable

from fastapi import HTTPException, Request

from tenantscope.auth.middleware import get_user_context
from tenantscope.auth.types import UserContext


def require_authenticated(request: Request) -> UserContext:
    """Dependency that requires an identified caller.

    Raises:
        HTTPException 401 if not authenticated
    """
    user_context = get_user_context(request)
    if not user_context:
        raise HTTPException(
            status_code=401,
            detail="Authentication required",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return user_context


def require_tenant_scope(request: Request) -> UserContext:
    """Dependency that requires a caller with tenant, company, and branch selected.

    Raises:
        HTTPException 401 if not authenticated
        HTTPException 400 if any of tenant, company, or branch is missing
    """
    user_context = require_authenticated(request)
    if not user_context.has_scope:
        raise HTTPException(
            status_code=400,
            detail="Tenant, company, and branch must be selected.",
        )
    return user_context


def require_role(*required_roles: str) -> Callable[[Request], UserContext]:
    """Create a dependency that requires at least one of the given roles.

    Example:
        @router.get("/admin-only")
        async def admin_endpoint(user: UserContext = Depends(require_role("admin"))):
            ...
    """

    def dependency(request: Request) -> UserContext:
        user_context = require_authenticated(request)
        if any(role in required_roles for role in user_context.roles):
            return user_context
        raise HTTPException(
            status_code=403,
            detail=f"Insufficient permissions. Required roles: {', '.join(required_roles)}",
        )

    return dependency
