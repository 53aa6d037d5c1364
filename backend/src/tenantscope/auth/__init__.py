"""Caller identity for tenantscope."""

from tenantscope.auth.types import TokenClaims, UserContext
from tenantscope.auth.jwt_service import (
    InvalidTokenError,
    JWTError,
    JWTService,
    TokenExpiredError,
)
from tenantscope.auth.middleware import AuthMiddleware, get_user_context
from tenantscope.auth.dependencies import (
    require_authenticated,
    require_role,
    require_tenant_scope,
)

__all__ = [
    "TokenClaims",
    "UserContext",
    "JWTError",
    "JWTService",
    "InvalidTokenError",
    "TokenExpiredError",
    "AuthMiddleware",
    "get_user_context",
    "require_authenticated",
    "require_role",
    "require_tenant_scope",
]
