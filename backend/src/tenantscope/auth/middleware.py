"""Authentication middleware for FastAPI."""

import logging

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from tenantscope.auth.jwt_service import JWTError, JWTService
from tenantscope.auth.types import UserContext

logger = logging.getLogger(__name__)

SKIP_PATHS = ("/docs", "/openapi.json", "/redoc")


def _split_roles(value: str) -> list[str]:
    return [role.strip() for role in value.split(",") if role.strip()]


class AuthMiddleware(BaseHTTPMiddleware):
    """Sets ``request.state.user_context`` from the Authorization header.

    With ``trust_headers`` enabled (local development and tests, no JWT
    service) identity is read from ``X-Tenant-Id``, ``X-Company-Id``,
    ``X-Branch-Id``, ``X-User-Id``, ``X-User-Name`` and ``X-User-Roles``
    instead.

    The middleware does NOT reject unauthenticated requests - that's handled
    by the endpoint dependencies.
    """

    def __init__(self, app, jwt_service: JWTService | None = None, trust_headers: bool = False):
        super().__init__(app)
        self._jwt_service = jwt_service
        self._trust_headers = trust_headers

    async def dispatch(self, request: Request, call_next) -> Response:
        request.state.user_context = None

        if any(request.url.path.startswith(p) for p in SKIP_PATHS):
            return await call_next(request)

        if self._trust_headers:
            request.state.user_context = self._context_from_headers(request)
        elif self._jwt_service is not None:
            auth_header = request.headers.get("Authorization")
            if auth_header and auth_header.startswith("Bearer "):
                token = auth_header[7:]
                try:
                    claims = self._jwt_service.decode_token(token)
                    # Only access tokens identify a caller
                    if claims.type == "access":
                        request.state.user_context = UserContext.from_claims(claims)
                except JWTError as e:
                    logger.debug("Rejected bearer token: %s", e)

        return await call_next(request)

    def _context_from_headers(self, request: Request) -> UserContext | None:
        headers = request.headers
        user_id = headers.get("X-User-Id")
        if not user_id:
            return None
        return UserContext(
            user_id=user_id,
            user_name=headers.get("X-User-Name", ""),
            tenant_id=headers.get("X-Tenant-Id"),
            company_id=headers.get("X-Company-Id"),
            branch_id=headers.get("X-Branch-Id"),
            roles=_split_roles(headers.get("X-User-Roles", "")),
        )


def get_user_context(request: Request) -> UserContext | None:
    """Get the user context from the request state, or None if anonymous."""
    return getattr(request.state, "user_context", None)
