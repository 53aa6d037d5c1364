"""Access token validation."""

import time

import jwt

from tenantscope.auth.types import TokenClaims


class JWTError(Exception):
    """Base exception for JWT-related errors."""

    pass


class TokenExpiredError(JWTError):
    """Raised when a token has expired."""

    pass


class InvalidTokenError(JWTError):
    """Raised when a token is invalid or malformed."""

    pass


class JWTService:
    """Decodes HS256 access tokens issued by the identity service.

    Tokens are issued elsewhere; ``issue_access_token`` exists for tests and
    the development CLI.
    """

    ACCESS_TOKEN_TTL = 15 * 60  # 15 minutes

    def __init__(self, secret_key: str, algorithm: str = "HS256"):
        """Initialize the JWT service.

        Args:
            secret_key: Secret key for verifying tokens (should be at least 32 chars)
            algorithm: JWT algorithm (default HS256)
        """
        self._secret_key = secret_key
        self._algorithm = algorithm

    def issue_access_token(
        self,
        user_id: str,
        tenant_id: str,
        company_id: str,
        branch_id: str,
        roles: list[str] | None = None,
        user_name: str = "",
        ttl: int | None = None,
    ) -> str:
        now = int(time.time())
        claims = {
            "sub": user_id,
            "name": user_name,
            "tenant_id": tenant_id,
            "company_id": company_id,
            "branch_id": branch_id,
            "roles": list(roles or []),
            "iat": now,
            "exp": now + (self.ACCESS_TOKEN_TTL if ttl is None else ttl),
            "type": "access",
        }
        return jwt.encode(claims, self._secret_key, algorithm=self._algorithm)

    def decode_token(self, token: str) -> TokenClaims:
        """Decode and validate a JWT token.

        Raises:
            TokenExpiredError: If the token has expired
            InvalidTokenError: If the token is invalid or malformed
        """
        try:
            payload = jwt.decode(
                token,
                self._secret_key,
                algorithms=[self._algorithm],
            )
        except jwt.ExpiredSignatureError:
            raise TokenExpiredError("Token has expired")
        except jwt.InvalidTokenError as e:
            raise InvalidTokenError(f"Invalid token: {e}")

        roles = payload.get("roles") or []
        if isinstance(roles, str):
            roles = [roles]
        return TokenClaims(
            user_id=payload.get("sub", ""),
            user_name=payload.get("name") or "",
            tenant_id=payload.get("tenant_id"),
            company_id=payload.get("company_id"),
            branch_id=payload.get("branch_id"),
            roles=[str(role) for role in roles],
            exp=payload.get("exp", 0),
            iat=payload.get("iat", 0),
            type=payload.get("type", "access"),
        )
