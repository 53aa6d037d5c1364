"""Type definitions for caller identity."""

from dataclasses import dataclass, field


@dataclass
class TokenClaims:
    """Claims embedded in an access token.

    Attributes:
        user_id: The authenticated user's ID (``sub``)
        user_name: Display name (``name``)
        tenant_id: Active tenant
        company_id: Active company within the tenant
        branch_id: Active branch within the company
        roles: Role names held in the active company
        exp: Token expiration timestamp
        iat: Token issued-at timestamp
        type: Token type; only "access" tokens identify a caller
    """

    user_id: str
    user_name: str = ""
    tenant_id: str | None = None
    company_id: str | None = None
    branch_id: str | None = None
    roles: list[str] = field(default_factory=list)
    exp: int = 0
    iat: int = 0
    type: str = "access"


@dataclass
class UserContext:
    """Who is calling, and for which tenant/company/branch."""

    user_id: str
    user_name: str = ""
    tenant_id: str | None = None
    company_id: str | None = None
    branch_id: str | None = None
    roles: list[str] = field(default_factory=list)

    @property
    def has_scope(self) -> bool:
        return bool(self.tenant_id and self.company_id and self.branch_id)

    @classmethod
    def from_claims(cls, claims: TokenClaims) -> "UserContext":
        return cls(
            user_id=claims.user_id,
            user_name=claims.user_name,
            tenant_id=claims.tenant_id,
            company_id=claims.company_id,
            branch_id=claims.branch_id,
            roles=list(claims.roles),
        )
