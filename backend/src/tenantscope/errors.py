"""Error kinds raised while resolving tenant context."""


class TenantScopeError(Exception):
    """Base exception for tenantscope."""

    pass


class NotFoundError(TenantScopeError):
    """Raised when the tenant, company, or branch cannot be resolved.

    Also raised when the company does not belong to the tenant or the branch
    does not belong to the company. Surfaced to HTTP callers as 404.
    """

    pass


class ConfigurationError(TenantScopeError):
    """Raised when a configuration row is missing, malformed, or conflicting.

    Recoverable: the resolver logs it and falls back to the next outer level.
    """

    def __init__(self, message: str, location: str = ""):
        self.location = location
        super().__init__(f"{location}: {message}" if location else message)


class BaselineError(TenantScopeError):
    """Raised when the platform baseline is absent or invalid.

    This is a packaging/deployment defect and is fatal at startup.
    """

    pass


class UnexpectedError(TenantScopeError):
    """Any other failure during resolution. Surfaced to HTTP callers as 500."""

    pass
