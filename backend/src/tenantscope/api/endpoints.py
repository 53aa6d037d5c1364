"""Tenant context API endpoints."""

from typing import Any, Callable

from fastapi import APIRouter, Depends, HTTPException

from tenantscope.auth import UserContext, require_role, require_tenant_scope
from tenantscope.baseline.loader import check_baseline_integrity
from tenantscope.baseline.types import PlatformBaseline
from tenantscope.context.integrity import IntegrityIssue, check_layout_integrity
from tenantscope.context.service import TenantContextResolver
from tenantscope.errors import UnexpectedError

ADMIN_ROLES = ("SystemAdmin", "ClinicAdmin")


def _integrity_report(version: str, issues: list[IntegrityIssue]) -> dict[str, Any]:
    return {
        "baselineVersion": version,
        "errorCount": sum(1 for i in issues if i.severity == "error"),
        "warningCount": sum(1 for i in issues if i.severity == "warning"),
        "issues": [issue.to_dict() for issue in issues],
    }


def create_context_router(
    get_resolver: Callable[[], TenantContextResolver | None],
    get_baseline: Callable[[], PlatformBaseline | None],
) -> APIRouter:
    """Create the tenant context router with injected dependencies."""
    router = APIRouter(prefix="/api/tenant", tags=["tenant"])

    def _resolver() -> TenantContextResolver:
        resolver = get_resolver()
        if not resolver:
            raise UnexpectedError("Service not initialized")
        return resolver

    @router.get("/context")
    async def get_context(user: UserContext = Depends(require_tenant_scope)) -> dict[str, Any]:
        """Return the merged, role-filtered context for the caller's branch."""
        context = await _resolver().resolve(
            tenant_id=user.tenant_id,
            company_id=user.company_id,
            branch_id=user.branch_id,
            user_id=user.user_id,
            user_name=user.user_name,
            roles=user.roles,
        )
        return context.to_dict()

    @router.get("/context/integrity")
    async def get_integrity(
        resolved: bool = False,
        user: UserContext = Depends(require_role(*ADMIN_ROLES)),
    ) -> dict[str, Any]:
        """Report dangling layout references.

        Checks the shipped baseline, or with ``?resolved=true`` the caller's
        fully merged context.
        """
        if resolved:
            if not user.has_scope:
                raise HTTPException(400, "Tenant, company, and branch must be selected.")
            context = await _resolver().resolve(
                tenant_id=user.tenant_id,
                company_id=user.company_id,
                branch_id=user.branch_id,
                user_id=user.user_id,
                user_name=user.user_name,
                roles=user.roles,
            )
            issues = check_layout_integrity(context.ui_schemas, context.form_layouts, context.list_layouts)
            return _integrity_report(context.baseline_version, issues)

        baseline = get_baseline()
        if not baseline:
            raise UnexpectedError("Service not initialized")
        return _integrity_report(baseline.version, check_baseline_integrity(baseline))

    return router
