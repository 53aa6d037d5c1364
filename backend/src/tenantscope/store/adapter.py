"""ConfigurationStore Protocol: the resolver's view of persisted configuration."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

from tenantscope.store.types import Hierarchy, OverrideSet

if TYPE_CHECKING:
    from tenantscope.baseline.types import PlatformBaseline


@runtime_checkable
class ConfigurationStore(Protocol):
    """Read side of the configuration database.

    Every method is synchronous and safe to call from worker threads; the
    resolver runs them concurrently via ``asyncio.to_thread``.
    """

    def get_platform_defaults(self) -> PlatformBaseline: ...

    def get_tenant_overrides(self, tenant_id: str) -> OverrideSet | None: ...

    def get_company_overrides(self, company_id: str) -> OverrideSet | None: ...

    def get_hierarchy(self, tenant_id: str, company_id: str, branch_id: str) -> Hierarchy: ...
