"""Resolve the effective tenant context for one request.

Configuration is layered platform < business-type templates < tenant <
company. Each section is merged one level at a time and the candidate is
re-parsed after every level; a level that fails either step is logged and
skipped for that section only, so the next outer value stands.
"""

import asyncio
import logging
from collections.abc import Callable, Collection, Iterable
from typing import Any

from tenantscope.baseline.types import PlatformBaseline
from tenantscope.context.gating import gate_list_layout, gate_schema
from tenantscope.context.merge import (
    merge_features,
    merge_form_layout,
    merge_keyed,
    merge_list_layout,
    merge_navigation,
    merge_role_permissions,
    merge_ui_schema,
)
from tenantscope.context.navigation import prune_navigation
from tenantscope.context.parsing import (
    expect_mapping,
    normalize_features,
    parse_branding,
    parse_features,
    parse_form_layout,
    parse_list_layout,
    parse_nav_items,
    parse_role_permissions,
    parse_settings,
    parse_terminology,
    parse_ui_schema,
)
from tenantscope.context.permissions import resolve_permissions
from tenantscope.context.terminology import default_terminology
from tenantscope.context.types import TenantContext
from tenantscope.errors import ConfigurationError, NotFoundError, UnexpectedError
from tenantscope.store.adapter import ConfigurationStore
from tenantscope.store.types import OverrideSet

logger = logging.getLogger(__name__)


class TenantContextResolver:
    """Builds a TenantContext from the platform baseline and stored overrides.

    Holds no per-request state; one instance serves concurrent requests.
    """

    def __init__(self, store: ConfigurationStore, baseline: PlatformBaseline | None = None):
        self._store = store
        self._baseline = baseline

    async def resolve(
        self,
        tenant_id: str,
        company_id: str,
        branch_id: str,
        user_id: str,
        user_name: str,
        roles: Collection[str],
    ) -> TenantContext:
        """Resolve the context a user sees for a tenant/company/branch.

        Raises:
            NotFoundError: The branch, company, and tenant do not form a valid chain
            UnexpectedError: Any other failure (logged with traceback)
        """
        try:
            return await self._resolve(tenant_id, company_id, branch_id, user_id, user_name, roles)
        except NotFoundError:
            raise
        except Exception as e:
            logger.exception(
                "Failed to resolve tenant context (tenant=%s company=%s branch=%s)",
                tenant_id,
                company_id,
                branch_id,
            )
            raise UnexpectedError("Failed to resolve tenant context") from e

    async def _resolve(
        self,
        tenant_id: str,
        company_id: str,
        branch_id: str,
        user_id: str,
        user_name: str,
        roles: Collection[str],
    ) -> TenantContext:
        hierarchy, tenant_overrides, company_overrides, baseline = await asyncio.gather(
            asyncio.to_thread(self._store.get_hierarchy, tenant_id, company_id, branch_id),
            asyncio.to_thread(self._store.get_tenant_overrides, tenant_id),
            asyncio.to_thread(self._store.get_company_overrides, company_id),
            self._get_baseline(),
        )
        if not hierarchy.valid:
            raise NotFoundError(hierarchy.reason or "Tenant, company, or branch not found")

        levels: list[OverrideSet] = []
        for kind, code in (("companyType", hierarchy.company_type), ("clinicType", hierarchy.clinic_type)):
            template = baseline.template_for(kind, code)
            if template is not None:
                levels.append(template.overrides)
        levels.extend(level for level in (tenant_overrides, company_overrides) if level is not None)

        role_set = frozenset(roles)

        features = parse_features(self._merge_section(
            "features", normalize_features(baseline.section("features") or {}),
            levels, merge_features, parse_features,
        ))
        role_permissions = parse_role_permissions(self._merge_section(
            "rolePermissions", baseline.section("rolePermissions") or {},
            levels, merge_role_permissions, parse_role_permissions,
        ))
        settings = parse_settings(self._merge_section(
            "settings", baseline.section("settings") or {},
            levels, merge_keyed, parse_settings,
        ))
        terminology_base = merge_keyed(
            default_terminology(settings.language), baseline.section("terminology") or {},
        )
        terminology = parse_terminology(self._merge_section(
            "terminology", terminology_base,
            levels, merge_keyed, parse_terminology,
        ))
        navigation = prune_navigation(
            parse_nav_items(self._merge_section(
                "navigation", baseline.section("navigation") or [],
                levels, merge_navigation, parse_nav_items,
            )),
            features,
            role_set,
        )

        ui_schemas = {
            entity: gate_schema(parse_ui_schema(entity, body), features, role_set)
            for entity, body in self._merge_entities(
                "uiSchemas", baseline, levels, merge_ui_schema, parse_ui_schema,
            ).items()
        }
        form_layouts = {
            entity: parse_form_layout(entity, body)
            for entity, body in self._merge_entities(
                "formLayouts", baseline, levels, merge_form_layout, parse_form_layout,
            ).items()
        }
        list_layouts = {
            entity: gate_list_layout(parse_list_layout(entity, body), features, role_set)
            for entity, body in self._merge_entities(
                "listLayouts", baseline, levels, merge_list_layout, parse_list_layout,
            ).items()
        }
        branding = parse_branding(self._merge_section(
            "branding", baseline.section("branding") or {},
            levels, merge_keyed, parse_branding,
        ))

        return TenantContext(
            tenant_id=tenant_id,
            tenant_name=hierarchy.tenant_name,
            company_id=company_id,
            company_name=hierarchy.company_name,
            branch_id=branch_id,
            branch_name=hierarchy.branch_name,
            user_id=user_id,
            user_name=user_name,
            company_type=hierarchy.company_type,
            clinic_type=hierarchy.clinic_type,
            branding=branding,
            user_roles=role_set,
            user_permissions=resolve_permissions(role_permissions, role_set),
            features=features,
            terminology=terminology,
            navigation=navigation,
            ui_schemas=ui_schemas,
            form_layouts=form_layouts,
            list_layouts=list_layouts,
            settings=settings,
            baseline_version=baseline.version,
        )

    async def _get_baseline(self) -> PlatformBaseline:
        if self._baseline is not None:
            return self._baseline
        return await asyncio.to_thread(self._store.get_platform_defaults)

    def _merge_section(
        self,
        name: str,
        base: Any,
        levels: Iterable[OverrideSet],
        merge: Callable[[Any, Any], Any],
        parse: Callable[[Any], Any],
    ) -> Any:
        """Apply each level's override of one section, innermost last."""
        value = base
        for level in levels:
            try:
                override = level.section(name)
                if override is None:
                    continue
                candidate = merge(value, override)
                parse(candidate)
            except ConfigurationError as e:
                logger.warning("Ignoring %s override from %s: %s", name, level.label, e)
                continue
            value = candidate
        return value

    def _merge_entities(
        self,
        name: str,
        baseline: PlatformBaseline,
        levels: Iterable[OverrideSet],
        merge: Callable[[Any, Any, str], Any],
        parse: Callable[[str, Any], Any],
    ) -> dict[str, Any]:
        """Like _merge_section, but a bad entity only discards that entity's override."""
        result: dict[str, Any] = dict(baseline.section(name) or {})
        for level in levels:
            try:
                overrides = level.section(name)
                if overrides is None:
                    continue
                overrides = expect_mapping(overrides, name)
            except ConfigurationError as e:
                logger.warning("Ignoring %s overrides from %s: %s", name, level.label, e)
                continue
            for entity, body in overrides.items():
                if body is None:
                    continue
                try:
                    candidate = merge(result.get(entity), body, entity)
                    parse(entity, candidate)
                except ConfigurationError as e:
                    logger.warning("Ignoring %s.%s override from %s: %s", name, entity, level.label, e)
                    continue
                result[entity] = candidate
        return result
