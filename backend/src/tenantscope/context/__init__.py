"""Tenant context resolution for tenantscope.

Merges platform, business-type, tenant, and company configuration and gates
the result by feature and role.
"""

from tenantscope.context.types import (
    Access,
    Branding,
    ConditionalRule,
    FeatureConfig,
    FieldDefinition,
    FormLayout,
    ListLayout,
    NavItem,
    TenantContext,
    TenantSettings,
    UISchema,
)
from tenantscope.context.integrity import IntegrityIssue, check_layout_integrity
from tenantscope.context.navigation import prune_navigation
from tenantscope.context.service import TenantContextResolver

__all__ = [
    "Access",
    "Branding",
    "ConditionalRule",
    "FeatureConfig",
    "FieldDefinition",
    "FormLayout",
    "ListLayout",
    "NavItem",
    "TenantContext",
    "TenantSettings",
    "UISchema",
    "IntegrityIssue",
    "check_layout_integrity",
    "prune_navigation",
    "TenantContextResolver",
]
