"""Tenant context types.

Every record here is built per request from merged configuration and never
mutated afterwards. ``to_dict()`` produces the camelCase JSON contract the
front end renders from.
"""

from dataclasses import dataclass, field
from typing import Any


def _condition_to_dict(condition: "bool | tuple[ConditionalRule, ...] | None") -> Any:
    if isinstance(condition, tuple):
        return [rule.to_dict() for rule in condition]
    return condition


@dataclass(frozen=True)
class FeatureConfig:
    """A togglable module and its settings bag."""

    enabled: bool = False
    settings: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {"enabled": self.enabled, "settings": dict(self.settings)}


@dataclass(frozen=True)
class Access:
    """Gating flags computed for a field or list action.

    Attributes:
        read: The feature gate and role gate both pass
        write: ``read`` and the element is not read-only or disabled
        reason: Why access was denied, or None when allowed
    """

    read: bool = True
    write: bool = True
    reason: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {"read": self.read, "write": self.write, "reason": self.reason}


@dataclass(frozen=True)
class NavBadge:
    type: str = "count"
    count_key: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.type, "countKey": self.count_key}


@dataclass(frozen=True)
class NavItem:
    """A node in the navigation tree."""

    id: str
    label: str = ""
    icon: str = ""
    route: str = ""
    feature_code: str | None = None  # gates visibility when set
    required_roles: frozenset[str] = frozenset()  # empty = no role restriction
    children: tuple["NavItem", ...] = ()
    badge: NavBadge | None = None
    sort_order: int = 0
    hidden: bool = False  # set by an override to remove the node

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "label": self.label,
            "icon": self.icon,
            "route": self.route,
            "featureCode": self.feature_code,
            "requiredRoles": sorted(self.required_roles),
            "children": [child.to_dict() for child in self.children],
            "badge": self.badge.to_dict() if self.badge else None,
            "sortOrder": self.sort_order,
        }


@dataclass(frozen=True)
class ConditionalRule:
    """A client-side visibility rule evaluated against the form record."""

    field: str
    operator: str
    value: Any = None

    def to_dict(self) -> dict[str, Any]:
        return {"field": self.field, "operator": self.operator, "value": self.value}


@dataclass(frozen=True)
class FieldValidation:
    required: bool | None = None
    min_length: int | None = None
    max_length: int | None = None
    min: float | None = None
    max: float | None = None
    pattern: str | None = None
    pattern_message: str | None = None
    custom: str | None = None  # named rule understood by the client

    def to_dict(self) -> dict[str, Any]:
        return {
            "required": self.required,
            "minLength": self.min_length,
            "maxLength": self.max_length,
            "min": self.min,
            "max": self.max,
            "pattern": self.pattern,
            "patternMessage": self.pattern_message,
            "custom": self.custom,
        }


@dataclass(frozen=True)
class FieldOption:
    value: Any
    label: str

    def to_dict(self) -> dict[str, Any]:
        return {"value": self.value, "label": self.label}


@dataclass(frozen=True)
class FieldDefinition:
    """Field metadata for schema-driven forms and lists.

    For ``select`` fields, ``options`` and ``lookup_endpoint`` are mutually
    exclusive; parsing rejects definitions carrying both.
    """

    name: str
    type: str = "text"
    label: str | None = None
    placeholder: str | None = None
    help_text: str | None = None
    default_value: Any = None
    validation: FieldValidation | None = None
    options: tuple[FieldOption, ...] | None = None
    lookup_endpoint: str | None = None
    lookup_display_field: str | None = None
    lookup_value_field: str | None = None
    visible: bool | tuple[ConditionalRule, ...] | None = None
    disabled: bool | tuple[ConditionalRule, ...] | None = None
    read_only: bool | None = None
    width: str | None = None
    sortable: bool | None = None
    filterable: bool | None = None
    searchable: bool | None = None
    currency: str | None = None
    decimals: int | None = None
    accept: str | None = None
    max_size: int | None = None
    multiple: bool | None = None
    feature_code: str | None = None
    required_roles: frozenset[str] = frozenset()
    access: Access = field(default_factory=Access)

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "type": self.type,
            "label": self.label,
            "placeholder": self.placeholder,
            "helpText": self.help_text,
            "defaultValue": self.default_value,
            "validation": self.validation.to_dict() if self.validation else None,
            "options": (
                [option.to_dict() for option in self.options]
                if self.options is not None
                else None
            ),
            "lookupEndpoint": self.lookup_endpoint,
            "lookupDisplayField": self.lookup_display_field,
            "lookupValueField": self.lookup_value_field,
            "visible": _condition_to_dict(self.visible),
            "disabled": _condition_to_dict(self.disabled),
            "readOnly": self.read_only,
            "width": self.width,
            "sortable": self.sortable,
            "filterable": self.filterable,
            "searchable": self.searchable,
            "currency": self.currency,
            "decimals": self.decimals,
            "accept": self.accept,
            "maxSize": self.max_size,
            "multiple": self.multiple,
            "featureCode": self.feature_code,
            "requiredRoles": sorted(self.required_roles),
            "access": self.access.to_dict(),
        }


@dataclass(frozen=True)
class DefaultSort:
    field: str
    direction: str = "asc"

    def to_dict(self) -> dict[str, Any]:
        return {"field": self.field, "direction": self.direction}


@dataclass(frozen=True)
class UISchema:
    """Entity-level field metadata."""

    entity_name: str
    display_name: str = ""
    display_name_plural: str = ""
    primary_field: str = ""
    fields: tuple[FieldDefinition, ...] = ()
    default_sort: DefaultSort | None = None

    def field_names(self) -> set[str]:
        return {f.name for f in self.fields}

    def to_dict(self) -> dict[str, Any]:
        return {
            "entityName": self.entity_name,
            "displayName": self.display_name,
            "displayNamePlural": self.display_name_plural,
            "primaryField": self.primary_field,
            "fields": [f.to_dict() for f in self.fields],
            "defaultSort": self.default_sort.to_dict() if self.default_sort else None,
        }


@dataclass(frozen=True)
class FormSection:
    id: str
    title: str = ""
    description: str | None = None
    collapsible: bool | None = None
    default_collapsed: bool | None = None
    visible: bool | tuple[ConditionalRule, ...] | None = None
    columns: int | None = None
    fields: tuple[str, ...] = ()  # field names in the matching UISchema

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "collapsible": self.collapsible,
            "defaultCollapsed": self.default_collapsed,
            "visible": _condition_to_dict(self.visible),
            "columns": self.columns,
            "fields": list(self.fields),
        }


@dataclass(frozen=True)
class FormLayout:
    entity_name: str
    sections: tuple[FormSection, ...] = ()
    submit_label: str | None = None
    cancel_label: str | None = None
    show_delete: bool | None = None
    delete_confirm_message: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "entityName": self.entity_name,
            "sections": [s.to_dict() for s in self.sections],
            "submitLabel": self.submit_label,
            "cancelLabel": self.cancel_label,
            "showDelete": self.show_delete,
            "deleteConfirmMessage": self.delete_confirm_message,
        }


@dataclass(frozen=True)
class ListColumn:
    field: str
    width: str | int | None = None
    align: str | None = None
    format: str | None = None
    sortable: bool | None = None
    hidden: bool | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "field": self.field,
            "width": self.width,
            "align": self.align,
            "format": self.format,
            "sortable": self.sortable,
            "hidden": self.hidden,
        }


@dataclass(frozen=True)
class ListAction:
    id: str
    label: str = ""
    icon: str = ""
    type: str = "secondary"
    requires_selection: bool | None = None
    confirm_message: str | None = None
    feature_code: str | None = None
    required_roles: frozenset[str] = frozenset()
    access: Access = field(default_factory=Access)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "label": self.label,
            "icon": self.icon,
            "type": self.type,
            "requiresSelection": self.requires_selection,
            "confirmMessage": self.confirm_message,
            "featureCode": self.feature_code,
            "requiredRoles": sorted(self.required_roles),
            "access": self.access.to_dict(),
        }


@dataclass(frozen=True)
class ListActions:
    row: tuple[ListAction, ...] = ()
    bulk: tuple[ListAction, ...] = ()
    header: tuple[ListAction, ...] = ()

    def all(self) -> tuple[ListAction, ...]:
        return self.row + self.bulk + self.header

    def to_dict(self) -> dict[str, Any]:
        return {
            "row": [a.to_dict() for a in self.row],
            "bulk": [a.to_dict() for a in self.bulk],
            "header": [a.to_dict() for a in self.header],
        }


@dataclass(frozen=True)
class ListFilter:
    field: str
    type: str = "text"
    options: tuple[FieldOption, ...] | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "field": self.field,
            "type": self.type,
            "options": (
                [option.to_dict() for option in self.options]
                if self.options is not None
                else None
            ),
        }


@dataclass(frozen=True)
class ListLayout:
    entity_name: str
    columns: tuple[ListColumn, ...] = ()
    actions: ListActions = field(default_factory=ListActions)
    filters: tuple[ListFilter, ...] = ()
    default_page_size: int = 25
    page_size_options: tuple[int, ...] = (10, 25, 50, 100)
    show_search: bool = True
    search_fields: tuple[str, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {
            "entityName": self.entity_name,
            "columns": [c.to_dict() for c in self.columns],
            "actions": self.actions.to_dict(),
            "filters": [f.to_dict() for f in self.filters],
            "defaultPageSize": self.default_page_size,
            "pageSizeOptions": list(self.page_size_options),
            "showSearch": self.show_search,
            "searchFields": list(self.search_fields),
        }


@dataclass(frozen=True)
class TenantSettings:
    """Locale and format settings."""

    currency: str = "AED"
    timezone: str = "Arabian Standard Time"
    date_format: str = "dd/MM/yyyy"
    time_format: str = "HH:mm"
    language: str = "en"

    def to_dict(self) -> dict[str, Any]:
        return {
            "currency": self.currency,
            "timezone": self.timezone,
            "dateFormat": self.date_format,
            "timeFormat": self.time_format,
            "language": self.language,
        }


@dataclass(frozen=True)
class Branding:
    logo_url: str | None = None
    primary_color: str = "#1F6FEB"
    secondary_color: str = "#6B7280"


@dataclass(frozen=True)
class TenantContext:
    """The fully merged, role-filtered configuration for one request."""

    tenant_id: str
    tenant_name: str
    company_id: str
    company_name: str
    branch_id: str
    branch_name: str
    user_id: str
    user_name: str
    company_type: str | None = None
    clinic_type: str | None = None
    branding: Branding = field(default_factory=Branding)
    user_roles: frozenset[str] = frozenset()
    user_permissions: frozenset[str] = frozenset()
    features: dict[str, FeatureConfig] = field(default_factory=dict)
    terminology: dict[str, str] = field(default_factory=dict)
    navigation: tuple[NavItem, ...] = ()
    ui_schemas: dict[str, UISchema] = field(default_factory=dict)
    form_layouts: dict[str, FormLayout] = field(default_factory=dict)
    list_layouts: dict[str, ListLayout] = field(default_factory=dict)
    settings: TenantSettings = field(default_factory=TenantSettings)
    baseline_version: str = ""

    def has_feature(self, code: str) -> bool:
        """A feature absent from the merged map is disabled."""
        feature = self.features.get(code)
        return feature is not None and feature.enabled

    def to_dict(self) -> dict[str, Any]:
        """Convert to API response dict."""
        return {
            "tenantId": self.tenant_id,
            "tenantName": self.tenant_name,
            "companyId": self.company_id,
            "companyName": self.company_name,
            "companyType": self.company_type,
            "clinicType": self.clinic_type,
            "branchId": self.branch_id,
            "branchName": self.branch_name,
            "logoUrl": self.branding.logo_url,
            "primaryColor": self.branding.primary_color,
            "secondaryColor": self.branding.secondary_color,
            "userId": self.user_id,
            "userName": self.user_name,
            "userRoles": sorted(self.user_roles),
            "userPermissions": sorted(self.user_permissions),
            "features": {code: f.to_dict() for code, f in self.features.items()},
            "terminology": dict(self.terminology),
            "navigation": [item.to_dict() for item in self.navigation],
            "uiSchemas": {name: s.to_dict() for name, s in self.ui_schemas.items()},
            "formLayouts": {name: f.to_dict() for name, f in self.form_layouts.items()},
            "listLayouts": {name: layout.to_dict() for name, layout in self.list_layouts.items()},
            "settings": self.settings.to_dict(),
            "baselineVersion": self.baseline_version,
        }
