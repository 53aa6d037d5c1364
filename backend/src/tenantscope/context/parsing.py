"""Decode camelCase configuration documents into context records.

Baseline YAML documents and override rows share one shape. Every structural
problem raises ConfigurationError naming the offending location, so the
resolver can discard the one override level that introduced it.
"""

from collections.abc import Mapping
from typing import Any

from tenantscope.context.gating import CONDITION_OPERATORS
from tenantscope.context.types import (
    Branding,
    ConditionalRule,
    DefaultSort,
    FeatureConfig,
    FieldDefinition,
    FieldOption,
    FieldValidation,
    FormLayout,
    FormSection,
    ListAction,
    ListActions,
    ListColumn,
    ListFilter,
    ListLayout,
    NavBadge,
    NavItem,
    TenantSettings,
    UISchema,
)
from tenantscope.errors import ConfigurationError

SORT_DIRECTIONS = ("asc", "desc")


# ---------------------------------------------------------------------------
# Primitive readers
# ---------------------------------------------------------------------------


def expect_mapping(value: Any, where: str) -> Mapping[str, Any]:
    if not isinstance(value, Mapping):
        raise ConfigurationError(f"expected an object, got {type(value).__name__}", where)
    return value


def expect_list(value: Any, where: str) -> list[Any]:
    if not isinstance(value, list):
        raise ConfigurationError(f"expected a list, got {type(value).__name__}", where)
    return value


def _str(data: Mapping[str, Any], key: str, where: str, default: str = "") -> str:
    value = data.get(key)
    if value is None:
        return default
    if not isinstance(value, str):
        raise ConfigurationError(f"'{key}' must be a string", where)
    return value


def _required_str(data: Mapping[str, Any], key: str, where: str) -> str:
    value = _str(data, key, where)
    if not value:
        raise ConfigurationError(f"'{key}' is required", where)
    return value


def _opt_str(data: Mapping[str, Any], key: str, where: str) -> str | None:
    value = data.get(key)
    if value is not None and not isinstance(value, str):
        raise ConfigurationError(f"'{key}' must be a string", where)
    return value


def _opt_bool(data: Mapping[str, Any], key: str, where: str) -> bool | None:
    value = data.get(key)
    if value is not None and not isinstance(value, bool):
        raise ConfigurationError(f"'{key}' must be a boolean", where)
    return value


def _opt_int(data: Mapping[str, Any], key: str, where: str) -> int | None:
    value = data.get(key)
    if value is not None and (isinstance(value, bool) or not isinstance(value, int)):
        raise ConfigurationError(f"'{key}' must be an integer", where)
    return value


def _opt_number(data: Mapping[str, Any], key: str, where: str) -> float | None:
    value = data.get(key)
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ConfigurationError(f"'{key}' must be a number", where)
    return value


def _str_list(data: Mapping[str, Any], key: str, where: str) -> tuple[str, ...]:
    value = data.get(key)
    if value is None:
        return ()
    items = expect_list(value, f"{where}.{key}")
    for item in items:
        if not isinstance(item, str):
            raise ConfigurationError(f"'{key}' must contain only strings", where)
    return tuple(items)


def _roles(data: Mapping[str, Any], where: str) -> frozenset[str]:
    return frozenset(_str_list(data, "requiredRoles", where))


def _options(value: Any, where: str) -> tuple[FieldOption, ...] | None:
    if value is None:
        return None
    options = []
    for i, raw in enumerate(expect_list(value, where)):
        item_where = f"{where}[{i}]"
        item = expect_mapping(raw, item_where)
        if "value" not in item:
            raise ConfigurationError("'value' is required", item_where)
        options.append(FieldOption(value=item["value"], label=_str(item, "label", item_where)))
    return tuple(options)


def _condition(value: Any, where: str) -> bool | tuple[ConditionalRule, ...] | None:
    """A visibility flag is a bool or a list of rules that must all hold."""
    if value is None or isinstance(value, bool):
        return value
    rules = []
    for i, raw in enumerate(expect_list(value, where)):
        rule_where = f"{where}[{i}]"
        rule = expect_mapping(raw, rule_where)
        operator = _required_str(rule, "operator", rule_where)
        if operator not in CONDITION_OPERATORS:
            raise ConfigurationError(f"unknown operator '{operator}'", rule_where)
        rules.append(
            ConditionalRule(
                field=_required_str(rule, "field", rule_where),
                operator=operator,
                value=rule.get("value"),
            )
        )
    return tuple(rules)


# ---------------------------------------------------------------------------
# Features, settings, branding, terminology, permissions
# ---------------------------------------------------------------------------


def normalize_features(raw: Any, where: str = "features") -> dict[str, dict[str, Any]]:
    """Normalize a feature section to ``{code: {"enabled"?, "settings"?}}``.

    Accepts a list of codes (each enabled), a mapping of code to bool, or a
    mapping of code to ``{enabled, settings}``. Keys absent from an entry are
    left absent so the merge can tell "not specified" from "false".
    """
    if isinstance(raw, list):
        for code in raw:
            if not isinstance(code, str):
                raise ConfigurationError("feature codes must be strings", where)
        return {code: {"enabled": True} for code in raw}

    result: dict[str, dict[str, Any]] = {}
    for code, entry in expect_mapping(raw, where).items():
        entry_where = f"{where}.{code}"
        if isinstance(entry, bool):
            result[code] = {"enabled": entry}
            continue
        entry = expect_mapping(entry, entry_where)
        normalized: dict[str, Any] = {}
        enabled = _opt_bool(entry, "enabled", entry_where)
        if enabled is not None:
            normalized["enabled"] = enabled
        if entry.get("settings") is not None:
            normalized["settings"] = dict(expect_mapping(entry["settings"], f"{entry_where}.settings"))
        result[code] = normalized
    return result


def parse_features(raw: Any) -> dict[str, FeatureConfig]:
    return {
        code: FeatureConfig(
            enabled=entry.get("enabled", False),
            settings=dict(entry.get("settings", {})),
        )
        for code, entry in normalize_features(raw).items()
    }


def parse_settings(raw: Any) -> TenantSettings:
    data = expect_mapping(raw, "settings")
    defaults = TenantSettings()
    return TenantSettings(
        currency=_str(data, "currency", "settings", defaults.currency),
        timezone=_str(data, "timezone", "settings", defaults.timezone),
        date_format=_str(data, "dateFormat", "settings", defaults.date_format),
        time_format=_str(data, "timeFormat", "settings", defaults.time_format),
        language=_str(data, "language", "settings", defaults.language),
    )


def parse_branding(raw: Any) -> Branding:
    data = expect_mapping(raw, "branding")
    defaults = Branding()
    return Branding(
        logo_url=_opt_str(data, "logoUrl", "branding"),
        primary_color=_str(data, "primaryColor", "branding", defaults.primary_color),
        secondary_color=_str(data, "secondaryColor", "branding", defaults.secondary_color),
    )


def parse_terminology(raw: Any) -> dict[str, str]:
    data = expect_mapping(raw, "terminology")
    for key, value in data.items():
        if not isinstance(value, str):
            raise ConfigurationError(f"'{key}' must be a string", "terminology")
    return dict(data)


def parse_role_permissions(raw: Any) -> dict[str, tuple[str, ...]]:
    """Map role name to permission codes; ``"*"`` grants every known permission."""
    data = expect_mapping(raw, "rolePermissions")
    result: dict[str, tuple[str, ...]] = {}
    for role, permissions in data.items():
        where = f"rolePermissions.{role}"
        if permissions == "*":
            result[role] = ("*",)
            continue
        items = expect_list(permissions, where)
        for item in items:
            if not isinstance(item, str):
                raise ConfigurationError("permissions must be strings", where)
        result[role] = tuple(items)
    return result


# ---------------------------------------------------------------------------
# Navigation
# ---------------------------------------------------------------------------


def parse_nav_items(raw: Any, where: str = "navigation") -> tuple[NavItem, ...]:
    items = []
    seen: set[str] = set()
    for i, entry in enumerate(expect_list(raw, where)):
        item = parse_nav_item(entry, f"{where}[{i}]")
        if item.id in seen:
            raise ConfigurationError(f"duplicate navigation id '{item.id}'", where)
        seen.add(item.id)
        items.append(item)
    return tuple(items)


def parse_nav_item(raw: Any, where: str) -> NavItem:
    data = expect_mapping(raw, where)
    item_id = _required_str(data, "id", where)
    where = f"{where}({item_id})"

    badge = None
    if data.get("badge") is not None:
        badge_data = expect_mapping(data["badge"], f"{where}.badge")
        badge = NavBadge(
            type=_str(badge_data, "type", f"{where}.badge", "count"),
            count_key=_opt_str(badge_data, "countKey", f"{where}.badge"),
        )

    children: tuple[NavItem, ...] = ()
    if data.get("children") is not None:
        children = parse_nav_items(data["children"], f"{where}.children")

    return NavItem(
        id=item_id,
        label=_str(data, "label", where),
        icon=_str(data, "icon", where),
        route=_str(data, "route", where),
        feature_code=_opt_str(data, "featureCode", where) or None,
        required_roles=_roles(data, where),
        children=children,
        badge=badge,
        sort_order=_opt_int(data, "sortOrder", where) or 0,
        hidden=_opt_bool(data, "hidden", where) or False,
    )


# ---------------------------------------------------------------------------
# UI schemas
# ---------------------------------------------------------------------------


def _check_entity_name(entity: str, data: Mapping[str, Any], where: str) -> str:
    declared = _opt_str(data, "entityName", where)
    if declared and declared != entity:
        raise ConfigurationError(f"entityName '{declared}' does not match key '{entity}'", where)
    return entity


def parse_field_validation(raw: Any, where: str) -> FieldValidation | None:
    if raw is None:
        return None
    data = expect_mapping(raw, where)
    return FieldValidation(
        required=_opt_bool(data, "required", where),
        min_length=_opt_int(data, "minLength", where),
        max_length=_opt_int(data, "maxLength", where),
        min=_opt_number(data, "min", where),
        max=_opt_number(data, "max", where),
        pattern=_opt_str(data, "pattern", where),
        pattern_message=_opt_str(data, "patternMessage", where),
        custom=_opt_str(data, "custom", where),
    )


def parse_field(raw: Any, where: str) -> FieldDefinition:
    data = expect_mapping(raw, where)
    name = _required_str(data, "name", where)
    where = f"{where}({name})"

    options = _options(data.get("options"), f"{where}.options")
    lookup_endpoint = _opt_str(data, "lookupEndpoint", where)
    if options is not None and lookup_endpoint:
        raise ConfigurationError(
            "field defines both static 'options' and 'lookupEndpoint'", where
        )

    return FieldDefinition(
        name=name,
        type=_str(data, "type", where, "text"),
        label=_opt_str(data, "label", where),
        placeholder=_opt_str(data, "placeholder", where),
        help_text=_opt_str(data, "helpText", where),
        default_value=data.get("defaultValue"),
        validation=parse_field_validation(data.get("validation"), f"{where}.validation"),
        options=options,
        lookup_endpoint=lookup_endpoint,
        lookup_display_field=_opt_str(data, "lookupDisplayField", where),
        lookup_value_field=_opt_str(data, "lookupValueField", where),
        visible=_condition(data.get("visible"), f"{where}.visible"),
        disabled=_condition(data.get("disabled"), f"{where}.disabled"),
        read_only=_opt_bool(data, "readOnly", where),
        width=_opt_str(data, "width", where),
        sortable=_opt_bool(data, "sortable", where),
        filterable=_opt_bool(data, "filterable", where),
        searchable=_opt_bool(data, "searchable", where),
        currency=_opt_str(data, "currency", where),
        decimals=_opt_int(data, "decimals", where),
        accept=_opt_str(data, "accept", where),
        max_size=_opt_int(data, "maxSize", where),
        multiple=_opt_bool(data, "multiple", where),
        feature_code=_opt_str(data, "featureCode", where) or None,
        required_roles=_roles(data, where),
    )


def parse_ui_schema(entity: str, raw: Any) -> UISchema:
    where = f"uiSchemas.{entity}"
    data = expect_mapping(raw, where)
    entity = _check_entity_name(entity, data, where)

    fields = []
    seen: set[str] = set()
    for i, entry in enumerate(expect_list(data.get("fields", []), f"{where}.fields")):
        field_def = parse_field(entry, f"{where}.fields[{i}]")
        if field_def.name in seen:
            raise ConfigurationError(f"duplicate field '{field_def.name}'", where)
        seen.add(field_def.name)
        fields.append(field_def)

    default_sort = None
    if data.get("defaultSort") is not None:
        sort_where = f"{where}.defaultSort"
        sort_data = expect_mapping(data["defaultSort"], sort_where)
        direction = _str(sort_data, "direction", sort_where, "asc")
        if direction not in SORT_DIRECTIONS:
            raise ConfigurationError(f"invalid direction '{direction}'", sort_where)
        default_sort = DefaultSort(
            field=_required_str(sort_data, "field", sort_where),
            direction=direction,
        )

    return UISchema(
        entity_name=entity,
        display_name=_str(data, "displayName", where, entity),
        display_name_plural=_str(data, "displayNamePlural", where, f"{entity}s"),
        primary_field=_str(data, "primaryField", where),
        fields=tuple(fields),
        default_sort=default_sort,
    )


# ---------------------------------------------------------------------------
# Form and list layouts
# ---------------------------------------------------------------------------


def parse_form_layout(entity: str, raw: Any) -> FormLayout:
    where = f"formLayouts.{entity}"
    data = expect_mapping(raw, where)
    entity = _check_entity_name(entity, data, where)

    sections = []
    for i, entry in enumerate(expect_list(data.get("sections", []), f"{where}.sections")):
        section_where = f"{where}.sections[{i}]"
        section = expect_mapping(entry, section_where)
        columns = _opt_int(section, "columns", section_where)
        if columns is not None and columns < 1:
            raise ConfigurationError("'columns' must be at least 1", section_where)
        sections.append(
            FormSection(
                id=_required_str(section, "id", section_where),
                title=_str(section, "title", section_where),
                description=_opt_str(section, "description", section_where),
                collapsible=_opt_bool(section, "collapsible", section_where),
                default_collapsed=_opt_bool(section, "defaultCollapsed", section_where),
                visible=_condition(section.get("visible"), f"{section_where}.visible"),
                columns=columns,
                fields=_str_list(section, "fields", section_where),
            )
        )

    return FormLayout(
        entity_name=entity,
        sections=tuple(sections),
        submit_label=_opt_str(data, "submitLabel", where),
        cancel_label=_opt_str(data, "cancelLabel", where),
        show_delete=_opt_bool(data, "showDelete", where),
        delete_confirm_message=_opt_str(data, "deleteConfirmMessage", where),
    )


def _parse_action(raw: Any, where: str) -> ListAction:
    data = expect_mapping(raw, where)
    return ListAction(
        id=_required_str(data, "id", where),
        label=_str(data, "label", where),
        icon=_str(data, "icon", where),
        type=_str(data, "type", where, "secondary"),
        requires_selection=_opt_bool(data, "requiresSelection", where),
        confirm_message=_opt_str(data, "confirmMessage", where),
        feature_code=_opt_str(data, "featureCode", where) or None,
        required_roles=_roles(data, where),
    )


def parse_list_layout(entity: str, raw: Any) -> ListLayout:
    where = f"listLayouts.{entity}"
    data = expect_mapping(raw, where)
    entity = _check_entity_name(entity, data, where)
    defaults = ListLayout(entity_name=entity)

    columns = []
    for i, entry in enumerate(expect_list(data.get("columns", []), f"{where}.columns")):
        column_where = f"{where}.columns[{i}]"
        column = expect_mapping(entry, column_where)
        width = column.get("width")
        if width is not None and (isinstance(width, bool) or not isinstance(width, (str, int))):
            raise ConfigurationError("'width' must be a string or integer", column_where)
        columns.append(
            ListColumn(
                field=_required_str(column, "field", column_where),
                width=width,
                align=_opt_str(column, "align", column_where),
                format=_opt_str(column, "format", column_where),
                sortable=_opt_bool(column, "sortable", column_where),
                hidden=_opt_bool(column, "hidden", column_where),
            )
        )

    actions_data = expect_mapping(data.get("actions") or {}, f"{where}.actions")
    groups = {}
    for group in ("row", "bulk", "header"):
        group_where = f"{where}.actions.{group}"
        groups[group] = tuple(
            _parse_action(entry, f"{group_where}[{i}]")
            for i, entry in enumerate(expect_list(actions_data.get(group, []), group_where))
        )

    filters = []
    for i, entry in enumerate(expect_list(data.get("filters", []), f"{where}.filters")):
        filter_where = f"{where}.filters[{i}]"
        filter_data = expect_mapping(entry, filter_where)
        filters.append(
            ListFilter(
                field=_required_str(filter_data, "field", filter_where),
                type=_str(filter_data, "type", filter_where, "text"),
                options=_options(filter_data.get("options"), f"{filter_where}.options"),
            )
        )

    page_size = _opt_int(data, "defaultPageSize", where)
    if page_size is not None and page_size < 1:
        raise ConfigurationError("'defaultPageSize' must be at least 1", where)

    page_size_options = defaults.page_size_options
    if data.get("pageSizeOptions") is not None:
        raw_options = expect_list(data["pageSizeOptions"], f"{where}.pageSizeOptions")
        if not all(isinstance(n, int) and not isinstance(n, bool) and n > 0 for n in raw_options):
            raise ConfigurationError("'pageSizeOptions' must be positive integers", where)
        page_size_options = tuple(raw_options)

    show_search = _opt_bool(data, "showSearch", where)

    return ListLayout(
        entity_name=entity,
        columns=tuple(columns),
        actions=ListActions(**groups),
        filters=tuple(filters),
        default_page_size=page_size if page_size is not None else defaults.default_page_size,
        page_size_options=page_size_options,
        show_search=show_search if show_search is not None else defaults.show_search,
        search_fields=_str_list(data, "searchFields", where),
    )
