"""Feature and role gates for navigation nodes, fields, and list actions.

Also evaluates conditional visibility rules against a form record, the same
rules the client applies while a form is being edited.
"""

from collections.abc import Callable, Collection, Mapping
from dataclasses import replace
from typing import Any

from tenantscope.context.types import (
    Access,
    ConditionalRule,
    FeatureConfig,
    FieldDefinition,
    ListAction,
    ListActions,
    ListLayout,
    UISchema,
)


def _is_empty(value: Any) -> bool:
    return value is None or value == "" or value == [] or value == {}


def _ordered(compare: Callable[[Any, Any], bool]) -> Callable[[Any, Any], bool]:
    """Wrap an ordering comparison so mismatched or missing values are False."""

    def check(actual: Any, expected: Any) -> bool:
        if actual is None or expected is None:
            return False
        try:
            return compare(actual, expected)
        except TypeError:
            return False

    return check


def _contains(actual: Any, expected: Any) -> bool:
    if isinstance(actual, str):
        return isinstance(expected, str) and expected in actual
    if isinstance(actual, (list, tuple, set)):
        return expected in actual
    return False


# Operator key -> check(actual, expected)
CONDITION_OPERATORS: dict[str, Callable[[Any, Any], bool]] = {
    "eq": lambda actual, expected: actual == expected,
    "neq": lambda actual, expected: actual != expected,
    "gt": _ordered(lambda a, b: a > b),
    "gte": _ordered(lambda a, b: a >= b),
    "lt": _ordered(lambda a, b: a < b),
    "lte": _ordered(lambda a, b: a <= b),
    "in": lambda actual, expected: isinstance(expected, list) and actual in expected,
    "notIn": lambda actual, expected: not (isinstance(expected, list) and actual in expected),
    "contains": _contains,
    "empty": lambda actual, expected: _is_empty(actual),
    "notEmpty": lambda actual, expected: not _is_empty(actual),
}


def evaluate_visibility(
    condition: bool | tuple[ConditionalRule, ...] | None,
    record: Mapping[str, Any],
) -> bool:
    """Evaluate a ``visible``/``disabled`` flag against a form record.

    ``None`` counts as unset and yields True. A rule list holds when every
    rule holds; a field missing from the record compares as None.
    """
    if condition is None:
        return True
    if isinstance(condition, bool):
        return condition
    return all(
        CONDITION_OPERATORS[rule.operator](record.get(rule.field), rule.value)
        for rule in condition
    )


def is_feature_enabled(features: Mapping[str, FeatureConfig], code: str) -> bool:
    """A feature absent from the merged map is disabled."""
    feature = features.get(code)
    return feature is not None and feature.enabled


def check_gates(
    feature_code: str | None,
    required_roles: Collection[str],
    features: Mapping[str, FeatureConfig],
    roles: Collection[str],
) -> str | None:
    """Return the reason an element is gated off, or None when it passes.

    The feature gate applies only when ``feature_code`` is set; the role gate
    applies only when ``required_roles`` is non-empty and requires at least
    one shared role.
    """
    if feature_code and not is_feature_enabled(features, feature_code):
        return f"Feature '{feature_code}' is disabled"
    if required_roles and not any(role in roles for role in required_roles):
        return f"Requires one of: {', '.join(sorted(required_roles))}"
    return None


def gate_field(
    field_def: FieldDefinition,
    features: Mapping[str, FeatureConfig],
    roles: Collection[str],
) -> FieldDefinition:
    reason = check_gates(field_def.feature_code, field_def.required_roles, features, roles)
    can_read = reason is None
    can_write = can_read and not field_def.read_only and field_def.disabled is not True
    return replace(field_def, access=Access(read=can_read, write=can_write, reason=reason))


def gate_action(
    action: ListAction,
    features: Mapping[str, FeatureConfig],
    roles: Collection[str],
) -> ListAction:
    reason = check_gates(action.feature_code, action.required_roles, features, roles)
    allowed = reason is None
    return replace(action, access=Access(read=allowed, write=allowed, reason=reason))


def gate_schema(
    schema: UISchema,
    features: Mapping[str, FeatureConfig],
    roles: Collection[str],
) -> UISchema:
    """Mark every field with its access flags.

    Fields are never removed: form and list layouts reference them by name.
    """
    return replace(
        schema,
        fields=tuple(gate_field(f, features, roles) for f in schema.fields),
    )


def gate_list_layout(
    layout: ListLayout,
    features: Mapping[str, FeatureConfig],
    roles: Collection[str],
) -> ListLayout:
    actions = layout.actions
    return replace(
        layout,
        actions=ListActions(
            row=tuple(gate_action(a, features, roles) for a in actions.row),
            bulk=tuple(gate_action(a, features, roles) for a in actions.bulk),
            header=tuple(gate_action(a, features, roles) for a in actions.header),
        ),
    )
