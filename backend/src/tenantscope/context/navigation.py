"""Role- and feature-filtered navigation trees."""

from collections.abc import Collection, Mapping
from dataclasses import replace

from tenantscope.context.gating import check_gates
from tenantscope.context.types import FeatureConfig, NavItem


def is_nav_item_visible(
    item: NavItem,
    features: Mapping[str, FeatureConfig],
    roles: Collection[str],
) -> bool:
    """Check a node's own gates; visibility is not inherited from its parent."""
    if item.hidden:
        return False
    return check_gates(item.feature_code, item.required_roles, features, roles) is None


def should_keep_parent(item: NavItem, surviving_children: tuple[NavItem, ...]) -> bool:
    """Decide whether a node that passed its own gates stays in the tree.

    A node that never had children is kept. A node whose children were all
    pruned is kept only if it has a route of its own to navigate to;
    otherwise it would render as an empty group and is dropped.
    """
    if not item.children or surviving_children:
        return True
    return bool(item.route)


def prune_navigation(
    items: tuple[NavItem, ...],
    features: Mapping[str, FeatureConfig],
    roles: Collection[str],
) -> tuple[NavItem, ...]:
    """Return a new tree holding only the nodes this caller may see.

    Siblings are ordered by sort_order; ties keep their configured order.
    """
    result = []
    for item in sorted(items, key=lambda i: i.sort_order):
        if not is_nav_item_visible(item, features, roles):
            continue
        children = prune_navigation(item.children, features, roles)
        if not should_keep_parent(item, children):
            continue
        result.append(replace(item, children=children))
    return tuple(result)
