"""Precedence merges over raw camelCase configuration.

Each function combines an outer level (``base``) with the next inner level
(``override``) and returns a new structure; inputs are never mutated.
Applied in order platform < tenant < company, the last writer wins per key.

Two conventions for ``None``:

* In settings bags, terminology, branding, locale settings, and role
  permissions a ``None`` override value means "not specified" and keeps the
  base value.
* Inside entity definitions (schema fields, sections, columns, actions) an
  explicit ``None`` clears the inherited attribute, so an override can switch
  a select field from static options to a lookup endpoint.
"""

import copy
from collections.abc import Callable, Mapping
from typing import Any

from tenantscope.context.parsing import expect_list, expect_mapping, normalize_features
from tenantscope.errors import ConfigurationError

MergeFn = Callable[[Any, Any], Any]


def merge_settings(base: Mapping[str, Any] | None, override: Mapping[str, Any] | None) -> dict[str, Any]:
    """Shallow per-key merge: override keys replace base keys, others survive.

    Never a whole-object replace. A tenant overriding one key of a settings
    bag keeps every other key it did not name.
    """
    result = copy.deepcopy(dict(base or {}))
    for key, value in (override or {}).items():
        if value is None:
            continue
        result[key] = copy.deepcopy(value)
    return result


def merge_keyed(base: Any, override: Any) -> dict[str, Any]:
    """Last-writer-wins at the leaf; used for terminology, branding, settings."""
    return merge_settings(
        expect_mapping(base or {}, "base"),
        expect_mapping(override, "override"),
    )


def merge_features(base: Any, override: Any) -> dict[str, dict[str, Any]]:
    """Merge feature maps per feature code.

    ``enabled`` is replaced when the override names it. ``settings`` are
    combined with merge_settings. A feature the base does not know starts
    disabled unless the override enables it.
    """
    result = copy.deepcopy(normalize_features(base or {}))
    for code, entry in normalize_features(override).items():
        current = result.get(code, {"enabled": False})
        merged: dict[str, Any] = {"enabled": entry.get("enabled", current.get("enabled", False))}
        settings = merge_settings(current.get("settings"), entry.get("settings"))
        if settings:
            merged["settings"] = settings
        result[code] = merged
    return result


def merge_role_permissions(base: Any, override: Any) -> dict[str, Any]:
    """Replace the permission list of each role the override names."""
    return merge_settings(
        expect_mapping(base or {}, "rolePermissions"),
        expect_mapping(override, "rolePermissions"),
    )


# ---------------------------------------------------------------------------
# Keyed lists
# ---------------------------------------------------------------------------


def _merge_entry(base: Mapping[str, Any], override: Mapping[str, Any]) -> dict[str, Any]:
    """Shallow merge where an explicit None removes the inherited key."""
    result = copy.deepcopy(dict(base))
    for key, value in override.items():
        if value is None:
            result.pop(key, None)
        else:
            result[key] = copy.deepcopy(value)
    return result


def merge_by_key(
    base: list[Any] | None,
    override: Any,
    key: str,
    where: str,
    merge_item: MergeFn = _merge_entry,
) -> list[dict[str, Any]]:
    """Merge two lists of objects matched on ``key``.

    Base order is preserved; entries only in the override are appended.
    """
    result = [copy.deepcopy(dict(item)) for item in (base or [])]
    positions = {item.get(key): i for i, item in enumerate(result)}
    for i, raw in enumerate(expect_list(override, where)):
        item = expect_mapping(raw, f"{where}[{i}]")
        item_key = item.get(key)
        if not isinstance(item_key, str) or not item_key:
            raise ConfigurationError(f"'{key}' is required", f"{where}[{i}]")
        if item_key in positions:
            index = positions[item_key]
            result[index] = merge_item(result[index], item)
        else:
            positions[item_key] = len(result)
            result.append(_merge_entry({}, item))
    return result


# ---------------------------------------------------------------------------
# Navigation
# ---------------------------------------------------------------------------


def _merge_nav_item(base: Mapping[str, Any], override: Mapping[str, Any]) -> dict[str, Any]:
    result = _merge_entry(base, {k: v for k, v in override.items() if k not in ("children", "parent")})
    if override.get("children") is not None:
        result["children"] = merge_by_key(
            base.get("children"),
            override["children"],
            "id",
            f"navigation({base.get('id')}).children",
            _merge_nav_item,
        )
    return result


def _find_children(items: list[dict[str, Any]], parent_id: str) -> list[dict[str, Any]] | None:
    """Return the (mutable) children list of the node ``parent_id``, at any depth."""
    for item in items:
        if item.get("id") == parent_id:
            if item.get("children") is None:
                item["children"] = []
            return expect_list(item["children"], f"navigation({parent_id}).children")
        found = _find_children(item.get("children") or [], parent_id)
        if found is not None:
            return found
    return None


def merge_navigation(base: Any, override: Any) -> list[dict[str, Any]]:
    """Merge navigation trees by node id.

    Override entries at the top level match top-level nodes; an entry with a
    ``parent`` id is merged into that node's children instead, which lets a
    company add a node anywhere in the tree. ``hidden: true`` removes a node
    during pruning. Matching nodes merge attributes and recurse into children.

    Top-level entries are merged first, so a ``parent`` may name a node the
    same override adds.
    """
    base_items = [copy.deepcopy(dict(item)) for item in expect_list(base or [], "navigation")]
    top_level = []
    nested = []
    for i, raw in enumerate(expect_list(override, "navigation")):
        item = expect_mapping(raw, f"navigation[{i}]")
        if item.get("parent") is None:
            top_level.append(item)
        else:
            nested.append((i, item))

    result = merge_by_key(base_items, top_level, "id", "navigation", _merge_nav_item)
    for i, item in nested:
        parent_id = item["parent"]
        siblings = _find_children(result, parent_id)
        if siblings is None:
            raise ConfigurationError(f"unknown parent '{parent_id}'", f"navigation[{i}]")
        siblings[:] = merge_by_key(siblings, [item], "id", f"navigation({parent_id}).children", _merge_nav_item)
        for child in siblings:
            child.pop("parent", None)
    return result


# ---------------------------------------------------------------------------
# Entity definitions
# ---------------------------------------------------------------------------


def _merge_field(base: Mapping[str, Any], override: Mapping[str, Any]) -> dict[str, Any]:
    result = _merge_entry(base, {k: v for k, v in override.items() if k != "validation"})
    if "validation" in override:
        if override["validation"] is None:
            result.pop("validation", None)
        else:
            result["validation"] = _merge_entry(
                expect_mapping(base.get("validation") or {}, "validation"),
                expect_mapping(override["validation"], "validation"),
            )
    return result


def merge_ui_schema(base: Any, override: Any, entity: str = "") -> dict[str, Any]:
    """Merge a UI schema; fields are matched by name."""
    where = f"uiSchemas.{entity}"
    base = expect_mapping(base or {}, where)
    override = expect_mapping(override, where)
    result = _merge_entry(base, {k: v for k, v in override.items() if k != "fields"})
    if override.get("fields") is not None:
        result["fields"] = merge_by_key(
            base.get("fields"), override["fields"], "name", f"{where}.fields", _merge_field
        )
    return result


def merge_form_layout(base: Any, override: Any, entity: str = "") -> dict[str, Any]:
    """Merge a form layout; sections are matched by id."""
    where = f"formLayouts.{entity}"
    base = expect_mapping(base or {}, where)
    override = expect_mapping(override, where)
    result = _merge_entry(base, {k: v for k, v in override.items() if k != "sections"})
    if override.get("sections") is not None:
        result["sections"] = merge_by_key(
            base.get("sections"), override["sections"], "id", f"{where}.sections"
        )
    return result


def merge_list_layout(base: Any, override: Any, entity: str = "") -> dict[str, Any]:
    """Merge a list layout.

    Columns and filters are matched by field, actions by id within each of
    the row, bulk, and header groups.
    """
    where = f"listLayouts.{entity}"
    base = expect_mapping(base or {}, where)
    override = expect_mapping(override, where)
    keyed = ("columns", "filters", "actions")
    result = _merge_entry(base, {k: v for k, v in override.items() if k not in keyed})

    for name in ("columns", "filters"):
        if override.get(name) is not None:
            result[name] = merge_by_key(base.get(name), override[name], "field", f"{where}.{name}")

    if override.get("actions") is not None:
        base_actions = expect_mapping(base.get("actions") or {}, f"{where}.actions")
        override_actions = expect_mapping(override["actions"], f"{where}.actions")
        actions = copy.deepcopy(dict(base_actions))
        for group in ("row", "bulk", "header"):
            if override_actions.get(group) is not None:
                actions[group] = merge_by_key(
                    base_actions.get(group),
                    override_actions[group],
                    "id",
                    f"{where}.actions.{group}",
                )
        result["actions"] = actions
    return result
