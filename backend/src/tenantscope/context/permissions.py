"""Expand a caller's roles into the permission codes they grant."""

from collections.abc import Collection, Mapping

WILDCARD = "*"


def known_permissions(role_permissions: Mapping[str, tuple[str, ...]]) -> frozenset[str]:
    """Every concrete permission mentioned by any role."""
    return frozenset(
        permission
        for permissions in role_permissions.values()
        for permission in permissions
        if permission != WILDCARD
    )


def resolve_permissions(
    role_permissions: Mapping[str, tuple[str, ...]],
    roles: Collection[str],
) -> frozenset[str]:
    """Union of the permissions of every role the caller holds.

    A role granted ``"*"`` receives every permission known to the merged
    role map. Roles missing from the map grant nothing.
    """
    granted: set[str] = set()
    for role in roles:
        permissions = role_permissions.get(role, ())
        if WILDCARD in permissions:
            return known_permissions(role_permissions)
        granted.update(permissions)
    return frozenset(granted)
