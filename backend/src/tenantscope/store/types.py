"""Records returned by configuration stores."""

import json
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from tenantscope.errors import ConfigurationError

# Sections an override row may carry, in the order the resolver applies them
OVERRIDE_SECTIONS = (
    "features",
    "settings",
    "branding",
    "terminology",
    "rolePermissions",
    "navigation",
    "uiSchemas",
    "formLayouts",
    "listLayouts",
)


@dataclass(frozen=True)
class Hierarchy:
    """Result of looking up a tenant/company/branch triple.

    Attributes:
        valid: All three exist, are active, and each belongs to its parent
        reason: Why the lookup failed (None when valid)
    """

    valid: bool
    tenant_name: str = ""
    company_name: str = ""
    branch_name: str = ""
    company_type: str | None = None
    clinic_type: str | None = None
    reason: str | None = None

    @classmethod
    def not_found(cls, reason: str) -> "Hierarchy":
        return cls(valid=False, reason=reason)


@dataclass(frozen=True)
class OverrideSet:
    """Configuration sections contributed by one precedence level.

    Section bodies are kept as stored (JSON text for database rows, decoded
    objects for YAML templates) and decoded on access, so one malformed
    section never poisons the others.
    """

    label: str
    sections: Mapping[str, Any] = field(default_factory=dict)

    def section(self, name: str) -> Any:
        """Return the decoded section body, or None when the level is silent.

        Raises:
            ConfigurationError: If the stored body cannot be decoded as JSON
        """
        raw = self.sections.get(name)
        if raw is None:
            return None
        if isinstance(raw, (str, bytes)):
            where = f"{self.label}.{name}"
            try:
                return json.loads(raw)
            except json.JSONDecodeError as e:
                raise ConfigurationError(f"invalid JSON ({e.msg})", where) from e
            except ValueError as e:
                # Undecodable bytes
                raise ConfigurationError(f"unreadable body ({e})", where) from e
            except RecursionError as e:
                raise ConfigurationError("body nested too deeply", where) from e
        return raw
