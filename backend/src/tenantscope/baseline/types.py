"""Platform baseline types."""

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from tenantscope.store.types import OverrideSet

TEMPLATE_KINDS = ("companyType", "clinicType")


@dataclass(frozen=True)
class BusinessTemplate:
    """Configuration contributed by a company type or clinic type.

    Folded into the platform level, ahead of tenant overrides, for companies
    of the matching type.
    """

    kind: str  # "companyType" | "clinicType"
    code: str  # e.g. "CLINIC", "AUDIOLOGY"
    overrides: OverrideSet

    @property
    def key(self) -> str:
        return f"{self.kind}:{self.code}"


@dataclass(frozen=True)
class PlatformBaseline:
    """Versioned platform defaults, loaded once per process.

    Holds validated raw sections in the same camelCase shape as override
    rows. Nothing reads them except through the merge functions, which copy
    before combining.
    """

    version: str
    sections: Mapping[str, Any] = field(default_factory=dict)
    templates: Mapping[str, BusinessTemplate] = field(default_factory=dict)

    def section(self, name: str) -> Any:
        return self.sections.get(name)

    def template_for(self, kind: str, code: str | None) -> BusinessTemplate | None:
        if not code:
            return None
        return self.templates.get(f"{kind}:{code}")
