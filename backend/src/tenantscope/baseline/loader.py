"""Load the platform baseline from YAML files."""

import logging
from pathlib import Path
from typing import Any

from tenantscope.baseline.types import TEMPLATE_KINDS, BusinessTemplate, PlatformBaseline
from tenantscope.baseline.validator import (
    BASELINE_FILE,
    ValidationIssue,
    load_registry,
    read_yaml,
    validate_document,
)
from tenantscope.context.integrity import IntegrityIssue, check_layout_integrity
from tenantscope.context.parsing import (
    normalize_features,
    parse_branding,
    parse_form_layout,
    parse_list_layout,
    parse_nav_items,
    parse_role_permissions,
    parse_settings,
    parse_terminology,
    parse_ui_schema,
)
from tenantscope.errors import BaselineError, ConfigurationError
from tenantscope.store.types import OverrideSet

logger = logging.getLogger(__name__)

# Top-level sections of baseline.yaml and templates, with their semantic parsers
_SECTION_PARSERS = {
    "features": normalize_features,
    "settings": parse_settings,
    "branding": parse_branding,
    "terminology": parse_terminology,
    "rolePermissions": parse_role_permissions,
    "navigation": parse_nav_items,
}

_ENTITY_PARSERS = {
    "uiSchemas": parse_ui_schema,
    "formLayouts": parse_form_layout,
    "listLayouts": parse_list_layout,
}

# Entity document key → baseline section it lands in
_ENTITY_DOCUMENT_KEYS = {
    "uiSchema": "uiSchemas",
    "formLayout": "formLayouts",
    "listLayout": "listLayouts",
}


def _check_sections(sections: dict[str, Any], source: Path) -> None:
    """Run the semantic parsers so a shipped baseline never fails at request time."""
    try:
        for name, parser in _SECTION_PARSERS.items():
            if sections.get(name) is not None:
                parser(sections[name])
        for name, parser in _ENTITY_PARSERS.items():
            for entity, body in (sections.get(name) or {}).items():
                parser(entity, body)
    except ConfigurationError as e:
        raise BaselineError(f"{source}: {e}") from e


def _raise_for_issues(issues: list[ValidationIssue]) -> None:
    errors = [issue for issue in issues if issue.severity == "error"]
    if errors:
        summary = "; ".join(str(issue) for issue in errors[:5])
        more = f" (and {len(errors) - 5} more)" if len(errors) > 5 else ""
        raise BaselineError(f"Invalid baseline: {summary}{more}")


class BaselineLoader:
    """Loads the platform baseline from a ``metadata/baseline`` directory.

    Layout::

        baseline.yaml        version, features, settings, branding,
                             terminology, rolePermissions, navigation
        schemas/*.yaml       one entity each: uiSchema, formLayout, listLayout
        templates/*.yaml     business-type templates (companyType/clinicType)
    """

    def __init__(self, baseline_path: Path):
        self.baseline_path = baseline_path
        self._registry = load_registry()

    def load(self) -> PlatformBaseline:
        """Read, validate, and parse every baseline file.

        Raises:
            BaselineError: If baseline.yaml is missing or any file is invalid
        """
        baseline_file = self.baseline_path / BASELINE_FILE
        if not baseline_file.is_file():
            raise BaselineError(f"Baseline not found: {baseline_file}")

        data = self._read(baseline_file, "baseline.schema.json")["baseline"]
        version = str(data["version"])
        sections = {name: data[name] for name in _SECTION_PARSERS if name in data}
        sections.update(self._load_entities())
        _check_sections(sections, baseline_file)

        templates = self._load_templates()
        logger.info(
            "Loaded baseline %s: %d entities, %d templates",
            version,
            len(sections.get("uiSchemas", {})),
            len(templates),
        )
        return PlatformBaseline(version=version, sections=sections, templates=templates)

    def _read(self, yaml_file: Path, schema_name: str) -> dict[str, Any]:
        doc, issues = read_yaml(yaml_file)
        if not issues:
            issues = validate_document(doc, schema_name, yaml_file, registry=self._registry)
        _raise_for_issues(issues)
        return doc

    def _load_entities(self) -> dict[str, dict[str, Any]]:
        entities: dict[str, dict[str, Any]] = {name: {} for name in _ENTITY_PARSERS}
        schemas_dir = self.baseline_path / "schemas"
        if not schemas_dir.is_dir():
            return entities

        for yaml_file in sorted(schemas_dir.glob("*.yaml")):
            doc = self._read(yaml_file, "entity.schema.json")
            entity = doc["entity"]
            if entity in entities["uiSchemas"]:
                raise BaselineError(f"{yaml_file}: entity '{entity}' is defined twice")
            for key, section in _ENTITY_DOCUMENT_KEYS.items():
                if doc.get(key) is not None:
                    entities[section][entity] = doc[key]
        return entities

    def _load_templates(self) -> dict[str, BusinessTemplate]:
        templates: dict[str, BusinessTemplate] = {}
        templates_dir = self.baseline_path / "templates"
        if not templates_dir.is_dir():
            return templates

        for yaml_file in sorted(templates_dir.glob("*.yaml")):
            data = self._read(yaml_file, "template.schema.json")["template"]
            template = self._parse_template(data, yaml_file)
            if template.key in templates:
                raise BaselineError(f"{yaml_file}: template '{template.key}' is defined twice")
            templates[template.key] = template
        return templates

    def _parse_template(self, data: dict[str, Any], source: Path) -> BusinessTemplate:
        kind = data["kind"]
        if kind not in TEMPLATE_KINDS:
            raise BaselineError(f"{source}: unknown template kind '{kind}'")
        sections = {
            name: body
            for name, body in data.items()
            if name in _SECTION_PARSERS or name in _ENTITY_PARSERS
        }
        _check_sections(sections, source)
        return BusinessTemplate(
            kind=kind,
            code=data["code"],
            overrides=OverrideSet(label=f"template {kind}:{data['code']}", sections=sections),
        )


def check_baseline_integrity(baseline: PlatformBaseline) -> list[IntegrityIssue]:
    """Referential check of the baseline's own schemas and layouts."""
    ui_schemas = {
        entity: parse_ui_schema(entity, body)
        for entity, body in (baseline.section("uiSchemas") or {}).items()
    }
    form_layouts = {
        entity: parse_form_layout(entity, body)
        for entity, body in (baseline.section("formLayouts") or {}).items()
    }
    list_layouts = {
        entity: parse_list_layout(entity, body)
        for entity, body in (baseline.section("listLayouts") or {}).items()
    }
    return check_layout_integrity(ui_schemas, form_layouts, list_layouts)
