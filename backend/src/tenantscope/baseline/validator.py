"""
baseline/validator.py: JSON Schema validation for platform baseline YAML.

Validates baseline.yaml, per-entity schema files, and business-type template
files against the JSON Schemas shipped beside this module.

Usage:
    from tenantscope.baseline.validator import validate_baseline_dir

    issues = validate_baseline_dir(Path("metadata/baseline"))
    for issue in issues:
        print(issue)
"""
from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml
from jsonschema import Draft202012Validator
from jsonschema.exceptions import ValidationError
from referencing import Registry, Resource
from referencing.jsonschema import DRAFT202012

logger = logging.getLogger(__name__)

_SCHEMAS_DIR = Path(__file__).parent / "schemas"

BASELINE_FILE = "baseline.yaml"

# Map subdirectory name → schema filename
_SUBDIR_SCHEMA: dict[str, str] = {
    "schemas": "entity.schema.json",
    "templates": "template.schema.json",
}

_SCHEMA_NAMES = (
    "_defs.schema.json",
    "baseline.schema.json",
    "entity.schema.json",
    "template.schema.json",
)


@dataclass
class ValidationIssue:
    """A single validation finding for a baseline YAML file."""

    file: Path
    message: str
    path: str = ""           # location within the document, e.g. "baseline/navigation[2]"
    severity: str = "error"  # "error" | "warning"

    def __str__(self) -> str:
        loc = f" at {self.path}" if self.path else ""
        return f"[{self.severity.upper()}] {self.file}{loc}: {self.message}"


def _load_schema(name: str) -> dict[str, Any]:
    with (_SCHEMAS_DIR / name).open() as fh:
        return json.load(fh)


def load_registry() -> Registry:
    """Build a Registry holding every baseline schema, keyed by ``$id``."""
    resources = []
    for name in _SCHEMA_NAMES:
        schema = _load_schema(name)
        resources.append((schema["$id"], Resource(contents=schema, specification=DRAFT202012)))
    return Registry().with_resources(resources)


def _json_path(error: ValidationError) -> str:
    parts = []
    for p in error.absolute_path:
        parts.append(f"[{p}]" if isinstance(p, int) else str(p))
    return "/".join(parts).replace("/[", "[")


def validate_document(
    doc: Any,
    schema_name: str,
    source: Path,
    *,
    registry: Registry | None = None,
) -> list[ValidationIssue]:
    """Validate an already-parsed document against the named schema."""
    if registry is None:
        registry = load_registry()
    validator = Draft202012Validator(_load_schema(schema_name), registry=registry)
    return [
        ValidationIssue(file=source, message=error.message, path=_json_path(error))
        for error in sorted(validator.iter_errors(doc), key=_json_path)
    ]


def read_yaml(yaml_path: Path) -> tuple[Any, list[ValidationIssue]]:
    """Parse a YAML file, returning the document or the issues that prevented it."""
    try:
        with yaml_path.open() as fh:
            raw = yaml.safe_load(fh)
    except yaml.YAMLError as exc:
        return None, [ValidationIssue(file=yaml_path, message=f"YAML parse error: {exc}")]
    if raw is None:
        return None, [ValidationIssue(file=yaml_path, message="File is empty or contains only whitespace")]
    return raw, []


def validate_yaml_file(
    yaml_path: Path,
    schema_name: str,
    *,
    registry: Registry | None = None,
) -> list[ValidationIssue]:
    """
    Validate a single YAML file against the named schema.

    Args:
        yaml_path:   Path to the YAML file to validate.
        schema_name: Filename of the schema (e.g. ``"entity.schema.json"``).
        registry:    Pre-built schema registry. Built automatically if omitted.

    Returns:
        A list of :class:`ValidationIssue` objects (empty on success).
    """
    doc, issues = read_yaml(yaml_path)
    if issues:
        return issues
    return validate_document(doc, schema_name, yaml_path, registry=registry)


def validate_baseline_dir(
    baseline_dir: Path,
    *,
    strict: bool = False,
) -> list[ValidationIssue]:
    """
    Validate every YAML file under *baseline_dir*.

    Checks ``baseline.yaml`` (required), then each file in ``schemas/`` and
    ``templates/`` against the matching JSON Schema.

    Args:
        baseline_dir: Root baseline directory.
        strict:       If ``True``, warnings are escalated to errors.

    Returns:
        A flat list of :class:`ValidationIssue` objects. Empty means valid.
    """
    if not baseline_dir.is_dir():
        return [ValidationIssue(
            file=baseline_dir,
            message=f"Baseline directory does not exist: {baseline_dir}",
        )]

    try:
        registry = load_registry()
    except (FileNotFoundError, json.JSONDecodeError) as exc:
        return [ValidationIssue(file=_SCHEMAS_DIR, message=f"Failed to load JSON Schema files: {exc}")]

    all_issues: list[ValidationIssue] = []

    baseline_file = baseline_dir / BASELINE_FILE
    if baseline_file.is_file():
        all_issues.extend(validate_yaml_file(baseline_file, "baseline.schema.json", registry=registry))
    else:
        all_issues.append(ValidationIssue(file=baseline_file, message=f"{BASELINE_FILE} is missing"))

    for subdir, schema_name in _SUBDIR_SCHEMA.items():
        target = baseline_dir / subdir
        if not target.is_dir():
            continue
        for yaml_file in sorted(target.glob("*.yaml")):
            all_issues.extend(validate_yaml_file(yaml_file, schema_name, registry=registry))

    if strict:
        for issue in all_issues:
            if issue.severity == "warning":
                issue.severity = "error"

    logger.debug("Validated baseline at %s: %d issue(s)", baseline_dir, len(all_issues))
    return all_issues
