"""Referential checks between UI schemas and the layouts that point into them.

Form sections, list columns, filters, and search fields name schema fields
by string. Nothing in the data model enforces that those names exist, so the
check is run on the shipped baseline at startup, by the CLI, and on a
resolved context on demand.
"""

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from tenantscope.context.types import FormLayout, ListLayout, UISchema


@dataclass
class IntegrityIssue:
    """A single dangling or inconsistent reference."""

    entity: str
    location: str
    message: str
    severity: str = "error"  # "error" | "warning"

    def __str__(self) -> str:
        return f"[{self.severity.upper()}] {self.entity} {self.location}: {self.message}"

    def to_dict(self) -> dict[str, Any]:
        return {
            "entity": self.entity,
            "location": self.location,
            "message": self.message,
            "severity": self.severity,
        }


def check_schema(schema: UISchema) -> list[IntegrityIssue]:
    issues = []
    names = schema.field_names()
    entity = schema.entity_name
    if schema.primary_field and schema.primary_field not in names:
        issues.append(IntegrityIssue(
            entity, "primaryField", f"unknown field '{schema.primary_field}'",
        ))
    if schema.default_sort and schema.default_sort.field not in names:
        issues.append(IntegrityIssue(
            entity, "defaultSort", f"unknown field '{schema.default_sort.field}'",
        ))
    for field_def in schema.fields:
        if field_def.type == "select" and field_def.options is None and not field_def.lookup_endpoint:
            issues.append(IntegrityIssue(
                entity,
                f"fields.{field_def.name}",
                "select field has neither options nor a lookupEndpoint",
                severity="warning",
            ))
    return issues


def check_form_layout(layout: FormLayout, schema: UISchema | None) -> list[IntegrityIssue]:
    entity = layout.entity_name
    if schema is None:
        return [IntegrityIssue(entity, "formLayout", "no UI schema for entity")]

    issues = []
    names = schema.field_names()
    placed: dict[str, str] = {}
    for section in layout.sections:
        for field_name in section.fields:
            location = f"sections.{section.id}"
            if field_name not in names:
                issues.append(IntegrityIssue(entity, location, f"unknown field '{field_name}'"))
            elif field_name in placed:
                issues.append(IntegrityIssue(
                    entity,
                    location,
                    f"field '{field_name}' already placed in section '{placed[field_name]}'",
                    severity="warning",
                ))
            else:
                placed[field_name] = section.id
    return issues


def check_list_layout(layout: ListLayout, schema: UISchema | None) -> list[IntegrityIssue]:
    entity = layout.entity_name
    if schema is None:
        return [IntegrityIssue(entity, "listLayout", "no UI schema for entity")]

    issues = []
    names = schema.field_names()
    for column in layout.columns:
        if column.field not in names:
            issues.append(IntegrityIssue(entity, "columns", f"unknown field '{column.field}'"))
    for list_filter in layout.filters:
        if list_filter.field not in names:
            issues.append(IntegrityIssue(entity, "filters", f"unknown field '{list_filter.field}'"))
    for field_name in layout.search_fields:
        if field_name not in names:
            issues.append(IntegrityIssue(entity, "searchFields", f"unknown field '{field_name}'"))
    if layout.default_page_size not in layout.page_size_options:
        issues.append(IntegrityIssue(
            entity,
            "defaultPageSize",
            f"{layout.default_page_size} is not one of pageSizeOptions",
            severity="warning",
        ))
    return issues


def check_layout_integrity(
    ui_schemas: Mapping[str, UISchema],
    form_layouts: Mapping[str, FormLayout],
    list_layouts: Mapping[str, ListLayout],
) -> list[IntegrityIssue]:
    """Check every schema and layout; an empty list means all references resolve."""
    issues: list[IntegrityIssue] = []
    for schema in ui_schemas.values():
        issues.extend(check_schema(schema))
    for entity, layout in form_layouts.items():
        issues.extend(check_form_layout(layout, ui_schemas.get(entity)))
    for entity, layout in list_layouts.items():
        issues.extend(check_list_layout(layout, ui_schemas.get(entity)))
    return issues
