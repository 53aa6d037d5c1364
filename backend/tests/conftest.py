"""Shared fixtures: a small platform baseline and a seeded SQLite store."""

from pathlib import Path

import pytest
import yaml

from tenantscope.baseline import BaselineLoader
from tenantscope.context.service import TenantContextResolver
from tenantscope.store.sql import SqlConfigurationStore

REPO_BASELINE = Path(__file__).parent.parent.parent / "metadata" / "baseline"

BASELINE = {
    "baseline": {
        "version": "test-1",
        "features": {
            "LabModule": {"enabled": True, "settings": {"maxRows": 100, "autoRelease": False}},
            "InventoryModule": {"enabled": True, "settings": {"lowStockThreshold": 10}},
            "PharmacyModule": False,
            "AudiologyModule": False,
        },
        "settings": {"currency": "AED", "language": "en"},
        "branding": {"primaryColor": "#111111"},
        "terminology": {"app.title": "Clinic"},
        "rolePermissions": {
            "Admin": "*",
            "Doctor": ["patients.view", "lab.order"],
            "Nurse": ["patients.view"],
        },
        "navigation": [
            {"id": "dashboard", "label": "Dashboard", "route": "/", "sortOrder": 0},
            {"id": "lab", "label": "Lab", "route": "/lab", "featureCode": "LabModule", "sortOrder": 20},
            {
                "id": "inventory",
                "label": "Inventory",
                "route": "/inventory",
                "featureCode": "InventoryModule",
                "requiredRoles": ["Admin"],
                "sortOrder": 30,
            },
            {
                "id": "clinical",
                "label": "Clinical",
                "sortOrder": 10,
                "children": [
                    {
                        "id": "pharmacy",
                        "label": "Pharmacy",
                        "route": "/pharmacy",
                        "featureCode": "PharmacyModule",
                    },
                ],
            },
            {
                "id": "admin",
                "label": "Admin",
                "route": "/admin",
                "requiredRoles": ["Admin"],
                "sortOrder": 90,
                "children": [
                    {"id": "users", "label": "Users", "route": "/admin/users", "sortOrder": 1},
                ],
            },
        ],
    }
}

PATIENT = {
    "entity": "patient",
    "uiSchema": {
        "primaryField": "name",
        "fields": [
            {"name": "name", "type": "text", "validation": {"required": True, "maxLength": 100}},
            {
                "name": "gender",
                "type": "select",
                "options": [{"value": "M", "label": "Male"}, {"value": "F", "label": "Female"}],
            },
            {"name": "balance", "type": "currency", "requiredRoles": ["Admin"]},
            {"name": "labNotes", "type": "textarea", "featureCode": "LabModule"},
        ],
    },
    "formLayout": {
        "sections": [
            {"id": "main", "title": "Main", "fields": ["name", "gender"]},
            {"id": "extra", "title": "Extra", "fields": ["balance", "labNotes"]},
        ],
    },
    "listLayout": {
        "columns": [{"field": "name"}, {"field": "gender"}],
        "actions": {
            "row": [
                {"id": "edit", "label": "Edit"},
                {"id": "delete", "label": "Delete", "requiredRoles": ["Admin"]},
            ],
            "header": [{"id": "add", "label": "Add"}],
        },
        "searchFields": ["name"],
    },
}

AUDIOLOGY_TEMPLATE = {
    "template": {
        "kind": "clinicType",
        "code": "AUDIOLOGY",
        "features": {"AudiologyModule": True},
        "terminology": {"app.title": "Hearing Clinic"},
        "navigation": [
            {
                "id": "audiology",
                "parent": "clinical",
                "label": "Audiology",
                "route": "/audiology",
                "featureCode": "AudiologyModule",
            },
        ],
    }
}


def write_baseline(
    root: Path,
    baseline: dict | None = None,
    entities: list[dict] | None = None,
    templates: list[dict] | None = None,
) -> Path:
    """Write a baseline directory under *root* and return its path."""
    baseline_dir = root / "baseline"
    (baseline_dir / "schemas").mkdir(parents=True)
    (baseline_dir / "templates").mkdir()
    (baseline_dir / "baseline.yaml").write_text(yaml.safe_dump(baseline or BASELINE, sort_keys=False))
    for doc in entities if entities is not None else [PATIENT]:
        (baseline_dir / "schemas" / f"{doc['entity']}.yaml").write_text(yaml.safe_dump(doc, sort_keys=False))
    for doc in templates if templates is not None else [AUDIOLOGY_TEMPLATE]:
        name = f"{doc['template']['kind']}_{doc['template']['code']}.yaml"
        (baseline_dir / "templates" / name).write_text(yaml.safe_dump(doc, sort_keys=False))
    return baseline_dir


@pytest.fixture
def baseline_dir(tmp_path):
    return write_baseline(tmp_path)


@pytest.fixture
def platform(baseline_dir):
    return BaselineLoader(baseline_dir).load()


@pytest.fixture
def store(tmp_path, platform):
    """SQLite store seeded with two tenants.

    t1 (Acme Health): c1/b1 and c2/b2
    t2 (Hear Well): c3/b3, an audiology clinic
    """
    db = SqlConfigurationStore(f"sqlite:///{tmp_path / 'test.db'}", platform)
    db.upsert_tenant("t1", "Acme Health")
    db.upsert_company("c1", "t1", "Acme Dubai", company_type="CLINIC")
    db.upsert_company("c2", "t1", "Acme Abu Dhabi", company_type="CLINIC")
    db.upsert_branch("b1", "c1", "Jumeirah")
    db.upsert_branch("b2", "c2", "Corniche")
    db.upsert_tenant("t2", "Hear Well")
    db.upsert_company("c3", "t2", "Hear Well Main", company_type="CLINIC", clinic_type="AUDIOLOGY")
    db.upsert_branch("b3", "c3", "Main Street")
    yield db
    db.dispose()


@pytest.fixture
def resolver(store, platform):
    return TenantContextResolver(store, platform)
