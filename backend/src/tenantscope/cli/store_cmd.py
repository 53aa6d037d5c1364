"""Store CLI commands: seed hierarchy rows and manage overrides."""

import json
from pathlib import Path

import click

from tenantscope.config import AppSettings
from tenantscope.store import OVERRIDE_SECTIONS, create_store
from tenantscope.store.sql import OWNER_TYPES, SqlConfigurationStore


def _open_store() -> SqlConfigurationStore:
    return create_store(AppSettings.from_env().database)


@click.group()
def store():
    """Configuration store commands."""
    pass


@store.command("add-tenant")
@click.argument("tenant_id")
@click.argument("name")
@click.option("--inactive", is_flag=True, default=False)
def add_tenant(tenant_id: str, name: str, inactive: bool):
    """Create or replace a tenant."""
    db = _open_store()
    db.upsert_tenant(tenant_id, name, is_active=not inactive)
    db.dispose()
    click.echo(f"Saved tenant {tenant_id}")


@store.command("add-company")
@click.argument("company_id")
@click.argument("tenant_id")
@click.argument("name")
@click.option("--company-type", default=None, help="Business type, e.g. CLINIC.")
@click.option("--clinic-type", default=None, help="Clinic specialty, e.g. AUDIOLOGY.")
@click.option("--inactive", is_flag=True, default=False)
def add_company(
    company_id: str,
    tenant_id: str,
    name: str,
    company_type: str | None,
    clinic_type: str | None,
    inactive: bool,
):
    """Create or replace a company under a tenant."""
    db = _open_store()
    db.upsert_company(company_id, tenant_id, name, company_type, clinic_type, is_active=not inactive)
    db.dispose()
    click.echo(f"Saved company {company_id}")


@store.command("add-branch")
@click.argument("branch_id")
@click.argument("company_id")
@click.argument("name")
@click.option("--inactive", is_flag=True, default=False)
def add_branch(branch_id: str, company_id: str, name: str, inactive: bool):
    """Create or replace a branch under a company."""
    db = _open_store()
    db.upsert_branch(branch_id, company_id, name, is_active=not inactive)
    db.dispose()
    click.echo(f"Saved branch {branch_id}")


@store.command("set-override")
@click.argument("owner_type", type=click.Choice(OWNER_TYPES))
@click.argument("owner_id")
@click.argument("section", type=click.Choice(OVERRIDE_SECTIONS))
@click.argument("body_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
def set_override(owner_type: str, owner_id: str, section: str, body_file: Path):
    """Store one section override from a JSON file."""
    body = body_file.read_text()
    try:
        json.loads(body)
    except json.JSONDecodeError as e:
        click.echo(click.style(f"Error: {body_file} is not valid JSON ({e.msg})", fg="red"), err=True)
        raise SystemExit(1)

    db = _open_store()
    db.put_override(owner_type, owner_id, section, body)
    db.dispose()
    click.echo(f"Saved {section} override for {owner_type} {owner_id}")


@store.command("delete-override")
@click.argument("owner_type", type=click.Choice(OWNER_TYPES))
@click.argument("owner_id")
@click.argument("section", type=click.Choice(OVERRIDE_SECTIONS))
def delete_override(owner_type: str, owner_id: str, section: str):
    """Remove one section override."""
    db = _open_store()
    deleted = db.delete_override(owner_type, owner_id, section)
    db.dispose()
    if not deleted:
        click.echo(f"No {section} override for {owner_type} {owner_id}")
        raise SystemExit(1)
    click.echo(f"Deleted {section} override for {owner_type} {owner_id}")
