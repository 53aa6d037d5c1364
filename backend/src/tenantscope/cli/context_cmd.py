"""Context CLI commands: resolve and check a tenant context."""

import asyncio
import json
from pathlib import Path

import click

from tenantscope.baseline import BaselineLoader
from tenantscope.config import AppSettings
from tenantscope.context.integrity import check_layout_integrity
from tenantscope.context.service import TenantContextResolver
from tenantscope.context.types import TenantContext
from tenantscope.errors import BaselineError, NotFoundError, UnexpectedError
from tenantscope.store import create_store


def _scope_options(func):
    """Options shared by every command that resolves a context."""
    options = [
        click.option("--tenant", "tenant_id", required=True, help="Tenant ID."),
        click.option("--company", "company_id", required=True, help="Company ID."),
        click.option("--branch", "branch_id", required=True, help="Branch ID."),
        click.option("--user", "user_id", default="cli", show_default=True, help="User ID."),
        click.option("--user-name", default="", help="User display name."),
        click.option("--role", "roles", multiple=True, help="Role held by the user (repeatable)."),
        click.option(
            "--baseline-path",
            default=None,
            type=click.Path(path_type=Path),
            help="Baseline directory (default: metadata/baseline).",
        ),
    ]
    for option in reversed(options):
        func = option(func)
    return func


def _resolve(
    tenant_id: str,
    company_id: str,
    branch_id: str,
    user_id: str,
    user_name: str,
    roles: tuple[str, ...],
    baseline_path: Path | None,
) -> TenantContext:
    settings = AppSettings.from_env()
    try:
        platform = BaselineLoader(baseline_path or settings.baseline_path).load()
    except BaselineError as e:
        click.echo(click.style(f"Error: {e}", fg="red"), err=True)
        raise SystemExit(1)

    store = create_store(settings.database, platform)
    try:
        resolver = TenantContextResolver(store, platform)
        return asyncio.run(resolver.resolve(tenant_id, company_id, branch_id, user_id, user_name, list(roles)))
    except NotFoundError as e:
        click.echo(click.style(f"Not found: {e}", fg="red"), err=True)
        raise SystemExit(2)
    except UnexpectedError as e:
        click.echo(click.style(f"Error: {e}", fg="red"), err=True)
        raise SystemExit(1)
    finally:
        store.dispose()


@click.group()
def context():
    """Tenant context commands."""
    pass


@context.command()
@_scope_options
def resolve(**kwargs):
    """Resolve a tenant context and print it as JSON."""
    ctx = _resolve(**kwargs)
    click.echo(json.dumps(ctx.to_dict(), indent=2, ensure_ascii=False))


@context.command()
@_scope_options
def check(**kwargs):
    """Check layout references in a resolved tenant context."""
    ctx = _resolve(**kwargs)
    issues = check_layout_integrity(ctx.ui_schemas, ctx.form_layouts, ctx.list_layouts)
    for issue in issues:
        colour = "red" if issue.severity == "error" else "yellow"
        click.echo(click.style(str(issue), fg=colour))

    errors = [i for i in issues if i.severity == "error"]
    if errors:
        click.echo(click.style(f"\n{len(errors)} integrity error(s) found", fg="red", bold=True))
        raise SystemExit(1)
    click.echo(click.style("All layout references resolve.", fg="green", bold=True))
