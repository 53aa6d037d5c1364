"""Baseline CLI commands: validate."""

from pathlib import Path

import click

from tenantscope.baseline import BaselineLoader, check_baseline_integrity, validate_baseline_dir
from tenantscope.config import AppSettings
from tenantscope.errors import BaselineError


@click.group()
def baseline():
    """Platform baseline commands."""
    pass


@baseline.command()
@click.option(
    "--strict",
    is_flag=True,
    default=False,
    help="Treat warnings as errors.",
)
@click.option(
    "--path",
    "baseline_path",
    default=None,
    type=click.Path(path_type=Path),
    help="Baseline directory (default: metadata/baseline or TENANTSCOPE_BASELINE_PATH).",
)
def validate(strict: bool, baseline_path: Path | None):
    """Validate baseline YAML against JSON Schemas and check layout references."""
    baseline_path = baseline_path or AppSettings.from_env().baseline_path
    if not baseline_path.exists():
        click.echo(f"Error: Baseline directory not found at {baseline_path}", err=True)
        raise SystemExit(1)

    # ── Schema (JSON Schema) validation ─────────────────────────────────────
    schema_issues = validate_baseline_dir(baseline_path, strict=strict)
    for issue in schema_issues:
        colour = "red" if issue.severity == "error" else "yellow"
        click.echo(click.style(str(issue), fg=colour))

    schema_errors = [i for i in schema_issues if i.severity == "error"]
    if schema_errors:
        click.echo(click.style(f"\n{len(schema_errors)} schema error(s) found", fg="red", bold=True))
        raise SystemExit(1)

    # ── Semantic (loader) validation ─────────────────────────────────────────
    try:
        platform = BaselineLoader(baseline_path).load()
    except BaselineError as e:
        click.echo(click.style(f"\nSemantic validation failed: {e}", fg="red"), err=True)
        raise SystemExit(1)

    # ── Layout integrity ─────────────────────────────────────────────────────
    issues = check_baseline_integrity(platform)
    if strict:
        for issue in issues:
            issue.severity = "error"
    for issue in issues:
        colour = "red" if issue.severity == "error" else "yellow"
        click.echo(click.style(str(issue), fg=colour))

    errors = [i for i in issues if i.severity == "error"]
    warnings = [i for i in issues if i.severity == "warning"]
    if errors:
        click.echo(
            click.style(
                f"\n{len(errors)} integrity error(s) found"
                + (f", {len(warnings)} warning(s)" if warnings else ""),
                fg="red",
                bold=True,
            )
        )
        raise SystemExit(1)
    if warnings:
        click.echo(click.style(f"{len(warnings)} warning(s) found.", fg="yellow"))

    entities = sorted(platform.section("uiSchemas") or {})
    click.echo(f"\nBaseline {platform.version}: {len(entities)} entities, {len(platform.templates)} templates")
    for name in entities:
        click.echo(f"  ✓ {name}")
    for key in sorted(platform.templates):
        click.echo(f"  ✓ template {key}")

    click.echo(click.style("\nBaseline is valid.", fg="green", bold=True))
