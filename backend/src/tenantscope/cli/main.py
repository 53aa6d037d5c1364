"""Tenantscope CLI entry point."""

import logging
import os

import click


@click.group()
def cli():
    """Tenantscope: tenant context resolution CLI."""
    logging.basicConfig(
        level=os.environ.get("TENANTSCOPE_LOG_LEVEL", "warning").upper(),
        format="%(levelname)s %(name)s: %(message)s",
    )


# Register subcommand groups
from tenantscope.cli.baseline_cmd import baseline  # noqa: E402
from tenantscope.cli.context_cmd import context  # noqa: E402
from tenantscope.cli.serve_cmd import serve  # noqa: E402
from tenantscope.cli.store_cmd import store  # noqa: E402

cli.add_command(baseline)
cli.add_command(context)
cli.add_command(store)
cli.add_command(serve)
