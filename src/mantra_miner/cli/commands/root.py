"""Root CLI command registration."""

from __future__ import annotations

import click

from mantra_miner.version import get_mantra_miner_version

from .config import config_cmd
from .recite import recite


@click.group(invoke_without_command=True)
@click.option("--version", is_flag=True, help="Show version and exit")
@click.pass_context
def cli(ctx: click.Context, version: bool) -> None:
    """Recite mantras into an in-memory buffer in the background."""
    if version:
        click.echo(f"mantra-miner {get_mantra_miner_version()}")
        ctx.exit(0)

    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


cli.add_command(recite)
cli.add_command(config_cmd)
