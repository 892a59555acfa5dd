"""Configuration file commands."""

from __future__ import annotations

from pathlib import Path

import click

from mantra_miner.config import MinerConfig, get_example_config
from mantra_miner.errors import MantraMinerError
from mantra_miner.paths import get_config_path

_path_option = click.option(
    "--path",
    type=click.Path(path_type=Path, dir_okay=False),
    default=None,
    help="Configuration file (defaults to the user config file)",
)


@click.group(name="config")
def config_cmd() -> None:
    """Manage the miner configuration file."""


@config_cmd.command()
@_path_option
@click.option("--force", is_flag=True, help="Overwrite an existing file")
def init(path: Path | None, force: bool) -> None:
    """Write an example configuration file."""
    target = path or get_config_path()
    if target.exists() and not force:
        raise click.ClickException(f"{target} already exists (use --force to overwrite)")

    get_example_config().save(target)
    click.secho(f"Wrote example configuration to {target}", fg="green")


@config_cmd.command()
@_path_option
def show(path: Path | None) -> None:
    """Print the effective configuration as TOML."""
    try:
        config = MinerConfig.load(path)
    except MantraMinerError as exc:
        raise click.ClickException(str(exc)) from exc
    click.echo(config.to_toml(), nl=False)
