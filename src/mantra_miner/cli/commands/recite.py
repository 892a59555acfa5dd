"""Recite command: run one miner session in the foreground process."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import click

from mantra_miner.config import MinerConfig
from mantra_miner.debug_log import export_logs_to_file, setup_debug_logging, teardown_debug_logging
from mantra_miner.errors import MantraMinerError
from mantra_miner.miner import MantraMiner


def _resolve_config(
    config_path: Path | None,
    mantras: tuple[str, ...],
    overrides: dict[str, Any],
) -> MinerConfig:
    """Merge the config file (unless mantras are given inline) with CLI overrides."""
    if mantras and config_path is None:
        data: dict[str, Any] = {}
    else:
        data = MinerConfig.load(config_path).model_dump()

    if mantras:
        data["mantras"] = [{"text": text} for text in mantras]
    data.update(overrides)
    return MinerConfig.from_mapping(data, source="recite options")


@click.command()
@click.option(
    "--config",
    "config_path",
    type=click.Path(path_type=Path, dir_okay=False),
    default=None,
    help="Configuration file (defaults to the user config file)",
)
@click.option(
    "--mantra",
    "mantras",
    multiple=True,
    help="Mantra text; repeat for several. Replaces configured mantras.",
)
@click.option("--preparation", default=None, help="Text recited before the mantras")
@click.option("--conclusion", default=None, help="Text recited after the mantras")
@click.option("--repeats", type=click.IntRange(min=1), default=None, help="Recitations to run")
@click.option("--forever", is_flag=True, help="Recite until interrupted")
@click.option("--rate-ms", type=click.IntRange(min=1), default=None, help="Milliseconds per unit")
@click.option(
    "--duration",
    type=click.FloatRange(min=0, min_open=True),
    default=None,
    help="Stop after this many seconds",
)
@click.option(
    "--debug-log",
    type=click.Path(path_type=Path, dir_okay=False),
    default=None,
    help="Write captured debug logs to this file on exit",
)
def recite(
    config_path: Path | None,
    mantras: tuple[str, ...],
    preparation: str | None,
    conclusion: str | None,
    repeats: int | None,
    forever: bool,
    rate_ms: int | None,
    duration: float | None,
    debug_log: Path | None,
) -> None:
    """Recite mantras in the background and report how far the miner got."""
    if forever and repeats is not None:
        raise click.UsageError("--repeats and --forever are mutually exclusive")

    overrides: dict[str, Any] = {}
    if preparation is not None:
        overrides["preparation"] = preparation
    if conclusion is not None:
        overrides["conclusion"] = conclusion
    if repeats is not None:
        overrides["repeats"] = repeats
    if forever:
        overrides["repeats"] = None
    if rate_ms is not None:
        overrides["rate_ms"] = rate_ms

    try:
        config = _resolve_config(config_path, mantras, overrides)
        miner = MantraMiner.from_config(config)
    except MantraMinerError as exc:
        raise click.ClickException(str(exc)) from exc

    if debug_log is not None:
        setup_debug_logging()

    interrupted = False
    try:
        miner.start()
        finished = miner.wait(duration)
    except KeyboardInterrupt:
        finished = False
        interrupted = True
    finally:
        miner.stop()
        if debug_log is not None:
            written = export_logs_to_file(debug_log)
            teardown_debug_logging()
            click.echo(f"Wrote {written} log entries to {debug_log}", err=True)

    if finished:
        outcome = click.style("finished", fg="green")
    elif interrupted:
        outcome = click.style("interrupted", fg="yellow")
    else:
        outcome = click.style("stopped", fg="yellow")
    click.echo(
        f"Miner {outcome}: {miner.count} recitation(s) completed, "
        f"{len(miner.buffer)} unit(s) recited"
    )
