"""CLI entry point for the mantra miner."""

from __future__ import annotations

from mantra_miner.cli.commands.root import cli


def main() -> None:
    cli()


if __name__ == "__main__":
    main()
