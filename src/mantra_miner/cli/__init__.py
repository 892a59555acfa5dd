"""Command-line interface for the mantra miner."""
