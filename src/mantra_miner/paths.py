"""XDG-compliant path helpers for mantra miner files."""

from __future__ import annotations

import os
from pathlib import Path

from platformdirs import user_config_dir


def get_config_dir() -> Path:
    """Get the config directory (config.toml)."""
    override = os.environ.get("MANTRA_MINER_CONFIG_DIR")
    if override:
        return Path(override)
    return Path(user_config_dir("mantra-miner"))


def get_config_path() -> Path:
    """Get the path to the main config file."""
    return get_config_dir() / "config.toml"
