"""Shared package version helpers."""

from __future__ import annotations

from functools import lru_cache
from importlib.metadata import PackageNotFoundError, version


@lru_cache(maxsize=1)
def get_mantra_miner_version() -> str:
    """Return installed mantra-miner version, or 'dev' when package metadata is unavailable."""
    try:
        return version("mantra-miner")
    except PackageNotFoundError:
        return "dev"


__all__ = ["get_mantra_miner_version"]
