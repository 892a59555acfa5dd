"""Pytest fixtures for mantra miner tests."""

from __future__ import annotations

import os
import tempfile
from pathlib import Path
from typing import TYPE_CHECKING

import pytest
from hypothesis import Phase, Verbosity, settings

from mantra_miner.buffer import RecitationBuffer
from mantra_miner.debug_log import clear_log_buffer, teardown_debug_logging
from mantra_miner.miner import MantraMiner

_TEST_BASE_DIR = Path(tempfile.mkdtemp(prefix="mantra-miner-tests-"))
os.environ["MANTRA_MINER_CONFIG_DIR"] = str(_TEST_BASE_DIR / "config")

if TYPE_CHECKING:
    from collections.abc import Callable, Generator, Iterable


settings.register_profile(
    "ci",
    max_examples=100,
    deadline=None,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
)
settings.register_profile(
    "dev",
    max_examples=20,
    deadline=500,
)
settings.register_profile(
    "debug",
    max_examples=10,
    verbosity=Verbosity.verbose,
    deadline=None,
)
settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "dev"))


def pytest_collection_modifyitems(config: pytest.Config, items: list[pytest.Item]) -> None:
    """Mark everything under tests/unit/ as a unit test."""
    del config
    for item in items:
        path = str(getattr(item, "path", item.fspath)).replace("\\", "/")
        if "tests/unit/" in path and not item.get_closest_marker("unit"):
            item.add_marker(pytest.mark.unit)


@pytest.fixture(autouse=True)
def _clean_debug_log() -> Generator[None, None, None]:
    """Keep captured logs and handlers from leaking between tests."""
    yield
    teardown_debug_logging()
    clear_log_buffer()


@pytest.fixture
def make_miner() -> Generator[Callable[..., MantraMiner], None, None]:
    """Create miners that are always stopped at teardown."""
    miners: list[MantraMiner] = []

    def _make(
        units: Iterable[str],
        *,
        interval: float = 0.01,
        repeats: int | None = 1,
        buffer: RecitationBuffer | None = None,
    ) -> MantraMiner:
        miner = MantraMiner(units, buffer, interval=interval, repeats=repeats)
        miners.append(miner)
        return miner

    yield _make

    for miner in miners:
        miner.stop()
