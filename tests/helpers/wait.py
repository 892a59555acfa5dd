from __future__ import annotations

import os
import time
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Callable

# CI runners are significantly slower; scale timeouts accordingly.
_CI_MULTIPLIER: float = 5.0 if os.environ.get("CI") else 1.0


def _ci_timeout(timeout: float) -> float:
    return timeout * _CI_MULTIPLIER


def wait_until(
    predicate: Callable[[], bool],
    *,
    timeout: float = 5.0,
    check_interval: float = 0.005,
    description: str = "condition",
) -> None:
    """Poll a predicate from the calling thread until it becomes true."""
    timeout = _ci_timeout(timeout)
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        if predicate():
            return
        time.sleep(check_interval)
    raise TimeoutError(f"Timed out after {timeout}s waiting for {description}")


def ci_timeout(timeout: float) -> float:
    """Scale a timeout for slow CI runners."""
    return _ci_timeout(timeout)
