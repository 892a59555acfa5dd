"""Exceptions raised by the mantra miner."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from mantra_miner.miner import WorkerState


class MantraMinerError(Exception):
    """Base class for all mantra miner errors."""


class ConfigurationError(MantraMinerError, ValueError):
    """Raised when a miner or sequence is built from invalid input."""


class InvalidTransitionError(MantraMinerError, RuntimeError):
    """Raised when a control call is not allowed in the worker's current state."""

    def __init__(self, action: str, state: WorkerState) -> None:
        self.action = action
        self.state = state
        super().__init__(f"Cannot {action} a miner in state {state.value}")


class AlreadyStartedError(InvalidTransitionError):
    """Raised when start() is called on a running or paused miner."""

    def __init__(self, state: WorkerState) -> None:
        super().__init__("start", state)


__all__ = [
    "AlreadyStartedError",
    "ConfigurationError",
    "InvalidTransitionError",
    "MantraMinerError",
]
