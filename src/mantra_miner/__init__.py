"""Mantra Miner: recites mantras into an in-memory buffer from a background thread."""

from mantra_miner.buffer import RecitationBuffer
from mantra_miner.config import MantraConfig, MinerConfig
from mantra_miner.errors import (
    AlreadyStartedError,
    ConfigurationError,
    InvalidTransitionError,
    MantraMinerError,
)
from mantra_miner.miner import MantraMiner, WorkerState, create_miner
from mantra_miner.sequence import build_sequence, build_session_sequence
from mantra_miner.version import get_mantra_miner_version

__version__ = get_mantra_miner_version()

__all__ = [
    "AlreadyStartedError",
    "ConfigurationError",
    "InvalidTransitionError",
    "MantraConfig",
    "MantraMiner",
    "MantraMinerError",
    "MinerConfig",
    "RecitationBuffer",
    "WorkerState",
    "build_sequence",
    "build_session_sequence",
    "create_miner",
]
