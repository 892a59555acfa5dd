"""Background worker that recites a sequence of units into a buffer.

The miner owns one daemon thread. Once per interval the thread appends the next
unit of its sequence to the shared buffer. A pass over the whole sequence is one
recitation; after the configured number of recitations the miner stops on its
own, or it keeps going until ``stop()`` when repeats is ``None``.

All state (state, cursor, recitation count) is guarded by a single condition
variable. The worker holds it while ticking and releases it while waiting, so a
control call never observes a half-finished tick. ``stop()`` signals the worker
and joins it; the worker wakes immediately, so the join lasts at most one tick.
"""

from __future__ import annotations

import itertools
import logging
import math
import threading
import time
from datetime import timedelta
from enum import StrEnum
from typing import TYPE_CHECKING, Self

from mantra_miner.buffer import RecitationBuffer
from mantra_miner.errors import AlreadyStartedError, ConfigurationError, InvalidTransitionError
from mantra_miner.limits import DEFAULT_RATE_MS, SHUTDOWN_TIMEOUT
from mantra_miner.sequence import build_sequence, build_session_sequence

if TYPE_CHECKING:
    from collections.abc import Iterable
    from types import TracebackType

    from mantra_miner.config import MinerConfig
    from mantra_miner.sequence import Sequence

logger = logging.getLogger(__name__)

_miner_ids = itertools.count(1)


class WorkerState(StrEnum):
    """Lifecycle of a miner. STOPPED is terminal."""

    IDLE = "IDLE"
    RUNNING = "RUNNING"
    PAUSED = "PAUSED"
    STOPPED = "STOPPED"


def _interval_seconds(interval: float | timedelta) -> float:
    seconds = interval.total_seconds() if isinstance(interval, timedelta) else float(interval)
    if not math.isfinite(seconds) or seconds <= 0:
        raise ConfigurationError(f"Interval must be a positive finite number, got {seconds}s")
    return seconds


def _validate_repeats(repeats: int | None) -> int | None:
    if repeats is not None and repeats < 1:
        raise ConfigurationError(f"Repeats must be at least 1 or None, got {repeats}")
    return repeats


class MantraMiner:
    """Recites a fixed sequence of units into a buffer from a background thread."""

    def __init__(
        self,
        sequence: Iterable[str],
        buffer: RecitationBuffer | None = None,
        *,
        interval: float | timedelta = DEFAULT_RATE_MS / 1000,
        repeats: int | None = 1,
    ) -> None:
        """Create an idle miner.

        Args:
            sequence: Units of one recitation, in order.
            buffer: Buffer to recite into; a fresh one is created when omitted.
            interval: Pause between two units, in seconds or as a timedelta.
            repeats: Number of recitations before stopping, ``None`` for no limit.

        Raises:
            ConfigurationError: On an empty sequence, non-positive interval or repeats < 1.
        """
        self._sequence: Sequence = tuple(sequence)
        if not self._sequence:
            raise ConfigurationError("Sequence must contain at least one unit")
        self._buffer = buffer if buffer is not None else RecitationBuffer()
        self._interval = _interval_seconds(interval)
        self._repeats = _validate_repeats(repeats)

        self._name = f"mantra-miner-{next(_miner_ids)}"
        self._condition = threading.Condition()
        self._state = WorkerState.IDLE
        self._cursor = 0
        self._count = 0
        self._next_tick = 0.0
        self._thread: threading.Thread | None = None

    @classmethod
    def from_config(cls, config: MinerConfig, buffer: RecitationBuffer | None = None) -> Self:
        """Build a miner for a full session configuration."""
        if buffer is None:
            buffer = RecitationBuffer(config.separator)
        return cls(
            build_session_sequence(config),
            buffer,
            interval=config.rate_ms / 1000,
            repeats=config.repeats,
        )

    @property
    def sequence(self) -> Sequence:
        return self._sequence

    @property
    def buffer(self) -> RecitationBuffer:
        return self._buffer

    @property
    def interval(self) -> float:
        return self._interval

    @property
    def repeats(self) -> int | None:
        return self._repeats

    @property
    def state(self) -> WorkerState:
        with self._condition:
            return self._state

    @property
    def cursor(self) -> int:
        """Index of the next unit to recite."""
        with self._condition:
            return self._cursor

    @property
    def count(self) -> int:
        """Number of completed recitations."""
        with self._condition:
            return self._count

    @property
    def is_running(self) -> bool:
        """True while the worker is ticking or paused."""
        return self.state in (WorkerState.RUNNING, WorkerState.PAUSED)

    def start(self) -> None:
        """Start reciting. The first unit is appended one interval from now.

        Raises:
            AlreadyStartedError: If the miner is running or paused.
            InvalidTransitionError: If the miner is stopped; miners are single use.
        """
        with self._condition:
            if self._state in (WorkerState.RUNNING, WorkerState.PAUSED):
                raise AlreadyStartedError(self._state)
            if self._state is WorkerState.STOPPED:
                raise InvalidTransitionError("start", self._state)

            self._state = WorkerState.RUNNING
            self._next_tick = time.monotonic() + self._interval
            self._thread = threading.Thread(target=self._run, name=self._name, daemon=True)
            self._thread.start()
        logger.debug(
            "%s started: %d units, interval=%.3fs, repeats=%s",
            self._name,
            len(self._sequence),
            self._interval,
            self._repeats,
        )

    def pause(self) -> None:
        """Suspend ticking, keeping the cursor where it is."""
        with self._condition:
            if self._state is not WorkerState.RUNNING:
                raise InvalidTransitionError("pause", self._state)
            self._state = WorkerState.PAUSED
            self._condition.notify_all()
            cursor = self._cursor
        logger.debug("%s paused at cursor %d", self._name, cursor)

    def resume(self) -> None:
        """Resume a paused miner. The next unit follows one full interval later."""
        with self._condition:
            if self._state is not WorkerState.PAUSED:
                raise InvalidTransitionError("resume", self._state)
            self._state = WorkerState.RUNNING
            self._next_tick = time.monotonic() + self._interval
            self._condition.notify_all()
        logger.debug("%s resumed", self._name)

    def stop(self, timeout: float = SHUTDOWN_TIMEOUT) -> None:
        """Stop the miner and join its thread.

        Safe to call repeatedly, from any thread, and after the miner finished on
        its own. Nothing is appended to the buffer after this returns.
        """
        with self._condition:
            if self._state is not WorkerState.STOPPED:
                previous = self._state
                self._state = WorkerState.STOPPED
                self._condition.notify_all()
                logger.debug("%s stopped from %s", self._name, previous)
            thread = self._thread

        if thread is None or thread is threading.current_thread():
            return
        thread.join(timeout)
        if thread.is_alive():
            logger.warning("%s did not exit within %.1fs", self._name, timeout)

    def wait(self, timeout: float | None = None) -> bool:
        """Block until the miner is stopped. Returns False on timeout."""
        with self._condition:
            return self._condition.wait_for(lambda: self._state is WorkerState.STOPPED, timeout)

    def __enter__(self) -> Self:
        self.start()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.stop()

    def __repr__(self) -> str:
        return (
            f"MantraMiner(name={self._name!r}, state={self.state.value}, "
            f"cursor={self.cursor}/{len(self._sequence)}, count={self.count})"
        )

    def _run(self) -> None:
        try:
            with self._condition:
                while self._wait_for_tick():
                    if not self._tick():
                        break
        except Exception:
            logger.exception("%s worker failed", self._name)
            raise
        finally:
            with self._condition:
                self._state = WorkerState.STOPPED
                self._condition.notify_all()

    def _wait_for_tick(self) -> bool:
        """Wait with the condition held until the next tick is due.

        Returns False once the miner is stopped.
        """
        while True:
            if self._state is WorkerState.STOPPED:
                return False
            if self._state is WorkerState.PAUSED:
                self._condition.wait()
                continue
            remaining = self._next_tick - time.monotonic()
            if remaining <= 0:
                return True
            self._condition.wait(remaining)

    def _tick(self) -> bool:
        """Recite one unit. Returns False when the last recitation is complete."""
        if self._cursor == len(self._sequence):
            self._cursor = 0
        self._buffer.append(self._sequence[self._cursor])
        self._cursor += 1

        now = time.monotonic()
        self._next_tick += self._interval
        if self._next_tick <= now:
            # Fell behind; do not burst to catch up.
            self._next_tick = now + self._interval

        if self._cursor < len(self._sequence):
            return True
        self._count += 1
        if self._repeats is not None and self._count >= self._repeats:
            self._state = WorkerState.STOPPED
            self._condition.notify_all()
            logger.info("%s finished after %d recitation(s)", self._name, self._count)
            return False
        return True


def create_miner(
    mantra_text: str,
    preparation_text: str | None = None,
    conclusion_text: str | None = None,
    repeat: bool | int = False,
    interval: float | timedelta = DEFAULT_RATE_MS / 1000,
) -> tuple[MantraMiner, RecitationBuffer]:
    """Build an idle miner and the buffer it recites into.

    Args:
        mantra_text: The mantra; must not be empty.
        preparation_text: Recited before the mantra on every recitation.
        conclusion_text: Recited after the mantra on every recitation.
        repeat: ``False`` recites the mantra once, ``True`` wraps around the
            whole sequence until stopped, and a positive number recites the
            mantra that many times between preparation and conclusion.
        interval: Pause between two units.

    Raises:
        ConfigurationError: On an empty mantra or an invalid repeat/interval.
    """
    repeats: int | None = None if repeat is True else 1
    mantra_repeats = 1 if isinstance(repeat, bool) else repeat

    sequence = build_sequence(mantra_text, preparation_text, conclusion_text, mantra_repeats)
    buffer = RecitationBuffer()
    miner = MantraMiner(sequence, buffer, interval=interval, repeats=repeats)
    return miner, buffer


__all__ = ["MantraMiner", "WorkerState", "create_miner"]
