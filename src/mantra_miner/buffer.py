"""Thread-safe text buffer the miner recites into."""

from __future__ import annotations

import threading

from mantra_miner.limits import DEFAULT_SEPARATOR


class RecitationBuffer:
    """Append-only text store shared between one writer and any number of readers.

    Appends are atomic per unit: a concurrent ``snapshot()`` sees the contents
    either before or after a unit was added, never part of it.
    """

    def __init__(self, separator: str = DEFAULT_SEPARATOR) -> None:
        self._separator = separator
        self._lock = threading.Lock()
        self._text = ""
        self._units = 0

    @property
    def separator(self) -> str:
        return self._separator

    def append(self, unit: str) -> None:
        """Append one unit, separated from the previous one."""
        with self._lock:
            if self._units:
                self._text = f"{self._text}{self._separator}{unit}"
            else:
                self._text = unit
            self._units += 1

    def snapshot(self) -> str:
        """Return the current contents."""
        with self._lock:
            return self._text

    def reset(self) -> None:
        """Clear the contents. Meant for the host, between sessions."""
        with self._lock:
            self._text = ""
            self._units = 0

    def __len__(self) -> int:
        with self._lock:
            return self._units

    def __repr__(self) -> str:
        return f"RecitationBuffer(units={len(self)})"


__all__ = ["RecitationBuffer"]
