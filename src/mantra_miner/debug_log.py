"""Debug log capture.

Records from the ``mantra_miner`` loggers are kept in a ring buffer so a host
can inspect or export them without the miner writing to stdout or stderr.
"""

from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path

from mantra_miner.limits import MAX_LOG_LINES, MAX_LOG_MESSAGE_LENGTH

PACKAGE_LOGGER = "mantra_miner"


@dataclass(slots=True)
class LogEntry:
    """A captured log entry."""

    group: str  # Level name (DEBUG, INFO, WARNING, ERROR, etc.)
    name: str
    message: str
    timestamp: float


# Global log buffer (ring buffer)
log_buffer: deque[LogEntry] = deque(maxlen=MAX_LOG_LINES)

# Track generation to detect buffer clears
_buffer_generation: int = 0


def _truncate(message: str) -> str:
    if len(message) > MAX_LOG_MESSAGE_LENGTH:
        return message[:MAX_LOG_MESSAGE_LENGTH] + "... [truncated]"
    return message


class DebugLogHandler(logging.Handler):
    """Logging handler that captures logs to the debug buffer."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            log_buffer.append(
                LogEntry(
                    group=record.levelname,
                    name=record.name,
                    message=_truncate(self.format(record)),
                    timestamp=record.created,
                )
            )
        except Exception:
            self.handleError(record)


_handler: DebugLogHandler | None = None
_previous_level: int = logging.NOTSET


def setup_debug_logging(level: int = logging.DEBUG) -> None:
    """Attach the capture handler to the package logger.

    This is idempotent - calling it again only updates the level. The level the
    logger had before the first call is restored by teardown_debug_logging().
    """
    global _handler, _previous_level

    logger = logging.getLogger(PACKAGE_LOGGER)
    if _handler is None:
        _previous_level = logger.level
    logger.setLevel(level)
    if _handler is not None:
        return

    _handler = DebugLogHandler()
    _handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(_handler)
    logger.debug("Debug logging initialized")


def teardown_debug_logging() -> None:
    """Detach the capture handler, if attached, and restore the logger level."""
    global _handler

    if _handler is None:
        return
    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.removeHandler(_handler)
    logger.setLevel(_previous_level)
    _handler = None


def clear_log_buffer() -> None:
    """Clear the log buffer."""
    global _buffer_generation
    log_buffer.clear()
    _buffer_generation += 1


def get_buffer_generation() -> int:
    """Get the current buffer generation (incremented on clear)."""
    return _buffer_generation


def export_logs_to_file(file_path: str | Path) -> int:
    """Export all logs from the buffer to a file.

    Args:
        file_path: Path to write the log file to

    Returns:
        Number of log entries written
    """
    output_path = Path(file_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    entries = list(log_buffer)

    with output_path.open("w", encoding="utf-8") as f:
        f.write("# Mantra Miner Debug Log Export\n")
        f.write(f"# Total entries: {len(entries)}\n")
        f.write(f"# Buffer generation: {_buffer_generation}\n")
        f.write("# " + "=" * 76 + "\n\n")

        for entry in entries:
            ts = datetime.fromtimestamp(entry.timestamp).strftime("%Y-%m-%d %H:%M:%S.%f")[:-3]
            f.write(f"{ts} [{entry.group}] {entry.name}: {entry.message}\n")

    return len(entries)
