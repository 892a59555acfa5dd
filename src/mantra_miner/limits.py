"""Numeric limits and timeouts - no circular dependencies."""

from __future__ import annotations

DEFAULT_RATE_MS = 100
"""Pause between two units, in milliseconds."""

SHUTDOWN_TIMEOUT = 5.0
"""Upper bound in seconds for joining the worker thread on stop."""

DEFAULT_SEPARATOR = " "


MAX_LOG_MESSAGE_LENGTH = 4000
MAX_LOG_LINES = 2000
