"""Unit tests for debug logging."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from mantra_miner.debug_log import (
    PACKAGE_LOGGER,
    DebugLogHandler,
    clear_log_buffer,
    export_logs_to_file,
    get_buffer_generation,
    log_buffer,
    setup_debug_logging,
    teardown_debug_logging,
)
from mantra_miner.limits import MAX_LOG_MESSAGE_LENGTH

if TYPE_CHECKING:
    from pathlib import Path

logger = logging.getLogger(f"{PACKAGE_LOGGER}.tests")


class TestLogTruncation:
    """Tests for log message truncation."""

    def test_log_truncates_oversized_messages(self):
        """Very large log messages should be truncated to prevent memory bloat."""
        setup_debug_logging()
        clear_log_buffer()

        logger.info("x" * 10000)

        assert len(log_buffer) == 1
        logged_message = log_buffer[0].message
        assert len(logged_message) <= MAX_LOG_MESSAGE_LENGTH + 20
        assert "... [truncated]" in logged_message

    def test_log_truncates_at_exact_boundary(self):
        """Messages exactly at the limit should not be truncated."""
        setup_debug_logging()
        clear_log_buffer()
        exact_message = "y" * MAX_LOG_MESSAGE_LENGTH

        logger.info(exact_message)

        assert log_buffer[0].message == exact_message


class TestSetup:
    def test_setup_is_idempotent(self):
        setup_debug_logging()
        setup_debug_logging()

        handlers = [
            handler
            for handler in logging.getLogger(PACKAGE_LOGGER).handlers
            if isinstance(handler, DebugLogHandler)
        ]
        assert len(handlers) == 1

    def test_teardown_restores_the_host_level(self):
        package_logger = logging.getLogger(PACKAGE_LOGGER)
        package_logger.setLevel(logging.WARNING)
        try:
            setup_debug_logging()
            setup_debug_logging(logging.INFO)
            assert package_logger.level == logging.INFO

            teardown_debug_logging()

            assert package_logger.level == logging.WARNING
        finally:
            package_logger.setLevel(logging.NOTSET)

    def test_captures_package_records_only(self):
        setup_debug_logging()
        clear_log_buffer()

        logger.warning("inside")
        logging.getLogger("elsewhere").warning("outside")

        assert [entry.message for entry in log_buffer] == ["inside"]
        assert log_buffer[0].group == "WARNING"
        assert log_buffer[0].name == f"{PACKAGE_LOGGER}.tests"

    def test_nothing_captured_before_setup(self):
        clear_log_buffer()

        logger.warning("not captured")

        assert len(log_buffer) == 0


class TestBufferManagement:
    def test_clear_bumps_generation(self):
        before = get_buffer_generation()

        clear_log_buffer()

        assert get_buffer_generation() == before + 1
        assert len(log_buffer) == 0

    def test_export_writes_header_and_entries(self, tmp_path: Path):
        setup_debug_logging()
        clear_log_buffer()
        logger.info("first")
        logger.error("second")

        target = tmp_path / "logs" / "debug.log"
        written = export_logs_to_file(target)

        content = target.read_text(encoding="utf-8")
        assert written == 2
        assert content.startswith("# Mantra Miner Debug Log Export\n")
        assert "# Total entries: 2" in content
        assert f"[INFO] {PACKAGE_LOGGER}.tests: first" in content
        assert f"[ERROR] {PACKAGE_LOGGER}.tests: second" in content
