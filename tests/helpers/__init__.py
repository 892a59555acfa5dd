"""Test helpers package."""

from tests.helpers.config import write_test_config
from tests.helpers.wait import ci_timeout, wait_until

__all__ = ["ci_timeout", "wait_until", "write_test_config"]
