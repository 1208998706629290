"""Core harness modules."""

from harness.core.config import HarnessSettings, load_settings
from harness.core.logging import get_logger, setup_logging

__all__ = [
    "HarnessSettings",
    "load_settings",
    "get_logger",
    "setup_logging",
]
