"""Logging configuration for the harness."""

import logging
import sys
from typing import Any


def setup_logging(debug: bool = False) -> None:
    """Configure harness logging.

    Installs a single stdout handler on the root logger. Scenario output is
    therefore visible in pytest's captured log sections.

    Args:
        debug: Log at DEBUG instead of INFO
    """
    log_level = logging.DEBUG if debug else logging.INFO

    formatter = logging.Formatter(
        fmt="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    # Remove existing handlers to avoid duplicates
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(log_level)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    # Reduce noise from third-party libraries
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("asyncio").setLevel(logging.WARNING)

    logging.getLogger("harness").setLevel(log_level)


def get_logger(name: str) -> logging.Logger:
    """Get a logger instance for a specific module.

    Args:
        name: The name of the module (typically __name__)

    Returns:
        A logger under the ``harness`` namespace

    Usage:
        logger = get_logger(__name__)
        logger.info("Creating fixture invoices")
    """
    if name == "harness" or name.startswith("harness."):
        return logging.getLogger(name)
    return logging.getLogger(f"harness.{name}")


class LoggerAdapter(logging.LoggerAdapter):
    """Logger adapter that adds context to log messages.

    Usage:
        logger = LoggerAdapter(get_logger(__name__), {"invoice_id": "inv-1"})
        logger.info("Waiting for row")  # Logs: "Waiting for row - invoice_id=inv-1"
    """

    def process(self, msg: str, kwargs: Any) -> tuple[str, Any]:
        """Process the log message to include extra context."""
        extra = " - ".join(f"{k}={v}" for k, v in self.extra.items())
        return f"{msg} - {extra}" if extra else msg, kwargs
