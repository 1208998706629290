"""Pytest configuration and shared fixtures.

Unit tests run offline. Scenarios under tests/e2e talk to a live environment
and are skipped unless ``--run-e2e`` is given or ``BILLPAY_RUN_E2E=1`` is set.
"""

import os

import pytest

from harness.core.config import HarnessSettings, load_settings


def pytest_addoption(parser):
    parser.addoption(
        "--run-e2e",
        action="store_true",
        default=False,
        help="Run scenarios against the live Utility Bill Pay environment",
    )


def _e2e_enabled(config) -> bool:
    return config.getoption("--run-e2e") or os.getenv("BILLPAY_RUN_E2E") == "1"


def pytest_collection_modifyitems(config, items):
    if _e2e_enabled(config):
        return
    skip_e2e = pytest.mark.skip(reason="live scenario: use --run-e2e or BILLPAY_RUN_E2E=1")
    for item in items:
        if "e2e" in item.keywords:
            item.add_marker(skip_e2e)


@pytest.fixture
def settings() -> HarnessSettings:
    """Settings for the target environment, read from BILLPAY_* variables."""
    return load_settings()
