"""Harness configuration using Pydantic Settings."""

from typing import Any, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class HarnessSettings(BaseSettings):
    """Target environment and timing settings loaded from environment variables.

    Every value can be supplied as ``BILLPAY_<FIELD>`` (e.g.
    ``BILLPAY_API_BASE_URL``) or through a local ``.env`` file.
    """

    model_config = SettingsConfigDict(
        env_prefix="BILLPAY_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Targets
    api_base_url: str = "https://api-t6vbon.bunnyenv.com"
    ui_base_url: str = "https://ui-t6vbon.bunnyenv.com"

    # HTTP
    verify_tls: bool = False  # test environment uses self-signed certificates
    request_timeout: float = 30.0  # seconds

    # UI synchronization
    ui_wait_timeout: float = 30.0  # seconds
    poll_interval: float = 0.5  # seconds

    # Browser
    headless: bool = True
    browser_channel: Optional[str] = None  # e.g. "chrome" to use the system browser

    debug: bool = False


def load_settings(**overrides: Any) -> HarnessSettings:
    """Build a fresh settings object.

    Args:
        **overrides: Explicit values that win over the environment

    Returns:
        A new HarnessSettings instance. Nothing is cached, so separate calls
        may target separate environments.
    """
    return HarnessSettings(**overrides)
