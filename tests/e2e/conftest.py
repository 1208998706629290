"""Fixtures for scenarios against the live environment.

Every scenario gets its own API client and, for UI scenarios, its own browser
context. Nothing is shared between tests, so they can run in any order.
"""

from typing import AsyncGenerator

import pytest
import pytest_asyncio
from playwright.async_api import Page, async_playwright

from harness.core.config import HarnessSettings
from harness.pages import CreateInvoiceModal, InvoiceListPage
from harness.services.api_client import BillPayClient


@pytest_asyncio.fixture(scope="function")
async def api_client(settings: HarnessSettings) -> AsyncGenerator[BillPayClient, None]:
    """API client for the configured environment."""
    async with BillPayClient.from_settings(settings) as client:
        yield client


@pytest_asyncio.fixture(scope="function")
async def page(settings: HarnessSettings) -> AsyncGenerator[Page, None]:
    """Fresh Chromium page whose relative URLs resolve against the UI."""
    async with async_playwright() as playwright:
        browser = await playwright.chromium.launch(
            headless=settings.headless,
            channel=settings.browser_channel,
        )
        context = await browser.new_context(
            base_url=settings.ui_base_url,
            ignore_https_errors=not settings.verify_tls,
        )
        try:
            yield await context.new_page()
        finally:
            await context.close()
            await browser.close()


@pytest_asyncio.fixture(scope="function")
async def invoice_list_page(page: Page, settings: HarnessSettings) -> InvoiceListPage:
    """Invoice list, already opened."""
    list_page = InvoiceListPage(
        page,
        base_url=settings.ui_base_url,
        timeout=settings.ui_wait_timeout,
        poll_interval=settings.poll_interval,
    )
    await list_page.goto()
    return list_page


@pytest.fixture
def create_modal(page: Page, settings: HarnessSettings) -> CreateInvoiceModal:
    return CreateInvoiceModal(page, timeout=settings.ui_wait_timeout)
