"""Page object for the invoice list (dashboard) page."""

import re
from typing import Optional, Union

from playwright.async_api import Error as PlaywrightError
from playwright.async_api import Locator, Page, expect
from playwright.async_api import TimeoutError as PlaywrightTimeoutError

from harness.core.logging import LoggerAdapter, get_logger
from harness.models.invoice import InvoiceStatus
from harness.pages.constants import (
    ADD_INVOICE_BUTTON,
    ADD_INVOICE_TEST_ID,
    DEFAULT_WAIT_TIMEOUT,
    DUE_DATE_COLUMN_INDEX,
    INVOICE_ROW_TEST_ID_PREFIX,
    LOAD_MORE_BUTTON,
    LOAD_MORE_TEST_ID,
    PAGE_TITLE,
    POLL_INTERVAL,
    STATUS_FILTER_LABEL,
    STATUS_FILTER_TEST_ID,
    TOAST_TEST_ID,
)
from harness.pages.pagination import ListAppearanceWaiter, WaitOutcome

logger = get_logger(__name__)

PAY_BUTTON_TEXT = re.compile(r"pay", re.IGNORECASE)


class InvoiceListPage:
    """Invoice list with status filter, "Add Invoice", "Load more" and toasts.

    Timeouts are given in seconds and converted to Playwright's milliseconds.
    Checks that exceed their timeout return False instead of raising.
    """

    def __init__(
        self,
        page: Page,
        base_url: Optional[str] = None,
        timeout: float = DEFAULT_WAIT_TIMEOUT,
        poll_interval: float = POLL_INTERVAL,
    ):
        self.page = page
        self.base_url = base_url
        self.timeout = timeout
        self.poll_interval = poll_interval

        self.add_invoice_button = page.get_by_test_id(ADD_INVOICE_TEST_ID)
        self.status_filter = page.get_by_test_id(STATUS_FILTER_TEST_ID)
        self.invoice_rows = page.locator(
            '[data-testid^="invoice-row-"], tr[data-invoice-id], .invoice-item, table tr'
        ).filter(has_not_text=re.compile(r"Status|Amount"))
        self.page_heading = page.get_by_role("heading", level=1)
        self.empty_state = page.get_by_text(re.compile(r"no invoice|empty|no data", re.IGNORECASE))
        self._status_filter_label = page.get_by_text(STATUS_FILTER_LABEL)
        self._toast = page.get_by_test_id(TOAST_TEST_ID)
        self._load_more_button = page.get_by_test_id(LOAD_MORE_TEST_ID)

    @property
    def _timeout_ms(self) -> float:
        return self.timeout * 1000

    def _row(self, invoice_id: str) -> Locator:
        return self.page.get_by_test_id(f"{INVOICE_ROW_TEST_ID_PREFIX}{invoice_id}")

    def _pay_button(self, invoice_id: str) -> Locator:
        return self._row(invoice_id).locator("button", has_text=PAY_BUTTON_TEXT)

    async def _has_visible_text(self, locator: Locator, expected: str) -> bool:
        try:
            await locator.wait_for(state="visible", timeout=self._timeout_ms)
        except PlaywrightTimeoutError:
            return False
        text = await locator.text_content()
        return (text or "").strip() == expected

    # =========================================================================
    # Navigation and layout
    # =========================================================================

    async def goto(self) -> None:
        """Open the list and wait for the network to settle (best effort)."""
        url = f"{self.base_url.rstrip('/')}/" if self.base_url else "/"
        await self.page.goto(url)
        try:
            await self.page.wait_for_load_state("networkidle", timeout=self._timeout_ms)
        except PlaywrightTimeoutError:
            logger.debug("Network did not go idle; continuing with the loaded page")

    async def is_page_loaded(self) -> bool:
        """Check the top-level heading reads the application title."""
        return await self._has_visible_text(self.page_heading, PAGE_TITLE)

    async def has_invoices_or_empty_state(self) -> bool:
        return await self.invoice_rows.count() > 0 or await self.empty_state.count() > 0

    async def has_add_invoice_button(self) -> bool:
        return await self._has_visible_text(self.add_invoice_button, ADD_INVOICE_BUTTON)

    async def has_load_more_button(self) -> bool:
        return await self._has_visible_text(self._load_more_button, LOAD_MORE_BUTTON)

    async def has_status_filter(self) -> bool:
        """Check both the filter control and its label are visible."""
        label_visible = await self._status_filter_label.is_visible()
        filter_visible = await self.status_filter.is_visible()
        return label_visible and filter_visible

    # =========================================================================
    # Actions
    # =========================================================================

    async def click_add_invoice(self) -> None:
        await self.add_invoice_button.wait_for(state="visible", timeout=self._timeout_ms)
        await self.add_invoice_button.click()

    async def filter_by_status(self, status: Union[InvoiceStatus, str]) -> None:
        value = status.value if isinstance(status, InvoiceStatus) else status
        await self.status_filter.select_option(value)

    async def get_invoice_count(self) -> int:
        return await self.invoice_rows.count()

    async def click_pay_button_for_invoice(self, invoice_id: str) -> None:
        """Click the row's pay action. Does nothing if the row has none."""
        pay_button = self._pay_button(invoice_id)
        if await pay_button.count() > 0:
            await pay_button.first.click()
        else:
            logger.debug(f"No pay button for invoice {invoice_id}")

    async def has_toast_message(self, expected: str) -> bool:
        """Check the toast shows exactly ``expected`` within the timeout."""
        try:
            await expect(self._toast).to_have_text(expected, timeout=self._timeout_ms)
        except AssertionError:
            text = await self._toast.text_content() if await self._toast.count() else None
            logger.debug(f"Toast text {text!r} != {expected!r}")
            return False
        return True

    # =========================================================================
    # Synchronization
    # =========================================================================

    async def _is_invoice_rendered(self, invoice_id: str) -> bool:
        locator = self._row(invoice_id).or_(self.page.get_by_text(invoice_id, exact=True))
        return await locator.count() > 0

    async def _click_load_more(self) -> bool:
        """Reveal the next page if "Load more" is available.

        Click failures are expected (the control disappears after the last
        page) and are reported as "not advanced".
        """
        try:
            if not await self._load_more_button.is_visible():
                return False
            await self._load_more_button.wait_for(state="attached", timeout=self.poll_interval * 1000)
            await self._load_more_button.click(timeout=self.poll_interval * 1000)
        except PlaywrightError as e:
            logger.debug(f"Load more not clicked: {e}")
            return False
        return True

    async def wait_for_invoice_to_appear(
        self,
        invoice_id: str,
        timeout: Optional[float] = None,
    ) -> WaitOutcome:
        """Wait until the invoice is listed, paging through "Load more".

        Args:
            invoice_id: Invoice to look for
            timeout: Seconds before giving up. Defaults to the page timeout.

        Returns:
            WaitOutcome, truthy when the invoice was found
        """
        log = LoggerAdapter(logger, {"invoice_id": invoice_id})
        waiter = ListAppearanceWaiter(
            is_present=lambda: self._is_invoice_rendered(invoice_id),
            advance=self._click_load_more,
            timeout=self.timeout if timeout is None else timeout,
            poll_interval=self.poll_interval,
        )
        outcome = await waiter.wait()
        log.info(
            f"Wait finished: {outcome.result.value} after {outcome.elapsed:.1f}s, "
            f"{outcome.load_more_clicks} load-more clicks"
        )
        return outcome

    # =========================================================================
    # Row details
    # =========================================================================

    async def get_invoice_due_date(self, invoice_id: str) -> Optional[str]:
        """Text of the row's due date cell.

        Reads the cell at a fixed column index, so it breaks if the table
        columns are reordered.
        """
        row = self._row(invoice_id)
        if await row.count() == 0:
            row = self.page.locator(f'tr[data-invoice-id="{invoice_id}"]')
        cells = await row.locator("td").all_text_contents()
        if len(cells) <= DUE_DATE_COLUMN_INDEX:
            return None
        return cells[DUE_DATE_COLUMN_INDEX].strip() or None

    async def is_pay_button_disabled(self, invoice_id: str) -> bool:
        return await self._pay_button(invoice_id).first.is_disabled()
