"""Page object for the create-invoice modal."""

import re
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Optional, Union

from playwright.async_api import Page

from harness.pages.constants import (
    CREATE_AMOUNT_TEST_ID,
    CREATE_CURRENCY_TEST_ID,
    CREATE_CUSTOMER_TEST_ID,
    CREATE_DUE_TEST_ID,
    CREATE_ID_TEST_ID,
    CREATE_MODAL_TEST_ID,
    CREATE_SUBMIT_TEST_ID,
    DATETIME_LOCAL_PLACEHOLDER,
    DEFAULT_WAIT_TIMEOUT,
)
from harness.services.test_data import minor_to_major


class AmountUnit(str, Enum):
    """Unit of InvoiceFormData.amount. The form itself takes major units."""
    MINOR = "minor"
    MAJOR = "major"


@dataclass
class InvoiceFormData:
    """Values typed into the create-invoice form.

    Attributes:
        id: Invoice id
        customer_id: Customer id
        amount: Amount in ``amount_unit``
        amount_unit: Whether ``amount`` is in minor (cents) or major units
        currency: Currency code; left untouched when None
        due_date: ISO-8601 due date; an empty string leaves the field blank
    """
    id: str
    customer_id: str
    amount: Union[int, Decimal, str]
    amount_unit: AmountUnit = AmountUnit.MINOR
    currency: Optional[str] = None
    due_date: Optional[str] = None

    def amount_text(self) -> str:
        """Amount as the form expects it (major units).

        Raises:
            ValueError: If a minor-unit amount is not a whole number
        """
        if self.amount_unit is AmountUnit.MINOR:
            try:
                minor = Decimal(str(self.amount).strip())
            except InvalidOperation:
                raise ValueError(f"Minor amount is not a number: {self.amount!r}") from None
            if not minor.is_finite() or minor != minor.to_integral_value():
                raise ValueError(
                    f"Minor amount must be a whole number of minor units, got {self.amount!r}; "
                    "use AmountUnit.MAJOR for fractional major amounts"
                )
            return minor_to_major(int(minor))
        return str(self.amount)


class CreateInvoiceModal:
    """The modal opened by "Add Invoice"."""

    def __init__(self, page: Page, timeout: float = DEFAULT_WAIT_TIMEOUT):
        self.page = page
        self.timeout = timeout

        self.modal = page.get_by_test_id(CREATE_MODAL_TEST_ID)
        self.id_input = page.get_by_test_id(CREATE_ID_TEST_ID)
        self.customer_id_input = page.get_by_test_id(CREATE_CUSTOMER_TEST_ID)
        self.amount_input = page.get_by_test_id(CREATE_AMOUNT_TEST_ID)
        self.currency_input = page.get_by_test_id(CREATE_CURRENCY_TEST_ID)
        self.due_date_input = page.get_by_test_id(CREATE_DUE_TEST_ID)
        self.submit_button = page.get_by_test_id(CREATE_SUBMIT_TEST_ID)
        self.cancel_button = page.get_by_role("button", name=re.compile(r"cancel", re.IGNORECASE))

    async def wait_for_modal(self) -> None:
        await self.modal.wait_for(state="visible", timeout=self.timeout * 1000)

    async def fill_invoice_form(self, data: InvoiceFormData) -> None:
        """Fill every field the data provides.

        Inputs whose placeholder asks for ``YYYY-MM-DDTHH:mm`` receive the ISO
        date truncated to minutes.
        """
        await self.id_input.fill(data.id)
        await self.customer_id_input.fill(data.customer_id)
        await self.amount_input.fill(data.amount_text())

        if data.currency:
            await self.currency_input.fill(data.currency)

        if data.due_date:
            value = data.due_date
            placeholder = await self.due_date_input.get_attribute("placeholder")
            if placeholder and DATETIME_LOCAL_PLACEHOLDER in placeholder:
                value = value[:16]
            await self.due_date_input.fill(value)

    async def submit(self) -> None:
        await self.submit_button.click()

    async def cancel(self) -> None:
        await self.cancel_button.click()

    async def create_invoice(self, data: InvoiceFormData) -> None:
        """Wait for the modal, fill it and submit."""
        await self.wait_for_modal()
        await self.fill_invoice_form(data)
        await self.submit()

    async def is_visible(self) -> bool:
        return await self.modal.is_visible()
