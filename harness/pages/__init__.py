"""Page objects for the Utility Bill Pay UI."""

from harness.pages.create_invoice_modal import AmountUnit, CreateInvoiceModal, InvoiceFormData
from harness.pages.invoice_list import InvoiceListPage
from harness.pages.pagination import ListAppearanceWaiter, WaitOutcome, WaitResult

__all__ = [
    "AmountUnit",
    "CreateInvoiceModal",
    "InvoiceFormData",
    "InvoiceListPage",
    "ListAppearanceWaiter",
    "WaitOutcome",
    "WaitResult",
]
