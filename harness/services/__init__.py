"""API access, test data and fixture provisioning."""

from harness.services.api_client import ApiResponse, BillPayClient
from harness.services.fixtures import InvoiceSpec, setup_test_invoices, with_test_invoices

__all__ = [
    "ApiResponse",
    "BillPayClient",
    "InvoiceSpec",
    "setup_test_invoices",
    "with_test_invoices",
]
