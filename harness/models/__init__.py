"""Domain models package."""

from harness.models.error import ErrorDetail, ErrorResponse
from harness.models.invoice import (
    CreateInvoiceRequest,
    Invoice,
    InvoiceListResponse,
    InvoiceStatus,
)
from harness.models.payment import (
    CreatePaymentRequest,
    MockOutcome,
    PaymentAttempt,
    PaymentStatus,
)

__all__ = [
    "ErrorDetail",
    "ErrorResponse",
    "CreateInvoiceRequest",
    "Invoice",
    "InvoiceListResponse",
    "InvoiceStatus",
    "CreatePaymentRequest",
    "MockOutcome",
    "PaymentAttempt",
    "PaymentStatus",
]
