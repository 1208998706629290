"""Payment attempt shapes exchanged with the Utility Bill Pay API."""

from enum import Enum

from pydantic import BaseModel


class PaymentStatus(str, Enum):
    """Payment attempt lifecycle: created pending, then confirmed or failed."""
    PENDING = "pending"
    CONFIRMED = "confirmed"
    FAILED = "failed"


class MockOutcome(str, Enum):
    """Values for the X-Mock-Outcome header; they override the amount rule."""
    SUCCESS = "success"
    FAIL = "fail"


class PaymentAttempt(BaseModel):
    """A single try to settle an invoice."""
    id: str
    invoice_id: str
    created_at: str
    status: PaymentStatus


class CreatePaymentRequest(BaseModel):
    """Request body for POST /payments."""
    invoice_id: str
