"""Invoice shapes exchanged with the Utility Bill Pay API."""

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator


class InvoiceStatus(str, Enum):
    """Invoice lifecycle status. Transitions are owned by the service."""
    UNPAID = "unpaid"
    PAID = "paid"
    EXPIRED = "expired"
    VOID = "void"


class Invoice(BaseModel):
    """Invoice as returned by the service."""
    id: str
    customer_id: str
    currency: str
    amount_minor: int
    due_date_iso: str = ""  # may be empty or unparseable
    status: InvoiceStatus


class CreateInvoiceRequest(BaseModel):
    """Validated request body for POST /invoices.

    The test data factory returns plain dicts instead so that negative
    scenarios can send payloads this model would reject.
    """
    id: str = Field(min_length=1)
    customer_id: str
    currency: str = Field(min_length=3, max_length=3)
    amount_minor: int = Field(ge=0)
    due_date_iso: str
    status: Optional[InvoiceStatus] = None

    @field_validator("status")
    @classmethod
    def status_must_be_creatable(cls, value: Optional[InvoiceStatus]) -> Optional[InvoiceStatus]:
        """Only unpaid and void invoices can be created directly."""
        if value is not None and value not in (InvoiceStatus.UNPAID, InvoiceStatus.VOID):
            raise ValueError("status must be unpaid or void")
        return value


class InvoiceListResponse(BaseModel):
    """One page of GET /invoices."""
    items: List[Invoice]
    next_cursor: Optional[str] = None
