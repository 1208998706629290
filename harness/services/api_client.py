"""Utility Bill Pay API client.

This module provides the BillPayClient class for exercising the service's
HTTP surface. It includes:
- A uniform ApiResponse result (status + parsed body) for every call
- No exceptions for 4xx/5xx: the status code is data for assertions
- Optional Idempotency-Key and X-Mock-Outcome headers
- Cursor pagination helper for walking the invoice list
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, AsyncIterator, Dict, Generic, Optional, Type, TypeVar, Union

import httpx
from pydantic import BaseModel, ValidationError

from harness.core.config import HarnessSettings
from harness.core.errors import (
    ContractViolationError,
    ErrorClass,
    MalformedResponseError,
    TransportError,
    UnexpectedStatusError,
    classify_status,
)
from harness.core.logging import get_logger
from harness.models.error import ErrorResponse
from harness.models.invoice import Invoice, InvoiceListResponse, InvoiceStatus
from harness.models.payment import CreatePaymentRequest, MockOutcome, PaymentAttempt

logger = get_logger(__name__)

T = TypeVar("T")

IDEMPOTENCY_HEADER = "Idempotency-Key"
MOCK_OUTCOME_HEADER = "X-Mock-Outcome"


# =============================================================================
# Result Type
# =============================================================================


@dataclass
class ApiResponse(Generic[T]):
    """Outcome of one API call.

    Attributes:
        status: HTTP status code
        body: Typed body on 2xx, ErrorResponse otherwise
        raw: Decoded JSON exactly as the service sent it
    """
    status: int
    body: Union[T, ErrorResponse]
    raw: Any = field(default=None, repr=False)

    @property
    def ok(self) -> bool:
        """Check if the service answered with a 2xx status."""
        return 200 <= self.status < 300

    @property
    def error(self) -> Optional[ErrorResponse]:
        """The error envelope for non-2xx responses, else None."""
        if self.ok:
            return None
        return self.body if isinstance(self.body, ErrorResponse) else None

    @property
    def error_class(self) -> Optional[ErrorClass]:
        """Taxonomy class of the status code (None on success)."""
        return classify_status(self.status)

    def expect_success(self) -> T:
        """Return the typed body or raise UnexpectedStatusError."""
        if not self.ok:
            raise UnexpectedStatusError(self.status, self.raw)
        return self.body  # type: ignore[return-value]

    def expect_error(self, status: int) -> ErrorResponse:
        """Return the error envelope of an expected failure.

        Args:
            status: The HTTP status the request must have failed with.

        Raises:
            UnexpectedStatusError: If the response has any other status.
            ContractViolationError: If the body is not an
                ``{"error": {"code", "message"}}`` envelope with both
                fields non-empty.
        """
        if self.status != status:
            raise UnexpectedStatusError(self.status, self.raw)
        envelope = self.error
        if envelope is None or not envelope.is_well_formed:
            raise ContractViolationError(
                f"{status} response is not a well-formed error envelope: {self.raw!r}",
                details={"status": status, "body": self.raw},
            )
        return envelope


# =============================================================================
# Client
# =============================================================================


def _wire_value(value: Any) -> Any:
    """Unwrap enum members to their wire values."""
    return value.value if isinstance(value, Enum) else value


def _to_json_body(payload: Union[BaseModel, Dict[str, Any]]) -> Dict[str, Any]:
    """Serialize a request payload, keeping invalid values untouched."""
    if isinstance(payload, BaseModel):
        return payload.model_dump(mode="json", exclude_none=True)
    return {key: _wire_value(value) for key, value in payload.items()}


class BillPayClient:
    """Client for the Utility Bill Pay REST API.

    Provides methods for:
    - Health check
    - Creating, fetching and listing invoices
    - Creating and confirming payment attempts

    Every method except health_check returns an ApiResponse. Only transport
    failures, undecodable bodies and 2xx bodies that do not match the
    documented shape raise.

    Example:
        ```python
        async with BillPayClient("https://api.example.com") as client:
            created = await client.create_invoice(create_invoice_payload())
            assert created.status == 201
        ```
    """

    REQUEST_TIMEOUT = 30.0  # seconds

    def __init__(
        self,
        base_url: str,
        timeout: Optional[float] = None,
        verify: bool = False,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """Initialize BillPayClient.

        Args:
            base_url: API base URL (e.g., "https://api.example.com")
            timeout: Request timeout in seconds. Defaults to 30.
            verify: Verify TLS certificates. Disabled for the test environment.
            transport: Optional httpx transport (used by tests)
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout if timeout is not None else self.REQUEST_TIMEOUT
        self.verify = verify
        self._transport = transport

        # HTTP client will be created lazily
        self._client: Optional[httpx.AsyncClient] = None

    @classmethod
    def from_settings(cls, settings: HarnessSettings) -> "BillPayClient":
        """Create a client for the API target described by settings."""
        return cls(
            base_url=settings.api_base_url,
            timeout=settings.request_timeout,
            verify=settings.verify_tls,
        )

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create the HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                timeout=httpx.Timeout(self.timeout),
                verify=self.verify,
                transport=self._transport,
                headers={"Accept": "application/json"},
            )
        return self._client

    async def close(self) -> None:
        """Close the HTTP client and release resources."""
        if self._client is not None and not self._client.is_closed:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> "BillPayClient":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    # =========================================================================
    # HTTP Request Methods
    # =========================================================================

    async def _send(
        self,
        method: str,
        endpoint: str,
        params: Optional[dict] = None,
        json_data: Optional[dict] = None,
        headers: Optional[dict] = None,
    ) -> httpx.Response:
        """Send one request. No retries: the harness never masks outages.

        Raises:
            TransportError: If the service cannot be reached
        """
        url = f"{self.base_url}/{endpoint.lstrip('/')}"
        client = await self._get_client()

        try:
            response = await client.request(
                method=method,
                url=url,
                params=params,
                json=json_data,
                headers=headers,
            )
        except httpx.TransportError as e:
            raise TransportError(
                f"{method} {url} failed: {e}",
                details={"method": method, "url": url},
            ) from e

        logger.debug(f"{method} {url} -> {response.status_code}")
        return response

    @staticmethod
    def _decode(response: httpx.Response) -> Any:
        """Decode a JSON body.

        Raises:
            MalformedResponseError: If the body is not JSON
        """
        try:
            return response.json()
        except ValueError as e:
            raise MalformedResponseError(
                f"Response with status {response.status_code} is not JSON: {e}",
                details={"status": response.status_code},
            ) from e

    def _build(self, response: httpx.Response, model: Type[BaseModel]) -> ApiResponse:
        """Turn an httpx response into an ApiResponse.

        Raises:
            MalformedResponseError: If the body is not JSON
            ContractViolationError: If a 2xx body does not match ``model``
        """
        raw = self._decode(response)
        status = response.status_code

        if not response.is_success:
            return ApiResponse(status=status, body=ErrorResponse.from_payload(raw), raw=raw)

        try:
            body = model.model_validate(raw)
        except ValidationError as e:
            raise ContractViolationError(
                f"{model.__name__} expected with status {status}: {e}",
                details={"status": status, "body": raw},
            ) from e
        return ApiResponse(status=status, body=body, raw=raw)

    # =========================================================================
    # Operations
    # =========================================================================

    async def health_check(self) -> bool:
        """Check GET /health answers with a 2xx status."""
        response = await self._send("GET", "/health")
        return response.is_success

    async def list_invoices(
        self,
        status: Optional[Union[InvoiceStatus, str]] = None,
        limit: Optional[int] = None,
        cursor: Optional[str] = None,
    ) -> ApiResponse[InvoiceListResponse]:
        """List invoices with optional filtering.

        Args:
            status: Filter by invoice status. Omitted means unfiltered.
            limit: Maximum number of invoices to return
            cursor: Cursor from a previous page's next_cursor
        """
        params: Dict[str, Any] = {}
        if status is not None:
            params["status"] = _wire_value(status)
        if limit is not None:
            params["limit"] = limit
        if cursor:
            params["cursor"] = cursor

        response = await self._send("GET", "/invoices", params=params or None)
        return self._build(response, InvoiceListResponse)

    async def get_invoice(self, invoice_id: str) -> ApiResponse[Invoice]:
        """Fetch one invoice by id; 404 when it does not exist."""
        response = await self._send("GET", f"/invoices/{invoice_id}")
        return self._build(response, Invoice)

    async def create_invoice(
        self,
        payload: Union[BaseModel, Dict[str, Any]],
    ) -> ApiResponse[Invoice]:
        """Create an invoice.

        Args:
            payload: Request body. May be deliberately invalid.

        Returns:
            201 with the Invoice, 400 on validation failure, 409 on duplicate id
        """
        response = await self._send("POST", "/invoices", json_data=_to_json_body(payload))
        return self._build(response, Invoice)

    async def create_payment(
        self,
        invoice_id: str,
        idempotency_key: Optional[str] = None,
    ) -> ApiResponse[PaymentAttempt]:
        """Create a payment attempt for an invoice.

        Args:
            invoice_id: Invoice to pay
            idempotency_key: Optional Idempotency-Key header value

        Returns:
            201 with a pending PaymentAttempt, 404 for an unknown invoice,
            422 for a void or already paid invoice
        """
        headers = {IDEMPOTENCY_HEADER: idempotency_key} if idempotency_key else None
        response = await self._send(
            "POST",
            "/payments",
            json_data=_to_json_body(CreatePaymentRequest(invoice_id=invoice_id)),
            headers=headers,
        )
        return self._build(response, PaymentAttempt)

    async def confirm_payment(
        self,
        payment_id: str,
        mock_outcome: Optional[Union[MockOutcome, str]] = None,
    ) -> ApiResponse[PaymentAttempt]:
        """Confirm a payment attempt.

        Args:
            payment_id: Payment attempt id
            mock_outcome: Forces the outcome regardless of the amount rule

        Returns:
            200 with the confirmed PaymentAttempt, 402 when the payment fails,
            404 for an unknown payment
        """
        headers = (
            {MOCK_OUTCOME_HEADER: _wire_value(mock_outcome)}
            if mock_outcome is not None
            else None
        )
        response = await self._send("POST", f"/payments/{payment_id}/confirm", headers=headers)
        return self._build(response, PaymentAttempt)

    # =========================================================================
    # Pagination Helper
    # =========================================================================

    async def iter_invoices(
        self,
        status: Optional[Union[InvoiceStatus, str]] = None,
        page_size: Optional[int] = None,
        max_pages: Optional[int] = None,
    ) -> AsyncIterator[Invoice]:
        """Yield invoices across pages by following next_cursor.

        Args:
            status: Optional status filter applied to every page
            page_size: Optional limit per page
            max_pages: Stop after this many pages (None walks to the end)

        Raises:
            UnexpectedStatusError: If a page request is not 2xx
        """
        cursor: Optional[str] = None
        pages = 0

        while True:
            page = (await self.list_invoices(status=status, limit=page_size, cursor=cursor)).expect_success()
            pages += 1
            for invoice in page.items:
                yield invoice

            cursor = page.next_cursor
            if not cursor:
                break
            if max_pages is not None and pages >= max_pages:
                break
