"""Error taxonomy and harness exceptions.

HTTP-level failures reported by the service are data, not exceptions: the API
client returns them inside an ApiResponse and scenarios branch on the status.
The exceptions below cover only what falls outside the service contract
(transport problems, undecodable bodies, shape violations) and fixture
provisioning failures.
"""

from enum import Enum
from typing import Any, Dict, Optional


class ErrorClass(str, Enum):
    """Status-code classes the service uses for non-2xx responses."""

    VALIDATION = "VALIDATION"
    PAYMENT_DECLINED = "PAYMENT_DECLINED"
    NOT_FOUND = "NOT_FOUND"
    CONFLICT = "CONFLICT"
    STATE_PRECONDITION = "STATE_PRECONDITION"
    SERVER = "SERVER"
    UNKNOWN = "UNKNOWN"


STATUS_ERROR_CLASSES = {
    400: ErrorClass.VALIDATION,
    402: ErrorClass.PAYMENT_DECLINED,
    404: ErrorClass.NOT_FOUND,
    409: ErrorClass.CONFLICT,
    422: ErrorClass.STATE_PRECONDITION,
}

ERROR_DESCRIPTIONS = {
    ErrorClass.VALIDATION: "Malformed or out-of-range input (e.g. negative amount, bad currency, short id).",
    ErrorClass.PAYMENT_DECLINED: "Payment declined by the amount rule or an explicit mock outcome.",
    ErrorClass.NOT_FOUND: "The referenced invoice or payment does not exist.",
    ErrorClass.CONFLICT: "An invoice with the same id already exists.",
    ErrorClass.STATE_PRECONDITION: "The invoice is void or already paid.",
    ErrorClass.SERVER: "The service failed internally.",
    ErrorClass.UNKNOWN: "Status code outside the documented contract.",
}


def classify_status(status: int) -> Optional[ErrorClass]:
    """Map an HTTP status code to its error class.

    Args:
        status: HTTP status code

    Returns:
        None for 2xx/3xx, otherwise the matching ErrorClass
    """
    if status < 400:
        return None
    if status >= 500:
        return ErrorClass.SERVER
    return STATUS_ERROR_CLASSES.get(status, ErrorClass.UNKNOWN)


def describe_status(status: int) -> str:
    """Human-readable meaning of a status code ("" for 2xx/3xx)."""
    error_class = classify_status(status)
    if error_class is None:
        return ""
    return f"{error_class.value}: {ERROR_DESCRIPTIONS[error_class]}"


class HarnessError(Exception):
    """Base exception for harness failures."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.details = details or {}


class TransportError(HarnessError):
    """Raised when the service cannot be reached (DNS, refused, timeout)."""
    pass


class MalformedResponseError(HarnessError):
    """Raised when a response body is not valid JSON."""
    pass


class ContractViolationError(HarnessError):
    """Raised when a body does not have the documented shape."""
    pass


class UnexpectedStatusError(HarnessError):
    """Raised by ApiResponse when the status is not the one expected."""

    def __init__(self, status: int, body: Any, message: Optional[str] = None):
        if message is None:
            description = describe_status(status)
            message = f"Unexpected status {status}"
            if description:
                message += f" ({description})"
            message += f": {body!r}"
        super().__init__(message, details={"status": status})
        self.status = status
        self.body = body


class FixtureSetupError(HarnessError):
    """Raised when strict fixture provisioning cannot reach the requested state."""
    pass
