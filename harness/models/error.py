"""Error envelope returned by the service on every non-2xx response."""

from typing import Any

from pydantic import BaseModel, Field


class ErrorDetail(BaseModel):
    """Machine code plus human message."""
    code: str = ""
    message: str = ""


class ErrorResponse(BaseModel):
    """Envelope of the form ``{"error": {"code": ..., "message": ...}}``."""
    error: ErrorDetail = Field(default_factory=ErrorDetail)

    @property
    def is_well_formed(self) -> bool:
        """Both the code and the message are non-empty."""
        return bool(self.error.code.strip()) and bool(self.error.message.strip())

    @classmethod
    def from_payload(cls, payload: Any) -> "ErrorResponse":
        """Build an envelope from any decoded body without raising.

        Missing or mistyped fields become empty strings, which
        ``is_well_formed`` then reports.
        """
        if not isinstance(payload, dict):
            return cls()
        error = payload.get("error")
        if not isinstance(error, dict):
            return cls()
        code = error.get("code")
        message = error.get("message")
        return cls(
            error=ErrorDetail(
                code=code if isinstance(code, str) else "",
                message=message if isinstance(message, str) else "",
            )
        )
