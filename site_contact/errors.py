"""Exception hierarchy for contact form processing.

Every error carries the client-visible message as its ``str`` value so
handlers can surface it directly.  Nothing here is escalated or persisted;
callers decide which text reaches the visitor.
"""

from __future__ import annotations

from typing import Optional


class ContactError(Exception):
    """Base class for all contact form errors."""


class ConfigurationError(ContactError, ValueError):
    """Raised when a delivery strategy is missing required settings."""


class ValidationError(ContactError):
    """Raised when a submission is rejected before any delivery attempt."""


class MissingFieldsError(ValidationError):
    """One or more required fields are empty."""

    def __init__(self, fields: tuple[str, ...] = ()) -> None:
        super().__init__("All fields are required.")
        self.fields = fields


class InvalidEmailError(ValidationError):
    """The submitter's address is not a syntactically valid email."""

    def __init__(self, address: str = "") -> None:
        super().__init__("Invalid email format.")
        self.address = address


class DeliveryError(ContactError):
    """The transport or library failed to hand off the message.

    ``detail`` holds the underlying library's error text, when any.
    """

    def __init__(self, message: str, detail: str = "") -> None:
        super().__init__(message)
        self.detail = detail


class RelayError(DeliveryError):
    """The hosted relay API rejected the request.

    ``text`` is the relay's response body, surfaced verbatim to the visitor
    when present; ``status`` is the HTTP status code (``None`` for network
    failures).
    """

    def __init__(self, status: Optional[int], text: str = "") -> None:
        if status is None:
            message = "Relay could not be reached"
        else:
            message = f"Relay request failed with status {status}"
        super().__init__(message, detail=text)
        self.status = status
        self.text = text


__all__ = [
    "ContactError",
    "ConfigurationError",
    "ValidationError",
    "MissingFieldsError",
    "InvalidEmailError",
    "DeliveryError",
    "RelayError",
]
