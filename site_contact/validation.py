"""Field validation shared by every delivery path."""

from __future__ import annotations

from email_validator import EmailNotValidError, validate_email

from site_contact.errors import InvalidEmailError, MissingFieldsError
from site_contact.submission import ContactSubmission


def require_fields(submission: ContactSubmission) -> None:
    """Raise ``MissingFieldsError`` if any of the four fields is empty."""
    missing = submission.missing_fields()
    if missing:
        raise MissingFieldsError(missing)


def is_valid_email(address: str) -> bool:
    """Return True if ``address`` is a syntactically valid email address.

    Only the syntax is checked; no DNS lookup is made for the domain.
    """
    if not address:
        return False
    try:
        validate_email(address, check_deliverability=False)
    except EmailNotValidError:
        return False
    return True


def require_valid_email(address: str) -> None:
    """Raise ``InvalidEmailError`` unless ``address`` is a valid email."""
    if not is_valid_email(address):
        raise InvalidEmailError(address)


__all__ = ["require_fields", "is_valid_email", "require_valid_email"]
