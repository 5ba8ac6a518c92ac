"""Request handlers for the contact form endpoints.

The handlers are framework-free: they take the request method and posted
fields and return the plain-text body for the visitor.  ``server.py`` wires
them to HTTP routes.

Two handlers keep the behaviour of the site's original form scripts:

* :func:`handle_direct_mail` – validates the email syntax, escapes the free
  text and hands a plain-text message to the local mail transport.
* :func:`handle_smtp_relay` – sends the fields as posted through an
  authenticated SMTP session.

:class:`ContactHandler` is the consolidated path: trim, validate and deliver
through whichever strategy configuration selects.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Mapping, Union

from site_contact.errors import ContactError, DeliveryError, RelayError, ValidationError
from site_contact.mailer import EmailSender
from site_contact.submission import ContactSubmission
from site_contact.validation import is_valid_email

LOGGER = logging.getLogger(__name__)

INVALID_METHOD = "Invalid request method."
INVALID_EMAIL = "Invalid email format."
DIRECT_MAIL_SENT = "Thank you for your message. We will get back to you shortly."
DIRECT_MAIL_FAILED = "Sorry, something went wrong. Please try again later."
SMTP_SENT = "Thank you. Message has been sent successfully!"
SMTP_FAILED = "Message could not be sent. Mailer Error: {detail}"
CONTACT_SENT = "Your message has been sent. Thank you!"
SEND_FAILED = "Failed to send message. Please try again."


def handle_direct_mail(
    method: str,
    form: Mapping[str, Any],
    sender: Union[EmailSender, Callable[[], EmailSender]],
) -> str:
    """Handle a request to the direct-mail contact form.

    Only ``POST`` is accepted.  The subject is read from the ``Subject``
    field and used unescaped; name, email and message are HTML-escaped
    before the email syntax check and before building the body.

    ``sender`` may be a zero-argument factory; it is only called once the
    submission has passed the email check.
    """
    if method.upper() != "POST":
        return INVALID_METHOD

    submission = ContactSubmission.from_form(form, subject_key="Subject", strip=False)
    escaped = submission.escaped()
    if not is_valid_email(escaped.email):
        return INVALID_EMAIL

    if not isinstance(sender, EmailSender):
        sender = sender()
    try:
        sender.deliver(escaped)
    except DeliveryError as exc:
        LOGGER.error("Direct-mail delivery failed: %s", exc)
        return DIRECT_MAIL_FAILED
    return DIRECT_MAIL_SENT


def handle_smtp_relay(form: Mapping[str, Any], sender: EmailSender) -> str:
    """Handle a post from the SMTP contact form.

    Fields are sent as posted, with no validation or escaping.  On failure
    the library's error detail is reported back to the caller.
    """
    submission = ContactSubmission.from_form(form, strip=False)
    try:
        sender.deliver(submission)
    except DeliveryError as exc:
        LOGGER.error("SMTP delivery failed: %s", exc)
        return SMTP_FAILED.format(detail=exc.detail or str(exc))
    return SMTP_SENT


@dataclass(frozen=True)
class ContactResult:
    """Outcome of one submission: whether it was delivered and what to say."""

    ok: bool
    message: str
    #: "validation", "delivery" or "" on success.
    error_kind: str = ""


class ContactHandler:
    """Consolidated submission handler behind the ``EmailSender`` capability."""

    def __init__(self, sender: EmailSender) -> None:
        self._sender = sender

    @property
    def sender(self) -> EmailSender:
        return self._sender

    def submit(self, form: Mapping[str, Any]) -> ContactResult:
        submission = ContactSubmission.from_form(form)
        return self.submit_submission(submission)

    def submit_submission(self, submission: ContactSubmission) -> ContactResult:
        try:
            self._sender.validate(submission)
        except ValidationError as exc:
            return ContactResult(False, str(exc), "validation")

        try:
            self._sender.deliver(submission)
        except RelayError as exc:
            LOGGER.warning("Relay delivery failed: %s", exc)
            return ContactResult(False, exc.text or SEND_FAILED, "delivery")
        except ContactError as exc:
            LOGGER.error("Delivery via %s failed: %s", self._sender.name, exc)
            return ContactResult(False, SEND_FAILED, "delivery")
        return ContactResult(True, CONTACT_SENT)


__all__ = [
    "ContactHandler",
    "ContactResult",
    "handle_direct_mail",
    "handle_smtp_relay",
]
