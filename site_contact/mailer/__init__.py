"""Abstract interface and implementations for delivering contact messages.

This subpackage defines a common ``EmailSender`` interface with two
capabilities, ``validate`` and ``deliver``, along with four concrete
strategies: the EmailJS relay API, an SMTP server, the local ``sendmail``
transport and the Mailgun HTTP API.  Client code selects a strategy by
configuration through :func:`get_sender` without changing the calling
semantics.
"""

from __future__ import annotations

import os
from abc import ABC, abstractmethod
from typing import Optional

from site_contact.config import DEFAULT_DELIVERY
from site_contact.errors import ConfigurationError
from site_contact.submission import ContactSubmission
from site_contact.validation import require_fields


class EmailSender(ABC):
    """Abstract base class for contact message delivery strategies.

    Implementations must provide ``deliver``.  ``validate`` defaults to
    requiring every field to be non-empty; strategies may strengthen it.
    """

    #: Short name used to select the strategy from configuration.
    name: str = ""

    def validate(self, submission: ContactSubmission) -> None:
        """Reject a submission before any delivery attempt.

        Raises:
            site_contact.errors.ValidationError: If the submission is unfit.
        """
        require_fields(submission)

    @abstractmethod
    def deliver(self, submission: ContactSubmission) -> None:
        """Make exactly one attempt to deliver the submission.

        Args:
            submission: The visitor's fields.

        Raises:
            site_contact.errors.DeliveryError: If the transport fails.
        """
        raise NotImplementedError

    def send(self, submission: ContactSubmission) -> None:
        """Validate then deliver ``submission``."""
        self.validate(submission)
        self.deliver(submission)


def get_sender(name: Optional[str] = None) -> EmailSender:
    """Instantiate the delivery strategy named ``name``.

    When ``name`` is omitted the ``CONTACT_DELIVERY`` environment variable
    decides, defaulting to the EmailJS relay.

    Raises:
        ConfigurationError: If the name is unknown or the strategy is
            missing required settings.
    """
    choice = (name or os.environ.get("CONTACT_DELIVERY") or DEFAULT_DELIVERY)
    choice = choice.strip().lower()

    if choice == "emailjs":
        from site_contact.mailer.emailjs_sender import EmailJSSender

        return EmailJSSender()
    if choice == "smtp":
        from site_contact.mailer.smtp_sender import SMTPSender

        return SMTPSender()
    if choice == "sendmail":
        from site_contact.mailer.sendmail_sender import SendmailSender

        return SendmailSender()
    if choice == "mailgun":
        from site_contact.mailer.mailgun_sender import MailgunSender

        return MailgunSender()
    raise ConfigurationError(f"Unknown delivery strategy: {choice!r}")


__all__ = ["EmailSender", "get_sender"]
