"""Mailgun-based contact message delivery.

This module defines ``MailgunSender``, which sends the notification via the
Mailgun HTTP API.  It is the transactional-provider alternative to running
an SMTP session from the web process.  See the Mailgun API documentation
for details on the parameters accepted.

Environment variables used:

* ``MAILGUN_API_KEY`` – API key for Mailgun
* ``MAILGUN_DOMAIN`` – Domain configured in Mailgun
* ``MAILGUN_BASE_URL`` – Optional base URL; defaults to the official API
* ``CONTACT_TO_EMAIL`` – destination address
"""

from __future__ import annotations

import logging
import os

import requests

from site_contact.config import contact_recipient
from site_contact.errors import ConfigurationError, DeliveryError
from site_contact.mailer import EmailSender
from site_contact.mailer.messages import render_html_body, render_text_body
from site_contact.submission import ContactSubmission

LOGGER = logging.getLogger(__name__)


class MailgunSender(EmailSender):
    """Mailgun implementation of the ``EmailSender`` interface."""

    name = "mailgun"

    def __init__(self) -> None:
        self._api_key = os.environ.get("MAILGUN_API_KEY")
        self._domain = os.environ.get("MAILGUN_DOMAIN")
        self._base_url = os.environ.get(
            "MAILGUN_BASE_URL", f"https://api.mailgun.net/v3/{self._domain}"
        )
        if not self._api_key or not self._domain:
            raise ConfigurationError("MAILGUN_API_KEY and MAILGUN_DOMAIN must be set")
        self._recipient = contact_recipient()

    def deliver(self, submission: ContactSubmission) -> None:
        """Send the notification via the Mailgun API.

        The message goes out from the configured domain with the visitor's
        address as ``Reply-To``; Mailgun refuses foreign ``from`` domains.

        Raises:
            DeliveryError: If the HTTP request fails.
        """
        url = f"{self._base_url}/messages"
        auth = ("api", self._api_key)
        data = {
            "from": f"Contact form <mail@{self._domain}>",
            "to": [self._recipient],
            "subject": submission.subject,
            "html": render_html_body(submission),
            "text": render_text_body(submission),
            "h:Reply-To": submission.email,
        }

        try:
            response = requests.post(url, auth=auth, data=data, timeout=10)
            response.raise_for_status()
        except requests.RequestException as exc:
            detail = ""
            if exc.response is not None:
                detail = exc.response.text
            LOGGER.warning("Mailgun delivery failed: %s", exc)
            raise DeliveryError("Mailgun request failed", detail=detail or str(exc)) from exc
        LOGGER.info("Contact message sent via Mailgun to %s", self._recipient)


__all__ = ["MailgunSender"]
