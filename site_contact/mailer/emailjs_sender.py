"""EmailJS relay API delivery.

``EmailJSSender`` hands the submission to the EmailJS hosted relay, which
renders it through a stored template and performs the outbound delivery on
our behalf.  The relay answers ``200 OK`` on success and a plain-text error
description otherwise; that text is what the visitor gets to see.

Environment variables used:

* ``EMAILJS_SERVICE_ID`` – EmailJS service identifier
* ``EMAILJS_TEMPLATE_ID`` – EmailJS template identifier
* ``EMAILJS_PUBLIC_KEY`` – public key (sent as ``user_id``)
* ``EMAILJS_PRIVATE_KEY`` – optional private key, sent as ``accessToken``
  when the account requires it for server-side calls
* ``EMAILJS_API_URL`` – optional endpoint override
* ``CONTACT_TO_EMAIL`` – destination address passed to the template
"""

from __future__ import annotations

import logging
import os
from typing import Any, Dict, Optional

import requests

from site_contact.config import contact_recipient
from site_contact.errors import ConfigurationError, RelayError
from site_contact.mailer import EmailSender
from site_contact.submission import ContactSubmission

LOGGER = logging.getLogger(__name__)

DEFAULT_API_URL = "https://api.emailjs.com/api/v1.0/email/send"


class EmailJSSender(EmailSender):
    """EmailJS implementation of the ``EmailSender`` interface."""

    name = "emailjs"

    def __init__(self, session: Optional[requests.Session] = None) -> None:
        self._service_id = os.environ.get("EMAILJS_SERVICE_ID")
        self._template_id = os.environ.get("EMAILJS_TEMPLATE_ID")
        self._public_key = os.environ.get("EMAILJS_PUBLIC_KEY")
        self._private_key = os.environ.get("EMAILJS_PRIVATE_KEY")
        self._api_url = os.environ.get("EMAILJS_API_URL", DEFAULT_API_URL)
        if not (self._service_id and self._template_id and self._public_key):
            raise ConfigurationError(
                "EMAILJS_SERVICE_ID, EMAILJS_TEMPLATE_ID and "
                "EMAILJS_PUBLIC_KEY must be set"
            )
        self._recipient = contact_recipient()
        self._session = session or requests.Session()

    def build_payload(self, submission: ContactSubmission) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "service_id": self._service_id,
            "template_id": self._template_id,
            "user_id": self._public_key,
            "template_params": submission.as_template_params(self._recipient),
        }
        if self._private_key:
            payload["accessToken"] = self._private_key
        return payload

    def deliver(self, submission: ContactSubmission) -> None:
        """Post the template payload to the relay.

        Raises:
            RelayError: If the relay rejects the request (``text`` holds its
                response body) or cannot be reached (``text`` is empty).
        """
        try:
            response = self._session.post(
                self._api_url, json=self.build_payload(submission), timeout=15
            )
        except requests.RequestException as exc:
            LOGGER.warning("EmailJS relay unreachable: %s", exc)
            raise RelayError(None) from exc

        if not response.ok:
            LOGGER.warning(
                "EmailJS relay rejected message with status %s: %s",
                response.status_code,
                response.text,
            )
            raise RelayError(response.status_code, response.text.strip())
        LOGGER.info("Contact message relayed via EmailJS to %s", self._recipient)


__all__ = ["EmailJSSender", "DEFAULT_API_URL"]
