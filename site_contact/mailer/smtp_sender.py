"""SMTP-based contact message delivery.

This module provides ``SMTPSender``, a concrete implementation of
``EmailSender`` that uses Python's ``smtplib`` to authenticate against a
remote SMTP server and deliver an HTML-formatted notification to the fixed
destination address.

Environment variables used:

* ``SMTP_HOST``/``SMTP_SERVER`` – hostname of the SMTP server.
* ``SMTP_PORT``/``SMTP_SERVER_PORT`` – port number; defaults to 587.
* ``SMTP_USERNAME``/``SMTP_USER`` – username for authentication.
* ``SMTP_PASSWORD``/``SMTP_APP_PWD`` – password for authentication.
* ``SMTP_USE_SSL`` – when set to "true"/"1"/"yes", connects via SMTP over SSL
  (port 465).  When false or unset, STARTTLS is used on the configured port.
* ``SMTP_DEBUG`` – when truthy the underlying ``smtplib`` client writes the
  protocol exchange to stderr.
* ``SMTP_TIMEOUT`` – socket timeout in seconds; defaults to 30.
* ``CONTACT_TO_EMAIL`` – destination address.

The implementation reads the first defined variable in each pair.  If no
host is provided, the domain part of the username is used to infer the SMTP
host (e.g. ``user@gmail.com`` → ``smtp.gmail.com``).
"""

from __future__ import annotations

import logging
import os
import smtplib
from email.message import EmailMessage
from email.utils import formataddr

from site_contact.config import contact_recipient, env_flag
from site_contact.errors import ConfigurationError, DeliveryError
from site_contact.mailer import EmailSender
from site_contact.mailer.messages import render_html_body
from site_contact.submission import ContactSubmission

LOGGER = logging.getLogger(__name__)

PROVIDER_HOSTS = {
    "gmail.com": "smtp.gmail.com",
    "outlook.com": "smtp-mail.outlook.com",
    "hotmail.com": "smtp-mail.outlook.com",
    "live.com": "smtp-mail.outlook.com",
    "yahoo.com": "smtp.mail.yahoo.com",
}


class SMTPSender(EmailSender):
    """SMTP implementation of the ``EmailSender`` interface."""

    name = "smtp"

    def __init__(self) -> None:
        self._host = (
            os.environ.get("SMTP_HOST")
            or os.environ.get("SMTP_SERVER")
            or ""
        )
        self._port = int(
            os.environ.get("SMTP_PORT")
            or os.environ.get("SMTP_SERVER_PORT")
            or "0"
        )
        self._username = (
            os.environ.get("SMTP_USERNAME") or os.environ.get("SMTP_USER")
        )
        self._password = (
            os.environ.get("SMTP_PASSWORD") or os.environ.get("SMTP_APP_PWD")
        )
        if not self._username or not self._password:
            raise ConfigurationError(
                "SMTP_USERNAME and SMTP_PASSWORD must be set"
            )
        self._use_ssl = env_flag("SMTP_USE_SSL")
        self._debug = env_flag("SMTP_DEBUG")
        self._timeout = float(os.environ.get("SMTP_TIMEOUT", "30"))
        self._recipient = contact_recipient()

        # Infer host from the account's domain if not explicitly set.
        if not self._host:
            domain = None
            if "@" in self._username:
                domain = self._username.split("@", 1)[1].lower()
            if domain:
                self._host = PROVIDER_HOSTS.get(domain, f"smtp.{domain}")
            else:
                self._host = "localhost"
        if self._port == 0:
            self._port = 465 if self._use_ssl else 587

    @property
    def recipient(self) -> str:
        return self._recipient

    def build_message(self, submission: ContactSubmission) -> EmailMessage:
        """Compose the HTML notification for ``submission``.

        The sender is the visitor's own address and the body interpolates
        every field unescaped.
        """
        msg = EmailMessage()
        msg["Subject"] = submission.subject
        msg["From"] = formataddr((submission.name, submission.email))
        msg["Reply-To"] = submission.email
        msg["To"] = self._recipient
        msg.set_content(render_html_body(submission), subtype="html")
        return msg

    def _connect(self) -> smtplib.SMTP:
        if self._use_ssl:
            return smtplib.SMTP_SSL(self._host, self._port, timeout=self._timeout)
        return smtplib.SMTP(self._host, self._port, timeout=self._timeout)

    def deliver(self, submission: ContactSubmission) -> None:
        """Authenticate and send one message to the fixed recipient.

        Raises:
            DeliveryError: If connecting, authenticating or sending fails.
                ``detail`` carries the library's error text.
        """
        try:
            msg = self.build_message(submission)
        except ValueError as exc:
            raise DeliveryError("Invalid message headers", detail=str(exc)) from exc
        try:
            with self._connect() as smtp:
                if self._debug:
                    smtp.set_debuglevel(1)
                smtp.ehlo()
                if not self._use_ssl:
                    smtp.starttls()
                    smtp.ehlo()
                smtp.login(self._username, self._password)
                smtp.send_message(msg)
        except (smtplib.SMTPException, OSError) as exc:
            LOGGER.warning(
                "SMTP delivery via %s:%s failed: %s", self._host, self._port, exc
            )
            raise DeliveryError(
                f"Failed to connect or send email via SMTP server at "
                f"{self._host}:{self._port}",
                detail=str(exc),
            ) from exc
        LOGGER.info("Contact message sent via SMTP to %s", self._recipient)


__all__ = ["SMTPSender"]
