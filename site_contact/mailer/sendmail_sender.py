"""Local mail transport agent delivery.

``SendmailSender`` composes a plain-text notification and pipes it to the
system's ``sendmail`` binary, the same hand-off a web host's ``mail()``
facility performs.  The transport only reports whether it accepted the
message; there is no further error detail.

Environment variables used:

* ``SENDMAIL_PATH`` – path to the sendmail-compatible binary; defaults to
  ``/usr/sbin/sendmail``.
* ``CONTACT_TO_EMAIL`` – destination address.
"""

from __future__ import annotations

import logging
import os
import subprocess
from email.message import EmailMessage

from site_contact.config import contact_recipient
from site_contact.errors import DeliveryError
from site_contact.mailer import EmailSender
from site_contact.mailer.messages import render_text_body
from site_contact.submission import ContactSubmission
from site_contact.validation import require_valid_email

LOGGER = logging.getLogger(__name__)

DEFAULT_SENDMAIL_PATH = "/usr/sbin/sendmail"


def sendmail_transport(message: EmailMessage, sendmail_path: str) -> bool:
    """Hand ``message`` to the local MTA; return True if it was accepted.

    Recipients are taken from the message headers (``-t``) and a line with
    a single dot does not end the input (``-i``).
    """
    try:
        result = subprocess.run(
            [sendmail_path, "-t", "-i"],
            input=message.as_bytes(),
            capture_output=True,
            timeout=60,
            check=False,
        )
    except (OSError, subprocess.SubprocessError) as exc:
        LOGGER.error("Could not run %s: %s", sendmail_path, exc)
        return False
    if result.returncode != 0:
        LOGGER.error(
            "%s exited with status %s: %s",
            sendmail_path,
            result.returncode,
            result.stderr.decode("utf-8", errors="replace").strip(),
        )
        return False
    return True


class SendmailSender(EmailSender):
    """Local transport implementation of the ``EmailSender`` interface."""

    name = "sendmail"

    def __init__(self) -> None:
        self._sendmail_path = os.environ.get("SENDMAIL_PATH", DEFAULT_SENDMAIL_PATH)
        self._recipient = contact_recipient()

    @property
    def recipient(self) -> str:
        return self._recipient

    def validate(self, submission: ContactSubmission) -> None:
        super().validate(submission)
        require_valid_email(submission.email)

    def build_message(self, submission: ContactSubmission) -> EmailMessage:
        msg = EmailMessage()
        msg["To"] = self._recipient
        msg["Subject"] = submission.subject
        msg["From"] = submission.email
        msg["Reply-To"] = submission.email
        msg.set_content(render_text_body(submission), charset="utf-8")
        return msg

    def transport(self, message: EmailMessage) -> bool:
        return sendmail_transport(message, self._sendmail_path)

    def deliver(self, submission: ContactSubmission) -> None:
        """Pipe one plain-text message to the local transport.

        Raises:
            DeliveryError: If the transport did not accept the message.
        """
        try:
            message = self.build_message(submission)
        except ValueError as exc:
            # Header values containing line breaks are refused by the email policy.
            raise DeliveryError("Invalid message headers", detail=str(exc)) from exc
        if not self.transport(message):
            raise DeliveryError("The local mail transport rejected the message")
        LOGGER.info("Contact message handed to local transport for %s", self._recipient)


__all__ = ["SendmailSender", "sendmail_transport", "DEFAULT_SENDMAIL_PATH"]
