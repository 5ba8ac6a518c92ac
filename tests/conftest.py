import sys
from pathlib import Path
from typing import Callable, List, Optional

import pytest

ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from site_contact.mailer import EmailSender
from site_contact.submission import ContactSubmission


class RecordingSender(EmailSender):
    """Sender that records deliveries and optionally fails."""

    name = "recording"

    def __init__(self, error: Optional[Exception] = None) -> None:
        self.error = error
        self.delivered: List[ContactSubmission] = []

    def deliver(self, submission: ContactSubmission) -> None:
        if self.error is not None:
            raise self.error
        self.delivered.append(submission)


@pytest.fixture
def contact_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """A clean environment with a destination address configured."""
    for name in (
        "CONTACT_DELIVERY",
        "SMTP_HOST",
        "SMTP_SERVER",
        "SMTP_PORT",
        "SMTP_SERVER_PORT",
        "SMTP_USERNAME",
        "SMTP_USER",
        "SMTP_PASSWORD",
        "SMTP_APP_PWD",
        "SMTP_USE_SSL",
        "SMTP_DEBUG",
        "EMAILJS_SERVICE_ID",
        "EMAILJS_TEMPLATE_ID",
        "EMAILJS_PUBLIC_KEY",
        "EMAILJS_PRIVATE_KEY",
        "EMAILJS_API_URL",
        "MAILGUN_API_KEY",
        "MAILGUN_DOMAIN",
        "MAILGUN_BASE_URL",
        "LOG_LEVEL",
        "SENDMAIL_PATH",
    ):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("CONTACT_TO_EMAIL", "owner@example.com")


@pytest.fixture
def recording_sender() -> Callable[..., RecordingSender]:
    return RecordingSender
