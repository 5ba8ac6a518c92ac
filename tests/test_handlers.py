from typing import Callable

import pytest

from site_contact.errors import DeliveryError, RelayError
from site_contact.handlers import (
    CONTACT_SENT,
    DIRECT_MAIL_FAILED,
    DIRECT_MAIL_SENT,
    INVALID_EMAIL,
    INVALID_METHOD,
    SEND_FAILED,
    SMTP_SENT,
    ContactHandler,
    handle_direct_mail,
    handle_smtp_relay,
)

FORM = {
    "name": "<Ada>",
    "email": "ada@example.com",
    "Subject": "Q & A",
    "message": "1 < 2",
}


def test_direct_mail_rejects_other_methods(recording_sender: Callable) -> None:
    sender = recording_sender()
    for method in ("GET", "PUT", "DELETE"):
        assert handle_direct_mail(method, FORM, sender) == INVALID_METHOD
    assert sender.delivered == []


def test_direct_mail_invalid_email_halts_before_transport(
    recording_sender: Callable,
) -> None:
    sender = recording_sender()
    form = dict(FORM, email="ada@")
    assert handle_direct_mail("POST", form, sender) == INVALID_EMAIL
    assert sender.delivered == []


def test_direct_mail_escapes_free_text_but_not_subject(
    recording_sender: Callable,
) -> None:
    sender = recording_sender()
    assert handle_direct_mail("post", FORM, sender) == DIRECT_MAIL_SENT
    (sent,) = sender.delivered
    assert sent.name == "&lt;Ada&gt;"
    assert sent.message == "1 &lt; 2"
    assert sent.subject == "Q & A"


def test_direct_mail_reads_capitalised_subject_key(recording_sender: Callable) -> None:
    sender = recording_sender()
    form = {k: v for k, v in FORM.items() if k != "Subject"}
    form["subject"] = "lowercase"
    handle_direct_mail("POST", form, sender)
    assert sender.delivered[0].subject == ""


def test_direct_mail_transport_failure_is_generic(recording_sender: Callable) -> None:
    sender = recording_sender(error=DeliveryError("boom", detail="secret detail"))
    assert handle_direct_mail("POST", FORM, sender) == DIRECT_MAIL_FAILED


def test_smtp_relay_sends_fields_as_posted(recording_sender: Callable) -> None:
    sender = recording_sender()
    form = {"name": " <Ada> ", "email": "whatever", "subject": "", "message": "x"}
    assert handle_smtp_relay(form, sender) == SMTP_SENT
    (sent,) = sender.delivered
    assert sent.name == " <Ada> "
    assert sent.email == "whatever"


def test_smtp_relay_reports_library_detail(recording_sender: Callable) -> None:
    sender = recording_sender(
        error=DeliveryError("failed", detail="(535, b'Bad credentials')")
    )
    assert handle_smtp_relay(FORM, sender) == (
        "Message could not be sent. Mailer Error: (535, b'Bad credentials')"
    )


def test_contact_handler_requires_all_fields(recording_sender: Callable) -> None:
    sender = recording_sender()
    result = ContactHandler(sender).submit({"name": "Ada", "email": "  "})
    assert not result.ok
    assert result.message == "All fields are required."
    assert result.error_kind == "validation"
    assert sender.delivered == []


def test_contact_handler_trims_and_delivers(recording_sender: Callable) -> None:
    sender = recording_sender()
    result = ContactHandler(sender).submit(
        {"name": " Ada ", "email": "ada@example.com", "subject": "Hi", "message": "Hello "}
    )
    assert result.ok
    assert result.message == CONTACT_SENT
    assert sender.delivered[0].name == "Ada"
    assert sender.delivered[0].message == "Hello"


@pytest.mark.parametrize(
    "error, expected",
    [
        (RelayError(400, "Template not found"), "Template not found"),
        (RelayError(None), SEND_FAILED),
        (DeliveryError("boom", detail="internal"), SEND_FAILED),
    ],
)
def test_contact_handler_delivery_failures(
    recording_sender: Callable, error: Exception, expected: str
) -> None:
    result = ContactHandler(recording_sender(error=error)).submit(
        {"name": "Ada", "email": "ada@example.com", "subject": "Hi", "message": "Hello"}
    )
    assert not result.ok
    assert result.error_kind == "delivery"
    assert result.message == expected


def test_direct_mail_factory_is_not_called_for_invalid_email(
    recording_sender: Callable,
) -> None:
    def factory():
        raise AssertionError("sender built before the email check")

    form = dict(FORM, email="ada@")
    assert handle_direct_mail("POST", form, factory) == INVALID_EMAIL
    assert handle_direct_mail("HEAD", FORM, factory) == INVALID_METHOD


def test_direct_mail_accepts_sender_factory(recording_sender: Callable) -> None:
    sender = recording_sender()
    assert handle_direct_mail("POST", FORM, lambda: sender) == DIRECT_MAIL_SENT
    assert len(sender.delivered) == 1
