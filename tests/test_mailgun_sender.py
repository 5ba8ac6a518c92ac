from typing import Any, Dict, List

import pytest
import requests

from site_contact.errors import ConfigurationError, DeliveryError
from site_contact.mailer import mailgun_sender
from site_contact.mailer.mailgun_sender import MailgunSender
from site_contact.submission import ContactSubmission

SUBMISSION = ContactSubmission("Ada", "ada@example.com", "Hi", "Hello")


class FakeResponse:
    def __init__(self, status_code: int, text: str = "") -> None:
        self.status_code = status_code
        self.text = text

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} error", response=self)


@pytest.fixture
def mailgun_env(monkeypatch: pytest.MonkeyPatch, contact_env: None) -> None:
    monkeypatch.setenv("MAILGUN_API_KEY", "key-123")
    monkeypatch.setenv("MAILGUN_DOMAIN", "mg.example.org")


def test_requires_api_key_and_domain(contact_env: None, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("MAILGUN_API_KEY", raising=False)
    monkeypatch.delenv("MAILGUN_DOMAIN", raising=False)
    with pytest.raises(ConfigurationError):
        MailgunSender()


def test_posts_message_with_reply_to(
    mailgun_env: None, monkeypatch: pytest.MonkeyPatch
) -> None:
    posts: List[Dict[str, Any]] = []

    def fake_post(url: str, **kwargs: Any) -> FakeResponse:
        posts.append({"url": url, **kwargs})
        return FakeResponse(200)

    monkeypatch.setattr(mailgun_sender.requests, "post", fake_post)
    MailgunSender().deliver(SUBMISSION)

    assert len(posts) == 1
    post = posts[0]
    assert post["url"] == "https://api.mailgun.net/v3/mg.example.org/messages"
    assert post["auth"] == ("api", "key-123")
    assert post["data"]["to"] == ["owner@example.com"]
    assert post["data"]["h:Reply-To"] == "ada@example.com"
    assert post["data"]["from"].endswith("@mg.example.org>")
    assert "Hello" in post["data"]["html"]


def test_http_error_becomes_delivery_error(
    mailgun_env: None, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setattr(
        mailgun_sender.requests,
        "post",
        lambda url, **kwargs: FakeResponse(401, "Forbidden"),
    )
    with pytest.raises(DeliveryError) as excinfo:
        MailgunSender().deliver(SUBMISSION)
    assert excinfo.value.detail == "Forbidden"
