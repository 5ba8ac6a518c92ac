import pytest

from site_contact.config import ContactConfig, contact_recipient, env_flag
from site_contact.errors import ConfigurationError
from site_contact.mailer import get_sender
from site_contact.mailer.emailjs_sender import EmailJSSender
from site_contact.mailer.sendmail_sender import SendmailSender


def test_recipient_is_required(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("CONTACT_TO_EMAIL", raising=False)
    with pytest.raises(ConfigurationError):
        contact_recipient()


def test_config_from_env(contact_env: None, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("CONTACT_DELIVERY", " SMTP ")
    monkeypatch.setenv("LOG_LEVEL", "debug")
    config = ContactConfig.from_env()
    assert config.to_email == "owner@example.com"
    assert config.delivery == "smtp"
    assert config.log_level == "DEBUG"


@pytest.mark.parametrize("value, expected", [("1", True), ("Yes", True), ("no", False)])
def test_env_flag(monkeypatch: pytest.MonkeyPatch, value: str, expected: bool) -> None:
    monkeypatch.setenv("SOME_FLAG", value)
    assert env_flag("SOME_FLAG") is expected


def test_get_sender_defaults_to_relay(
    contact_env: None, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setenv("EMAILJS_SERVICE_ID", "service")
    monkeypatch.setenv("EMAILJS_TEMPLATE_ID", "template")
    monkeypatch.setenv("EMAILJS_PUBLIC_KEY", "key")
    assert isinstance(get_sender(), EmailJSSender)


def test_get_sender_follows_configuration(
    contact_env: None, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setenv("CONTACT_DELIVERY", "sendmail")
    assert isinstance(get_sender(), SendmailSender)


def test_get_sender_rejects_unknown_strategy(contact_env: None) -> None:
    with pytest.raises(ConfigurationError, match="carrier-pigeon"):
        get_sender("carrier-pigeon")
