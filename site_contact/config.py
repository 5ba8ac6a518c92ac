"""Runtime configuration read from environment variables.

No secret or address is embedded in source.  Environment variables used:

* ``CONTACT_TO_EMAIL`` – fixed destination address for every submission.
* ``CONTACT_DELIVERY`` – delivery strategy: ``emailjs`` (default), ``smtp``,
  ``sendmail`` or ``mailgun``.
* ``LOG_LEVEL`` – logging level for the server entry point; defaults to
  ``INFO``.

Each delivery strategy reads its own credentials when it is constructed;
see the modules under ``site_contact.mailer``.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass

from site_contact.errors import ConfigurationError

DEFAULT_DELIVERY = "emailjs"

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def env_flag(name: str, default: str = "false") -> bool:
    """Return True if the variable holds a truthy value ("1", "true", "yes")."""
    return os.environ.get(name, default).strip().lower() in {"1", "true", "yes"}


def contact_recipient() -> str:
    """Return the configured destination address.

    Raises:
        ConfigurationError: If ``CONTACT_TO_EMAIL`` is unset.
    """
    recipient = os.environ.get("CONTACT_TO_EMAIL", "").strip()
    if not recipient:
        raise ConfigurationError("CONTACT_TO_EMAIL must be set")
    return recipient


@dataclass(frozen=True)
class ContactConfig:
    """Process-wide settings for the contact form."""

    to_email: str
    delivery: str = DEFAULT_DELIVERY
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "ContactConfig":
        return cls(
            to_email=contact_recipient(),
            delivery=(
                os.environ.get("CONTACT_DELIVERY", DEFAULT_DELIVERY)
                .strip()
                .lower()
                or DEFAULT_DELIVERY
            ),
            log_level=os.environ.get("LOG_LEVEL", "INFO").strip().upper() or "INFO",
        )


def configure_logging(level: str | None = None) -> None:
    """Install a basic root handler at ``level`` (or ``LOG_LEVEL``)."""
    level = (level or os.environ.get("LOG_LEVEL", "INFO")).upper()
    logging.basicConfig(level=level, format=LOG_FORMAT)


__all__ = [
    "ContactConfig",
    "DEFAULT_DELIVERY",
    "configure_logging",
    "contact_recipient",
    "env_flag",
]
