"""The contact form submission record.

A ``ContactSubmission`` is created when the visitor submits the form,
consumed by a single delivery attempt and then discarded.  It carries no
identifier and is never stored.  The destination address is not part of
the submission; strategies read it from configuration.
"""

from __future__ import annotations

import html
from dataclasses import dataclass, fields, replace
from typing import Any, Dict, Mapping, Tuple

FIELD_NAMES: Tuple[str, ...] = ("name", "email", "subject", "message")


def _text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, (list, tuple)):
        # Multi-valued form fields: the last value wins, like PHP's $_POST.
        value = value[-1] if value else ""
    return str(value)


@dataclass(frozen=True)
class ContactSubmission:
    """The four visitor-supplied fields of the contact form."""

    name: str = ""
    email: str = ""
    subject: str = ""
    message: str = ""

    @classmethod
    def from_form(
        cls,
        form: Mapping[str, Any],
        subject_key: str = "subject",
        strip: bool = True,
    ) -> "ContactSubmission":
        """Build a submission from posted form fields.

        Args:
            form: Any mapping of field name to value.  Missing keys become
                empty strings.
            subject_key: Key holding the subject.  The direct-mail form posts
                it as ``Subject``.
            strip: Trim surrounding whitespace from every value.
        """
        values = {
            "name": _text(form.get("name")),
            "email": _text(form.get("email")),
            "subject": _text(form.get(subject_key)),
            "message": _text(form.get("message")),
        }
        if strip:
            values = {key: value.strip() for key, value in values.items()}
        return cls(**values)

    def missing_fields(self) -> Tuple[str, ...]:
        """Return the names of empty fields, in form order."""
        return tuple(f.name for f in fields(self) if not getattr(self, f.name))

    def escaped(self) -> "ContactSubmission":
        """Return a copy with the free-text fields HTML-escaped.

        The subject is left untouched: it only ever travels in a header.
        """
        return replace(
            self,
            name=html.escape(self.name),
            email=html.escape(self.email),
            message=html.escape(self.message),
        )

    def as_template_params(self, to_email: str) -> Dict[str, str]:
        """Return the payload expected by the relay's email template."""
        return {
            "from_name": self.name,
            "from_email": self.email,
            "subject": self.subject,
            "message": self.message,
            "to_email": to_email,
        }


__all__ = ["ContactSubmission", "FIELD_NAMES"]
