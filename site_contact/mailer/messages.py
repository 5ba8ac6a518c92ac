"""Message bodies shared by the delivery strategies."""

from __future__ import annotations

from site_contact.submission import ContactSubmission


def render_html_body(submission: ContactSubmission) -> str:
    """Return the HTML notification body.

    Field values are interpolated as given; callers that need escaping pass
    ``submission.escaped()``.
    """
    return (
        "<h3>You have received a new message:</h3>\n"
        f"<p><strong>Name:</strong> {submission.name}</p>\n"
        f"<p><strong>Email:</strong> {submission.email}</p>\n"
        f"<p><strong>Subject:</strong> {submission.subject}</p>\n"
        f"<p><strong>Message:</strong><br>{submission.message}</p>\n"
    )


def render_text_body(submission: ContactSubmission) -> str:
    """Return the plain-text notification body used by the local transport."""
    return (
        "You have received a new message from the contact form.\n\n"
        f"Name: {submission.name}\n"
        f"Email: {submission.email}\n\n"
        f"Message:\n{submission.message}\n"
    )


__all__ = ["render_html_body", "render_text_body"]
