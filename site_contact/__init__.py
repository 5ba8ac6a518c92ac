"""Top‑level package for the site contact form.

This package turns a website's contact form submission into a single
email.  Individual modules handle specific concerns: validating the
submitted fields, delivering the message through a configurable strategy
(hosted relay API, SMTP, the local mail transport or Mailgun), exposing
the form handlers over HTTP and rendering an interactive form widget.

The ``__all__`` variable enumerates the primary public modules for
convenience when using ``from site_contact import ...``.
"""

from __future__ import annotations

__all__ = [
    "config",
    "errors",
    "handlers",
    "mailer",
    "server",
    "submission",
    "validation",
    "widget",
]

# SemVer version of the package
__version__: str = "0.1.0"
