"""Interactive contact form widget.

``ContactFormController`` implements the form's submit behaviour
independently of any UI toolkit: trim the fields, refuse empty ones, show a
loading indicator while the relay call is in flight, then either reset the
form and show a success notice for a fixed window, or surface the relay's
error text.  ``render_contact_form`` binds the controller to Streamlit
elements.  Run it with::

    streamlit run site_contact/widget.py

Relay credentials may come from the environment or from Streamlit secrets
(``EMAILJS_SERVICE_ID``, ``EMAILJS_TEMPLATE_ID``, ``EMAILJS_PUBLIC_KEY``,
``CONTACT_TO_EMAIL``).
"""

from __future__ import annotations

import logging
import os
import time
from typing import Any, Callable, Mapping, Optional, Protocol

from site_contact.errors import ContactError, RelayError
from site_contact.handlers import SEND_FAILED
from site_contact.mailer import EmailSender
from site_contact.submission import ContactSubmission

LOGGER = logging.getLogger(__name__)

REQUIRED_MESSAGE = "All fields are required."
SUCCESS_MESSAGE = "Your message has been sent. Thank you!"
SUCCESS_DISPLAY_SECONDS = 5


class FormUI(Protocol):
    """The indicators and controls the controller drives."""

    def show_loading(self) -> None: ...

    def hide_loading(self) -> None: ...

    def show_error(self, message: str) -> None: ...

    def hide_error(self) -> None: ...

    def show_success(self) -> None: ...

    def hide_success(self) -> None: ...

    def set_submit_enabled(self, enabled: bool) -> None: ...

    def reset_form(self) -> None: ...


class ContactFormController:
    """Submit handler for the contact form."""

    def __init__(
        self,
        relay: EmailSender,
        ui: FormUI,
        sleep: Callable[[float], None] = time.sleep,
        display_seconds: float = SUCCESS_DISPLAY_SECONDS,
    ) -> None:
        self._relay = relay
        self._ui = ui
        self._sleep = sleep
        self._display_seconds = display_seconds

    def _fail(self, message: str) -> None:
        self._ui.hide_loading()
        self._ui.show_error(message)

    def submit(self, fields: Mapping[str, Any]) -> bool:
        """Run one submission; return True if the relay accepted it."""
        submission = ContactSubmission.from_form(fields)
        if submission.missing_fields():
            self._fail(REQUIRED_MESSAGE)
            return False

        self._ui.show_loading()
        self._ui.hide_error()
        self._ui.hide_success()
        self._ui.set_submit_enabled(False)
        try:
            try:
                self._relay.deliver(submission)
            except RelayError as exc:
                self._fail(exc.text or SEND_FAILED)
                return False
            except ContactError as exc:
                LOGGER.warning("Contact form delivery failed: %s", exc)
                self._fail(SEND_FAILED)
                return False

            self._ui.hide_loading()
            self._ui.show_success()
            self._ui.reset_form()
            self._sleep(self._display_seconds)
            self._ui.hide_success()
            return True
        finally:
            self._ui.set_submit_enabled(True)


# ============================ Streamlit binding ============================

_NONCE_KEY = "contact_form_nonce"
_SUBMITTING_KEY = "contact_form_submitting"


class StreamlitFormUI:
    """``FormUI`` backed by Streamlit placeholders and session state."""

    def __init__(self, st: Any) -> None:
        self._st = st
        self._loading = st.empty()
        self._error = st.empty()
        self._success = st.empty()

    def show_loading(self) -> None:
        self._loading.info("Sending...")

    def hide_loading(self) -> None:
        self._loading.empty()

    def show_error(self, message: str) -> None:
        self._error.error(message)

    def hide_error(self) -> None:
        self._error.empty()

    def show_success(self) -> None:
        self._success.success(SUCCESS_MESSAGE)

    def hide_success(self) -> None:
        self._success.empty()

    def set_submit_enabled(self, enabled: bool) -> None:
        self._st.session_state[_SUBMITTING_KEY] = not enabled

    def reset_form(self) -> None:
        # Widgets are keyed by the nonce; bumping it renders fresh empty
        # inputs on the next run.
        self._st.session_state[_NONCE_KEY] = self._st.session_state.get(_NONCE_KEY, 0) + 1


def _load_env_from_secrets(st: Any) -> None:
    """Copy Streamlit secrets into ``os.environ`` for the relay sender."""
    names = (
        "EMAILJS_SERVICE_ID",
        "EMAILJS_TEMPLATE_ID",
        "EMAILJS_PUBLIC_KEY",
        "EMAILJS_PRIVATE_KEY",
        "CONTACT_TO_EMAIL",
    )
    try:
        for name in names:
            if name in st.secrets and not os.environ.get(name):
                os.environ[name] = str(st.secrets[name])
    except FileNotFoundError:
        LOGGER.debug("No Streamlit secrets file; using the environment only")


def render_contact_form(relay: Optional[EmailSender] = None) -> None:
    """Render the contact form page in Streamlit."""
    import streamlit as st

    from site_contact.mailer.emailjs_sender import EmailJSSender

    _load_env_from_secrets(st)
    st.header("Contact")

    nonce = st.session_state.setdefault(_NONCE_KEY, 0)
    with st.form(f"contact-form-{nonce}"):
        name = st.text_input("Your Name", key=f"name-{nonce}")
        email = st.text_input("Your Email", key=f"email-{nonce}")
        subject = st.text_input("Subject", key=f"subject-{nonce}")
        message = st.text_area("Message", height=200, key=f"message-{nonce}")
        submitted = st.form_submit_button(
            "Send Message",
            disabled=bool(st.session_state.get(_SUBMITTING_KEY)),
        )

    ui = StreamlitFormUI(st)
    if not submitted:
        return

    try:
        relay = relay or EmailJSSender()
    except ContactError as exc:
        LOGGER.error("Contact form relay is misconfigured: %s", exc)
        ui.show_error(SEND_FAILED)
        return

    fields = {"name": name, "email": email, "subject": subject, "message": message}
    if ContactFormController(relay, ui).submit(fields):
        st.rerun()


if __name__ == "__main__":
    render_contact_form()
