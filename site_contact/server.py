"""Web server for the contact form endpoints.

This module exposes the form handlers using FastAPI.  The server can be run
standalone::

    uvicorn site_contact.server:app --reload

or with ``python -m site_contact.server``, which honours ``CONTACT_HOST``,
``CONTACT_PORT`` and ``LOG_LEVEL``.  ``CORS_ORIGINS`` holds a
comma-separated list of origins allowed to post from the static site.

Routes:

* ``POST /forms/contact`` – direct-mail form (local mail transport).  Any
  other method answers ``Invalid request method.``.
* ``POST /forms/contact-smtp`` – SMTP form.
* ``POST /api/contact`` – JSON endpoint using the configured strategy.
* ``GET /health`` – liveness check.
"""

from __future__ import annotations

import logging
import os
from typing import Callable, Optional

from fastapi import Depends, FastAPI, Request
from fastapi.exception_handlers import request_validation_exception_handler
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse, Response
from pydantic import BaseModel, Field

from site_contact.config import ContactConfig, configure_logging
from site_contact.errors import ConfigurationError
from site_contact.handlers import (
    ContactHandler,
    handle_direct_mail,
    handle_smtp_relay,
)
from site_contact.mailer import EmailSender, get_sender
from site_contact.submission import ContactSubmission

LOGGER = logging.getLogger(__name__)

DIRECT_MAIL_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]
INVALID_PAYLOAD = "Please check the form fields and try again."


class ContactIn(BaseModel):
    # null is accepted and treated as an empty field.
    name: Optional[str] = Field(default=None, max_length=200)
    email: Optional[str] = Field(default=None, max_length=254)
    subject: Optional[str] = Field(default=None, max_length=200)
    message: Optional[str] = Field(default=None, max_length=5000)


class ContactOut(BaseModel):
    ok: bool
    message: str


def get_direct_mail_sender() -> EmailSender:
    """Sender used by the direct-mail form."""
    return get_sender("sendmail")


def get_direct_mail_sender_factory() -> Callable[[], EmailSender]:
    """Factory for the direct-mail sender, built only after the email check."""
    return get_direct_mail_sender


def get_smtp_sender() -> EmailSender:
    """Sender used by the SMTP form."""
    return get_sender("smtp")


def get_contact_sender() -> EmailSender:
    """Sender selected by ``CONTACT_DELIVERY``."""
    return get_sender()


app = FastAPI(title="Site Contact API")

app.add_middleware(
    CORSMiddleware,
    allow_origins=[
        o.strip() for o in os.environ.get("CORS_ORIGINS", "").split(",") if o.strip()
    ],
    allow_methods=["POST", "OPTIONS"],
    allow_headers=["Content-Type"],
)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> Response:
    if request.url.path != "/api/contact":
        return await request_validation_exception_handler(request, exc)
    LOGGER.info("Rejected contact payload: %s", exc.errors())
    return JSONResponse(
        {"ok": False, "message": INVALID_PAYLOAD}, status_code=400
    )


@app.exception_handler(ConfigurationError)
async def configuration_error_handler(
    request: Request, exc: ConfigurationError
) -> PlainTextResponse:
    LOGGER.error("Contact delivery is misconfigured: %s", exc)
    return PlainTextResponse(
        "Sorry, something went wrong. Please try again later.", status_code=500
    )


@app.api_route("/forms/contact", methods=DIRECT_MAIL_METHODS,
               response_class=PlainTextResponse,
               summary="Direct-mail contact form")
async def direct_mail_form(
    request: Request,
    sender_factory: Callable[[], EmailSender] = Depends(
        get_direct_mail_sender_factory
    ),
) -> PlainTextResponse:
    """Validate, escape and hand the message to the local transport.

    Every method other than POST answers ``Invalid request method.``.
    """
    form = await request.form() if request.method == "POST" else {}
    return PlainTextResponse(handle_direct_mail(request.method, form, sender_factory))


@app.post("/forms/contact-smtp", response_class=PlainTextResponse,
          summary="SMTP contact form")
async def smtp_form(
    request: Request,
    sender: EmailSender = Depends(get_smtp_sender),
) -> PlainTextResponse:
    """Send the posted fields through the SMTP relay."""
    form = await request.form()
    return PlainTextResponse(handle_smtp_relay(form, sender))


@app.post("/api/contact", response_model=ContactOut,
          summary="Submit the contact form")
async def contact(
    payload: ContactIn,
    sender: EmailSender = Depends(get_contact_sender),
) -> JSONResponse:
    """Trim, validate and deliver through the configured strategy."""
    submission = ContactSubmission.from_form(payload.model_dump())
    result = ContactHandler(sender).submit_submission(submission)
    if result.ok:
        status_code = 200
    elif result.error_kind == "validation":
        status_code = 400
    else:
        status_code = 502
    return JSONResponse(
        {"ok": result.ok, "message": result.message}, status_code=status_code
    )


@app.get("/health")
async def health() -> dict:
    return {"status": "ok"}


def create_app() -> FastAPI:
    """Return the FastAPI application instance.

    Exposing this function allows the server to be embedded in arbitrary
    host environments.  It simply returns the module level ``app``.
    """
    return app


def main() -> None:
    import uvicorn

    config = ContactConfig.from_env()
    configure_logging(config.log_level)
    LOGGER.info(
        "Contact form delivering to %s via %s", config.to_email, config.delivery
    )
    uvicorn.run(
        create_app(),
        host=os.environ.get("CONTACT_HOST", "0.0.0.0"),
        port=int(os.environ.get("CONTACT_PORT", "8000")),
        log_level=config.log_level.lower(),
    )


if __name__ == "__main__":
    main()
