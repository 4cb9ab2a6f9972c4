from __future__ import annotations

import logging
from typing import Sequence

import httpx

from .breakdown import build_breakdown
from .email_templates import render_customer_email, render_internal_email
from .models.form import FormData
from .models.quote import ModuleDetail, Quote
from .models.submission import CustomerDetails, SendEmailRequest

logger = logging.getLogger(__name__)

SEND_EMAIL_PATH = "/api/sendEmail"


class SubmissionError(RuntimeError):
    """Raised when the send-email endpoint fails or cannot be reached."""


def build_submission(
    customer: CustomerDetails,
    form: FormData,
    quote: Quote,
    details: Sequence[ModuleDetail],
) -> SendEmailRequest:
    """Render both email bodies from one quote and its module details."""
    breakdown = build_breakdown(quote, details)
    return SendEmailRequest(
        internal_email_html=render_internal_email(
            customer=customer, form=form, quote=quote, breakdown=breakdown
        ),
        customer_email_html=render_customer_email(
            customer=customer, form=form, quote=quote, breakdown=breakdown
        ),
        customer_email=customer.email,
        customer_name=customer.full_name,
    )


class SubmissionClient:
    def __init__(self, base_url: str, *, http_client: httpx.Client | None = None) -> None:
        self.base_url = base_url.rstrip("/")
        self._http = http_client or httpx.Client()

    def submit(self, request: SendEmailRequest) -> None:
        try:
            response = self._http.post(
                f"{self.base_url}{SEND_EMAIL_PATH}",
                json=request.model_dump(by_alias=True),
            )
        except httpx.HTTPError as exc:
            raise SubmissionError(f"Could not reach the send-email endpoint: {exc}") from exc

        if response.is_error:
            raise SubmissionError(f"Send-email endpoint returned {response.status_code}: {response.text}")


def submit_estimate(
    client: SubmissionClient,
    customer: CustomerDetails,
    form: FormData,
    quote: Quote,
    details: Sequence[ModuleDetail],
) -> bool:
    """Post the estimate; False means the caller should show a generic failure notice."""
    request = build_submission(customer, form, quote, details)
    try:
        client.submit(request)
    except SubmissionError:
        logger.exception("Estimate submission failed", extra={"customer_email": customer.email})
        return False
    logger.info("Estimate submitted", extra={"customer_email": customer.email})
    return True


__all__ = ["SubmissionClient", "SubmissionError", "build_submission", "submit_estimate"]
