from __future__ import annotations

import asyncio
import logging
import os
import uuid
from functools import lru_cache
from typing import Any, Callable

from fastapi import Depends, FastAPI, Request
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from ebs_estimator.breakdown import ServiceBreakdown, build_breakdown
from ebs_estimator.calculator import calculate_quote
from ebs_estimator.email_client import EmailDeliveryError, QuoteMailer, ResendEmailClient
from ebs_estimator.logging_config import set_trace_id, setup_logging
from ebs_estimator.models.form import FormData
from ebs_estimator.models.quote import ModuleDetail, Quote, QuoteModel
from ebs_estimator.models.submission import REQUIRED_EMAIL_FIELDS, SendEmailRequest, is_valid_email
from ebs_estimator.module_details import generate_module_details

logger = logging.getLogger(__name__)


class CalculateQuoteResponse(QuoteModel):
    quote: Quote
    module_details: list[ModuleDetail]
    breakdown: list[ServiceBreakdown]


# Environment configuration
ENVIRONMENT = os.getenv("ENVIRONMENT", "dev")
PROJECT_ID = os.getenv("PROJECT_ID")
RESEND_API_KEY = os.getenv("RESEND_API_KEY")
EMAIL_FROM = os.getenv("EMAIL_FROM", "Exceptional Building <no-reply@ebs-team.co.uk>")
EMAIL_TO = os.getenv("EMAIL_TO")

setup_logging(environment=ENVIRONMENT, project_id=PROJECT_ID)

app = FastAPI(title="EBS Estimator API", version="0.1.0")

MISSING_FIELDS_ERROR = f"Missing fields: {', '.join(REQUIRED_EMAIL_FIELDS)} are required"


@lru_cache(maxsize=1)
def get_mailer() -> QuoteMailer:
    client = ResendEmailClient(RESEND_API_KEY, project_id=PROJECT_ID)
    return QuoteMailer(client, from_address=EMAIL_FROM, internal_address=EMAIL_TO or "")


def mailer_provider() -> Callable[[], QuoteMailer]:
    # Building the mailer can reach Secret Manager, so it happens inside the request's error handling.
    return get_mailer


def _error(status_code: int, message: str, **extra: Any) -> JSONResponse:
    return JSONResponse({"error": message, **extra}, status_code=status_code)


async def _read_json(request: Request) -> Any:
    try:
        return await request.json()
    except ValueError:
        return None


@app.post("/v1/quotes:calculate", response_model=CalculateQuoteResponse)
async def calculate(form: FormData) -> CalculateQuoteResponse:
    quote = calculate_quote(form)
    details = generate_module_details(form)
    return CalculateQuoteResponse(
        quote=quote,
        module_details=details,
        breakdown=build_breakdown(quote, details),
    )


@app.get("/api/sendEmail")
async def send_email_alive() -> JSONResponse:
    return JSONResponse({"ok": True, "message": "sendEmail API is alive (use POST)"})


@app.post("/api/sendEmail")
async def send_email(
    request: Request,
    provide_mailer: Callable[[], QuoteMailer] = Depends(mailer_provider),
) -> JSONResponse:
    set_trace_id(request.headers.get("X-Cloud-Trace-Context") or uuid.uuid4().hex)

    body = await _read_json(request)
    try:
        payload = SendEmailRequest.model_validate(body if isinstance(body, dict) else {})
    except ValidationError:
        return _error(400, MISSING_FIELDS_ERROR)

    if payload.missing_fields():
        return _error(400, MISSING_FIELDS_ERROR)
    if not is_valid_email(payload.customer_email):
        return _error(400, "Invalid customerEmail")

    try:
        mailer = await asyncio.to_thread(provide_mailer)
        await asyncio.to_thread(mailer.dispatch, payload)
    except EmailDeliveryError as exc:
        logger.exception("Email send failed", extra={"customer_email": payload.customer_email})
        return _error(500, "Email send failed", details=str(exc))
    except Exception as exc:
        logger.exception("Unexpected error sending quote emails", extra={"customer_email": payload.customer_email})
        return _error(500, "Email send failed", details=str(exc))

    logger.info("Quote emails sent", extra={"customer_email": payload.customer_email})
    return JSONResponse({"success": True})


@app.api_route("/api/sendEmail", methods=["PUT", "PATCH", "DELETE"])
async def send_email_not_allowed() -> JSONResponse:
    return _error(405, "Method not allowed")


@app.get("/health")
async def healthcheck() -> JSONResponse:
    return JSONResponse({"status": "ok"})
