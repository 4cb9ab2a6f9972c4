from __future__ import annotations

import logging
from typing import Any

import httpx
from google.cloud import secretmanager

from .models.submission import SendEmailRequest

logger = logging.getLogger(__name__)

RESEND_BASE_URL = "https://api.resend.com"
INTERNAL_SUBJECT = "New Quote Request — {name}"
CUSTOMER_SUBJECT = "Your EBS Estimate Summary"


class EmailDeliveryError(RuntimeError):
    """Raised when the email API rejects a message or cannot be reached."""


class ResendEmailClient:
    """Thin wrapper around the Resend transactional email API."""

    def __init__(
        self,
        api_key: str | None = None,
        *,
        project_id: str | None = None,
        base_url: str = RESEND_BASE_URL,
        http_client: httpx.Client | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            api_key: Resend API key (or fetch from Secret Manager)
            project_id: GCP project ID for Secret Manager
            base_url: API root, overridable for tests
            http_client: Optional preconfigured httpx client
        """
        if not api_key and project_id:
            api_key = self._get_secret(project_id, "resend-api-key")

        self.base_url = base_url.rstrip("/")
        self._api_key = api_key
        self._http = http_client or httpx.Client()

    def send(
        self,
        *,
        from_address: str,
        to: str,
        subject: str,
        html: str,
        reply_to: str | None = None,
    ) -> str:
        """Send one HTML email and return the provider's message id."""
        if not self._api_key:
            raise EmailDeliveryError("Email API key is not configured")

        payload: dict[str, Any] = {
            "from": from_address,
            "to": [to],
            "subject": subject,
            "html": html,
        }
        if reply_to:
            payload["reply_to"] = reply_to

        try:
            response = self._http.post(
                f"{self.base_url}/emails",
                json=payload,
                headers={"Authorization": f"Bearer {self._api_key}"},
            )
        except httpx.HTTPError as exc:
            raise EmailDeliveryError(f"Email API request failed: {exc}") from exc

        if response.is_error:
            raise EmailDeliveryError(
                f"Email API returned {response.status_code}: {_error_message(response)}"
            )

        message_id = _message_id(response)
        logger.info("Sent email", extra={"email_subject": subject, "message_id": message_id})
        return message_id

    def close(self) -> None:
        self._http.close()

    def _get_secret(self, project_id: str, secret_id: str) -> str:
        """Fetch secret from Secret Manager.

        Args:
            project_id: GCP project ID
            secret_id: Secret ID

        Returns:
            Secret value
        """
        client = secretmanager.SecretManagerServiceClient()
        name = f"projects/{project_id}/secrets/{secret_id}/versions/latest"
        response = client.access_secret_version(name=name)
        return response.payload.data.decode("UTF-8")


def _message_id(response: httpx.Response) -> str:
    # A 2xx means the message was accepted even when the body carries no id.
    try:
        body = response.json()
    except ValueError:
        return ""
    if isinstance(body, dict) and body.get("id"):
        return str(body["id"])
    return ""


def _error_message(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return response.text
    if isinstance(body, dict) and body.get("message"):
        return str(body["message"])
    return response.text


class QuoteMailer:
    """Sends the internal notification, then the customer confirmation."""

    def __init__(self, client: ResendEmailClient, *, from_address: str, internal_address: str) -> None:
        self.client = client
        self.from_address = from_address
        self.internal_address = internal_address

    def dispatch(self, request: SendEmailRequest) -> list[str]:
        if not self.internal_address:
            raise EmailDeliveryError("Internal recipient is not configured")

        internal_id = self.client.send(
            from_address=self.from_address,
            to=self.internal_address,
            subject=INTERNAL_SUBJECT.format(name=request.customer_name),
            html=request.internal_email_html,
            reply_to=request.customer_email,
        )
        customer_id = self.client.send(
            from_address=self.from_address,
            to=request.customer_email,
            subject=CUSTOMER_SUBJECT,
            html=request.customer_email_html,
        )
        return [internal_id, customer_id]


__all__ = [
    "CUSTOMER_SUBJECT",
    "EmailDeliveryError",
    "INTERNAL_SUBJECT",
    "QuoteMailer",
    "ResendEmailClient",
]
