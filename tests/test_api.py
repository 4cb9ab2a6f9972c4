from pathlib import Path

import httpx
import pytest
from fastapi.testclient import TestClient

from ebs_estimator.email_client import EmailDeliveryError, QuoteMailer, ResendEmailClient
from services.api.main import app, mailer_provider

FIXTURE = Path(__file__).resolve().parent.parent / "data" / "forms" / "terrace_renovation.json"

VALID_BODY = {
    "internalEmailHtml": "<p>internal</p>",
    "customerEmailHtml": "<p>customer</p>",
    "customerEmail": "sam@example.co.uk",
    "customerName": "Sam Taylor",
}


class RecordingMailer:
    def __init__(self, error: Exception | None = None) -> None:
        self.requests = []
        self.error = error

    def dispatch(self, request):
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        return ["msg-1", "msg-2"]


@pytest.fixture
def mailer():
    recording = RecordingMailer()
    app.dependency_overrides[mailer_provider] = lambda: lambda: recording
    yield recording
    app.dependency_overrides.clear()


@pytest.fixture
def client():
    return TestClient(app)


def test_health(client):
    assert client.get("/health").json() == {"status": "ok"}


def test_send_email_alive(client):
    response = client.get("/api/sendEmail")

    assert response.status_code == 200
    assert response.json() == {"ok": True, "message": "sendEmail API is alive (use POST)"}


@pytest.mark.parametrize("method", ["put", "patch", "delete"])
def test_other_methods_not_allowed(client, method):
    response = client.request(method.upper(), "/api/sendEmail")

    assert response.status_code == 405
    assert response.json() == {"error": "Method not allowed"}


def test_send_email_success(client, mailer):
    response = client.post("/api/sendEmail", json=VALID_BODY)

    assert response.status_code == 200
    assert response.json() == {"success": True}
    assert mailer.requests[0].customer_name == "Sam Taylor"


@pytest.mark.parametrize("missing", ["internalEmailHtml", "customerEmailHtml", "customerEmail"])
def test_send_email_missing_fields(client, mailer, missing):
    body = {**VALID_BODY, missing: "   "}
    response = client.post("/api/sendEmail", json=body)

    assert response.status_code == 400
    assert response.json() == {
        "error": "Missing fields: internalEmailHtml, customerEmailHtml, customerEmail are required"
    }
    assert mailer.requests == []


def test_send_email_rejects_non_json_body(client, mailer):
    response = client.post("/api/sendEmail", content=b"not json", headers={"Content-Type": "application/json"})

    assert response.status_code == 400


def test_send_email_invalid_address(client, mailer):
    response = client.post("/api/sendEmail", json={**VALID_BODY, "customerEmail": "sam@example"})

    assert response.status_code == 400
    assert response.json() == {"error": "Invalid customerEmail"}
    assert mailer.requests == []


def test_send_email_defaults_customer_name(client, mailer):
    body = {key: value for key, value in VALID_BODY.items() if key != "customerName"}
    client.post("/api/sendEmail", json=body)

    assert mailer.requests[0].customer_name == "Customer"


def post_with_mailer(client, provide_mailer):
    app.dependency_overrides[mailer_provider] = lambda: provide_mailer
    try:
        return client.post("/api/sendEmail", json=VALID_BODY)
    finally:
        app.dependency_overrides.clear()


def test_send_email_failure(client):
    response = post_with_mailer(client, lambda: RecordingMailer(EmailDeliveryError("Email API returned 500")))

    assert response.status_code == 500
    assert response.json() == {"error": "Email send failed", "details": "Email API returned 500"}


def test_send_email_unexpected_mailer_error(client):
    response = post_with_mailer(client, lambda: RecordingMailer(RuntimeError("mailer crashed")))

    assert response.status_code == 500
    assert response.json() == {"error": "Email send failed", "details": "mailer crashed"}


def test_send_email_mailer_setup_failure(client):
    def unavailable():
        raise RuntimeError("secret unavailable")

    response = post_with_mailer(client, unavailable)

    assert response.status_code == 500
    assert response.json() == {"error": "Email send failed", "details": "secret unavailable"}


@pytest.mark.parametrize(
    "reply",
    [{"text": "OK"}, {"json": ["queued"]}],
)
def test_send_email_accepts_any_successful_provider_reply(client, reply):
    sent = []

    def handler(request: httpx.Request) -> httpx.Response:
        sent.append(request)
        return httpx.Response(200, **reply)

    email_client = ResendEmailClient(
        "re_test",
        base_url="https://email.test",
        http_client=httpx.Client(transport=httpx.MockTransport(handler)),
    )
    mailer = QuoteMailer(email_client, from_address="a@b.c", internal_address="office@ebs-team.co.uk")

    response = post_with_mailer(client, lambda: mailer)

    assert response.status_code == 200
    assert response.json() == {"success": True}
    assert len(sent) == 2


def test_calculate_quote_endpoint(client):
    response = client.post("/v1/quotes:calculate", content=FIXTURE.read_bytes(), headers={"Content-Type": "application/json"})

    assert response.status_code == 200
    body = response.json()
    assert set(body) == {"quote", "moduleDetails", "breakdown"}
    assert [service["name"] for service in body["quote"]["services"]] == [
        detail["module"] for detail in body["moduleDetails"]
    ]
    assert body["quote"]["totalLow"] % 5 == 0
    assert body["breakdown"][0]["rooms"][0]["bullets"][0] == "Size: medium"


def test_calculate_quote_rejects_wrong_types(client):
    response = client.post("/v1/quotes:calculate", json={"selectedServices": "kitchen", "additionals": 3})

    assert response.status_code == 422
