import pytest
from pydantic import ValidationError

from ebs_estimator.models.submission import (
    CustomerDetails,
    SendEmailRequest,
    is_valid_email,
    validate_customer_details,
)

VALID_CUSTOMER = {
    "fullName": "  Sam Taylor ",
    "email": "sam@example.co.uk",
    "phone": "07700 900123",
    "addressLine1": "12 Acacia Road",
    "city": "Leeds",
    "postcode": "ls6 2ab",
}


@pytest.mark.parametrize(
    ("value", "expected"),
    [("sam@example.co.uk", True), ("a@b.c", True), ("sam@example", False), ("sam example@x.com", False), ("", False)],
)
def test_email_pattern(value, expected):
    assert is_valid_email(value) is expected


def test_customer_details_are_trimmed_and_postcode_upper_cased():
    customer = CustomerDetails.model_validate(VALID_CUSTOMER)

    assert customer.full_name == "Sam Taylor"
    assert customer.postcode == "LS6 2AB"
    assert customer.address_lines == ["12 Acacia Road", "Leeds", "LS6 2AB"]


def test_validate_customer_details_reports_each_field():
    errors = validate_customer_details({"email": "not-an-email", "city": "   "})

    assert errors == {
        "fullName": "Full name is required",
        "email": "Please enter a valid email address",
        "addressLine1": "Address line 1 is required",
        "city": "City / town is required",
        "postcode": "Postcode is required",
    }


def test_validate_customer_details_uses_wire_names_for_absent_fields():
    errors = validate_customer_details({})

    assert set(errors) == {"fullName", "email", "addressLine1", "city", "postcode"}


def test_validate_customer_details_accepts_attribute_names():
    data = {
        "full_name": "Sam Taylor",
        "email": "sam@example.co.uk",
        "address_line1": "12 Acacia Road",
        "city": "Leeds",
    }

    assert validate_customer_details(data) == {"postcode": "Postcode is required"}


def test_validate_customer_details_accepts_complete_form():
    assert validate_customer_details(VALID_CUSTOMER) == {}


def test_customer_details_rejects_missing_email():
    with pytest.raises(ValidationError):
        CustomerDetails.model_validate({**VALID_CUSTOMER, "email": None})


def test_send_email_request_defaults_customer_name():
    request = SendEmailRequest.model_validate(
        {"internalEmailHtml": "<p>a</p>", "customerEmailHtml": "<p>b</p>", "customerEmail": " sam@example.co.uk "}
    )

    assert request.customer_name == "Customer"
    assert request.customer_email == "sam@example.co.uk"
    assert request.missing_fields() == []


def test_send_email_request_lists_missing_fields():
    request = SendEmailRequest.model_validate({"internalEmailHtml": "  ", "customerEmail": None})

    assert request.missing_fields() == ["internalEmailHtml", "customerEmailHtml", "customerEmail"]
