from __future__ import annotations

import re
from typing import Any, Mapping

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator
from pydantic.alias_generators import to_camel
from pydantic_core import PydanticCustomError

EMAIL_PATTERN = re.compile(r"^\S+@\S+\.\S+$")

REQUIRED_EMAIL_FIELDS = ("internalEmailHtml", "customerEmailHtml", "customerEmail")

_FIELD_LABELS = {
    "full_name": "Full name",
    "email": "Email",
    "address_line1": "Address line 1",
    "city": "City / town",
    "postcode": "Postcode",
}


def is_valid_email(value: str) -> bool:
    return bool(EMAIL_PATTERN.match(value))


class _TrimmedModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        str_strip_whitespace=True,
        validate_default=True,
    )

    @field_validator("*", mode="before")
    @classmethod
    def _blank_nulls(cls, value):
        if value is None:
            return ""
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return str(value)
        return value


class CustomerDetails(_TrimmedModel):
    full_name: str = ""
    email: str = ""
    phone: str = ""
    address_line1: str = ""
    address_line2: str = ""
    city: str = ""
    postcode: str = ""
    notes: str = ""

    @field_validator("full_name", "email", "address_line1", "city", "postcode")
    @classmethod
    def _required(cls, value: str, info) -> str:
        if not value:
            raise PydanticCustomError(
                "required",
                "{field} is required",
                {"field": _FIELD_LABELS[info.field_name]},
            )
        return value

    @field_validator("email")
    @classmethod
    def _email_format(cls, value: str) -> str:
        if not is_valid_email(value):
            raise PydanticCustomError("invalid_email", "Please enter a valid email address")
        return value

    @field_validator("postcode")
    @classmethod
    def _upper_postcode(cls, value: str) -> str:
        return value.upper()

    @property
    def address_lines(self) -> list[str]:
        return [line for line in (self.address_line1, self.address_line2, self.city, self.postcode) if line]


def validate_customer_details(data: Mapping[str, Any]) -> dict[str, str]:
    """Map each invalid contact field (camelCase) to the message shown beside it."""
    try:
        CustomerDetails.model_validate(data)
    except ValidationError as exc:
        # Fields validated from their defaults are reported by attribute name.
        wire_names = {name: field.alias or name for name, field in CustomerDetails.model_fields.items()}
        errors: dict[str, str] = {}
        for error in exc.errors():
            field = str(error["loc"][0]) if error["loc"] else "form"
            errors.setdefault(wire_names.get(field, field), error["msg"])
        return errors
    return {}


class SendEmailRequest(_TrimmedModel):
    internal_email_html: str = ""
    customer_email_html: str = ""
    customer_email: str = ""
    customer_name: str = ""

    @field_validator("customer_name")
    @classmethod
    def _default_name(cls, value: str) -> str:
        return value or "Customer"

    def missing_fields(self) -> list[str]:
        values = {
            "internalEmailHtml": self.internal_email_html,
            "customerEmailHtml": self.customer_email_html,
            "customerEmail": self.customer_email,
        }
        return [name for name in REQUIRED_EMAIL_FIELDS if not values[name]]


__all__ = [
    "CustomerDetails",
    "EMAIL_PATTERN",
    "REQUIRED_EMAIL_FIELDS",
    "SendEmailRequest",
    "is_valid_email",
    "validate_customer_details",
]
