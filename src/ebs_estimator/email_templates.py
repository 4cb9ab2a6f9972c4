from __future__ import annotations

from datetime import date
from html import escape
from typing import Sequence

from .breakdown import (
    ServiceBreakdown,
    format_cost_range,
    format_currency,
    format_days_range,
)
from .dictionaries import PROPERTY_TYPE_LABELS
from .models.form import FormData
from .models.quote import Quote
from .models.submission import CustomerDetails

COMPANY_NAME = "Exceptional Building Services"
DISCLAIMER = (
    "This is an estimated quote. Final costs may vary based on specific requirements "
    "and site conditions."
)


def _row(label: str, value: str) -> str:
    return (
        "<tr>"
        f'<td style="padding:4px 12px 4px 0;color:#555">{escape(label)}</td>'
        f'<td style="padding:4px 0">{escape(value)}</td>'
        "</tr>"
    )


def _services_html(breakdown: Sequence[ServiceBreakdown]) -> str:
    if not breakdown:
        return "<p>No services selected.</p>"
    parts: list[str] = []
    for service in breakdown:
        parts.append(
            f"<h3>{escape(service.name)}: {escape(format_cost_range(service.cost_low, service.cost_high))}"
            f" ({escape(format_days_range(service.days_low, service.days_high))})</h3>"
        )
        for room in service.rooms:
            parts.append(
                f"<p><strong>{escape(room.title)}</strong>: "
                f"{escape(format_cost_range(room.cost_low, room.cost_high))}</p>"
            )
            if room.bullets:
                items = "".join(f"<li>{escape(line)}</li>" for line in room.bullets)
                parts.append(f"<ul>{items}</ul>")
    return "".join(parts)


def _extras_html(quote: Quote) -> str:
    rows: list[str] = []
    for item in quote.additionals:
        rows.append(_row(f"{item.label} × {item.quantity:g}", format_currency(item.total)))
    if quote.materials_mid or quote.materials_high:
        suffix = "" if quote.materials_included else " (not included in total)"
        rows.append(_row(f"Materials{suffix}", format_cost_range(quote.materials_low, quote.materials_high)))
    if quote.design_management is not None:
        dm = quote.design_management
        rows.append(_row(f"{dm.label} ({dm.percentage:g}%)", format_currency(dm.amount)))
    if not rows:
        return ""
    return f"<h3>Extras</h3><table>{''.join(rows)}</table>"


def _totals_html(quote: Quote) -> str:
    return (
        "<h2>Estimated total: "
        f"{escape(format_cost_range(quote.total_low, quote.total_high))}</h2>"
        f"<p>Estimated duration: {quote.duration_days} working day(s), "
        f"about {quote.project_weeks} week(s).</p>"
    )


def _property_label(form: FormData) -> str:
    if not form.property_type:
        return "Not specified"
    return PROPERTY_TYPE_LABELS.get(form.property_type, form.property_type)


def render_internal_email(
    *,
    customer: CustomerDetails,
    form: FormData,
    quote: Quote,
    breakdown: Sequence[ServiceBreakdown],
    submitted_on: date | None = None,
) -> str:
    """Notification for the office: full contact details plus the breakdown."""
    contact = [
        _row("Name", customer.full_name),
        _row("Email", customer.email),
        _row("Phone", customer.phone or "Not provided"),
        _row("Address", ", ".join(customer.address_lines)),
        _row("Property type", _property_label(form)),
        _row("Submitted", (submitted_on or date.today()).isoformat()),
    ]
    notes = ""
    if customer.notes:
        notes = f"<h3>Notes</h3><p>{escape(customer.notes)}</p>"
    return (
        "<html><body>"
        f"<h1>New Quote Request — {escape(customer.full_name)}</h1>"
        f"<table>{''.join(contact)}</table>"
        f"{notes}"
        "<h2>Breakdown</h2>"
        f"{_services_html(breakdown)}"
        f"{_extras_html(quote)}"
        f"{_totals_html(quote)}"
        "</body></html>"
    )


def render_customer_email(
    *,
    customer: CustomerDetails,
    form: FormData,
    quote: Quote,
    breakdown: Sequence[ServiceBreakdown],
) -> str:
    """Confirmation sent to the customer with the same breakdown lines."""
    return (
        "<html><body>"
        f"<p>Hi {escape(customer.full_name)},</p>"
        f"<p>Thank you for using the {COMPANY_NAME} estimator. "
        "Here is a summary of your estimate. We will be in touch shortly to arrange a visit.</p>"
        f"<p>Property type: {escape(_property_label(form))}</p>"
        f"{_services_html(breakdown)}"
        f"{_extras_html(quote)}"
        f"{_totals_html(quote)}"
        f"<p><em>{escape(DISCLAIMER)}</em></p>"
        f"<p>{COMPANY_NAME}</p>"
        "</body></html>"
    )


__all__ = ["render_customer_email", "render_internal_email"]
