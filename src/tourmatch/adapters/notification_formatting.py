"""Shared notification formatting helpers.

Keeping formatting here prevents drift between adapters and keeps messages
consistent regardless of delivery channel.
"""

from __future__ import annotations

from tourmatch.core.models import PaymentReminder, TaxReport

DATE_FORMAT = "%d-%m-%Y"
DIVIDER = "──────────────"


def format_place_list(place_names: list[str]) -> str:
    if not place_names:
        return "(no places)"
    return ", ".join(place_names)


def format_payment_reminder(reminder: PaymentReminder) -> str:
    """Return the plain-text body of a payment reminder mail."""

    lines = [
        f"To:        {reminder.recipient}",
        "Subject:   Your tour is confirmed",
        DIVIDER,
        "",
        f"Departure: {reminder.departure_date.strftime(DATE_FORMAT)}",
        f"Pay by:    {reminder.payment_deadline.strftime(DATE_FORMAT)}",
        f"Places:    {format_place_list(reminder.place_names)}",
        "",
        DIVIDER,
    ]
    return "\n".join(lines)


def format_tax_report(report: TaxReport) -> str:
    """Return the plain-text body of a tax authority report."""

    return "\n".join(
        [
            f"To:        {report.recipient}",
            f"Contact:   {report.contact}",
            f"Fiscal id: {report.fiscal_id or '-'}",
        ]
    )
