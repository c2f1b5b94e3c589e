"""Logging adapters for the mail and tax ports.

They deliver nothing; the formatted body goes to the log so a dry run shows
exactly what would have been sent.
"""

from __future__ import annotations

import logging

from tourmatch.adapters.notification_formatting import format_payment_reminder, format_tax_report
from tourmatch.core.models import PaymentReminder, TaxReport

LOGGER = logging.getLogger(__name__)


class LoggingMailSender:
    """Mail adapter that writes the reminder to the log."""

    def send(self, reminder: PaymentReminder) -> None:
        LOGGER.info("Mail for %s\n%s", reminder.recipient, format_payment_reminder(reminder))


class LoggingTaxAuthority:
    """Tax adapter that writes the report to the log."""

    def notify(self, report: TaxReport) -> None:
        LOGGER.info("Tax report for %s\n%s", report.contact, format_tax_report(report))
