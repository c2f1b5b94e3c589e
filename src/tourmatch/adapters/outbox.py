"""In-memory outbox adapters.

Both adapters keep every dispatched item in order. A set of contacts can be
marked as failing to exercise the DispatchError path end to end.
"""

from __future__ import annotations

from typing import Iterable, List

from tourmatch.core.errors import DispatchError
from tourmatch.core.models import PaymentReminder, TaxReport


class OutboxMailSender:
    """Mail adapter that records reminders instead of sending them."""

    def __init__(self, failing_recipients: Iterable[str] = ()) -> None:
        self.sent: List[PaymentReminder] = []
        self._failing = set(failing_recipients)

    def send(self, reminder: PaymentReminder) -> None:
        if reminder.recipient in self._failing:
            raise DispatchError(f"Mail delivery to {reminder.recipient} failed")
        self.sent.append(reminder)


class OutboxTaxAuthority:
    """Tax adapter that records reports instead of filing them."""

    def __init__(self, failing_contacts: Iterable[str] = ()) -> None:
        self.reports: List[TaxReport] = []
        self._failing = set(failing_contacts)

    def notify(self, report: TaxReport) -> None:
        if report.contact in self._failing:
            raise DispatchError(f"Tax report for {report.contact} was rejected")
        self.reports.append(report)
