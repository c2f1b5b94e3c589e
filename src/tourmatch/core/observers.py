"""Observers run for each traveler when a tour is confirmed."""

from __future__ import annotations

from datetime import date, timedelta
import logging
from typing import Callable

from tourmatch.core.config import DEFAULT_PAYMENT_LEAD_DAYS, DEFAULT_TAX_THRESHOLD
from tourmatch.core.models import PaymentReminder, Person, TaxReport, Tour
from tourmatch.core.ports import MailSenderPort, TaxAuthorityPort
from tourmatch.core.preferences import Alternator

LOGGER = logging.getLogger(__name__)


class PaymentReminderObserver:
    """Mail each traveler the departure date, payment deadline, and places.

    The deadline is the earlier of today and ``lead_days`` before departure.
    """

    def __init__(
        self,
        mail_sender: MailSenderPort,
        lead_days: int = DEFAULT_PAYMENT_LEAD_DAYS,
        today: Callable[[], date] = date.today,
    ) -> None:
        self._mail_sender = mail_sender
        self._lead_days = lead_days
        self._today = today

    def payment_deadline(self, tour: Tour) -> date:
        return min(tour.departure_date - timedelta(days=self._lead_days), self._today())

    def on_confirmed(self, tour: Tour, traveler: Person) -> None:
        reminder = PaymentReminder(
            recipient=traveler.email,
            departure_date=tour.departure_date,
            payment_deadline=self.payment_deadline(tour),
            place_names=tour.place_names(),
        )
        self._mail_sender.send(reminder)
        LOGGER.info("Payment reminder sent to %s for %s", traveler.email, tour.name)


class TaxReportObserver:
    """Report travelers of tours priced above the threshold."""

    def __init__(self, tax_authority: TaxAuthorityPort, threshold: float = DEFAULT_TAX_THRESHOLD) -> None:
        self._tax_authority = tax_authority
        self._threshold = threshold

    def on_confirmed(self, tour: Tour, traveler: Person) -> None:
        if tour.price_per_person <= self._threshold:
            return
        self._tax_authority.notify(TaxReport(contact=traveler.email, fiscal_id=traveler.fiscal_id))
        LOGGER.info("Tax report filed for %s on %s", traveler.person_id, tour.name)


class PreferenceRotationObserver:
    """Advance an Alternator preference once more after confirmation."""

    def on_confirmed(self, tour: Tour, traveler: Person) -> None:
        if isinstance(traveler.preference, Alternator):
            traveler.preference.rotate()
            LOGGER.debug("Rotated preference for %s after %s", traveler.person_id, tour.name)
