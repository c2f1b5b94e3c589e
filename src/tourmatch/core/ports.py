"""Ports (interfaces) used by the core confirmation pipeline.

Ports define the minimal contracts for the mail and tax collaborators and for
tour observers so that the core can be reused with different backends.
"""

from __future__ import annotations

from typing import Protocol

from tourmatch.core.models import PaymentReminder, Person, TaxReport, Tour


class MailSenderPort(Protocol):
    """Mail delivery required by the payment reminder observer.

    Implementations raise DispatchError when delivery fails.
    """

    def send(self, reminder: PaymentReminder) -> None:
        ...


class TaxAuthorityPort(Protocol):
    """Tax reporting required by the tax report observer."""

    def notify(self, report: TaxReport) -> None:
        ...


class TourObserver(Protocol):
    """Side effect run once per traveler when a tour is confirmed."""

    def on_confirmed(self, tour: Tour, traveler: Person) -> None:
        ...
