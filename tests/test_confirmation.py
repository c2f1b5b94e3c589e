from __future__ import annotations

from datetime import date

from helpers import fun_city, make_person, make_tour
from tourmatch.adapters.outbox import OutboxMailSender, OutboxTaxAuthority
from tourmatch.core.administrator import Administrator
from tourmatch.core.models import Person, Tour
from tourmatch.core.observers import PaymentReminderObserver, PreferenceRotationObserver, TaxReportObserver
from tourmatch.core.preferences import CALM, FUN, Alternator

TODAY = date(2026, 10, 18)


class RecordingObserver:
    def __init__(self, label: str, log: list[tuple[str, str]]) -> None:
        self._label = label
        self._log = log

    def on_confirmed(self, tour: Tour, traveler: Person) -> None:
        self._log.append((self._label, traveler.person_id))


def _full_tour(price: float, capacity: int = 2, departure: date = date(2027, 1, 15)) -> Tour:
    tour = make_tour([fun_city("Parana"), fun_city("Rosa")], capacity=capacity, price=price, departure=departure)
    for index in range(capacity):
        tour.admit(make_person(f"p{index}", 20_000_000, FUN))
    return tour


def _wire(tour: Tour, mail: OutboxMailSender, tax: OutboxTaxAuthority) -> None:
    tour.add_confirmation_observer(PaymentReminderObserver(mail, today=lambda: TODAY))
    tour.add_confirmation_observer(PreferenceRotationObserver())
    tour.add_tax_observer(TaxReportObserver(tax))


def test_observers_run_per_traveler_confirmation_before_tax() -> None:
    log: list[tuple[str, str]] = []
    tour = _full_tour(price=100)
    tour.add_tax_observer(RecordingObserver("tax", log))
    tour.add_confirmation_observer(RecordingObserver("mail", log))
    tour.add_confirmation_observer(RecordingObserver("rotate", log))

    result = tour.confirm(Administrator([tour]))

    assert result.confirmed
    assert result.notified == 2
    assert log == [
        ("mail", "p0"),
        ("rotate", "p0"),
        ("tax", "p0"),
        ("mail", "p1"),
        ("rotate", "p1"),
        ("tax", "p1"),
    ]


def test_tour_that_is_not_full_fires_nothing() -> None:
    log: list[tuple[str, str]] = []
    tour = make_tour([fun_city()], capacity=3, price=10)
    tour.admit(make_person("ana", 100, FUN))
    tour.add_confirmation_observer(RecordingObserver("mail", log))

    result = tour.confirm(Administrator([tour]))

    assert not result.confirmed
    assert not tour.confirmed
    assert not log


def test_expensive_tour_reports_every_traveler() -> None:
    mail = OutboxMailSender()
    tax = OutboxTaxAuthority()
    tour = _full_tour(price=15_000_000)
    _wire(tour, mail, tax)

    tour.confirm(Administrator([tour]))

    assert [report.contact for report in tax.reports] == ["p0@example.com", "p1@example.com"]
    assert tax.reports[0].fiscal_id == "fiscal-p0"
    assert tax.reports[0].recipient == "tax authority"
    assert len(mail.sent) == 2


def test_cheaper_tour_skips_tax_reports() -> None:
    mail = OutboxMailSender()
    tax = OutboxTaxAuthority()
    tour = _full_tour(price=5_000_000)
    _wire(tour, mail, tax)

    tour.confirm(Administrator([tour]))

    assert not tax.reports
    assert len(mail.sent) == 2


def test_tax_threshold_is_exclusive() -> None:
    tax = OutboxTaxAuthority()
    tour = _full_tour(price=10_000_000)
    tour.add_tax_observer(TaxReportObserver(tax))

    tour.confirm(Administrator([tour]))

    assert not tax.reports


def test_payment_reminder_contents() -> None:
    mail = OutboxMailSender()
    tour = _full_tour(price=100, capacity=1)
    tour.add_confirmation_observer(PaymentReminderObserver(mail, today=lambda: TODAY))

    tour.confirm(Administrator([tour]))

    reminder = mail.sent[0]
    assert reminder.recipient == "p0@example.com"
    assert reminder.departure_date == date(2027, 1, 15)
    assert reminder.place_names == ["Parana", "Rosa"]
    # Thirty days before departure is after today, so today wins.
    assert reminder.payment_deadline == TODAY


def test_payment_deadline_uses_lead_days_when_earlier_than_today() -> None:
    observer = PaymentReminderObserver(OutboxMailSender(), today=lambda: TODAY)
    tour = make_tour([fun_city()], departure=date(2026, 11, 1))
    assert observer.payment_deadline(tour) == date(2026, 10, 2)

    custom = PaymentReminderObserver(OutboxMailSender(), lead_days=10, today=lambda: TODAY)
    assert custom.payment_deadline(tour) == TODAY


def test_rotation_observer_adds_one_swap_after_admission() -> None:
    alternator = Alternator(FUN, CALM)
    person = make_person("ana", 100, alternator)
    tour = make_tour([fun_city("Parana", decibels=10)], capacity=1, price=10)
    tour.add_confirmation_observer(PreferenceRotationObserver())

    assert tour.admit(person)
    # One swap from evaluating the single place.
    assert alternator.current is CALM

    tour.confirm(Administrator([tour]))

    assert alternator.current is FUN


def test_rotation_observer_ignores_other_preferences() -> None:
    tour = _full_tour(price=10, capacity=1)
    tour.add_confirmation_observer(PreferenceRotationObserver())
    tour.confirm(Administrator([tour]))
    assert tour.travelers[0].preference is FUN


def test_dispatch_failure_is_reported_and_processing_continues() -> None:
    mail = OutboxMailSender(failing_recipients={"p0@example.com"})
    tax = OutboxTaxAuthority()
    tour = _full_tour(price=15_000_000)
    _wire(tour, mail, tax)

    result = tour.confirm(Administrator([tour]))

    assert result.confirmed
    assert result.notified == 2
    assert len(result.failures) == 1
    failure = result.failures[0]
    assert failure.person_id == "p0"
    assert failure.observer == "PaymentReminderObserver"
    assert "p0@example.com" in failure.error
    # p0 still gets reported to the tax authority, p1 gets everything.
    assert [report.contact for report in tax.reports] == ["p0@example.com", "p1@example.com"]
    assert [reminder.recipient for reminder in mail.sent] == ["p1@example.com"]


def test_confirmed_tour_does_not_fan_out_twice() -> None:
    log: list[tuple[str, str]] = []
    tour = _full_tour(price=10, capacity=1)
    tour.add_confirmation_observer(RecordingObserver("mail", log))
    administrator = Administrator([tour])

    tour.confirm(administrator)
    second = tour.confirm(administrator)

    assert second.confirmed
    assert second.notified == 0
    assert log == [("mail", "p0")]


class FlakyObserver:
    """Observer whose collaborator drops the connection for one traveler."""

    def __init__(self, failing_person_id: str) -> None:
        self._failing = failing_person_id
        self.seen: list[str] = []

    def on_confirmed(self, tour: Tour, traveler: Person) -> None:
        if traveler.person_id == self._failing:
            raise ConnectionError("SMTP connection reset")
        self.seen.append(traveler.person_id)


def test_unexpected_collaborator_error_does_not_stop_other_travelers() -> None:
    flaky = FlakyObserver("p0")
    tax = OutboxTaxAuthority()
    tour = _full_tour(price=15_000_000)
    tour.add_confirmation_observer(flaky)
    tour.add_tax_observer(TaxReportObserver(tax))

    result = tour.confirm(Administrator([tour]))

    assert flaky.seen == ["p1"]
    assert result.notified == 2
    assert [(failure.person_id, failure.observer) for failure in result.failures] == [("p0", "FlakyObserver")]
    assert "SMTP connection reset" in result.failures[0].error
    assert [report.contact for report in tax.reports] == ["p0@example.com", "p1@example.com"]
