"""Core domain models.

People, tours, and the value objects handed to collaborators live here so the
observers and adapters share one vocabulary without depending on each other.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
import logging
from typing import TYPE_CHECKING, List, Optional

from tourmatch.core.errors import DispatchError, MissingPreferenceError
from tourmatch.core.places import Place
from tourmatch.core.preferences import Preference

if TYPE_CHECKING:
    from tourmatch.core.administrator import Administrator
    from tourmatch.core.ports import TourObserver

LOGGER = logging.getLogger(__name__)

TAX_AUTHORITY_RECIPIENT = "tax authority"


@dataclass(eq=False)
class Person:
    """A prospective traveler with a budget and one vacation preference."""

    person_id: str
    email: str
    budget: float
    fiscal_id: str = ""
    preference: Optional[Preference] = None

    def __post_init__(self) -> None:
        if self.budget < 0:
            raise ValueError(f"Person {self.person_id} has a negative budget: {self.budget}")

    def change_preference(self, preference: Preference) -> None:
        self.preference = preference

    def is_place_suitable(self, place: Place) -> bool:
        if self.preference is None:
            raise MissingPreferenceError(self.person_id)
        suitable = self.preference.is_suitable(place)
        LOGGER.debug("Person %s finds %s suitable: %s", self.person_id, place.name, suitable)
        return suitable


@dataclass(frozen=True)
class PaymentReminder:
    """Mail sent to a traveler once their tour is confirmed."""

    recipient: str
    departure_date: date
    payment_deadline: date
    place_names: List[str]


@dataclass(frozen=True)
class TaxReport:
    """Report sent to the tax authority for expensive tours."""

    contact: str
    fiscal_id: str
    recipient: str = TAX_AUTHORITY_RECIPIENT


@dataclass(frozen=True)
class ObserverFailure:
    """A collaborator failure recorded for one traveler during confirmation."""

    person_id: str
    observer: str
    error: str


@dataclass
class ConfirmationResult:
    """Outcome of a confirmation attempt for one tour."""

    tour_name: str
    confirmed: bool
    notified: int = 0
    failures: List[ObserverFailure] = field(default_factory=list)


@dataclass(eq=False)
class Tour:
    """A group trip over a fixed list of places.

    ``travelers`` never grows beyond ``capacity``. People who cannot join land
    in ``pending`` and stay there; admission is never retried here.
    """

    name: str
    places: List[Place]
    capacity: int
    price_per_person: float
    departure_date: date
    travelers: List[Person] = field(default_factory=list)
    pending: List[Person] = field(default_factory=list)
    confirmation_observers: List["TourObserver"] = field(default_factory=list)
    tax_observers: List["TourObserver"] = field(default_factory=list)
    confirmed: bool = False

    def __post_init__(self) -> None:
        if self.capacity < 1:
            raise ValueError(f"Tour {self.name} needs a positive capacity, got {self.capacity}")

    def add_confirmation_observer(self, observer: "TourObserver") -> None:
        self.confirmation_observers.append(observer)

    def add_tax_observer(self, observer: "TourObserver") -> None:
        self.tax_observers.append(observer)

    def place_names(self) -> List[str]:
        return [place.name for place in self.places]

    def has_room(self) -> bool:
        return len(self.travelers) < self.capacity

    def can_afford(self, person: Person) -> bool:
        return person.budget >= self.price_per_person

    def is_suitable_for(self, person: Person) -> bool:
        """Return True when the person can pay and accepts every place.

        Each place is checked against the same preference, so a stateful
        preference advances once per place evaluated. Evaluation stops at the
        first rejected place, and an unaffordable person is never asked.
        """

        return self.can_afford(person) and all(
            person.is_place_suitable(place) for place in self.places
        )

    def admit(self, person: Person) -> bool:
        """Add the person to travelers when there is room and they fit, else to pending."""

        if self.has_room() and self.is_suitable_for(person):
            self.travelers.append(person)
            LOGGER.info("Admitted %s into %s (%s/%s)", person.person_id, self.name, len(self.travelers), self.capacity)
            return True
        self.pending.append(person)
        LOGGER.info("Person %s pending for %s", person.person_id, self.name)
        return False

    def confirm(self, administrator: "Administrator") -> ConfirmationResult:
        """Fan out to the observers when the administrator deems the tour full.

        For each traveler, every confirmation observer runs before every tax
        observer. A failing observer call is recorded as an ObserverFailure
        and the remaining observers and travelers still run. A missing
        preference is a programming error and propagates.
        """

        if self.confirmed:
            LOGGER.info("Tour %s is already confirmed", self.name)
            return ConfirmationResult(tour_name=self.name, confirmed=True)

        if not administrator.is_confirmed(self):
            return ConfirmationResult(tour_name=self.name, confirmed=False)

        self.confirmed = True
        result = ConfirmationResult(tour_name=self.name, confirmed=True)
        for traveler in self.travelers:
            for observer in [*self.confirmation_observers, *self.tax_observers]:
                try:
                    observer.on_confirmed(self, traveler)
                except MissingPreferenceError:
                    raise
                except Exception as exc:
                    observer_name = type(observer).__name__
                    if isinstance(exc, DispatchError):
                        LOGGER.warning(
                            "%s failed for %s on %s: %s", observer_name, traveler.person_id, self.name, exc
                        )
                    else:
                        # Unexpected collaborator errors get a traceback in the log.
                        LOGGER.exception("%s crashed for %s on %s", observer_name, traveler.person_id, self.name)
                    result.failures.append(
                        ObserverFailure(person_id=traveler.person_id, observer=observer_name, error=str(exc))
                    )
            result.notified += 1

        LOGGER.info(
            "Tour %s confirmed: travelers=%s, failures=%s", self.name, result.notified, len(result.failures)
        )
        return result
