"""Tour administration: admission, first-fit assignment, and confirmation.

This module is integration-agnostic. Observers wired on each tour carry the
side effects, so the administrator only decides when a tour is full.
"""

from __future__ import annotations

import logging
from typing import Iterable, List, Optional

from tourmatch.core.models import ConfirmationResult, Person, Tour

LOGGER = logging.getLogger(__name__)


class Administrator:
    """Owns every tour plus the unassigned and pending people.

    Assignment only consumes the unassigned pool. People who matched no tour
    move to ``pending`` and are retried only after ``requeue_pending``.
    """

    def __init__(self, tours: Iterable[Tour] = (), people: Iterable[Person] = ()) -> None:
        self.tours: List[Tour] = list(tours)
        self.unassigned: List[Person] = list(people)
        self.pending: List[Person] = []

    def add_tour(self, tour: Tour) -> None:
        self.tours.append(tour)

    def register_person(self, person: Person) -> None:
        self.unassigned.append(person)

    def is_confirmed(self, tour: Tour) -> bool:
        return len(tour.travelers) == tour.capacity

    def admit(self, tour: Tour, person: Person) -> Optional[ConfirmationResult]:
        """Admit one person into one tour, confirming it when it fills up."""

        if tour.admit(person) and self.is_confirmed(tour):
            return tour.confirm(self)
        return None

    def find_tour_for(self, person: Person) -> Optional[Tour]:
        """Return the first open tour the person can pay for and fully accepts.

        Every tour tried evaluates the person's preference, so stateful
        preferences advance once per place checked across all tours tried.
        """

        for tour in self.tours:
            if self.is_confirmed(tour):
                continue
            if tour.is_suitable_for(person):
                return tour
        return None

    def assign_people_to_tours(self) -> List[ConfirmationResult]:
        """Assign every unassigned person to the first fitting tour.

        First fit, in tour list order. A tour is confirmed as soon as it
        fills. Returns the confirmation results produced along the way.
        """

        results: List[ConfirmationResult] = []
        assigned = 0
        for person in list(self.unassigned):
            self.unassigned.remove(person)
            tour = self.find_tour_for(person)
            if tour is None:
                self.pending.append(person)
                LOGGER.info("No tour found for %s, moved to pending", person.person_id)
                continue

            tour.travelers.append(person)
            assigned += 1
            LOGGER.info("Assigned %s to %s (%s/%s)", person.person_id, tour.name, len(tour.travelers), tour.capacity)
            if self.is_confirmed(tour):
                results.append(tour.confirm(self))

        LOGGER.info("Assignment complete: assigned=%s, pending=%s", assigned, len(self.pending))
        return results

    def requeue_pending(self) -> int:
        """Move pending people back to the unassigned pool for another pass."""

        count = len(self.pending)
        self.unassigned.extend(self.pending)
        self.pending = []
        return count

    def confirm_all(self) -> List[ConfirmationResult]:
        """Try to confirm every tour; tours that are not full are skipped."""

        return [tour.confirm(self) for tour in self.tours]
