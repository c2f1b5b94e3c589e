from __future__ import annotations

from datetime import date

from tourmatch.core.models import Person, Tour
from tourmatch.core.places import BeachResort, City, Place, Village
from tourmatch.core.preferences import Preference


class RecordingPreference(Preference):
    """Preference with a fixed answer that records every place it sees."""

    def __init__(self, answer: bool) -> None:
        self.answer = answer
        self.calls: list[str] = []

    def is_suitable(self, place: Place) -> bool:
        self.calls.append(place.name)
        return self.answer


def fun_city(name: str = "Parana", decibels: float = 35) -> City:
    return City(
        name=name,
        tax_code="C-1",
        inhabitants=250_000,
        attractions=("a", "b", "c", "d"),
        average_decibels=decibels,
    )


def calm_village(name: str = "Alvear") -> Village:
    return Village(name=name, tax_code="V-1", founded=date(1908, 9, 26), province="La Pampa", area_km2=12.0)


def quiet_beach(name: str = "Mar Azul") -> BeachResort:
    return BeachResort(
        name=name,
        tax_code="B-1",
        average_beach_meters=100,
        sea_is_dangerous=False,
        has_promenade=False,
    )


def make_person(person_id: str, budget: float, preference: "Preference | None") -> Person:
    return Person(
        person_id=person_id,
        email=f"{person_id}@example.com",
        budget=budget,
        fiscal_id=f"fiscal-{person_id}",
        preference=preference,
    )


def make_tour(
    places: list[Place],
    capacity: int = 2,
    price: float = 1000,
    name: str = "Tour",
    departure: date = date(2027, 1, 15),
) -> Tour:
    return Tour(
        name=name,
        places=places,
        capacity=capacity,
        price_per_person=price,
        departure_date=departure,
    )
