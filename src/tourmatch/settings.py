"""Configuration loading and world setup for tourmatch.

Places, tours, people, and observer settings live in a single JSON file so a
scenario can be edited without touching Python. The file path defaults to
config.json at the project root and can be overridden with TOURMATCH_CONFIG
(read from the environment or a .env file).
"""

from __future__ import annotations

from datetime import date
import json
import logging
import os
from typing import Any, Optional

from dotenv import load_dotenv

from tourmatch.core.administrator import Administrator
from tourmatch.core.config import DEFAULT_PAYMENT_LEAD_DAYS, DEFAULT_TAX_THRESHOLD, ConfirmationConfig
from tourmatch.core.errors import ConfigError
from tourmatch.core.models import Person, Tour
from tourmatch.core.observers import PaymentReminderObserver, PreferenceRotationObserver, TaxReportObserver
from tourmatch.core.places import Place, build_place
from tourmatch.core.ports import MailSenderPort, TaxAuthorityPort
from tourmatch.core.preferences import build_preference

LOGGER = logging.getLogger(__name__)

PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", ".."))

# Default location of the scenario file.
CONFIG_PATH = os.path.join(PROJECT_ROOT, "config.json")


def resolve_config_path(explicit_path: Optional[str] = None) -> str:
    """Return the config path: explicit argument, then TOURMATCH_CONFIG, then the default."""

    if explicit_path:
        return explicit_path
    load_dotenv()
    return os.getenv("TOURMATCH_CONFIG") or CONFIG_PATH


def load_config(path: str) -> dict:
    """Load the JSON scenario file."""

    if not os.path.exists(path):
        raise FileNotFoundError(f"Config file not found: {path}")

    with open(path, "r", encoding="utf-8") as handle:
        return json.load(handle)


def confirmation_config(config: dict) -> ConfirmationConfig:
    raw = config.get("confirmation", {})
    return ConfirmationConfig(
        payment_lead_days=int(raw.get("payment_lead_days", DEFAULT_PAYMENT_LEAD_DAYS)),
        tax_threshold=float(raw.get("tax_threshold", DEFAULT_TAX_THRESHOLD)),
    )


def _build_places(raw_places: list[dict]) -> dict[str, Place]:
    places: dict[str, Place] = {}
    for entry in raw_places:
        place = build_place(entry)
        if place.name in places:
            raise ConfigError(f"Duplicate place name: {place.name}")
        places[place.name] = place
    return places


def _build_tour(entry: dict, places: dict[str, Place]) -> Tour:
    if not isinstance(entry, dict):
        raise ConfigError(f"Tour entry must be an object, got {entry!r}")
    name = entry.get("name")
    if not name:
        raise ConfigError(f"Tour entry without a name: {entry!r}")

    tour_places = []
    for place_name in entry.get("places", []):
        if place_name not in places:
            raise ConfigError(f"Tour {name} references unknown place {place_name}")
        tour_places.append(places[place_name])

    try:
        return Tour(
            name=name,
            places=tour_places,
            capacity=int(entry["capacity"]),
            price_per_person=float(entry["price_per_person"]),
            departure_date=date.fromisoformat(entry["departure_date"]),
        )
    except KeyError as exc:
        raise ConfigError(f"Tour {name} is missing field {exc.args[0]}") from exc
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"Tour {name} has an invalid value: {exc}") from exc


def _build_person(entry: dict) -> Person:
    if not isinstance(entry, dict):
        raise ConfigError(f"Person entry must be an object, got {entry!r}")
    person_id = entry.get("id")
    if not person_id:
        raise ConfigError(f"Person entry without an id: {entry!r}")
    # Admission requires a preference for every person.
    if not entry.get("preference"):
        raise ConfigError(f"Person {person_id} has no preference")

    try:
        preference = build_preference(entry["preference"])
    except ConfigError as exc:
        raise ConfigError(f"Person {person_id}: {exc}") from exc

    try:
        return Person(
            person_id=str(person_id),
            email=entry["email"],
            budget=float(entry.get("budget", 0)),
            fiscal_id=str(entry.get("fiscal_id", "")),
            preference=preference,
        )
    except KeyError as exc:
        raise ConfigError(f"Person {person_id} is missing field {exc.args[0]}") from exc
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"Person {person_id} has an invalid value: {exc}") from exc


def wire_observers(
    tour: Tour,
    mail_sender: MailSenderPort,
    tax_authority: TaxAuthorityPort,
    confirmation: ConfirmationConfig,
) -> None:
    """Register the standard observers on a tour.

    Confirmation list: payment reminder, then preference rotation.
    Tax list: tax report.
    """

    tour.add_confirmation_observer(PaymentReminderObserver(mail_sender, lead_days=confirmation.payment_lead_days))
    tour.add_confirmation_observer(PreferenceRotationObserver())
    tour.add_tax_observer(TaxReportObserver(tax_authority, threshold=confirmation.tax_threshold))


def build_world(
    config: dict[str, Any],
    mail_sender: MailSenderPort,
    tax_authority: TaxAuthorityPort,
) -> Administrator:
    """Build an Administrator holding every configured tour and person."""

    places = _build_places(config.get("places", []))
    confirmation = confirmation_config(config)

    administrator = Administrator()
    tour_names: set[str] = set()
    for entry in config.get("tours", []):
        tour = _build_tour(entry, places)
        if tour.name in tour_names:
            raise ConfigError(f"Duplicate tour name: {tour.name}")
        tour_names.add(tour.name)
        wire_observers(tour, mail_sender, tax_authority, confirmation)
        administrator.add_tour(tour)

    person_ids: set[str] = set()
    for entry in config.get("people", []):
        person = _build_person(entry)
        if person.person_id in person_ids:
            raise ConfigError(f"Duplicate person id: {person.person_id}")
        person_ids.add(person.person_id)
        administrator.register_person(person)

    LOGGER.info(
        "Loaded %s places, %s tours, %s people",
        len(places),
        len(administrator.tours),
        len(administrator.unassigned),
    )
    return administrator
