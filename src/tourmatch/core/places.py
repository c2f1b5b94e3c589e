"""Places a tour can visit (core domain).

Each place answers two questions, whether it is fun and whether it is calm.
Fun is shared logic across variants (an even-length name plus a
variant-specific criterion); calm is decided entirely by the variant.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import date
from typing import Tuple

from tourmatch.core.errors import ConfigError

COASTAL_PROVINCES = ("Entre Ríos", "Corrientes", "Misiones")
CALM_PROVINCE = "La Pampa"


@dataclass(frozen=True)
class Place(ABC):
    """A destination identified by its name and tax code."""

    name: str
    tax_code: str

    def is_fun(self) -> bool:
        return self.has_even_letter_count() and self.specific_criterion()

    def has_even_letter_count(self) -> bool:
        """Hook for the fun check; counts every character of the name."""

        return len(self.name) % 2 == 0

    @abstractmethod
    def specific_criterion(self) -> bool:
        ...

    @abstractmethod
    def is_calm(self) -> bool:
        ...


@dataclass(frozen=True)
class City(Place):
    inhabitants: int
    attractions: Tuple[str, ...]
    average_decibels: float

    def specific_criterion(self) -> bool:
        return len(self.attractions) > 3 and self.inhabitants > 100_000

    def is_calm(self) -> bool:
        return self.average_decibels < 20


@dataclass(frozen=True)
class Village(Place):
    founded: date
    province: str
    area_km2: float

    def specific_criterion(self) -> bool:
        return self.founded.year < 1800 or self.province in COASTAL_PROVINCES

    def is_calm(self) -> bool:
        return self.province == CALM_PROVINCE


@dataclass(frozen=True)
class BeachResort(Place):
    average_beach_meters: float
    sea_is_dangerous: bool
    has_promenade: bool

    def specific_criterion(self) -> bool:
        return self.average_beach_meters > 300 and self.sea_is_dangerous

    def is_calm(self) -> bool:
        return not self.has_promenade


def _flag(config: dict, key: str) -> bool:
    """Return a boolean field, rejecting strings such as "false"."""

    value = config.get(key, False)
    if not isinstance(value, bool):
        raise ConfigError(f"Place {config.get('name')} field {key} must be true or false, got {value!r}")
    return value


def build_place(config: dict) -> Place:
    """Build a place variant from a ``kind``-tagged config entry.

    Dates use ISO format (``YYYY-MM-DD``). Missing fields raise ConfigError
    naming the place so a broken config.json is easy to fix.
    """

    if not isinstance(config, dict):
        raise ConfigError(f"Place entry must be an object, got {config!r}")
    kind = config.get("kind")
    name = config.get("name")
    if not name:
        raise ConfigError(f"Place entry without a name: {config!r}")
    tax_code = str(config.get("tax_code", ""))

    try:
        if kind == "city":
            return City(
                name=name,
                tax_code=tax_code,
                inhabitants=int(config["inhabitants"]),
                attractions=tuple(config.get("attractions", [])),
                average_decibels=float(config["average_decibels"]),
            )
        if kind == "village":
            return Village(
                name=name,
                tax_code=tax_code,
                founded=date.fromisoformat(config["founded"]),
                province=config["province"],
                area_km2=float(config.get("area_km2", 0.0)),
            )
        if kind == "beach_resort":
            return BeachResort(
                name=name,
                tax_code=tax_code,
                average_beach_meters=float(config["average_beach_meters"]),
                sea_is_dangerous=_flag(config, "sea_is_dangerous"),
                has_promenade=_flag(config, "has_promenade"),
            )
    except KeyError as exc:
        raise ConfigError(f"Place {name} is missing field {exc.args[0]}") from exc
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"Place {name} has an invalid value: {exc}") from exc

    raise ConfigError(f"Unsupported place kind for {name}: {kind}")
