"""Vacation preference strategies (core domain).

A preference decides whether a place suits a person. Calm and Fun are pure
functions of the place. Alternator and Composite hold state or children and
must be owned by a single person: evaluating them can advance an Alternator,
so sharing one between two people leaks rotation across them.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
import logging
from typing import Iterable, List

from tourmatch.core.errors import ConfigError
from tourmatch.core.places import Place

LOGGER = logging.getLogger(__name__)


class Preference(ABC):
    """Strategy deciding whether a place is suitable."""

    @abstractmethod
    def is_suitable(self, place: Place) -> bool:
        ...


class Calm(Preference):
    def is_suitable(self, place: Place) -> bool:
        return place.is_calm()

    def __repr__(self) -> str:
        return "Calm()"


class Fun(Preference):
    def is_suitable(self, place: Place) -> bool:
        return place.is_fun()

    def __repr__(self) -> str:
        return "Fun()"


# Stateless, safe to share between people.
CALM = Calm()
FUN = Fun()


class Alternator(Preference):
    """Round-robin between two preferences.

    Every evaluation uses ``current`` and then swaps, whatever the result.
    Two consecutive calls therefore consult both preferences in order, and an
    even number of calls restores the starting arrangement.
    """

    def __init__(self, current: Preference, other: Preference) -> None:
        self.current = current
        self.other = other

    def is_suitable(self, place: Place) -> bool:
        result = self.current.is_suitable(place)
        self.rotate()
        return result

    def rotate(self) -> None:
        """Swap ``current`` and ``other`` without evaluating anything."""

        self.current, self.other = self.other, self.current

    def __repr__(self) -> str:
        return f"Alternator(current={self.current!r}, other={self.other!r})"


class Composite(Preference):
    """Suitable when any member is suitable.

    Members are evaluated in insertion order and evaluation stops at the first
    match, so stateful members after it are left untouched. An empty
    composite accepts nothing.
    """

    def __init__(self, members: Iterable[Preference] = ()) -> None:
        self._members: List[Preference] = list(members)

    @property
    def members(self) -> List[Preference]:
        return list(self._members)

    def add(self, preference: Preference) -> None:
        self._members.append(preference)

    def remove(self, preference: Preference) -> None:
        self._members.remove(preference)

    def is_suitable(self, place: Place) -> bool:
        return any(member.is_suitable(place) for member in self._members)

    def __repr__(self) -> str:
        return f"Composite({self._members!r})"


def build_preference(config: dict) -> Preference:
    """Build a preference tree from its config representation.

    Examples::

        {"type": "calm"}
        {"type": "alternator", "members": [{"type": "calm"}, {"type": "fun"}]}
        {"type": "composite", "members": [...]}

    Calm and Fun resolve to the shared singletons. Alternator and Composite
    nodes are created fresh on every call, so two people built from the same
    config never share state.
    """

    if not isinstance(config, dict):
        raise ConfigError(f"Preference must be an object with a type, got {config!r}")
    kind = str(config.get("type", "")).lower()
    members_config = config.get("members", []) or []
    if not isinstance(members_config, list):
        raise ConfigError(f"Preference members must be a list, got {members_config!r}")
    if kind == "calm":
        return CALM
    if kind == "fun":
        return FUN

    members = [build_preference(member) for member in members_config]
    if kind == "alternator":
        if len(members) != 2:
            raise ConfigError(f"Alternator preference needs exactly 2 members, got {len(members)}")
        return Alternator(members[0], members[1])
    if kind == "composite":
        if not members:
            LOGGER.warning("Composite preference without members never accepts a place")
        return Composite(members)

    raise ConfigError(f"Unsupported preference type: {config.get('type')!r}")
