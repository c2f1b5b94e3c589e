"""Exceptions raised by the core domain."""

from __future__ import annotations


class TourMatchError(Exception):
    """Base class for tourmatch errors."""


class ConfigError(TourMatchError):
    """Raised when configuration inputs cannot build a valid model."""


class MissingPreferenceError(TourMatchError):
    """Raised when a person is asked about a place without a preference."""

    def __init__(self, person_id: str) -> None:
        super().__init__(f"Person {person_id} has no vacation preference assigned")
        self.person_id = person_id


class DispatchError(TourMatchError):
    """Raised by collaborators when a mail or tax dispatch fails."""
