"""Core configuration dataclasses.

We keep config parsing outside the core, but these dataclasses define the
shape the core expects so the settings and app layers can build safely.
"""

from __future__ import annotations

from dataclasses import dataclass

DEFAULT_PAYMENT_LEAD_DAYS = 30
DEFAULT_TAX_THRESHOLD = 10_000_000


@dataclass(frozen=True)
class ConfirmationConfig:
    """Settings for the observers wired on every tour."""

    payment_lead_days: int = DEFAULT_PAYMENT_LEAD_DAYS
    tax_threshold: float = DEFAULT_TAX_THRESHOLD
