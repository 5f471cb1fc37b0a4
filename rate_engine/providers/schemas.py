"""Dataclasses describing normalized FX rate payloads."""

from __future__ import annotations

import math
from dataclasses import dataclass, replace
from datetime import datetime

from rate_engine.utils.datetime import ensure_utc

SAME_CURRENCY_PROVIDER = "same_currency"
FALLBACK_PROVIDER = "fallback"


def normalize_code(code: str) -> str:
    """Normalize a currency code to canonical uppercase form."""

    if code is None or not str(code).strip():
        raise ValueError("Currency code cannot be blank.")
    normalized = str(code).strip().upper()
    if not normalized.isascii():
        raise ValueError(f"Currency code must be ASCII: {code!r}")
    return normalized


@dataclass(frozen=True)
class RateEntry:
    """A directed exchange rate observed from a single provider.

    ``timestamp`` is the instant the rate was observed and drives cache
    freshness. ``as_of`` carries the upstream publication time when the
    provider reports one.
    """

    base_currency: str
    target_currency: str
    rate: float
    timestamp: datetime
    provider: str
    as_of: datetime | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "base_currency", normalize_code(self.base_currency))
        object.__setattr__(self, "target_currency", normalize_code(self.target_currency))
        rate = float(self.rate)
        if not math.isfinite(rate) or rate <= 0:
            raise ValueError(f"rate must be a positive finite number, got {self.rate!r}")
        object.__setattr__(self, "rate", rate)
        object.__setattr__(self, "timestamp", ensure_utc(self.timestamp))
        if self.as_of is not None:
            object.__setattr__(self, "as_of", ensure_utc(self.as_of))
        if not self.provider or not self.provider.strip():
            raise ValueError("provider must be provided for RateEntry")

    @property
    def pair(self) -> tuple[str, str]:
        return (self.base_currency, self.target_currency)

    def inverted(self) -> RateEntry:
        """Return the reverse-direction entry, keeping provenance and timestamps."""

        return replace(
            self,
            base_currency=self.target_currency,
            target_currency=self.base_currency,
            rate=1 / self.rate,
        )
