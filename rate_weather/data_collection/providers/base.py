"""Provider base classes and data contracts for rate providers."""
from __future__ import annotations

import math
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from typing import List, Optional

from rate_weather.utils.errors import ValidationError


@dataclass
class ProviderRate:
    """A single current rate: quote units received per one unit of base.

    Returned by ``get_current_rate``, which raises instead of returning a
    partial result.
    """

    source: str
    base: str
    quote: str
    rate: float
    timestamp: datetime = field(
        default_factory=lambda: datetime.now(timezone.utc)
    )  # UTC timestamp

    def validate(self) -> None:
        if isinstance(self.rate, bool) or not isinstance(self.rate, (int, float)):
            raise ValidationError(f"Invalid rate: {self.rate!r}")
        if not math.isfinite(self.rate):
            raise ValidationError(f"Invalid rate: {self.rate}")

    @property
    def currency_pair(self) -> str:
        return f"{self.base}/{self.quote}"


@dataclass
class RateSeries:
    """Date-ordered daily rates for a trailing window.

    Returned by ``get_historical_rates``, which never raises: failures
    produce an empty series.
    """

    base: str
    quote: str
    start: Optional[date] = None
    end: Optional[date] = None
    rates: List[float] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.rates

    def __len__(self) -> int:
        return len(self.rates)


class BaseProvider(ABC):
    """Abstract base class for rate providers."""

    NAME: str = "base"

    @abstractmethod
    async def get_current_rate(self, base: str, quote: str = "EUR") -> ProviderRate:
        """Fetch the latest rate for a currency pair; raise FetchError on failure."""

    @abstractmethod
    async def get_historical_rates(
        self, base: str, quote: str = "EUR", today: Optional[date] = None
    ) -> RateSeries:
        """Fetch the trailing daily series for a pair; empty on failure."""

    @abstractmethod
    async def health_check(self) -> bool:
        """Return True when the upstream service looks reachable/healthy."""

    @staticmethod
    def validate_currency_code(code: str) -> None:
        """Validate a 3-letter ISO currency code in uppercase."""
        if not code or len(code) != 3 or not code.isalpha() or code != code.upper():
            raise ValidationError(
                f"Invalid currency code: {code}. Expect 3-letter uppercase ISO code."
            )

    @classmethod
    def validate_pair(cls, base: str, quote: str) -> None:
        """Validate base/quote are distinct valid ISO codes."""
        cls.validate_currency_code(base)
        cls.validate_currency_code(quote)
        if base == quote:
            raise ValidationError("Base and quote currencies cannot be the same")
