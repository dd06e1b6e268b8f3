"""Refresh cycle: fetch both pairs concurrently, classify and format them."""
from __future__ import annotations

import asyncio
import random
import uuid
from datetime import datetime
from typing import Any, Callable, List, Optional

from rate_weather.cache import ExpiringCache
from rate_weather.data_collection.providers.base import BaseProvider
from rate_weather.utils.decorators import log_execution
from rate_weather.utils.logging import get_logger
from rate_weather.weather.config import CurrencyPair, WeatherConfig
from rate_weather.weather.engine import calculate_average, determine_weather
from rate_weather.weather.models import PairReport, RefreshResult
from rate_weather.weather.presentation import format_display, format_updated_at

logger = get_logger(__name__)

READY = "ready"
ERROR = "error"


def _is_rate(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


class RateWeatherService:
    """Produces the rate weather report for every configured pair.

    Each pair needs a current rate and a trailing series; all four lookups
    go through the expiring cache and run concurrently. A failed current
    rate fails the whole cycle, a failed series falls back to today's rate.
    """

    def __init__(
        self,
        provider: BaseProvider,
        cache: ExpiringCache,
        config: Optional[WeatherConfig] = None,
        key_prefix: str = "rate_weather",
        randrange: Callable[[int], int] = random.randrange,
        now: Callable[[], datetime] = datetime.now,
    ):
        self.provider = provider
        self.cache = cache
        self.config = config or WeatherConfig()
        self.key_prefix = key_prefix
        self._randrange = randrange
        self._now = now

    @property
    def pairs(self) -> List[CurrencyPair]:
        return self.config.pairs

    def cache_key(self, pair: CurrencyPair, kind: str) -> str:
        return f"{self.key_prefix}:{pair.prefix}:{kind}"

    async def get_current_rate(self, pair: CurrencyPair) -> float:
        """Current rate for pair; provider errors propagate."""
        key = self.cache_key(pair, "current")

        async def fetch() -> float:
            rate = await self.provider.get_current_rate(pair.base, pair.quote)
            return rate.rate

        value = await self.cache.fetch_with_cache(key, fetch)
        if not _is_rate(value):
            logger.warning(f"Ignoring unusable cached rate under {key}: {value!r}")
            value = await fetch()
            self.cache.set(key, value)
        return float(value)

    async def get_historical_rates(self, pair: CurrencyPair) -> List[float]:
        """Trailing series for pair; empty when unavailable."""
        key = self.cache_key(pair, "historical")

        async def fetch() -> List[float]:
            series = await self.provider.get_historical_rates(pair.base, pair.quote)
            return list(series.rates)

        values = await self.cache.fetch_with_cache(key, fetch)
        if not isinstance(values, list):
            logger.warning(f"Ignoring unusable cached series under {key}")
            return []
        return [float(v) for v in values if _is_rate(v)]

    def build_report(
        self, pair: CurrencyPair, current_rate: float, history: List[float]
    ) -> PairReport:
        if not history:
            logger.warning(
                f"No historical rates for {pair.base}/{pair.quote}, comparing against today's rate"
            )
            history = [current_rate]

        average = calculate_average(history)
        weather = determine_weather(
            current_rate,
            average,
            sunny_threshold=self.config.sunny_threshold,
            rainy_threshold=self.config.rainy_threshold,
        )
        display = format_display(
            pair, current_rate, average, weather, self.config, self._randrange
        )
        return PairReport(
            prefix=pair.prefix,
            base=pair.base,
            quote=pair.quote,
            current_rate=current_rate,
            average_rate=average,
            weather=weather,
            history_points=len(history),
            display=display,
        )

    @log_execution(log_args=False, log_result=False)
    async def refresh(self) -> RefreshResult:
        """Run one refresh cycle. Never raises; failures come back as an error result."""
        log = get_logger(__name__, correlation_id=uuid.uuid4().hex)
        lookups = []
        for pair in self.pairs:
            lookups.append(self.get_current_rate(pair))
            lookups.append(self.get_historical_rates(pair))

        try:
            results = await asyncio.gather(*lookups)
        except Exception as e:
            log.error(f"Refresh failed: {e}", exc_info=True)
            return RefreshResult(
                status=ERROR,
                updated_at=self._now(),
                error="Failed to fetch exchange rates",
            )

        reports = {}
        for i, pair in enumerate(self.pairs):
            current_rate, history = results[2 * i], results[2 * i + 1]
            reports[pair.prefix] = self.build_report(pair, current_rate, history)
            log.info(
                f"{pair.base}/{pair.quote}: rate={current_rate} "
                f"avg={reports[pair.prefix].average_rate:.6f} weather={reports[pair.prefix].weather.value}"
            )

        moment = self._now()
        return RefreshResult(
            status=READY,
            updated_at=moment,
            updated_text=format_updated_at(moment),
            pairs=reports,
        )
