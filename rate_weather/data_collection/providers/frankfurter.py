"""Frankfurter (ECB reference rates) provider implementation."""
from __future__ import annotations

import math
from datetime import date, datetime, timedelta, timezone
from typing import Any, Optional

import httpx

from rate_weather.config import get_config, load_config
from rate_weather.data_collection.providers.base import BaseProvider, ProviderRate, RateSeries
from rate_weather.utils.decorators import log_execution
from rate_weather.utils.errors import (
    ConfigurationError,
    FetchError,
    MalformedDataError,
    ValidationError,
)
from rate_weather.utils.logging import get_logger


logger = get_logger(__name__)

DATE_FORMAT = "%Y-%m-%d"


def _is_number(value: Any) -> bool:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return math.isfinite(value)


class FrankfurterClient(BaseProvider):
    NAME = "frankfurter"

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        history_days: Optional[int] = None,
    ) -> None:
        try:
            cfg = get_config()
        except ConfigurationError:
            cfg = load_config()
        self.base_url: str = (
            base_url or cfg.get("api.frankfurter.base_url", "https://api.frankfurter.app")
        ).rstrip("/")
        self.timeout: float = float(
            timeout if timeout is not None else cfg.get("api.frankfurter.timeout", 10)
        )
        self.history_days: int = (
            history_days if history_days is not None else cfg.history_days
        )

    async def _get_json(self, path: str, params: dict) -> Any:
        url = f"{self.base_url}/{path}"
        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                resp = await client.get(url, params=params)
                resp.raise_for_status()
                return resp.json()
        except (httpx.HTTPError, ValueError) as e:
            raise FetchError(f"Frankfurter request to {path} failed: {e}")

    @log_execution(log_args=False, log_result=False)
    async def get_current_rate(self, base: str, quote: str = "EUR") -> ProviderRate:
        self.validate_pair(base, quote)

        # Failures are reported by log_execution and the caller
        data = await self._get_json("latest", {"from": base, "to": quote})

        # Expected shape: {"amount": 1.0, "base": "JPY", "date": "...", "rates": {"EUR": 0.0061}}
        rates = data.get("rates") if isinstance(data, dict) else None
        value = rates.get(quote) if isinstance(rates, dict) else None
        if not _is_number(value):
            logger.debug(f"Frankfurter payload for {base}/{quote}: {data!r}"[:300])
            raise FetchError(f"No rate found for {base}/{quote} in response")

        pr = ProviderRate(
            source=self.NAME,
            base=base,
            quote=quote,
            rate=float(value),
            timestamp=datetime.now(timezone.utc),
        )
        try:
            pr.validate()
        except ValidationError as e:
            raise FetchError(f"Invalid rate from Frankfurter: {e}")
        return pr

    @log_execution(log_args=False, log_result=False)
    async def get_historical_rates(
        self, base: str, quote: str = "EUR", today: Optional[date] = None
    ) -> RateSeries:
        end = today or date.today()
        start = end - timedelta(days=self.history_days)
        series = RateSeries(base=base, quote=quote, start=start, end=end)

        try:
            self.validate_pair(base, quote)
            data = await self._get_json(
                f"{start.strftime(DATE_FORMAT)}..{end.strftime(DATE_FORMAT)}",
                {"from": base, "to": quote},
            )
        except Exception as e:
            logger.warning(f"Error fetching historical rates for {base}/{quote}, using empty series: {e}")
            return series

        by_date = data.get("rates") if isinstance(data, dict) else None
        if not isinstance(by_date, dict):
            logger.warning(f"Historical response for {base}/{quote} has no rates mapping")
            return series

        for day in sorted(by_date):
            try:
                series.rates.append(self._parse_day(by_date[day], quote))
            except MalformedDataError as e:
                logger.debug(f"Skipping {day} for {base}/{quote}: {e}")

        return series

    @staticmethod
    def _parse_day(entry: Any, quote: str) -> float:
        if not isinstance(entry, dict):
            raise MalformedDataError(f"expected mapping, got {type(entry).__name__}")
        value = entry.get(quote)
        if not _is_number(value):
            raise MalformedDataError(f"non-numeric {quote} value {value!r}")
        return float(value)

    async def health_check(self) -> bool:
        try:
            _ = await self.get_current_rate("USD", "EUR")
            return True
        except Exception:
            return False
