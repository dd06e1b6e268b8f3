from __future__ import annotations

from typing import Optional

from rate_weather.cache import ExpiringCache, create_cache
from rate_weather.config import load_config
from rate_weather.data_collection.providers import get_provider
from rate_weather.weather.config import WeatherConfig
from rate_weather.weather.service import RateWeatherService


_cache_singleton: Optional[ExpiringCache] = None
_service_singleton: Optional[RateWeatherService] = None


def get_cache() -> ExpiringCache:
    global _cache_singleton
    if _cache_singleton is None:
        _cache_singleton = create_cache(load_config())
    return _cache_singleton


def get_rate_weather_service() -> RateWeatherService:
    global _service_singleton
    if _service_singleton is None:
        config = load_config()
        _service_singleton = RateWeatherService(
            provider=get_provider("frankfurter"),
            cache=get_cache(),
            config=WeatherConfig.from_config(config),
            key_prefix=config.cache_key_prefix,
        )
    return _service_singleton
