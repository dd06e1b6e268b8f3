"""Pytest configuration and fixtures."""
import asyncio
from datetime import date
from pathlib import Path
from typing import Optional
import tempfile

import pytest
import yaml

from rate_weather.cache import ExpiringCache
from rate_weather.config import load_config, reset_config
from rate_weather.data_collection.providers.base import BaseProvider, ProviderRate, RateSeries
from rate_weather.storage import MemoryStore
from rate_weather.utils.errors import FetchError


@pytest.fixture
def temp_config_file():
    """Create a temporary config file for testing."""
    config_data = {
        'app': {
            'name': 'Test App',
            'version': '0.1.0',
            'debug': True
        },
        'api': {
            'frankfurter': {
                'base_url': 'https://frankfurter.test',
                'timeout': 5
            }
        },
        'rates': {
            'quote_currency': 'EUR',
            'history_days': 30
        },
        'cache': {
            'backend': 'memory',
            'freshness_seconds': 600,
            'key_prefix': 'test'
        },
        'weather': {
            'sunny_threshold': 0.01,
            'rainy_threshold': -0.01
        },
        'logging': {
            'level': 'WARNING',
            'format': 'text'
        }
    }

    with tempfile.NamedTemporaryFile(mode='w', suffix='.yaml', delete=False, encoding='utf-8') as f:
        yaml.dump(config_data, f, allow_unicode=True)
        config_path = f.name

    yield config_path

    Path(config_path).unlink()


@pytest.fixture(autouse=True)
def loaded_config(temp_config_file):
    """Load the temporary config as the global configuration for each test."""
    reset_config()
    config = load_config(temp_config_file)
    yield config
    reset_config()


class FakeClock:
    """Manually advanced replacement for time.time."""

    def __init__(self, start: float = 1_700_000_000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def memory_cache(clock):
    return ExpiringCache(MemoryStore(), freshness_seconds=600, clock=clock)


class FakeProvider(BaseProvider):
    """In-process provider serving fixed rates and counting calls."""

    NAME = "fake"

    def __init__(self, current=None, history=None, failing=(), delay: float = 0.0):
        self.current = current or {}
        self.history = history or {}
        self.failing = set(failing)
        self.delay = delay
        self.current_calls = []
        self.historical_calls = []

    async def get_current_rate(self, base: str, quote: str = "EUR") -> ProviderRate:
        self.current_calls.append(base)
        await asyncio.sleep(self.delay)
        if base in self.failing:
            raise FetchError(f"upstream down for {base}")
        return ProviderRate(source=self.NAME, base=base, quote=quote, rate=self.current[base])

    async def get_historical_rates(
        self, base: str, quote: str = "EUR", today: Optional[date] = None
    ) -> RateSeries:
        self.historical_calls.append(base)
        await asyncio.sleep(self.delay)
        return RateSeries(base=base, quote=quote, rates=list(self.history.get(base, [])))

    async def health_check(self) -> bool:
        return True


@pytest.fixture
def fake_provider():
    return FakeProvider(
        current={"JPY": 0.0065, "USD": 0.92},
        history={"JPY": [0.0061, 0.0062, 0.0063], "USD": [0.93, 0.93]},
    )


@pytest.fixture
def provider_factory():
    return FakeProvider
