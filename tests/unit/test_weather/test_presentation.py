from datetime import datetime

import pytest

from rate_weather.weather.comments import WEATHER_COMMENTS
from rate_weather.weather.config import CurrencyPair, WeatherConfig
from rate_weather.weather.models import DiffState, Weather
from rate_weather.weather.presentation import (
    diff_state,
    format_difference,
    format_display,
    format_rate,
    format_updated_at,
)

JPY = CurrencyPair(prefix="jpy", base="JPY", invert=True, unit="円")
USD = CurrencyPair(prefix="usd", base="USD", invert=False, unit="€")


@pytest.fixture
def config():
    return WeatherConfig()


def test_inverted_rate(config):
    assert format_rate(JPY, 0.0065, config) == "153.85"


def test_inverted_zero_rate_not_divided(config):
    assert format_rate(JPY, 0.0, config) == "0.00"


def test_plain_rate_four_decimals(config):
    assert format_rate(USD, 0.92, config) == "0.9200"
    assert format_rate(USD, 0.923456, config) == "0.9235"


def test_rate_precision_is_configurable():
    cfg = WeatherConfig(rate_decimals=2, inverted_rate_decimals=0)
    assert format_rate(USD, 0.92, cfg) == "0.92"
    assert format_rate(JPY, 0.0065, cfg) == "154"


def test_difference_uses_raw_rates(config):
    assert format_difference(0.0065, 0.0062, config) == "+4.84%"
    assert format_difference(0.92, 0.93, config) == "-1.08%"


def test_difference_zero_has_plus_sign(config):
    assert format_difference(0.93, 0.93, config) == "+0.00%"


def test_difference_zero_average_sentinel(config):
    assert format_difference(0.92, 0.0, config) == "N/A"
    assert format_difference(0.92, 0.0, WeatherConfig(unavailable_text="--")) == "--"


def test_diff_state():
    assert diff_state(1.1, 1.0) == DiffState.POSITIVE
    assert diff_state(0.9, 1.0) == DiffState.NEGATIVE
    assert diff_state(1.0, 1.0) == DiffState.NEUTRAL
    assert diff_state(1.0, 0.0) == DiffState.NEUTRAL


def test_format_display_jpy(config):
    fields = format_display(JPY, 0.0065, 0.0062, Weather.SUNNY, config, randrange=lambda n: 0)
    assert fields.icon == "☀️"
    assert fields.rate == "153.85"
    assert fields.unit == "円"
    assert fields.rate_text == "153.85 円"
    assert fields.diff == "+4.84%"
    assert fields.state == DiffState.POSITIVE
    assert fields.comment == WEATHER_COMMENTS[Weather.SUNNY][0]


def test_format_display_usd(config):
    fields = format_display(USD, 0.92, 0.93, Weather.RAINY, config, randrange=lambda n: 2)
    assert fields.icon == "🌧️"
    assert fields.rate == "0.9200"
    assert fields.diff == "-1.08%"
    assert fields.state == DiffState.NEGATIVE
    assert fields.comment == WEATHER_COMMENTS[Weather.RAINY][2]
    assert fields.to_dict()["state"] == "negative"


def test_format_updated_at():
    assert format_updated_at(datetime(2024, 3, 5, 9, 7, 2)) == "更新: 2024/3/5 9:07:02"
