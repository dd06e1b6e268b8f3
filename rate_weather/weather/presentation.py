"""Turn computed rates into display-ready strings."""
import random
from datetime import datetime
from typing import Callable, Optional

from rate_weather.weather.comments import WEATHER_ICONS, pick_comment
from rate_weather.weather.config import CurrencyPair, WeatherConfig
from rate_weather.weather.models import DiffState, DisplayFields, Weather


def format_rate(pair: CurrencyPair, current_rate: float, config: WeatherConfig) -> str:
    """Format the user-facing rate.

    Inverted pairs show 1/rate; a zero rate is shown as is.
    """
    if pair.invert:
        shown = 1 / current_rate if current_rate != 0 else current_rate
        return f"{shown:.{config.inverted_rate_decimals}f}"
    return f"{current_rate:.{config.rate_decimals}f}"


def format_difference(current_rate: float, average_rate: float, config: WeatherConfig) -> str:
    """Signed percentage of the raw (uninverted) rate against its average."""
    if average_rate == 0:
        return config.unavailable_text
    percent = (current_rate - average_rate) / average_rate * 100
    return f"{percent:+.{config.percent_decimals}f}%"


def diff_state(current_rate: float, average_rate: float) -> DiffState:
    if average_rate == 0:
        return DiffState.NEUTRAL
    if current_rate > average_rate:
        return DiffState.POSITIVE
    if current_rate < average_rate:
        return DiffState.NEGATIVE
    return DiffState.NEUTRAL


def format_display(
    pair: CurrencyPair,
    current_rate: float,
    average_rate: float,
    weather: Weather,
    config: Optional[WeatherConfig] = None,
    randrange: Callable[[int], int] = random.randrange,
) -> DisplayFields:
    config = config or WeatherConfig()
    return DisplayFields(
        icon=WEATHER_ICONS[weather],
        rate=format_rate(pair, current_rate, config),
        unit=pair.unit,
        diff=format_difference(current_rate, average_rate, config),
        state=diff_state(current_rate, average_rate),
        comment=pick_comment(weather, randrange),
    )


def format_updated_at(moment: datetime) -> str:
    """Render the "last updated" line, e.g. ``更新: 2024/3/5 9:07:02``."""
    return (
        f"更新: {moment.year}/{moment.month}/{moment.day} "
        f"{moment.hour}:{moment.minute:02d}:{moment.second:02d}"
    )
