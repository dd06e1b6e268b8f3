"""Averaging and classification of exchange rates."""
import math
from typing import Sequence

from rate_weather.weather.models import Weather

SUNNY_THRESHOLD = 0.01
RAINY_THRESHOLD = -0.01


def calculate_average(rates: Sequence[float]) -> float:
    """Arithmetic mean of rates; 0.0 for an empty series.

    Uses an exactly rounded sum so the result does not depend on order.
    """
    if not rates:
        return 0.0
    return math.fsum(rates) / len(rates)


def relative_difference(current: float, average: float) -> float:
    """(current - average) / average. Caller guarantees average != 0."""
    return (current - average) / average


def determine_weather(
    current: float,
    average: float,
    sunny_threshold: float = SUNNY_THRESHOLD,
    rainy_threshold: float = RAINY_THRESHOLD,
) -> Weather:
    """Classify the current rate against the trailing average.

    Both thresholds are inclusive. A zero average has no defined relative
    difference and classifies as cloudy.
    """
    if average == 0:
        return Weather.CLOUDY

    difference = relative_difference(current, average)
    if difference >= sunny_threshold:
        return Weather.SUNNY
    if difference <= rainy_threshold:
        return Weather.RAINY
    return Weather.CLOUDY
