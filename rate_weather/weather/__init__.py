"""Rate weather public API."""

from .models import Weather, DiffState, DisplayFields, PairReport, RefreshResult
from .config import CurrencyPair, WeatherConfig
from .engine import calculate_average, determine_weather
from .comments import pick_comment, WEATHER_ICONS, WEATHER_COMMENTS
from .presentation import format_display, format_updated_at
from .service import RateWeatherService

__all__ = [
    "Weather",
    "DiffState",
    "DisplayFields",
    "PairReport",
    "RefreshResult",
    "CurrencyPair",
    "WeatherConfig",
    "calculate_average",
    "determine_weather",
    "pick_comment",
    "WEATHER_ICONS",
    "WEATHER_COMMENTS",
    "format_display",
    "format_updated_at",
    "RateWeatherService",
]
