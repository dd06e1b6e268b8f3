from dataclasses import dataclass, field
from typing import Any, Dict, List
import yaml

from rate_weather.config import Config, resolve_config_path
from rate_weather.utils.errors import ConfigurationError


@dataclass
class CurrencyPair:
    prefix: str  # display identifier, e.g. "jpy"
    base: str
    quote: str = "EUR"
    invert: bool = False  # show 1/rate to end users
    unit: str = ""


def default_pairs(quote: str = "EUR") -> List[CurrencyPair]:
    return [
        CurrencyPair(prefix="jpy", base="JPY", quote=quote, invert=True, unit="円"),
        CurrencyPair(prefix="usd", base="USD", quote=quote, invert=False, unit="€"),
    ]


@dataclass
class WeatherConfig:
    sunny_threshold: float = 0.01
    rainy_threshold: float = -0.01
    rate_decimals: int = 4
    inverted_rate_decimals: int = 2
    percent_decimals: int = 2
    unavailable_text: str = "N/A"
    pairs: List[CurrencyPair] = field(default_factory=default_pairs)

    def __post_init__(self) -> None:
        if self.rainy_threshold >= self.sunny_threshold:
            raise ConfigurationError(
                f"rainy_threshold ({self.rainy_threshold}) must be below "
                f"sunny_threshold ({self.sunny_threshold})"
            )
        prefixes = [p.prefix for p in self.pairs]
        if len(set(prefixes)) != len(prefixes):
            raise ConfigurationError(f"Duplicate pair prefixes: {prefixes}")

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "WeatherConfig":
        w = data.get("weather") or {}
        rates = data.get("rates") or {}
        quote = rates.get("quote_currency", "EUR")

        pairs = default_pairs(quote)
        if rates.get("pairs"):
            pairs = [
                CurrencyPair(
                    prefix=str(p["prefix"]),
                    base=str(p["base"]),
                    quote=quote,
                    invert=bool(p.get("invert", False)),
                    unit=str(p.get("unit", "")),
                )
                for p in rates["pairs"]
            ]

        return cls(
            sunny_threshold=float(w.get("sunny_threshold", 0.01)),
            rainy_threshold=float(w.get("rainy_threshold", -0.01)),
            rate_decimals=int(w.get("rate_decimals", 4)),
            inverted_rate_decimals=int(w.get("inverted_rate_decimals", 2)),
            percent_decimals=int(w.get("percent_decimals", 2)),
            unavailable_text=str(w.get("unavailable_text", "N/A")),
            pairs=pairs,
        )

    @classmethod
    def from_config(cls, config: Config) -> "WeatherConfig":
        """Build from an already loaded application ``Config``."""
        return cls.from_dict({
            "weather": config.get("weather", {}),
            "rates": config.get("rates", {}),
        })

    @classmethod
    def from_yaml(cls, config_path: str = "config.yaml") -> "WeatherConfig":
        cfg_path = resolve_config_path(config_path)
        if not cfg_path.exists():
            return cls()
        with open(cfg_path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
        return cls.from_dict(data)
