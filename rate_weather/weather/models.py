"""Data model for the rate weather report."""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Dict, Optional


class Weather(str, Enum):
    """Qualitative verdict on today's rate versus the trailing average."""
    SUNNY = "sunny"
    CLOUDY = "cloudy"
    RAINY = "rainy"


class DiffState(str, Enum):
    POSITIVE = "positive"
    NEGATIVE = "negative"
    NEUTRAL = "neutral"


@dataclass
class DisplayFields:
    icon: str
    rate: str  # rounded, inverted where configured
    unit: str
    diff: str  # signed percentage, or the unavailable sentinel
    state: DiffState
    comment: str

    @property
    def rate_text(self) -> str:
        return f"{self.rate} {self.unit}" if self.unit else self.rate

    def to_dict(self) -> Dict[str, str]:
        return {
            "icon": self.icon,
            "rate": self.rate,
            "unit": self.unit,
            "rate_text": self.rate_text,
            "diff": self.diff,
            "state": self.state.value,
            "comment": self.comment,
        }


@dataclass
class PairReport:
    prefix: str
    base: str
    quote: str
    current_rate: float
    average_rate: float
    weather: Weather
    history_points: int
    display: DisplayFields


@dataclass
class RefreshResult:
    status: str  # "ready" | "error"
    updated_at: datetime
    updated_text: str = ""
    pairs: Dict[str, PairReport] = field(default_factory=dict)
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.status == "ready"
