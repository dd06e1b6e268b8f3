from __future__ import annotations

from datetime import datetime
from typing import Dict, Optional

from pydantic import BaseModel

from rate_weather.weather.models import PairReport, RefreshResult


class DisplayFieldsResponse(BaseModel):
    icon: str
    rate: str
    unit: str
    rate_text: str
    diff: str
    state: str
    comment: str


class PairReportResponse(BaseModel):
    """Display fields plus the raw numbers behind them."""
    prefix: str
    base: str
    quote: str
    current_rate: float
    average_rate: float
    weather: str
    history_points: int
    display: DisplayFieldsResponse

    @classmethod
    def from_report(cls, report: PairReport) -> "PairReportResponse":
        return cls(
            prefix=report.prefix,
            base=report.base,
            quote=report.quote,
            current_rate=report.current_rate,
            average_rate=report.average_rate,
            weather=report.weather.value,
            history_points=report.history_points,
            display=DisplayFieldsResponse(**report.display.to_dict()),
        )


class RatesResponse(BaseModel):
    status: str
    updated_at: datetime
    updated_text: str
    pairs: Dict[str, PairReportResponse]
    error: Optional[str] = None

    @classmethod
    def from_result(cls, result: RefreshResult) -> "RatesResponse":
        return cls(
            status=result.status,
            updated_at=result.updated_at,
            updated_text=result.updated_text,
            pairs={k: PairReportResponse.from_report(v) for k, v in result.pairs.items()},
            error=result.error,
        )
