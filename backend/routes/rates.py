from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from backend.dependencies import get_rate_weather_service
from backend.models.responses import RatesResponse


router = APIRouter()


@router.get("", response_model=RatesResponse)
async def get_rates(service=Depends(get_rate_weather_service)):
    """Run one refresh cycle and return both pairs, or 503 when it fails."""
    result = await service.refresh()
    if not result.ok:
        raise HTTPException(status_code=503, detail=result.error or "Exchange rates unavailable")
    return RatesResponse.from_result(result)
