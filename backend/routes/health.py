from __future__ import annotations

from fastapi import APIRouter, Depends

from backend.dependencies import get_cache
from rate_weather.health import get_health_status


router = APIRouter()


@router.get("/health")
async def health(cache=Depends(get_cache)):
    status = await get_health_status(cache)
    # health structure is already a dict with status, details
    return status
