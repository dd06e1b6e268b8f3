"""System health check."""
from typing import Dict, Any, Optional
from datetime import datetime, timezone
import asyncio
from rate_weather.cache import ExpiringCache
from rate_weather.utils.logging import get_logger

logger = get_logger(__name__)


class HealthStatus:
    """Health check status."""
    HEALTHY = "healthy"
    DEGRADED = "degraded"
    UNHEALTHY = "unhealthy"


async def check_cache(cache: Optional[ExpiringCache]) -> Dict[str, Any]:
    """Check that the cache store round-trips a value."""
    if cache is None:
        return {
            "status": HealthStatus.DEGRADED,
            "message": "Cache not initialized"
        }
    try:
        test_key = "_health_check_test"
        test_value = "test"

        cache.store.set(test_key, test_value)
        retrieved = cache.store.get(test_key)
        cache.store.delete(test_key)

        if retrieved == test_value:
            return {
                "status": HealthStatus.HEALTHY,
                "message": "Cache working correctly"
            }
        else:
            return {
                "status": HealthStatus.DEGRADED,
                "message": "Cache read/write issue"
            }
    except Exception as e:
        logger.error(f"Cache health check failed: {e}")
        return {
            "status": HealthStatus.DEGRADED,
            "message": f"Cache error: {str(e)}"
        }


async def check_config() -> Dict[str, Any]:
    """Check configuration loading."""
    try:
        from rate_weather.config import load_config
        config = load_config()
        required_fields = ["app_name", "cache_freshness_seconds", "quote_currency"]

        for field in required_fields:
            if not hasattr(config, field):
                return {
                    "status": HealthStatus.DEGRADED,
                    "message": f"Missing config field: {field}"
                }

        return {
            "status": HealthStatus.HEALTHY,
            "message": "Configuration loaded"
        }
    except Exception as e:
        logger.error(f"Config health check failed: {e}")
        return {
            "status": HealthStatus.UNHEALTHY,
            "message": f"Config error: {str(e)}"
        }


async def get_health_status(cache: Optional[ExpiringCache] = None) -> Dict[str, Any]:
    """
    Get overall system health status.

    A failing cache store reports degraded, never unhealthy.

    Returns:
        Dict containing overall status and component statuses
    """
    checks = await asyncio.gather(
        check_cache(cache),
        check_config(),
        return_exceptions=True
    )

    components = {}
    for name, result in zip(("cache", "config"), checks):
        if isinstance(result, dict):
            components[name] = result
        else:
            components[name] = {"status": HealthStatus.UNHEALTHY, "message": str(result)}

    statuses = [c["status"] for c in components.values()]
    if all(s == HealthStatus.HEALTHY for s in statuses):
        overall_status = HealthStatus.HEALTHY
    elif any(s == HealthStatus.UNHEALTHY for s in statuses):
        overall_status = HealthStatus.UNHEALTHY
    else:
        overall_status = HealthStatus.DEGRADED

    return {
        "status": overall_status,
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "components": components,
    }
