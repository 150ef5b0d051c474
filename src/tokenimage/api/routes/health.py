"""Health check endpoint with cache status."""

from typing import Any

from fastapi import APIRouter

from tokenimage.api.dependencies import CacheStoreDep, SettingsDep

router = APIRouter(tags=["health"])


@router.get("/health")
async def health_check(settings: SettingsDep, cache: CacheStoreDep) -> dict[str, Any]:
    """
    Health check endpoint with cache status.

    Returns:
        dict with overall status, version and cache health.
    """
    cache_health = await cache.health_check()
    overall_status = "ok" if cache_health["healthy"] else "degraded"

    return {
        "status": overall_status,
        "version": settings.app_version,
        "cache": cache_health,
    }
