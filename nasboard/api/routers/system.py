"""Системные метрики хоста (CPU, память, диск, сеть) с коротким кэшированием."""

from typing import Any, Dict

from fastapi import APIRouter, Depends

from nasboard.api.dependencies import get_cache, get_settings
from nasboard.settings.registry import SettingsRegistry
from nasboard.system.metrics import read_system_snapshot
from nasboard.utils.cache import TTLCache

router = APIRouter(prefix="/api/system", tags=["system"])

CACHE_KEY = "system-info"


@router.get("")
async def system_info(
    settings: SettingsRegistry = Depends(get_settings),
    cache: TTLCache = Depends(get_cache),
) -> Dict[str, Any]:
    cached = cache.get(CACHE_KEY)
    if cached is not None:
        return cached

    snapshot = await read_system_snapshot(settings.get_value("metrics", "disk_path"))
    payload = snapshot.to_dict()
    ttl = settings.get_value("metrics", "system_cache_ttl_sec")
    if ttl:
        cache.set(CACHE_KEY, payload, ttl)
    return payload
