"""Проверка живости сервиса."""

from typing import Dict

from fastapi import APIRouter

from nasboard import __version__

router = APIRouter(prefix="/api/health", tags=["health"])


@router.get("")
async def health_check() -> Dict[str, str]:
    return {"status": "ok", "version": __version__}
