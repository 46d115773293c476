"""
Docker endpoints

- GET  /api/docker/status                       - доступность daemon и способ подключения
- GET  /api/docker/containers                   - список контейнеров (пустой, если daemon недоступен)
- POST /api/docker/containers/{id}/{action}     - start / stop / restart
- GET  /api/docker/containers/{id}/stats        - утилизация CPU и памяти

Обработчики объявлены через `def`: вызовы docker SDK блокирующие, FastAPI
выполняет их в пуле потоков.
"""

import logging
from typing import Any, Dict, List

from fastapi import APIRouter, Depends, Response
from fastapi.responses import JSONResponse

from nasboard.api.dependencies import get_docker_provider
from nasboard.docker_api.containers import validate_container_id
from nasboard.docker_api.data_provider import DockerDataProvider
from nasboard.docker_api.exceptions import ContainerValidationError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/docker", tags=["docker"])


@router.get("/status")
def docker_status(
    response: Response,
    provider: DockerDataProvider = Depends(get_docker_provider),
) -> Dict[str, Any]:
    """200 при успешном подключении, 503 если daemon недоступен."""
    result = provider.connection_status()
    payload = result.to_dict()
    if result.success:
        payload["message"] = "Docker connection successful"
    else:
        response.status_code = 503
        payload["message"] = "Docker connection failed"
    return payload


@router.get("/containers")
def list_containers(
    provider: DockerDataProvider = Depends(get_docker_provider),
) -> List[Dict[str, Any]]:
    return [summary.to_dict() for summary in provider.fetch_containers()]


@router.post("/containers/{container_id}/{action}")
def container_action(
    container_id: str,
    action: str,
    provider: DockerDataProvider = Depends(get_docker_provider),
):
    try:
        result = provider.perform_action(container_id, action)
    except ContainerValidationError as e:
        logger.warning("Rejected %s request for container %s: %s", action, container_id, e)
        return JSONResponse(status_code=400, content={"error": str(e)})

    if result.success:
        return {"success": True}
    return JSONResponse(status_code=500, content={"error": result.error})


@router.get("/containers/{container_id}/stats")
def container_stats(
    container_id: str,
    provider: DockerDataProvider = Depends(get_docker_provider),
):
    try:
        validate_container_id(container_id)
    except ContainerValidationError as e:
        logger.warning("Rejected stats request for container %s: %s", container_id, e)
        return JSONResponse(status_code=400, content={"error": str(e)})

    snapshot = provider.fetch_container_stats(container_id)
    if snapshot is None:
        return JSONResponse(status_code=404, content={"error": "No stats available"})
    return snapshot.to_dict()
