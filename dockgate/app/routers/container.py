from __future__ import annotations

import logging

from fastapi import APIRouter, Response

from ..deps import EngineDep
from ..services.engine_client import ContainerSummary

logger = logging.getLogger(__name__)

router = APIRouter(tags=["container"])

# Engine failures are rendered by the EngineError handler in exceptions.py.


@router.get("/json", response_model=ContainerSummary)
async def container_json(engine: EngineDep) -> ContainerSummary:
    summary = await engine.inspect()
    logger.info("/api/json")
    return summary


@router.post("/start", status_code=204, response_class=Response)
async def start_container(engine: EngineDep) -> Response:
    await engine.start()
    logger.info("/api/start")
    return Response(status_code=204)


@router.post("/stop", status_code=204, response_class=Response)
async def stop_container(engine: EngineDep) -> Response:
    await engine.stop()
    logger.info("/api/stop")
    return Response(status_code=204)
