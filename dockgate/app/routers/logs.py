from __future__ import annotations

import logging
from email.utils import formatdate

from fastapi import APIRouter
from fastapi.responses import PlainTextResponse, StreamingResponse

from ..deps import EngineDep, LogCacheDep, SettingsDep
from ..services.redaction import redact
from ..services.sse import relay_log_stream

logger = logging.getLogger(__name__)

router = APIRouter(tags=["logs"])


@router.get("/logs", response_class=PlainTextResponse)
def read_logs(cache: LogCacheDep) -> PlainTextResponse:
    # Served from the poller's snapshot; stale text is preferred over an error.
    logger.info("/api/logs")
    headers = {}
    updated_at = cache.updated_at
    if updated_at is not None:
        headers["Last-Modified"] = formatdate(updated_at, usegmt=True)
    return PlainTextResponse(cache.read(), headers=headers)


@router.get("/logs/recent", response_class=PlainTextResponse)
async def read_recent_logs(engine: EngineDep, settings: SettingsDep) -> str:
    text = await engine.fetch_logs(tail=settings.recent_tail_lines)
    logger.info("/api/logs/recent")
    return redact(text)


@router.api_route("/stream", methods=["GET", "POST"])
async def stream_logs(engine: EngineDep, settings: SettingsDep):
    logger.info("/api/stream")
    generator = relay_log_stream(engine=engine, keepalive_seconds=settings.stream_keepalive_seconds)
    return StreamingResponse(
        generator,
        media_type="text/event-stream",
        headers={"Cache-Control": "no-cache", "X-Accel-Buffering": "no"},
    )
