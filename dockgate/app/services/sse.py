from __future__ import annotations

import asyncio
import contextlib
import logging
from typing import AsyncGenerator, AsyncIterator

from .engine_client import EngineClient, EngineError
from .redaction import redact

logger = logging.getLogger(__name__)

# SSE frames are line-delimited, so newlines inside a chunk travel as this marker.
NEWLINE_MARKER = "<newline>"
KEEPALIVE_FRAME = ": keep-alive\n\n"


def format_chunk(raw: bytes) -> str:
    text = redact(raw.decode("utf-8", errors="replace"))
    return text.replace("\r", "").replace("\n", NEWLINE_MARKER)


def sse_event(data: str) -> str:
    return f"data: {data}\n\n"


async def _next_chunk(chunks: AsyncGenerator[bytes, None]) -> bytes | None:
    try:
        return await chunks.__anext__()
    except StopAsyncIteration:
        return None


async def relay_log_stream(
    *,
    engine: EngineClient,
    keepalive_seconds: float = 15.0,
) -> AsyncIterator[str]:
    """
    Async generator that yields SSE frames for the container's live output.

    One `data:` frame per upstream chunk, in arrival order. A keep-alive
    comment is emitted whenever the upstream stays quiet for
    `keepalive_seconds`; the pending upstream read is kept across it.
    """

    chunks = engine.attach_stream()
    pending: asyncio.Task[bytes | None] | None = None
    try:
        while True:
            if pending is None:
                pending = asyncio.ensure_future(_next_chunk(chunks))
            done, _ = await asyncio.wait({pending}, timeout=keepalive_seconds)
            if not done:
                yield KEEPALIVE_FRAME
                continue

            task, pending = pending, None
            try:
                raw = task.result()
            except EngineError as e:
                logger.error("stream relay ended: %s: %s", e.code, e.message)
                return
            if raw is None:
                logger.info("stream relay ended: upstream closed")
                return
            yield sse_event(format_chunk(raw))
    finally:
        if pending is not None:
            pending.cancel()
            with contextlib.suppress(asyncio.CancelledError, EngineError):
                await pending
        await chunks.aclose()
