from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .exceptions import install_exception_handlers
from .routers import container, logs, static
from .services.engine_client import EngineClient
from .services.log_cache import LogCache
from .services.log_poller import LogPoller
from .settings import Settings


def _build_engine(settings: Settings) -> EngineClient:
    return EngineClient(
        base_url=settings.engine_base_url,
        container=settings.name,
        timeout_seconds=settings.upstream_timeout_seconds,
    )


def create_app(
    settings: Settings | None = None,
    *,
    engine: EngineClient | None = None,
    poll: bool = True,
) -> FastAPI:
    """
    Build the gateway application.

    Args:
        settings: Resolved configuration; read from `DOCKGATE_*` env when omitted.
        engine: Engine client to use instead of one built from settings.
        poll: Whether the lifespan runs the background log poller.

    Returns:
        FastAPI app with shared state on `app.state`.
    """

    settings = settings or Settings()  # type: ignore[call-arg]
    cache = LogCache()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        owned = engine is None
        client = engine or _build_engine(settings)
        app.state.engine = client
        poller = LogPoller(engine=client, cache=cache, interval_seconds=settings.poll_interval_seconds)
        app.state.poller = poller
        if poll:
            poller.start()
        try:
            yield
        finally:
            await poller.stop()
            app.state.engine = None
            if owned:
                await client.aclose()

    app = FastAPI(title="dockgate", version="0.1.0", lifespan=lifespan)
    app.state.settings = settings
    app.state.log_cache = cache
    app.state.engine = None
    install_exception_handlers(app)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )

    app.include_router(static.router)
    app.include_router(logs.router, prefix="/api")
    app.include_router(container.router, prefix="/api")

    return app
