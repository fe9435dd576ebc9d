from __future__ import annotations

import logging

from fastapi import FastAPI, HTTPException, Request
from starlette.responses import JSONResponse, Response

from .services.engine_client import ContainerNotFound, ContainerStateUnchanged, EngineError

logger = logging.getLogger(__name__)


def _error(status_code: int, code: str, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": {"code": code, "message": message}})


def install_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(EngineError)
    async def engine_error_handler(request: Request, exc: EngineError):  # type: ignore[override]
        container = request.app.state.settings.name
        if isinstance(exc, ContainerStateUnchanged):
            # 304 carries no body.
            logger.error("%s %s: %s", request.method, request.url.path, exc.message)
            return Response(status_code=304)
        logger.error("engine error container=%s: %s: %s", container, exc.code, exc.message)
        if isinstance(exc, ContainerNotFound):
            return _error(404, "not_found", f"No such container: {container}")
        return _error(500, "upstream_unavailable", exc.message)

    @app.exception_handler(HTTPException)
    async def http_exception_handler(_: Request, exc: HTTPException):  # type: ignore[override]
        if isinstance(exc.detail, dict) and "error" in exc.detail:
            return JSONResponse(status_code=exc.status_code, content=exc.detail)
        return _error(exc.status_code, "http_error", str(exc.detail))

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):  # type: ignore[override]
        logger.exception("unhandled error: %s %s", request.method, request.url.path)
        return _error(500, "internal_error", str(exc))
