from __future__ import annotations

from typing import Annotated

from fastapi import Depends, Request

from .services.engine_client import EngineClient
from .services.log_cache import LogCache
from .settings import Settings


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_engine(request: Request) -> EngineClient:
    engine = getattr(request.app.state, "engine", None)
    if engine is None:
        raise RuntimeError("engine_client_not_ready")
    return engine


def get_log_cache(request: Request) -> LogCache:
    return request.app.state.log_cache


SettingsDep = Annotated[Settings, Depends(get_settings)]
EngineDep = Annotated[EngineClient, Depends(get_engine)]
LogCacheDep = Annotated[LogCache, Depends(get_log_cache)]
