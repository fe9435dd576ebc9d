from __future__ import annotations

import logging
from pathlib import Path

from fastapi import APIRouter
from fastapi.responses import FileResponse

from ..deps import SettingsDep
from ..settings import Settings
from ..utils.errors import http_error

logger = logging.getLogger(__name__)

router = APIRouter(tags=["static"])


def _static_file(settings: Settings, name: str, media_type: str) -> FileResponse:
    file_path = Path(settings.path) / name
    if not file_path.is_file() or file_path.stat().st_size == 0:
        logger.error("static file missing: %s", file_path)
        http_error(500, "static_missing", f"Static file not available: {name}")
    logger.info("/%s", "" if name == "index.html" else name)
    return FileResponse(file_path, media_type=media_type)


@router.get("/")
def index(settings: SettingsDep) -> FileResponse:
    return _static_file(settings, "index.html", "text/html")


@router.get("/script.js")
def script(settings: SettingsDep) -> FileResponse:
    return _static_file(settings, "script.js", "text/javascript")
