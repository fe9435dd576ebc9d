from __future__ import annotations

from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="DOCKGATE_", extra="ignore", frozen=True)

    # Target container (name or id)
    name: str = Field(min_length=1)

    # Upstream engine
    host: str = "127.0.0.1"
    port: int = 2375
    upstream_timeout_seconds: float = 30.0

    # Static assets directory (index.html, script.js); files resolve as Path(path) / name.
    path: str = "static/"

    # Listener
    bind: str = "0.0.0.0"
    listen_port: int = 3000

    # Log pipeline
    poll_interval_seconds: float = 10.0
    recent_tail_lines: int = 20
    stream_keepalive_seconds: float = 15.0

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"

    @property
    def engine_base_url(self) -> str:
        return f"http://{self.host}:{self.port}"
