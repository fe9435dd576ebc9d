from __future__ import annotations

from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from dockgate.app.main import create_app
from dockgate.app.settings import Settings
from dockgate.tests.engine_fakes import FakeEngine


@pytest.fixture
def fake_engine() -> FakeEngine:
    return FakeEngine()


@pytest.fixture
def static_dir(tmp_path: Path) -> Path:
    path = tmp_path / "static"
    path.mkdir()
    return path


@pytest.fixture
def settings(static_dir: Path) -> Settings:
    return Settings(name="web", path=f"{static_dir}/", stream_keepalive_seconds=5.0)


@pytest.fixture
def client(settings: Settings, fake_engine: FakeEngine):
    app = create_app(settings, engine=fake_engine.client(), poll=False)
    with TestClient(app) as test_client:
        yield test_client
