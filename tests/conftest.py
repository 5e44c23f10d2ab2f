from datetime import datetime, timezone

import pytest
from fastapi.testclient import TestClient

from app.api.http import create_app
from app.config import AppConfig
from app.infra.assets import StaticAssetFetcher

from fakes import FakeBackend


NEW_MOON_DAY = datetime(2024, 1, 11, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def public_dir(tmp_path):
    directory = tmp_path / "public"
    directory.mkdir()
    (directory / "index.html").write_text("<h1>SoulFire</h1>", encoding="utf-8")
    (directory / "favicon.ico").write_bytes(b"\x00\x00\x01\x00")
    (directory / "style.css").write_text("body {}", encoding="utf-8")
    return directory


@pytest.fixture
def config(public_dir):
    return AppConfig(
        inference_api_key="test-key",
        system_prompt="You are a test oracle.",
        assets_dir=str(public_dir),
    )


@pytest.fixture
def backend():
    return FakeBackend()


@pytest.fixture
def make_client(config, backend):
    def _make(cfg=None, be=None, clock=lambda: NEW_MOON_DAY):
        cfg = cfg or config
        app = create_app(
            config=cfg,
            backend=be or backend,
            assets=StaticAssetFetcher(cfg.assets_dir),
            clock=clock,
        )
        return TestClient(app)

    return _make


@pytest.fixture
def client(make_client):
    return make_client()


@pytest.fixture
def anyio_backend():
    return "asyncio"
