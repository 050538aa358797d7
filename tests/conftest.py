from __future__ import annotations

import os
import sys
from collections.abc import AsyncIterator
from pathlib import Path

import pytest
from httpx import ASGITransport, AsyncClient

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///default.db")

PROJECT_ROOT = Path(__file__).resolve().parents[1]
sys.path.append(str(PROJECT_ROOT))

# ruff: noqa: E402
from src.config.settings import Settings
from src.infrastructure.db.base import Base
from src.infrastructure.db.orm import animal  # noqa: F401
from src.interfaces.http.main import create_app
from tests.factories import RecordingImageStore


@pytest.fixture()
def owner_headers() -> dict[str, str]:
    return {"X-Owner-ID": "owner-1"}


@pytest.fixture()
def test_settings(tmp_path) -> Settings:
    db_path = tmp_path / "test.db"
    return Settings.model_validate(
        {
            "database_url": f"sqlite+aiosqlite:///{db_path}",
            "owner_header": "X-Owner-ID",
            "log_level": "INFO",
            "environment": "test",
            "farm_name": "Test Dairy",
            "proprietor_name": "Test Owner",
        }
    )


@pytest.fixture()
def image_store() -> RecordingImageStore:
    return RecordingImageStore()


@pytest.fixture()
def app(test_settings: Settings, image_store: RecordingImageStore):
    return create_app(settings=test_settings, image_store=image_store)


@pytest.fixture()
async def client(app) -> AsyncIterator[AsyncClient]:
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as client:
        engine = app.state.engine
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.drop_all)
            await conn.run_sync(Base.metadata.create_all)
        yield client
    await app.state.engine.dispose()
