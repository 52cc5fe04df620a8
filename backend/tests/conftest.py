"""
Floreria Backend — Test Configuration (conftest.py)
=====================================================

What:  Shared pytest fixtures for the entire test suite.
How:   Every API test gets its own application built by create_app() against
       a throwaway SQLite file and a temporary image directory, so tests
       never share rows or files.

Fixture Hierarchy:
    Function-scoped (created fresh for each test):
    ├── temp_storage: Temporary image directory
    ├── test_settings: Settings pointing at temp_storage and a SQLite file
    ├── test_app: FastAPI app with tables created
    ├── test_client: HTTPX AsyncClient bound to test_app
    ├── image_service: test_app's ImageService
    └── png_data_uri / png_bytes: a tiny image payload
"""

import base64
import os
import tempfile

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport


# ══════════════════════════════════════════════════════════════════════════
# Environment Setup
# ══════════════════════════════════════════════════════════════════════════

# Set BEFORE any app imports: app.main builds a module-level app from them
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///./floreria_test.db"
os.environ["STORAGE_ROOT"] = tempfile.mkdtemp(prefix="floreria_test_")
os.environ["LOG_LEVEL"] = "WARNING"

from app.config import Settings  # noqa: E402
from app.database import Base  # noqa: E402
from app.main import create_app  # noqa: E402


# 1x1 transparent PNG
PNG_BYTES = base64.b64decode(
    "iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAQAAAC1HAwCAAAAC0lEQVR42mNkYAAAAAYAAjCB0C8AAAAASUVORK5CYII="
)


# ══════════════════════════════════════════════════════════════════════════
# Function-Scoped Fixtures (created fresh for each test)
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def temp_storage(tmp_path):
    storage_dir = tmp_path / "uploads"
    storage_dir.mkdir()
    return str(storage_dir)


@pytest.fixture
def test_settings(tmp_path, temp_storage):
    return Settings(
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'floreria.db'}",
        storage_root=temp_storage,
        log_level="WARNING",
        api_prefix="/api",
        cors_origins="*",
    )


@pytest_asyncio.fixture
async def test_app(test_settings):
    """
    A fresh application with empty catalogo_ramos and pedido tables.

    Tables come from Base.metadata (same definitions as migration 001).
    """
    app = create_app(test_settings)
    async with app.state.engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield app
    await app.state.engine.dispose()


@pytest_asyncio.fixture
async def test_client(test_app):
    """
    HTTPX AsyncClient routed straight into the ASGI app.

    raise_app_exceptions=False: unexpected errors are answered by the
    catch-all 500 handler and then re-raised by Starlette; the test sees the
    response instead of the exception.

    Usage:
        async def test_health(test_client):
            response = await test_client.get("/health")
            assert response.status_code == 200
    """
    transport = ASGITransport(app=test_app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
def image_service(test_app):
    return test_app.state.image_service


@pytest.fixture
def png_bytes():
    return PNG_BYTES


@pytest.fixture
def png_data_uri():
    return "data:image/png;base64," + base64.b64encode(PNG_BYTES).decode("ascii")


@pytest.fixture
def jpeg_data_uri():
    return "data:image/jpeg;base64," + base64.b64encode(b"\xff\xd8\xff\xe0fake\xff\xd9").decode("ascii")
