"""
Yoga Workout Backend — Test Configuration (conftest.py)
=========================================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy:
    Function-scoped (created fresh for each test):
    ├── mongo_db: In-memory MongoDB (mongomock-motor), same API as motor
    ├── mock_db: MagicMock database for "no store call happened" assertions
    ├── temp_storage: Temporary directory for file operations
    ├── blob_store: LocalFileStore rooted at temp_storage
    ├── sample_image_bytes: Fake image content for upload tests
    └── test_client: HTTPX AsyncClient wired to the app with mongo_db injected
"""

import os
import tempfile
from unittest.mock import MagicMock

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from mongomock_motor import AsyncMongoMockClient


# ══════════════════════════════════════════════════════════════════════════
# Environment Setup
# ══════════════════════════════════════════════════════════════════════════

# Override settings for testing BEFORE any app imports.
# The storage root is a subdirectory so tests can place files next to it
# (outside the root) when checking the path traversal guard.
TEST_ROOT = tempfile.mkdtemp(prefix="yogaworkout_test_")
os.environ["STORAGE_ROOT"] = os.path.join(TEST_ROOT, "storage")
os.environ["MONGODB_URL"] = "mongodb://localhost:27017"
os.environ["MONGODB_DATABASE"] = "yogaworkout_test"
os.environ["LOG_LEVEL"] = "WARNING"


# ══════════════════════════════════════════════════════════════════════════
# Function-Scoped Fixtures (created fresh for each test)
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def mongo_db():
    """
    Provides an empty in-memory database per test.

    Usage:
        async def test_list(mongo_db):
            await mongo_db["stretches"].insert_one({...})
            result = await stretch_service.list_stretches(mongo_db)
    """
    return AsyncMongoMockClient()["yogaworkout_test"]


@pytest.fixture
def mock_db():
    """
    A database that records every collection access.

    Usage:
        mock_db.__getitem__.assert_not_called()   # nothing touched the store
    """
    return MagicMock()


@pytest.fixture
def temp_storage(tmp_path):
    storage_dir = tmp_path / "storage"
    storage_dir.mkdir()
    return str(storage_dir)


@pytest.fixture
def blob_store(temp_storage):
    from yogaworkout.services.file_service import LocalFileStore

    return LocalFileStore(storage_root=temp_storage)


@pytest.fixture
def sample_image_bytes():
    """Minimal JPEG: Start of Image (FFD8) + JFIF marker + End of Image (FFD9)."""
    return (
        b'\xff\xd8\xff\xe0\x00\x10JFIF\x00\x01\x01\x00\x00\x01\x00\x01\x00\x00'
        b'\xff\xd9'
    )


@pytest_asyncio.fixture
async def test_client(mongo_db):
    """
    Provides an async HTTP test client for endpoint testing.

    The app's get_database dependency is overridden with mongo_db, so a test
    can seed or inspect the same database the endpoints use.

    Usage:
        async def test_health(test_client):
            response = await test_client.get("/health")
    """
    from yogaworkout.database import get_database
    from yogaworkout.main import app

    app.dependency_overrides[get_database] = lambda: mongo_db
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def mock_db_client(mock_db):
    """Like test_client, but backed by mock_db."""
    from yogaworkout.database import get_database
    from yogaworkout.main import app

    app.dependency_overrides[get_database] = lambda: mock_db
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()
