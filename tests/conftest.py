"""Test configuration and fixtures."""

import os
import shutil
import tempfile

import pytest
import pytest_asyncio
from aiohttp import web

from satchel.core.types import DaemonConfig
from tests.helpers import FakeDaemonClient, create_fake_daemon_app, write_manifest


@pytest.fixture
def manifest_file(tmp_path):
    """Sample manifest with one public and one private image."""
    return write_manifest(tmp_path)


@pytest.fixture
def fake_client():
    """Recording in-memory daemon client."""
    return FakeDaemonClient()


@pytest_asyncio.fixture
async def fake_daemon():
    """Serve the fake Engine API on a unix socket.

    Yields the aiohttp app (for inspecting recorded requests) and a
    DaemonConfig pointing at the socket.
    """
    app = create_fake_daemon_app()
    runner = web.AppRunner(app)
    await runner.setup()

    # Short directory: unix socket paths are limited to ~100 characters
    socket_dir = tempfile.mkdtemp(prefix="satchel-")
    socket_path = os.path.join(socket_dir, "docker.sock")
    site = web.UnixSite(runner, socket_path)
    await site.start()

    yield app, DaemonConfig(host=f"unix://{socket_path}")

    await runner.cleanup()
    shutil.rmtree(socket_dir, ignore_errors=True)


# Pytest configuration
def pytest_configure(config):
    """Configure pytest markers and settings."""
    config.addinivalue_line(
        "markers", "integration: mark test as integration test requiring a Docker daemon"
    )
    config.addinivalue_line("markers", "unit: mark test as unit test (default)")


def pytest_collection_modifyitems(config, items):
    """Skip integration tests unless a Docker daemon is available."""
    skip_integration = pytest.mark.skip(reason="Docker daemon not available")

    for item in items:
        if (
            "integration" in item.keywords
            and os.getenv("DOCKER_AVAILABLE", "false").lower() != "true"
        ):
            item.add_marker(skip_integration)
