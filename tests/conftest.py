"""
Pytest configuration and fixtures for tag migration tests.
"""

from collections.abc import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import ASGITransport

from fake_server import FakeServer
from tagmigrator.client import RestManagementClient
from tagmigrator.config import Settings

TEST_BASE_URL = "http://test"


@pytest.fixture
def test_settings() -> Settings:
    """Get test settings."""
    return Settings(
        USERNAME="admin",
        PASSWORD="secret",
        VERIFY_SSL=False,
        REQUEST_TIMEOUT=5.0,
        API_PREFIX="/api",
    )


@pytest.fixture
def fake_server() -> FakeServer:
    """Create an empty fake management server."""
    return FakeServer(username="admin", password="secret")


@pytest.fixture
def owner_server(fake_server: FakeServer) -> FakeServer:
    """Fake server with one "Owner" attribute and two annotated VMs."""
    fake_server.add_custom_attribute("Owner")
    fake_server.add_item("vm-1", "VM-A", Owner="Alice")
    fake_server.add_item("vm-2", "VM-B", Owner="Bob")
    return fake_server


def make_client(server: FakeServer, password: str = "secret") -> RestManagementClient:
    """Build a REST client talking to the fake server in-process."""
    return RestManagementClient(
        TEST_BASE_URL,
        username="admin",
        password=password,
        transport=ASGITransport(app=server.app),
    )


@pytest.fixture
def client_factory():
    """Factory building unconnected clients for a fake server."""
    return make_client


@pytest_asyncio.fixture(scope="function")
async def client(fake_server: FakeServer) -> AsyncGenerator[RestManagementClient, None]:
    """Create a connected client for the fake server."""
    async with make_client(fake_server) as client:
        yield client
