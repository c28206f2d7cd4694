"""
Pytest Configuration and Fixtures

This module provides shared fixtures and configuration for all tests.
"""

import asyncio
import socket
from contextlib import closing
from typing import AsyncGenerator

import httpx
import pytest
import pytest_asyncio

from kvhttp.cache.store import KVStore
from kvhttp.network.http_server import KVServer, create_app
from kvhttp.protocol.dispatcher import Dispatcher
from kvhttp.protocol.parser import ProtocolParser


def find_free_port() -> int:
    """Find an available port for testing."""
    with closing(socket.socket(socket.AF_INET, socket.SOCK_STREAM)) as s:
        s.bind(('', 0))
        s.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
        return s.getsockname()[1]


# ============================================================================
# KVStore Fixtures
# ============================================================================

@pytest.fixture
def store() -> KVStore:
    """Create a fresh, empty KVStore instance."""
    return KVStore()


# ============================================================================
# Protocol Fixtures
# ============================================================================

@pytest.fixture
def parser() -> ProtocolParser:
    """Create a ProtocolParser instance."""
    return ProtocolParser()


@pytest.fixture
def dispatcher(store: KVStore) -> Dispatcher:
    """Create a Dispatcher over the fresh store, reporting missing keys as 500."""
    return Dispatcher(store, missing_key_status=500)


# ============================================================================
# In-process HTTP Fixtures
# ============================================================================

@pytest_asyncio.fixture
async def asgi_client(dispatcher: Dispatcher) -> AsyncGenerator[httpx.AsyncClient, None]:
    """
    An httpx client talking to the application in-process, no socket involved.
    """
    transport = httpx.ASGITransport(app=create_app(dispatcher))
    async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as client:
        yield client


# ============================================================================
# Server Fixtures
# ============================================================================

@pytest.fixture
def server_port() -> int:
    """Get a free port for server testing."""
    return find_free_port()


async def _wait_until_running(srv: KVServer, timeout: float = 5.0) -> None:
    loop = asyncio.get_running_loop()
    deadline = loop.time() + timeout
    while not srv.is_running():
        if loop.time() > deadline:
            raise RuntimeError("server did not start in time")
        await asyncio.sleep(0.02)


@pytest_asyncio.fixture
async def server(server_port: int) -> AsyncGenerator[KVServer, None]:
    """
    Create and start a server instance for testing.

    This fixture:
    1. Creates a KVServer on a random free port
    2. Starts it in a background task
    3. Yields the server once it accepts requests
    4. Cleans up after the test
    """
    srv = KVServer(host='127.0.0.1', port=server_port, missing_key_status=500)

    server_task = asyncio.create_task(srv.start())
    await _wait_until_running(srv)

    yield srv

    # Cleanup
    await srv.stop()
    server_task.cancel()
    try:
        await server_task
    except asyncio.CancelledError:
        pass


@pytest_asyncio.fixture
async def http_client(server: KVServer, server_port: int) -> AsyncGenerator[httpx.AsyncClient, None]:
    """An httpx client pointed at the live server."""
    async with httpx.AsyncClient(base_url=f"http://127.0.0.1:{server_port}", timeout=5.0) as client:
        yield client


# ============================================================================
# Pytest Configuration
# ============================================================================

def pytest_configure(config):
    """Configure custom pytest markers."""
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )
    config.addinivalue_line(
        "markers", "integration: marks tests as integration tests"
    )
