"""
Pytest configuration and fixtures for testing.

This module provides shared fixtures for the broadcaster, the FastAPI
application and its test client.
"""

import pytest
from fastapi.testclient import TestClient

from connected_screens import application
from connected_screens.managers.broadcaster import PositionBroadcaster
from connected_screens.managers.connection_registry import ConnectionRegistry
from tests.mocks.websocket_mocks import create_mock_websocket


@pytest.fixture
def registry():
    """
    Provides an empty ConnectionRegistry.

    Returns:
        ConnectionRegistry: Registry whose first id is 0
    """
    return ConnectionRegistry()


@pytest.fixture
def broadcaster(registry):
    """
    Provides a PositionBroadcaster with the default state (50, 50) on screen 0.

    Args:
        registry: Fixture providing an empty registry

    Returns:
        PositionBroadcaster: Broadcaster without bounds
    """
    return PositionBroadcaster(registry=registry)


@pytest.fixture
def mock_websocket():
    """
    Provides a mock WebSocket connection.

    Returns:
        MagicMock: Mocked WebSocket with async send/receive methods
    """
    return create_mock_websocket()


@pytest.fixture
def app():
    """
    Provides a fresh application, so every test starts with an empty registry.

    Returns:
        FastAPI: Application built by the factory
    """
    return application()


@pytest.fixture
def client(app):
    """
    Provides a TestClient running the application lifespan.

    Args:
        app: Fixture providing the application

    Yields:
        TestClient: Client for HTTP and WebSocket requests
    """
    with TestClient(app) as test_client:
        yield test_client
