"""Tests for the application factory and its lifespan."""

from unittest.mock import patch

import pytest
from fastapi.testclient import TestClient
from starlette.websockets import WebSocketDisconnect

from connected_screens import application
from connected_screens.settings import Settings
from tests.mocks.websocket_mocks import expected_init


class TestApplicationFactory:
    """Test that the factory honours the settings it is given."""

    def test_custom_ws_path(self):
        settings = Settings(WS_PATH="/screens", INITIAL_SCREEN=1)
        app = application(settings)

        with TestClient(app) as client:
            with client.websocket_connect("/screens") as ws:
                assert ws.receive_json() == expected_init(0, 50, 50, 1)

            with pytest.raises(WebSocketDisconnect):
                with client.websocket_connect("/") as ws:
                    ws.receive_json()

        assert app.state.settings is settings

    def test_lifespan_logs_configured_path(self):
        app = application(Settings(WS_PATH="/screens", PORT=9300))

        with patch("connected_screens.logger") as mock_logger:
            with TestClient(app):
                pass

        startup_message = mock_logger.info.call_args_list[0].args[0]
        assert "/screens" in startup_message
        # The port is logged by the launcher that binds it
        assert "8081" not in startup_message
