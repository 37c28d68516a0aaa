"""
Tests for the HTTP endpoints.

This module tests the health check, the state snapshot and the Prometheus
metrics endpoint.
"""

from tests.mocks.websocket_mocks import create_move_payload


class TestHealthEndpoint:
    """Test /health."""

    def test_health_without_clients(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "healthy", "active_connections": 0}

    def test_health_counts_connected_clients(self, client):
        with client.websocket_connect("/") as ws:
            ws.receive_json()

            response = client.get("/health")

        assert response.json()["active_connections"] == 1


class TestStateEndpoint:
    """Test /state."""

    def test_initial_state(self, client):
        response = client.get("/state")

        assert response.status_code == 200
        assert response.json() == {
            "ballPosition": {"x": 50.0, "y": 50.0},
            "currentScreen": 0,
            "connections": 0,
        }

    def test_state_after_move(self, client):
        with client.websocket_connect("/") as ws:
            ws.receive_json()
            ws.send_json(create_move_payload(x=12.5, y=7, screen=4))
            # Update has been broadcast, so the state is written
            ws.receive_json()

            body = client.get("/state").json()

        assert body["ballPosition"] == {"x": 12.5, "y": 7.0}
        assert body["currentScreen"] == 4
        assert body["connections"] == 1


class TestMetricsEndpoint:
    """Test /metrics."""

    def test_metrics_exposes_websocket_metrics(self, client):
        with client.websocket_connect("/") as ws:
            ws.receive_json()

        response = client.get("/metrics")

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/plain")
        assert "ws_connections_active" in response.text
        assert "ws_messages_sent_total" in response.text
