"""Tests for the command line interface."""

from unittest.mock import patch

from typer.testing import CliRunner

from connected_screens.cli import typer_app
from connected_screens.settings import app_settings

runner = CliRunner()


class TestServeCommand:
    """Test the serve command."""

    def test_serve_uses_settings(self):
        with patch("connected_screens.cli.uvicorn.run") as mock_run:
            result = runner.invoke(typer_app, ["serve"])

        assert result.exit_code == 0
        mock_run.assert_called_once()
        assert mock_run.call_args.args[0] == "connected_screens:application"
        assert mock_run.call_args.kwargs["factory"] is True
        assert mock_run.call_args.kwargs["port"] == app_settings.PORT

    def test_serve_port_override_updates_settings(self, monkeypatch):
        monkeypatch.setattr(app_settings, "PORT", app_settings.PORT)
        monkeypatch.setenv("PORT", str(app_settings.PORT))

        with patch("connected_screens.cli.uvicorn.run") as mock_run:
            result = runner.invoke(typer_app, ["serve", "--port", "9100"])

        assert result.exit_code == 0
        assert mock_run.call_args.kwargs["port"] == 9100
        assert app_settings.PORT == 9100

    def test_serve_logs_bound_address(self, monkeypatch):
        monkeypatch.setattr(app_settings, "PORT", app_settings.PORT)
        monkeypatch.setenv("PORT", str(app_settings.PORT))

        with patch("connected_screens.cli.uvicorn.run") as mock_run, patch(
            "connected_screens.cli.logger"
        ) as mock_logger:
            runner.invoke(typer_app, ["serve", "--port", "9200"])

        assert mock_run.call_args.kwargs["port"] == 9200
        assert ":9200/" in mock_logger.info.call_args.args[0]


class TestSettingsCommand:
    """Test the settings command."""

    def test_prints_settings_table(self):
        result = runner.invoke(typer_app, ["settings"])

        assert result.exit_code == 0
        assert "PORT" in result.output
        assert "WS_PATH" in result.output
