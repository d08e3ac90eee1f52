"""Tests for the agent.py CLI."""

from unittest.mock import AsyncMock, patch

from click.testing import CliRunner

from agent import cli


def test_entrypoints_lists_prices():
    result = CliRunner().invoke(cli, ["entrypoints"])
    assert result.exit_code == 0
    assert "overview" in result.output
    assert "free" in result.output
    assert "3000" in result.output


def test_invoke_passes_options():
    mock_run = AsyncMock(return_value={"count": 0, "stories": []})
    with patch("agent.run_entrypoint", mock_run):
        result = CliRunner().invoke(cli, ["invoke", "top", "--limit", "3"])

    assert result.exit_code == 0
    assert '"count": 0' in result.output
    _, entrypoint, payload = mock_run.call_args.args
    assert entrypoint.key == "top"
    assert payload == {"limit": 3}


def test_invoke_unknown_key():
    result = CliRunner().invoke(cli, ["invoke", "worst"])
    assert result.exit_code != 0
    assert "unknown entrypoint" in result.output


def test_serve_uses_configured_port():
    with patch("uvicorn.run") as mock_run, patch("hnintel.app.create_app"), \
            patch("agent.settings") as mock_settings:
        mock_settings.port = 4321
        mock_settings.host = "127.0.0.1"
        mock_settings.log_level = "INFO"
        result = CliRunner().invoke(cli, ["serve"])

    assert result.exit_code == 0
    assert mock_run.call_args.kwargs["port"] == 4321
    assert "running on port 4321" in result.output
