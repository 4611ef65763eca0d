"""Tests for the hipchat command-line interface."""

from __future__ import annotations

import json
from unittest.mock import patch, MagicMock

import pytest
from click.testing import CliRunner

from cli.hipchat_cli import cli


# ── Fixtures ──────────────────────────────────────────────────────────────


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner(env={"HIPCHAT_AUTH_TOKEN": "test-token"})


@pytest.fixture
def mock_get():
    """Patch httpx.Client.get to simulate API responses."""
    with patch("httpx.Client.get") as mock:
        yield mock


@pytest.fixture
def mock_post():
    """Patch httpx.Client.post to simulate API responses."""
    with patch("httpx.Client.post") as mock:
        yield mock


def _ok_response(data, status_code=200):
    """Create a mock httpx.Response with a JSON body."""
    resp = MagicMock()
    resp.status_code = status_code
    resp.text = json.dumps(data)
    return resp


def _error_response(status_code, error_type, message):
    resp = MagicMock()
    resp.status_code = status_code
    resp.text = json.dumps(
        {"error": {"code": status_code, "type": error_type, "message": message}}
    )
    return resp


def _html_response(status_code, html):
    """Create a mock response whose body is not JSON (e.g. a proxy error page)."""
    resp = MagicMock()
    resp.status_code = status_code
    resp.text = html
    return resp


# ── rooms ─────────────────────────────────────────────────────────────────


class TestRoomsCommand:
    def test_rooms(self, runner, mock_get):
        mock_get.return_value = _ok_response({
            "rooms": [
                {"room_id": 7, "name": "Development", "topic": "Ship it", "is_private": True},
                {"room_id": 10, "name": "Ops", "is_archived": True},
            ]
        })
        result = runner.invoke(cli, ["rooms"])
        assert result.exit_code == 0
        assert "Development" in result.output
        assert "Ship it" in result.output
        assert "private" in result.output
        assert "archived" in result.output
        assert mock_get.call_args.kwargs["params"] == {"auth_token": "test-token"}

    def test_rooms_empty(self, runner, mock_get):
        mock_get.return_value = _ok_response({"rooms": []})
        result = runner.invoke(cli, ["rooms"])
        assert result.exit_code == 0
        assert "No rooms found" in result.output

    def test_rooms_error(self, runner, mock_get):
        mock_get.return_value = _error_response(401, "Unauthorized", "bad token")
        result = runner.invoke(cli, ["rooms"])
        assert result.exit_code == 1
        assert "bad token" in result.output

    def test_rooms_non_json_error(self, runner, mock_get):
        mock_get.return_value = _html_response(502, "<html>Bad Gateway</html>")
        result = runner.invoke(cli, ["rooms"])
        assert result.exit_code == 1
        assert "Unexpected response from HipChat" in result.output
        assert not isinstance(result.exception, ValueError)

    def test_token_option_overrides_env(self, runner, mock_get):
        mock_get.return_value = _ok_response({"rooms": []})
        result = runner.invoke(cli, ["--token", "other", "rooms"])
        assert result.exit_code == 0
        assert mock_get.call_args.kwargs["params"]["auth_token"] == "other"

    def test_missing_token(self, mock_get):
        result = CliRunner(env={"HIPCHAT_AUTH_TOKEN": None}).invoke(cli, ["rooms"])
        assert result.exit_code == 2
        mock_get.assert_not_called()


# ── history ───────────────────────────────────────────────────────────────


class TestHistoryCommand:
    def test_history(self, runner, mock_get):
        mock_get.return_value = _ok_response({
            "messages": [
                {
                    "date": "2010-11-19T15:48:19-0800",
                    "from": {"name": "Garret Heaton", "user_id": 10},
                    "message": "Good morning!",
                }
            ]
        })
        result = runner.invoke(
            cli, ["history", "10", "--date", "2010-11-19", "--timezone", "US/Pacific"]
        )
        assert result.exit_code == 0
        assert "Garret Heaton: Good morning!" in result.output
        params = mock_get.call_args.kwargs["params"]
        assert params["date"] == "2010-11-19"
        assert params["timezone"] == "US/Pacific"

    def test_history_empty(self, runner, mock_get):
        mock_get.return_value = _ok_response({"messages": []})
        result = runner.invoke(cli, ["history", "10"])
        assert result.exit_code == 0
        assert "No messages" in result.output

    def test_history_non_json_error(self, runner, mock_get):
        mock_get.return_value = _html_response(502, "<html>Bad Gateway</html>")
        result = runner.invoke(cli, ["history", "10"])
        assert result.exit_code == 1
        assert "Unexpected response from HipChat" in result.output
        assert not isinstance(result.exception, ValueError)

    def test_history_error(self, runner, mock_get):
        mock_get.return_value = _error_response(404, "Not Found", "Room not found")
        result = runner.invoke(cli, ["history", "missing"])
        assert result.exit_code == 1
        assert "Room not found" in result.output


# ── send ──────────────────────────────────────────────────────────────────


class TestSendCommand:
    def test_send(self, runner, mock_post):
        mock_post.return_value = _ok_response({"status": "sent"})
        result = runner.invoke(
            cli, ["send", "ops", "deploybot", "Deployed.", "--color", "green", "--notify"]
        )
        assert result.exit_code == 0
        assert "Message sent" in result.output
        data = mock_post.call_args.kwargs["data"]
        assert data["color"] == "green"
        assert data["notify"] == "1"
        assert "message_format" not in data

    def test_send_invalid_color(self, runner, mock_post):
        result = runner.invoke(cli, ["send", "ops", "bot", "hi", "--color", "blue"])
        assert result.exit_code == 2
        mock_post.assert_not_called()

    def test_send_empty_message(self, runner, mock_post):
        result = runner.invoke(cli, ["send", "ops", "bot", ""])
        assert result.exit_code == 1
        assert "required" in result.output
        mock_post.assert_not_called()

    def test_send_auth_test(self, runner, mock_post):
        mock_post.return_value = _ok_response(
            {"success": {"code": 202, "type": "Accepted", "message": "Token OK."}},
            status_code=202,
        )
        result = runner.invoke(cli, ["send", "ops", "bot", "hi", "--auth-test"])
        assert result.exit_code == 0
        assert "Auth test passed: Token OK." in result.output

    def test_send_rejected(self, runner, mock_post):
        mock_post.return_value = _error_response(403, "Forbidden", "Room is archived")
        result = runner.invoke(cli, ["send", "ops", "bot", "hi"])
        assert result.exit_code == 1
        assert "Room is archived" in result.output
