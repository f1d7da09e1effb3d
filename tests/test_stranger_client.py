"""
Tests for the terminal client's input and output helpers.
"""

import json

import pytest

from stranger_client import _http_url, _ws_match_url, describe_frame, parse_command


def test_urls():
    assert _ws_match_url("ws://localhost:8000/") == "ws://localhost:8000/ws/match/"
    assert _http_url("http://localhost:8000", "/api/stats/") == "http://localhost:8000/api/stats/"


class TestParseCommand:
    def test_plain_text_is_a_chat_message(self):
        frame, keep_running = parse_command("hello there\n")

        assert keep_running
        assert json.loads(frame) == {"event": "send-message", "data": "hello there"}

    @pytest.mark.parametrize(
        "line, expected",
        [
            ("/next\n", {"event": "find-match"}),
            ("/stop\n", {"event": "disconnect-manual"}),
        ],
    )
    def test_commands(self, line, expected):
        frame, keep_running = parse_command(line)

        assert keep_running
        assert json.loads(frame) == expected

    def test_quit(self):
        assert parse_command("/quit\n") == (None, False)

    def test_blank_line(self):
        assert parse_command("   \n") == (None, True)


class TestDescribeFrame:
    def test_chat(self):
        assert describe_frame({"event": "receive-message", "data": "hi"}) == "Stranger: hi"

    def test_match_found(self):
        line = describe_frame({"event": "match-found", "data": {"role": "receiver", "partnerId": "x"}})
        assert "receiver" in line

    def test_waiting(self):
        assert describe_frame({"event": "waiting", "data": "Searching for someone..."}) == "[Searching for someone...]"

    def test_peer_disconnected(self):
        assert "disconnected" in describe_frame({"event": "peer-disconnected"})

    def test_error(self):
        assert describe_frame({"event": "error", "data": {"message": "invalid_json"}}) == "[error invalid_json]"

    def test_silent_frames(self):
        assert describe_frame({"event": "connected", "data": {"connectionId": "x"}}) is None
        assert describe_frame({"event": "something-new"}) is None
