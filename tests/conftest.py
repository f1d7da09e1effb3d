"""
Shared fixtures.

Django is configured here (debug settings, in-memory channel layer) so the
consumer and view tests can run without a server.
"""

import asyncio
import os

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "relay_server.settings")
os.environ["DJANGO_DEBUG"] = "true"

import django  # noqa: E402

django.setup()

import pytest  # noqa: E402
from django.apps import apps  # noqa: E402

from matchmaking.directory import SessionDirectory  # noqa: E402


class RecordingConnection:
    """Connection double that records every event it is sent."""

    def __init__(self, connection_id: str, fail: bool = False):
        self.connection_id = connection_id
        self.fail = fail
        self.sent = []

    async def send(self, event) -> bool:
        if self.fail:
            return False
        self.sent.append(event)
        return True

    @property
    def frames(self):
        return [e.to_wire() for e in self.sent]

    @property
    def names(self):
        return [e.event for e in self.sent]

    def clear(self) -> None:
        self.sent.clear()


class YieldingConnection(RecordingConnection):
    """Connection double whose send suspends, letting other tasks run mid-operation."""

    async def send(self, event) -> bool:
        await asyncio.sleep(0)
        return await super().send(event)


@pytest.fixture
def directory():
    return SessionDirectory(waiting_message="Searching for someone...")


@pytest.fixture
def app_directory(monkeypatch):
    """Replace the process-wide directory with a fresh one for the test."""
    fresh = SessionDirectory()
    monkeypatch.setattr(apps.get_app_config("matchmaking"), "directory", fresh)
    return fresh


async def register(directory: SessionDirectory, *connection_ids: str, fail: bool = False, factory=RecordingConnection):
    conns = {}
    for connection_id in connection_ids:
        conn = factory(connection_id, fail=fail)
        await directory.register(conn)
        conns[connection_id] = conn
    return conns
