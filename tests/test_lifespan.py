"""
Tests for the ASGI lifespan handler.
"""

import asyncio

import pytest

from relay_server.lifespan import LifespanApp
from tests.conftest import register


async def _run(app, messages):
    inbox = asyncio.Queue()
    for message in messages:
        inbox.put_nowait(message)
    sent = []

    async def send(message):
        sent.append(message)

    await app({"type": "lifespan"}, inbox.get, send)
    return [m["type"] for m in sent]


@pytest.mark.asyncio
async def test_startup_and_shutdown_close_directory(directory):
    await register(directory, "a", "b")
    await directory.request_match("a")

    app = LifespanApp(on_shutdown=directory.close)
    sent = await _run(app, [{"type": "lifespan.startup"}, {"type": "lifespan.shutdown"}])

    assert sent == ["lifespan.startup.complete", "lifespan.shutdown.complete"]
    assert directory.stats().as_dict() == {"connected": 0, "waiting": 0, "paired": 0}


@pytest.mark.asyncio
async def test_shutdown_failure_is_reported():
    async def broken():
        raise RuntimeError("boom")

    sent = await _run(LifespanApp(on_shutdown=broken), [{"type": "lifespan.shutdown"}])

    assert sent == ["lifespan.shutdown.failed"]


@pytest.mark.asyncio
async def test_rejects_other_scopes():
    app = LifespanApp(on_shutdown=None)

    with pytest.raises(ValueError):
        await app({"type": "http"}, None, None)
