"""
ASGI lifespan handler.

Channels' ProtocolTypeRouter has no built-in lifespan support; servers such as
uvicorn send ``lifespan`` scopes at startup and shutdown. On shutdown the
process-wide SessionDirectory is closed.
"""
from __future__ import annotations

import logging

logger = logging.getLogger(__name__)


class LifespanApp:
    """Answers lifespan startup/shutdown and runs ``on_shutdown`` on exit."""

    def __init__(self, on_shutdown):
        self.on_shutdown = on_shutdown

    async def __call__(self, scope, receive, send):
        if scope.get("type") != "lifespan":
            raise ValueError("LifespanApp only supports lifespan scopes")

        while True:
            message = await receive()
            if message["type"] == "lifespan.startup":
                logger.info("Relay server starting")
                await send({"type": "lifespan.startup.complete"})
            elif message["type"] == "lifespan.shutdown":
                try:
                    await self.on_shutdown()
                except Exception as e:
                    logger.exception("Shutdown failed")
                    await send({"type": "lifespan.shutdown.failed", "message": str(e)})
                    return
                logger.info("Relay server stopped")
                await send({"type": "lifespan.shutdown.complete"})
                return
