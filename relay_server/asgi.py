"""
ASGI config for the relay_server project.

It exposes the ASGI callable as a module-level variable named ``application``.

For more information on this file, see
https://docs.djangoproject.com/en/5.0/howto/deployment/asgi/
"""
# Load secrets from AWS Secrets Manager before Django settings are loaded
from relay_server.env_bootstrap import load_secrets

load_secrets()

import os  # noqa: E402

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "relay_server.settings")

from channels.routing import ProtocolTypeRouter, URLRouter  # noqa: E402
from channels.security.websocket import AllowedHostsOriginValidator  # noqa: E402
from django.conf import settings  # noqa: E402
from django.core.asgi import get_asgi_application  # noqa: E402

# Standard Django ASGI application for HTTP. Must run before importing consumers
# so the app registry (and the SessionDirectory) is ready.
django_asgi_app = get_asgi_application()

from matchmaking.apps import get_directory  # noqa: E402
from relay_server.lifespan import LifespanApp  # noqa: E402
from relay_server.routing import websocket_urlpatterns  # noqa: E402

# Channels router for WebSockets.
#
# AllowedHostsOriginValidator (when DEBUG is False):
# - Only accepts handshakes whose Origin host is in ALLOWED_HOSTS.
websocket_app = URLRouter(websocket_urlpatterns)
if not settings.DEBUG:
    websocket_app = AllowedHostsOriginValidator(websocket_app)


async def _close_directory() -> None:
    await get_directory().close()


application = ProtocolTypeRouter(
    {
        "http": django_asgi_app,
        "websocket": websocket_app,
        "lifespan": LifespanApp(on_shutdown=_close_directory),
    }
)
