"""
Settings for the stranger relay (Django + Channels, ASGI).

Key requirements implemented:
- Django + Django Channels (ASGI)
- InMemoryChannelLayer: matchmaking state lives in one process, so the
  channel layer does too
- Environment-based configuration
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import List

from corsheaders.defaults import default_headers as _cors_default_headers
from dotenv import load_dotenv

# Local dev: load env vars from a `.env` file. Real env vars take precedence.
load_dotenv()


BASE_DIR = Path(__file__).resolve().parent.parent


def _env(name: str, default: str | None = None) -> str | None:
    v = os.environ.get(name)
    return v if v not in (None, "") else default


def _env_bool(name: str, default: bool = False) -> bool:
    v = _env(name)
    if v is None:
        return default
    return v.strip().lower() in ("1", "true", "yes", "y", "on")


def _env_int(name: str, default: int) -> int:
    return int(_env(name, str(default)) or default)


def _env_csv(name: str, default: str = "") -> List[str]:
    raw = _env(name, default) or ""
    return [x.strip() for x in raw.split(",") if x.strip()]


# SECURITY WARNING: Do not hardcode secrets in code.
DEBUG = _env_bool("DJANGO_DEBUG", default=False)

SECRET_KEY = _env("DJANGO_SECRET_KEY", "dev-insecure-secret-key-change-me")
if not DEBUG and (not SECRET_KEY or SECRET_KEY.startswith("dev-insecure-")):
    raise RuntimeError("DJANGO_SECRET_KEY must be set in production")

# Also drives WebSocket origin validation (see relay_server.asgi).
ALLOWED_HOSTS = _env_csv("DJANGO_ALLOWED_HOSTS", default="localhost,127.0.0.1")

# CORS: lets a frontend on another origin poll /api/stats/.
CORS_ALLOWED_ORIGINS = _env_csv("CORS_ALLOWED_ORIGINS", default="http://localhost:3000,http://127.0.0.1:3000")
CORS_ALLOW_HEADERS = list(_cors_default_headers)
CORS_URLS_REGEX = r"^/(api|health)/.*$"

# When serving behind a proxy, Django must respect X-Forwarded-* headers.
USE_X_FORWARDED_HOST = True
SECURE_PROXY_SSL_HEADER = ("HTTP_X_FORWARDED_PROTO", "https")


INSTALLED_APPS = [
    "corsheaders",
    # Channels must be installed to enable ASGI + websocket routing.
    "channels",
    "matchmaking.apps.MatchmakingConfig",
]

MIDDLEWARE = [
    "corsheaders.middleware.CorsMiddleware",
    "django.middleware.security.SecurityMiddleware",
    "django.middleware.common.CommonMiddleware",
]

ROOT_URLCONF = "relay_server.urls"

ASGI_APPLICATION = "relay_server.asgi.application"

# No persistence: pairings and the waiting queue are in-memory only.
DATABASES: dict = {}


LANGUAGE_CODE = "en-us"
TIME_ZONE = "UTC"
USE_I18N = False
USE_TZ = True

DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"


#
# Channels configuration
#
# Single-process deployment: the SessionDirectory is per process, so a shared
# (e.g. Redis) channel layer would add nothing.
#
CHANNEL_LAYERS = {
    "default": {
        "BACKEND": "channels.layers.InMemoryChannelLayer",
        "CONFIG": {
            "capacity": _env_int("CHANNEL_LAYER_CAPACITY", 100),
            "expiry": _env_int("CHANNEL_LAYER_EXPIRY", 60),
        },
    }
}


LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "plain": {"format": "%(asctime)s %(levelname)s %(name)s: %(message)s"},
    },
    "handlers": {"console": {"class": "logging.StreamHandler", "formatter": "plain"}},
    "root": {"handlers": ["console"], "level": _env("DJANGO_LOG_LEVEL", "INFO") or "INFO"},
}

# Text of the `waiting` event sent when no partner is available.
MATCHMAKING_WAITING_MESSAGE = _env("MATCHMAKING_WAITING_MESSAGE", "Searching for someone...")

INSTANCE_ID = _env("INSTANCE_ID", "unknown-instance")
