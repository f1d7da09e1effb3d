"""
Django app configuration for the matchmaking app.
Owns the process-wide SessionDirectory.
"""

import logging

from django.apps import AppConfig, apps
from django.conf import settings

from .directory import DEFAULT_WAITING_MESSAGE, SessionDirectory

logger = logging.getLogger(__name__)


class MatchmakingConfig(AppConfig):
    """App configuration for matchmaking."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "matchmaking"

    def ready(self):
        """Build the SessionDirectory once per process.

        Consumers and views reach it through ``get_directory()``; it is torn down
        by the ASGI lifespan shutdown handler.
        """
        waiting_message = getattr(settings, "MATCHMAKING_WAITING_MESSAGE", None) or DEFAULT_WAITING_MESSAGE
        self.directory = SessionDirectory(waiting_message=waiting_message)
        logger.info("Session directory ready")


def get_directory() -> SessionDirectory:
    return apps.get_app_config("matchmaking").directory
