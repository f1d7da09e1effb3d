from __future__ import annotations

import time

from django.conf import settings
from django.http import JsonResponse

from matchmaking.apps import get_directory


def health(request):
    """
    Load balancer health check endpoint.

    Cheap and dependency-free: reads in-memory counters only.
    """

    return JsonResponse(
        {
            "status": "ok",
            "ts": int(time.time()),
            "instance_id": settings.INSTANCE_ID,
            "directory": get_directory().stats().as_dict(),
        }
    )
