"""
URL configuration for the relay_server project.

The WebSocket endpoint lives in relay_server.routing; these are the HTTP routes.
"""
from django.urls import path

from matchmaking.views import stats
from .health import health

urlpatterns = [
    # Health check endpoint for the load balancer target group
    path("health/", health),
    # Live directory counters (e.g. "N strangers online")
    path("api/stats/", stats),
]
