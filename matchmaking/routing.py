from django.urls import re_path

from .consumers import MatchConsumer


websocket_urlpatterns = [
    # Stranger matchmaking + signaling relay
    re_path(r"^ws/match/$", MatchConsumer.as_asgi()),
]
