"""
Matchmaking WebSocket app.

This app contains:
- The SessionDirectory that pairs waiting strangers and relays events between partners
- A Channels consumer for `/ws/match/`
- HTTP views exposing directory stats
"""
