"""
CLI client for the stranger relay.

Supports:
- Text chat with a random stranger:   /ws/match/
- HTTP directory counters:            GET /api/stats/

WebSocket protocol (`MatchConsumer`):
- Connect: /ws/match/
- Client sends:
  - {"event":"find-match"}
  - {"event":"send-message","data":"..."}
  - {"event":"disconnect-manual"}
  - {"event":"offer"|"answer"|"ice-candidate","data":{...}}   (not used here)
- Server sends:
  - {"event":"connected","data":{"connectionId":...}}
  - {"event":"waiting","data":"Searching for someone..."}
  - {"event":"match-found","data":{"role":"initiator"|"receiver","partnerId":...}}
  - {"event":"receive-message","data":"..."}
  - {"event":"peer-disconnected"}
  - {"event":"error","data":{"message":"..."}}

Chat commands (interactive mode):
  /next   leave the current stranger and look for another
  /stop   leave without searching again
  /quit   close the connection and exit
  anything else is sent as a chat message
"""

from __future__ import annotations

import argparse
import asyncio
import json
import sys
from typing import Any, Dict, Optional, Tuple

import aiohttp
import websockets


def _rstrip_slash(s: str) -> str:
    return s[:-1] if s.endswith("/") else s


def _ws_match_url(ws_base: str) -> str:
    return f"{_rstrip_slash(ws_base)}/ws/match/"


def _http_url(http_base: str, path: str) -> str:
    return f"{_rstrip_slash(http_base)}{path}"


def _frame(event: str, data: Any = None) -> str:
    payload: Dict[str, Any] = {"event": event}
    if data is not None:
        payload["data"] = data
    return json.dumps(payload, separators=(",", ":"), ensure_ascii=False)


def parse_command(line: str) -> Tuple[Optional[str], bool]:
    """
    Turn one line of user input into (frame_to_send, keep_running).

    Blank lines produce no frame.
    """
    text = line.rstrip("\n")
    command = text.strip()
    if not command:
        return None, True
    if command == "/quit":
        return None, False
    if command == "/next":
        return _frame("find-match"), True
    if command == "/stop":
        return _frame("disconnect-manual"), True
    return _frame("send-message", text), True


def describe_frame(msg: Dict[str, Any]) -> Optional[str]:
    """Render a server frame for the terminal. Returns None for frames not worth showing."""
    event = msg.get("event")
    data = msg.get("data")
    if event == "connected":
        return None
    if event == "waiting":
        return f"[{data}]"
    if event == "match-found":
        role = (data or {}).get("role")
        return f"[connected to a stranger ({role}); say hi]"
    if event == "receive-message":
        return f"Stranger: {data}"
    if event == "peer-disconnected":
        return "[stranger disconnected; /next to find someone new]"
    if event in ("offer", "answer", "ice-candidate"):
        return f"[{event} received; media is not supported in the terminal]"
    if event == "error":
        return f"[error {(data or {}).get('message')}]"
    return None


async def _stdin_lines() -> str:
    return await asyncio.to_thread(sys.stdin.readline)


async def ws_chat(*, ws_base: str, origin: Optional[str]) -> int:
    ws_url = _ws_match_url(ws_base)

    async with websockets.connect(ws_url, origin=origin) as ws:

        async def _print_frames() -> None:
            async for raw in ws:
                try:
                    msg = json.loads(raw)
                except json.JSONDecodeError:
                    continue
                line = describe_frame(msg)
                if line:
                    sys.stdout.write(line + "\n")
                    sys.stdout.flush()

        reader = asyncio.create_task(_print_frames())
        await ws.send(_frame("find-match"))

        sys.stderr.write("Type a line and press Enter to send. /next, /stop, /quit.\n")
        sys.stderr.flush()
        try:
            while not reader.done():
                line = await _stdin_lines()
                if line == "":
                    break  # EOF
                frame, keep_running = parse_command(line)
                if frame:
                    await ws.send(frame)
                if not keep_running:
                    break
        finally:
            reader.cancel()
            try:
                await reader
            except asyncio.CancelledError:
                pass
    return 0


async def http_stats(*, http_base: str) -> Dict[str, Any]:
    url = _http_url(http_base, "/api/stats/")
    async with aiohttp.ClientSession() as session:
        async with session.get(url) as resp:
            text = await resp.text()
            try:
                data = json.loads(text) if text else {}
            except json.JSONDecodeError:
                raise RuntimeError(f"Non-JSON response from /api/stats/: {resp.status} {text}")
            if resp.status >= 400:
                raise RuntimeError(f"HTTP {resp.status}: {data}")
            return data


async def main() -> int:
    parser = argparse.ArgumentParser(description="Terminal client for the stranger relay")
    parser.add_argument("--http", default="http://localhost:8000", help="HTTP base, e.g. http://localhost:8000")
    parser.add_argument("--ws", default="ws://localhost:8000", help="WS base, e.g. ws://localhost:8000")
    parser.add_argument("--origin", help="Optional Origin header for WebSocket handshake")

    sub = parser.add_subparsers(dest="cmd", required=True)
    sub.add_parser("chat", help="Chat with a random stranger over WebSocket")
    sub.add_parser("stats", help="Show connected/waiting/paired counts (HTTP)")

    args = parser.parse_args()

    if args.cmd == "chat":
        return await ws_chat(ws_base=args.ws, origin=args.origin)

    if args.cmd == "stats":
        data = await http_stats(http_base=args.http)
        print(json.dumps(data, indent=2, ensure_ascii=False))
        return 0

    return 2


if __name__ == "__main__":
    raise SystemExit(asyncio.run(main()))
