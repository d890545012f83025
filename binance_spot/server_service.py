"""Connectivity checks and server time."""

from __future__ import annotations

import json
import time
from typing import Any

from binance_spot.request import APIClient, Request, RequestOption


def _int_field(document: Any, key: str) -> int:
    value = document.get(key) if isinstance(document, dict) else None
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    return 0


def _current_timestamp() -> int:
    return time.time_ns() // 1_000_000


def ping(client: APIClient, *args: RequestOption) -> None:
    """Check that the REST API can be reached."""
    client.call_api(Request("GET", "/api/v3/ping"), *args)


def server_time(client: APIClient, *args: RequestOption) -> int:
    """Return the server time in milliseconds (0 when the reply holds none)."""
    data = client.call_api(Request("GET", "/api/v3/time"), *args)
    return _int_field(json.loads(data), "serverTime")


def set_server_time(client: APIClient, *args: RequestOption) -> int:
    """Store the offset between local and server time on the client and return it."""
    offset = _current_timestamp() - server_time(client, *args)
    client.time_offset = offset
    return offset