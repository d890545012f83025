"""Listen keys for the user data stream."""

from __future__ import annotations

import json

from binance_spot.request import APIClient, Request, RequestOption, SecurityType

_ENDPOINT = "/api/v3/userDataStream"


def start_user_stream(client: APIClient, *args: RequestOption) -> str:
    """Create a listen key; returns an empty string when the reply holds none."""
    request = Request("POST", _ENDPOINT, SecurityType.API_KEY)
    document = json.loads(client.call_api(request, *args))
    value = document.get("listenKey") if isinstance(document, dict) else None
    return value if isinstance(value, str) else ""


def keepalive_user_stream(client: APIClient, listen_key: str, *args: RequestOption) -> None:
    """Extend the validity of a listen key."""
    request = Request("PUT", _ENDPOINT, SecurityType.API_KEY)
    request.set_form_param("listenKey", listen_key)
    client.call_api(request, *args)


def close_user_stream(client: APIClient, listen_key: str, *args: RequestOption) -> None:
    """Delete a listen key."""
    request = Request("DELETE", _ENDPOINT, SecurityType.API_KEY)
    request.set_form_param("listenKey", listen_key)
    client.call_api(request, *args)