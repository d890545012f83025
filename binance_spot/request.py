"""Description of a REST API request and the options that adjust it."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Any, Callable, Mapping, Protocol


class SecurityType(enum.IntEnum):
    """How a request must be authenticated."""

    NONE = 0
    API_KEY = 1
    SIGNED = 2  # the request carries a timestamp and a signature


def format_value(value: Any) -> str:
    """Render a parameter value the way the exchange expects it on the wire."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, enum.Enum):
        return format_value(value.value)
    if isinstance(value, float):
        if value.is_integer() and abs(value) < 1e21:
            return str(int(value))
        return repr(value)
    if value is None:
        return "<nil>"
    return str(value)


@dataclass
class Request:
    """An API request: endpoint, security level, query string and form body."""

    method: str
    endpoint: str
    sec_type: SecurityType = SecurityType.NONE
    query: dict[str, list[str]] = field(default_factory=dict)
    form: dict[str, list[str]] = field(default_factory=dict)
    recv_window: int = 0
    header: dict[str, list[str]] = field(default_factory=dict)
    body: bytes | None = None
    full_url: str = ""

    def add_param(self, key: str, value: Any) -> Request:
        """Append a value to the query string parameter ``key``."""
        self.query.setdefault(key, []).append(format_value(value))
        return self

    def set_param(self, key: str, value: Any) -> Request:
        """Replace the query string parameter ``key`` with a single value."""
        self.query[key] = [format_value(value)]
        return self

    def set_params(self, params: Mapping[str, Any]) -> Request:
        """Set several query string parameters."""
        for key, value in params.items():
            self.set_param(key, value)
        return self

    def set_form_param(self, key: str, value: Any) -> Request:
        """Replace the form body parameter ``key`` with a single value."""
        self.form[key] = [format_value(value)]
        return self

    def set_form_params(self, params: Mapping[str, Any]) -> Request:
        """Set several form body parameters."""
        for key, value in params.items():
            self.set_form_param(key, value)
        return self


RequestOption = Callable[[Request], None]


def with_recv_window(recv_window: int) -> RequestOption:
    """Option that sets the receive window of a request, in milliseconds."""

    def apply(request: Request) -> None:
        request.recv_window = recv_window

    return apply


class APIClient(Protocol):
    """What the services need from a client: a way to send requests."""

    time_offset: int

    def call_api(self, request: Request, *args: RequestOption) -> bytes:
        """Send ``request`` with the given options and return the raw response body."""
        ...