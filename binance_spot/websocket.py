"""Websocket connection that feeds raw messages to a handler on a background thread."""

from __future__ import annotations

import threading
import time
from dataclasses import dataclass
from typing import Any, Callable

import websocket as _websocket

WsHandler = Callable[[bytes], None]
ErrHandler = Callable[[BaseException], None]

WEBSOCKET_TIMEOUT = 60.0
"""Seconds between keepalive pings, and the longest silence tolerated."""

WEBSOCKET_KEEPALIVE = False
"""Whether connections send keepalive pings by default."""


@dataclass
class WsConfig:
    """Where a websocket connects to."""

    endpoint: str


class WsConnection:
    """A websocket read on a background thread until it fails or is stopped."""

    def __init__(
        self,
        conn: Any,
        handler: WsHandler,
        err_handler: ErrHandler,
        keepalive: bool = WEBSOCKET_KEEPALIVE,
        timeout: float = WEBSOCKET_TIMEOUT,
    ) -> None:
        self._conn = conn
        self._handler = handler
        self._err_handler = err_handler
        self._keepalive = keepalive
        self._timeout = timeout
        self._done = threading.Event()
        self._stopped = threading.Event()
        self._last_response = time.monotonic()
        self._thread = threading.Thread(target=self._run, daemon=True)
        self._thread.start()

    @property
    def done(self) -> bool:
        """True once the reader has finished."""
        return self._done.is_set()

    def stop(self) -> None:
        """Close the connection; the error this causes is not reported."""
        self._stopped.set()
        self._abort()

    def wait(self, timeout: float | None = None) -> bool:
        """Block until the reader has finished; False if ``timeout`` ran out first."""
        return self._done.wait(timeout)

    def _abort(self) -> None:
        try:
            self._conn.abort()
        except OSError:
            pass

    def _run(self) -> None:
        try:
            if self._keepalive:
                threading.Thread(target=self._keep_alive, daemon=True).start()
            self._read_loop()
        finally:
            try:
                self._conn.shutdown()
            except OSError:
                pass
            self._done.set()

    def _read_loop(self) -> None:
        while True:
            try:
                opcode, payload = self._conn.recv_data(control_frame=True)
                if opcode == _websocket.ABNF.OPCODE_CLOSE:
                    raise _websocket.WebSocketConnectionClosedException(
                        "connection closed by peer"
                    )
            except Exception as exc:
                if not self._stopped.is_set():
                    self._err_handler(exc)
                return
            if opcode == _websocket.ABNF.OPCODE_PONG:
                self._last_response = time.monotonic()
                continue
            if opcode == _websocket.ABNF.OPCODE_PING:
                continue
            if isinstance(payload, str):
                payload = payload.encode("utf-8")
            self._handler(payload)

    def _keep_alive(self) -> None:
        while True:
            try:
                self._conn.ping()
            except Exception:
                return
            if self._done.wait(self._timeout):
                return
            if time.monotonic() - self._last_response > self._timeout:
                self._abort()
                return


def ws_serve(
    config: WsConfig,
    handler: WsHandler,
    err_handler: ErrHandler,
    keepalive: bool = WEBSOCKET_KEEPALIVE,
    timeout: float = WEBSOCKET_TIMEOUT,
) -> WsConnection:
    """Connect to ``config.endpoint`` and pass every message to ``handler``.

    Connection failures are raised; read errors go to ``err_handler``.
    """
    conn = _websocket.create_connection(config.endpoint)
    return WsConnection(conn, handler, err_handler, keepalive=keepalive, timeout=timeout)