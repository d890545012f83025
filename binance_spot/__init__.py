"""Request builders and response models for an exchange's spot REST API, and websocket streams."""

__version__ = "0.1.0"

__all__ = [
    "request",
    "server_service",
    "user_stream_service",
    "websocket",
    "withdraw_service",
    "orders",
    "order_queries",
    "websocket_service",
]