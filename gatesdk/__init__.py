"""Async client for the Gate futures REST API and candlestick WebSocket feed."""

__version__ = "0.1.0"
__all__ = ["client", "models", "signing", "utils", "websocket"]