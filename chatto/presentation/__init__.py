"""Presentation layer - HTTP routers, the WebSocket endpoint and request dependencies."""
