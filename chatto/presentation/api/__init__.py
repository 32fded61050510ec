"""
API Routers - HTTP endpoints and the realtime WebSocket endpoint.
"""

from chatto.presentation.api.auth import router as auth_router
from chatto.presentation.api.chats import router as chats_router
from chatto.presentation.api.metrics import router as metrics_router
from chatto.presentation.api.realtime import router as realtime_router

__all__ = [
    "auth_router",
    "chats_router",
    "metrics_router",
    "realtime_router",
]
