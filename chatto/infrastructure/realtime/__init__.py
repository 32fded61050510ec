"""
Realtime core - live connections, room membership and fan-out.

    WebSocket ──► LiveConnection ──► ConnectionRegistry ◄── RoomSynchronizer ◄── Membership Store
                                           ▲
    Application handlers ──► EventPublisher (FanoutDispatcher)
"""

from chatto.infrastructure.realtime.connection import LiveConnection
from chatto.infrastructure.realtime.connection_registry import ConnectionRegistry
from chatto.infrastructure.realtime.fanout_dispatcher import FanoutDispatcher
from chatto.infrastructure.realtime.room_synchronizer import RoomSynchronizer
from chatto.infrastructure.realtime.typing_monitor import TypingMonitor

__all__ = [
    "LiveConnection",
    "ConnectionRegistry",
    "FanoutDispatcher",
    "RoomSynchronizer",
    "TypingMonitor",
]
