from chatto.domain.events.realtime_event import EventKind, RealtimeEvent

__all__ = ["EventKind", "RealtimeEvent"]
