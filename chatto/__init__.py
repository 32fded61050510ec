"""Chatto - realtime multi-user chat backend."""
