"""
DOMAIN LAYER - Chat business objects

This layer contains:
- entities/       → Users, sessions, conversations, participants, messages
- value_objects/  → Typed identifiers, emails and room identifiers
- events/         → Realtime events pushed to live connections
- exceptions/     → Business rule violations
- ports/          → Interfaces implemented by infrastructure

Rules:
- Pure Python dataclasses (no ORM, no Pydantic, no FastAPI)
"""
