"""
INFRASTRUCTURE LAYER - Adapters for domain ports

- persistence/  → Prisma (PostgreSQL) repositories
- memory/       → In-process store (CHAT_STORE=memory, test-suite)
- security/     → bcrypt password hashing, JWT tokens
- realtime/     → Live connections, registry, room synchronizer, fan-out
"""
