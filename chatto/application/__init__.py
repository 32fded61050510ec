"""
APPLICATION LAYER - Use Cases & Orchestration

This layer contains:
- commands/  → Write operations (register, login, create chats, send, membership)
- queries/   → Read operations (verify session, list chats, history, search)
- dto/       → Data Transfer Objects shared by HTTP responses and realtime events
- common/    → Shared interfaces (Command, Query base classes)

Rules:
- Depends on Domain layer only (ports, entities, events)
- No HTTP/framework code here
"""
