"""
ASGI entry point.

    uvicorn chatto.asgi:app --host 0.0.0.0 --port 5000

The store is chosen by CHAT_STORE (prisma | memory).
"""

from chatto.fastapi_app import create_fastapi_app
from chatto.setup.ioc import create_container

# Container is created at module level: Dishka adds middleware, which must happen before app starts
container = create_container()
app = create_fastapi_app(container)
