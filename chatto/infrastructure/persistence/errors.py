"""Maps Prisma client failures onto StoreError."""

import logging
from contextlib import asynccontextmanager

from prisma.errors import PrismaError

from chatto.domain.exceptions import StoreError

logger = logging.getLogger(__name__)


@asynccontextmanager
async def store_operation(action: str):
    try:
        yield
    except PrismaError as e:
        logger.error(f"[Store] Failed to {action}: {type(e).__name__}: {e}")
        raise StoreError(f"Failed to {action}") from e
