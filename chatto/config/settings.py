"""Application configuration settings"""

import os
from dotenv import load_dotenv

load_dotenv()


def _flag(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() in {"1", "true", "yes", "on"}


class Config:
    DEBUG = _flag("DEBUG", "false")

    # Storage backend: "prisma" (PostgreSQL via Prisma) or "memory"
    CHAT_STORE = os.getenv("CHAT_STORE", "prisma").lower()
    DATABASE_URL = os.getenv("DATABASE_URL", "")

    # Auth
    JWT_SECRET = os.getenv("JWT_SECRET", "change-this-secret-in-production")
    JWT_ISSUER = os.getenv("JWT_ISSUER", "chatto")
    JWT_AUDIENCE = os.getenv("JWT_AUDIENCE", "chatto-clients")
    SESSION_TTL_HOURS = float(os.getenv("SESSION_TTL_HOURS", "24"))
    BCRYPT_ROUNDS = int(os.getenv("BCRYPT_ROUNDS", "10"))

    # Realtime
    TYPING_TIMEOUT_SECONDS = float(os.getenv("TYPING_TIMEOUT_SECONDS", "2.0"))
    CONNECTION_OUTBOX_SIZE = int(os.getenv("CONNECTION_OUTBOX_SIZE", "256"))

    # Chats
    MESSAGE_PAGE_LIMIT = int(os.getenv("MESSAGE_PAGE_LIMIT", "50"))
    MESSAGE_PAGE_MAX = int(os.getenv("MESSAGE_PAGE_MAX", "100"))
    SEARCH_MESSAGES_LIMIT = int(os.getenv("SEARCH_MESSAGES_LIMIT", "50"))
    SEARCH_USERS_LIMIT = int(os.getenv("SEARCH_USERS_LIMIT", "10"))

    # HTTP
    CORS_ORIGINS = os.getenv("CORS_ORIGINS", "http://localhost:5173").split(",")
    HOST = os.getenv("HOST", "0.0.0.0")
    PORT = int(os.getenv("PORT", "5000"))

    # Logging
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
    LOG_PATH = os.getenv("LOG_PATH", "")
    LOG_FORMAT = os.getenv(
        "LOG_FORMAT",
        "%(asctime)s %(levelname)s [%(correlation_id)s] %(name)s: %(message)s",
    )
