"""
Main entry point for the chat server.

Usage:
    python run_fastapi.py

Or with uvicorn directly:
    uvicorn chatto.asgi:app --host 0.0.0.0 --port 5000 --reload
"""

from dotenv import load_dotenv

# Load environment variables before Config is imported
load_dotenv()

import uvicorn

from chatto.config.settings import Config

if __name__ == "__main__":
    print(f"Starting chat server (store: {Config.CHAT_STORE})...")
    print(f"Server running on http://{Config.HOST}:{Config.PORT}")
    print(f"API docs available at http://{Config.HOST}:{Config.PORT}/docs")

    uvicorn.run(
        "chatto.asgi:app",
        host=Config.HOST,
        port=Config.PORT,
        reload=Config.DEBUG,
        log_level="info" if Config.DEBUG else "warning",
    )
