"""Auth queries."""

from .verify_session import VerifySessionQuery, VerifySessionHandler

__all__ = ["VerifySessionQuery", "VerifySessionHandler"]
