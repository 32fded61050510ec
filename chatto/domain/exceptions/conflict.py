"""
ConflictError - Raised when an operation would duplicate existing state
(already a member, email already registered).
Maps to: HTTP 409 Conflict
"""


class ConflictError(Exception):
    def __init__(self, message: str = "Resource already exists"):
        super().__init__(message)
