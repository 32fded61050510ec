"""
UnauthenticatedError - Missing, invalid, expired or revoked credential.
Maps to: HTTP 401 Unauthorized
"""


class UnauthenticatedError(Exception):
    def __init__(self, message: str = "Authentication required"):
        super().__init__(message)
