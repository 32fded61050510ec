"""
StoreError - Unexpected failure of the durable store; the surrounding
transaction has been rolled back.
Maps to: HTTP 500 Internal Server Error
"""


class StoreError(Exception):
    def __init__(self, message: str = "Storage failure"):
        super().__init__(message)
