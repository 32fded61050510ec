"""
DOMAIN EXCEPTIONS - Business rule violations

These exceptions are raised by domain and application logic and caught by
the presentation layer, which maps them to HTTP status codes or to socket
`error` events.
"""

from chatto.domain.exceptions.entity_not_found import EntityNotFoundError
from chatto.domain.exceptions.access_denied import AccessDeniedError
from chatto.domain.exceptions.validation_error import DomainValidationError
from chatto.domain.exceptions.conflict import ConflictError
from chatto.domain.exceptions.unauthenticated import UnauthenticatedError
from chatto.domain.exceptions.store_error import StoreError

__all__ = [
    "EntityNotFoundError",
    "AccessDeniedError",
    "DomainValidationError",
    "ConflictError",
    "UnauthenticatedError",
    "StoreError",
]
