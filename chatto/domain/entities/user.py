"""
User Entity - A registered chat user.
"""

from dataclasses import dataclass
from datetime import datetime

from chatto.domain.value_objects.user_email import UserEmail
from chatto.domain.value_objects.user_id import UserId


@dataclass
class User:
    id: UserId
    email: UserEmail
    password_hash: str
    created_at: datetime
    updated_at: datetime
