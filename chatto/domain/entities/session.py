"""
Session Entity - An issued token bound to a user (one per device/login).
"""

from dataclasses import dataclass
from datetime import datetime

from chatto.domain.value_objects.user_id import UserId


@dataclass(frozen=True)
class Session:
    user_id: UserId
    token: str
    created_at: datetime
    expires_at: datetime

    def __post_init__(self):
        if not self.token:
            raise ValueError("Session token cannot be empty")
        if self.expires_at <= self.created_at:
            raise ValueError("Session must expire after it was created")

    def is_valid_at(self, moment: datetime) -> bool:
        return moment < self.expires_at
