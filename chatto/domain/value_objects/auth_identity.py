"""
AuthIdentity Value Object - who a verified credential belongs to.
"""

from dataclasses import dataclass

from chatto.domain.value_objects.user_email import UserEmail
from chatto.domain.value_objects.user_id import UserId


@dataclass(frozen=True)
class AuthIdentity:
    user_id: UserId
    email: UserEmail

    def to_dict(self) -> dict:
        return {"id": self.user_id.value, "email": self.email.value}
