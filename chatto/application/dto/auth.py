"""Auth DTOs for API responses."""

from pydantic import BaseModel

from chatto.domain.entities.user import User


class UserDTO(BaseModel):
    id: int
    email: str

    @classmethod
    def from_entity(cls, user: User) -> "UserDTO":
        return cls(id=user.id.value, email=user.email.value)
