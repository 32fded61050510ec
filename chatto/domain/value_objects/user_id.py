"""
UserId Value Object
"""

from dataclasses import dataclass

from chatto.domain.value_objects._int_id import validate_positive_id


@dataclass(frozen=True)
class UserId:
    value: int  # users.id

    def __post_init__(self):
        validate_positive_id("UserId", self.value)

    def __str__(self) -> str:
        return str(self.value)
