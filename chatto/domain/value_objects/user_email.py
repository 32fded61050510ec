"""
UserEmail Value Object - Wraps user email with validation.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class UserEmail:
    value: str  # normalized: stripped and lower-cased

    def __post_init__(self):
        normalized = (self.value or "").strip().lower()
        local, _, domain = normalized.partition("@")
        if not local or not domain or " " in normalized:
            raise ValueError(f"Invalid user email: {self.value}")
        object.__setattr__(self, "value", normalized)

    def __str__(self) -> str:
        return self.value
