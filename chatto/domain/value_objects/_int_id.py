"""Shared validation for integer identifiers issued by the store."""


def validate_positive_id(kind: str, value: int) -> None:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{kind} must be an integer, got {value!r}")
    if value <= 0:
        raise ValueError(f"{kind} must be positive, got {value}")
