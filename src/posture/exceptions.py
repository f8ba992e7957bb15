"""Posture store exceptions."""

from __future__ import annotations


class PostureError(Exception):
    """Base exception for posture store errors."""


class MissingFieldError(PostureError):
    """A required text field was blank at creation."""

    def __init__(self, field: str) -> None:
        super().__init__(f"{field} must not be empty")
        self.field = field


class DomainValueError(PostureError):
    """A value falls outside its closed enumeration."""

    def __init__(self, field: str, value: object, allowed: list[str]) -> None:
        super().__init__(
            f"invalid {field} {value!r}; expected one of: {', '.join(allowed)}"
        )
        self.field = field
        self.value = value
