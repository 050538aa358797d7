from __future__ import annotations


class DomainError(Exception):
    """Base class for rule violations raised by the herd core."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class TransitionError(DomainError):
    """A requested lifecycle change is not legal for the animal's current state."""


class DuplicateTagError(DomainError):
    def __init__(self, tag_number: str) -> None:
        super().__init__(f"Tag Number {tag_number} already exists")
        self.tag_number = tag_number
