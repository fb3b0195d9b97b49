"""Result of validating a user-supplied topic."""

from dataclasses import dataclass


@dataclass(frozen=True)
class TopicValidation:
    is_valid: bool
    message: str | None = None
