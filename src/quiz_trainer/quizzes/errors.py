"""Exceptions raised by the quiz store, its storage and the session engine."""

from __future__ import annotations

__all__ = [
    "QuizError",
    "MissingArgumentError",
    "QuizNotFoundError",
    "StorageError",
]


class QuizError(RuntimeError):
    """Base class for recoverable quiz errors reported back to the shell."""


class MissingArgumentError(QuizError):
    """Raised when a command needs a quiz id and none was given."""

    def __init__(self, name: str = "id") -> None:
        super().__init__(f"Missing {name} parameter.")
        self.name = name


class QuizNotFoundError(QuizError):
    """Raised when an id does not resolve to a quiz in the collection."""

    def __init__(self, index: object) -> None:
        super().__init__(f"No quiz found at index {index}.")
        self.index = index


class StorageError(QuizError):
    """Raised when quizzes cannot be loaded from or saved to storage."""
