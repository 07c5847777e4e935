"""Interactive question/answer quiz trainer."""

from .quizzes import (
    MissingArgumentError,
    Quiz,
    QuizNotFoundError,
    QuizStore,
    SessionEngine,
    StorageError,
)

__all__ = [
    "Quiz",
    "QuizStore",
    "SessionEngine",
    "MissingArgumentError",
    "QuizNotFoundError",
    "StorageError",
]
