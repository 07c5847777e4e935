from .engine import SessionEngine, answers_match
from .errors import (
    MissingArgumentError,
    QuizError,
    QuizNotFoundError,
    StorageError,
)
from .models import AnswerCheck, PlayResult, Quiz, QuizLookup, TestOutcome
from .storage import (
    DEFAULT_QUIZZES,
    JsonQuizStorage,
    MemoryQuizStorage,
    QuizStorage,
)
from .store import QuizStore

__all__ = [
    "SessionEngine",
    "answers_match",
    "QuizError",
    "MissingArgumentError",
    "QuizNotFoundError",
    "StorageError",
    "Quiz",
    "QuizLookup",
    "AnswerCheck",
    "TestOutcome",
    "PlayResult",
    "QuizStorage",
    "JsonQuizStorage",
    "MemoryQuizStorage",
    "DEFAULT_QUIZZES",
    "QuizStore",
]
