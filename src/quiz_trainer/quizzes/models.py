"""Plain value types shared by the store, engine and views."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Literal, Mapping, MutableMapping

from .errors import StorageError

PlayStatus = Literal["exhausted", "failed"]
LookupStatus = Literal["found", "missing", "not_found"]


@dataclass(frozen=True)
class Quiz:
    """A question and its expected answer."""

    question: str
    answer: str

    def to_dict(self) -> MutableMapping[str, Any]:
        return {"question": self.question, "answer": self.answer}

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "Quiz":
        try:
            question = payload["question"]
            answer = payload["answer"]
        except KeyError as exc:
            raise StorageError(
                f"Quiz entry missing required field: {exc}"
            ) from exc
        if not isinstance(question, str) or not isinstance(answer, str):
            raise StorageError("Quiz question and answer must be strings.")
        return cls(question=question, answer=answer)


@dataclass(frozen=True)
class QuizLookup:
    """Outcome of resolving a raw command argument to a quiz.

    ``status`` tells callers which message to show: ``"missing"`` when no id
    was typed at all, ``"not_found"`` when it does not name a quiz.
    """

    status: LookupStatus
    index: int | None = None
    quiz: Quiz | None = None
    message: str = ""

    @property
    def found(self) -> bool:
        return self.status == "found"


@dataclass(frozen=True)
class AnswerCheck:
    """One evaluated answer."""

    quiz: Quiz
    response: str
    correct: bool
    score: int


@dataclass(frozen=True)
class TestOutcome:
    """Result of testing a single quiz."""

    __test__ = False  # keep pytest from collecting this as a test class

    index: int
    quiz: Quiz
    response: str
    correct: bool


@dataclass(frozen=True)
class PlayResult:
    """Final state of a play session."""

    score: int
    total: int
    status: PlayStatus
    asked: tuple[AnswerCheck, ...] = ()

    @property
    def finished(self) -> bool:
        """True when every quiz was answered correctly."""

        return self.status == "exhausted"
