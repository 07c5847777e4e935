"""Single-question tests and randomized play sessions over a quiz store."""

from __future__ import annotations

import logging
import random
from typing import Callable, Optional

from ..prompt import Prompt
from .errors import MissingArgumentError
from .models import AnswerCheck, PlayResult, PlayStatus, Quiz, TestOutcome
from .store import QuizStore

__all__ = [
    "SessionEngine",
    "answers_match",
    "plain_question_prompt",
]

QuestionFormatter = Callable[[Quiz], str]
AnswerCallback = Callable[[AnswerCheck], None]


def answers_match(response: str, expected: str) -> bool:
    """Compare answers ignoring case and surrounding whitespace."""

    return response.strip().lower() == expected.strip().lower()


def plain_question_prompt(quiz: Quiz) -> str:
    return f" ¿ {quiz.question} ? "


class SessionEngine:
    """Ask quizzes from ``store`` through ``prompt`` and score the answers.

    The engine only reads the store. A play session works on its own copy of
    the collection, so asking a quiz never removes it from the store.
    """

    def __init__(
        self,
        store: QuizStore,
        prompt: Prompt,
        *,
        rng: Optional[random.Random] = None,
        format_question: QuestionFormatter = plain_question_prompt,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self._store = store
        self._prompt = prompt
        self._rng = rng or random.Random()
        self._format_question = format_question
        self._logger = logger or logging.getLogger("quiz_trainer.engine")

    async def test_one(self, raw_id: object) -> TestOutcome:
        """Ask the quiz at ``raw_id`` once and report whether it was right."""

        if raw_id is None:
            raise MissingArgumentError("id")
        index = self._store.resolve_index(raw_id)
        quiz = self._store.get_by_index(index)
        response = await self._prompt.ask(self._format_question(quiz))
        correct = answers_match(response, quiz.answer)
        self._logger.info(
            "Tested quiz", extra={"index": index, "correct": correct}
        )
        return TestOutcome(
            index=index, quiz=quiz, response=response, correct=correct
        )

    async def play_all(
        self, on_answer: Optional[AnswerCallback] = None
    ) -> PlayResult:
        """Ask every quiz once in random order until one is answered wrong."""

        remaining = self._store.get_all()
        total = len(remaining)
        score = 0
        asked: list[AnswerCheck] = []
        self._logger.info("Play session started", extra={"total": total})

        while remaining:
            quiz = remaining.pop(self._rng.randrange(len(remaining)))
            response = await self._prompt.ask(self._format_question(quiz))
            correct = answers_match(response, quiz.answer)
            if correct:
                score += 1
            check = AnswerCheck(
                quiz=quiz, response=response, correct=correct, score=score
            )
            asked.append(check)
            if on_answer is not None:
                on_answer(check)
            if not correct:
                return self._finish(score, total, "failed", asked)

        return self._finish(score, total, "exhausted", asked)

    def _finish(
        self,
        score: int,
        total: int,
        status: PlayStatus,
        asked: list[AnswerCheck],
    ) -> PlayResult:
        self._logger.info(
            "Play session finished",
            extra={"score": score, "total": total, "status": status},
        )
        return PlayResult(
            score=score,
            total=total,
            status=status,
            asked=tuple(asked),
        )
