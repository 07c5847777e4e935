"""Index-addressed quiz collection backed by a storage backend.

A quiz has no identity of its own: its position in the collection is the id
users type. Deleting a quiz shifts every later quiz down by one. Every
mutation is written through to storage; when a write fails the in-memory
change is kept, the store is marked dirty and the error is raised so the
caller can tell the user. The next mutation or :meth:`QuizStore.flush`
retries the write.
"""

from __future__ import annotations

import logging
from typing import Sequence

from .errors import QuizNotFoundError, StorageError
from .models import Quiz, QuizLookup
from .storage import QuizStorage

__all__ = ["QuizStore"]


class QuizStore:
    """Single owner of the ordered quiz collection."""

    def __init__(
        self,
        storage: QuizStorage,
        quizzes: Sequence[Quiz] = (),
        *,
        logger: logging.Logger | None = None,
    ) -> None:
        self._storage = storage
        self._quizzes: list[Quiz] = list(quizzes)
        self._dirty = False
        self._logger = logger or logging.getLogger("quiz_trainer.store")

    @classmethod
    def open(
        cls,
        storage: QuizStorage,
        *,
        logger: logging.Logger | None = None,
    ) -> "QuizStore":
        """Build a store from whatever ``storage`` currently holds."""

        store = cls(storage, storage.load(), logger=logger)
        store._logger.debug(
            "Loaded quizzes", extra={"count": len(store._quizzes)}
        )
        return store

    def __len__(self) -> int:
        return len(self._quizzes)

    @property
    def count(self) -> int:
        return len(self._quizzes)

    @property
    def dirty(self) -> bool:
        """True while the last write to storage has not succeeded."""

        return self._dirty

    def get_all(self) -> list[Quiz]:
        return list(self._quizzes)

    def resolve_index(self, raw: object) -> int:
        """Turn a user-supplied id into a valid index.

        Accepts ints and decimal strings. Anything else, including ``None``,
        negatives and ids past the end, raises :class:`QuizNotFoundError`.
        """

        if isinstance(raw, str):
            text = raw.strip()
            if not (text.isascii() and text.isdecimal()):
                raise QuizNotFoundError(text)
            try:
                index = int(text)
            except ValueError:
                raise QuizNotFoundError(text) from None
        elif isinstance(raw, int) and not isinstance(raw, bool):
            index = raw
        else:
            raise QuizNotFoundError(raw)
        if not 0 <= index < len(self._quizzes):
            raise QuizNotFoundError(index)
        return index

    def get_by_index(self, raw: object) -> Quiz:
        return self._quizzes[self.resolve_index(raw)]

    def lookup(self, raw: object) -> QuizLookup:
        """Resolve ``raw`` without raising, tagging why it failed."""

        if raw is None:
            return QuizLookup("missing", message="Missing id parameter.")
        try:
            index = self.resolve_index(raw)
        except QuizNotFoundError as exc:
            return QuizLookup("not_found", message=str(exc))
        return QuizLookup("found", index=index, quiz=self._quizzes[index])

    def add(self, question: str, answer: str) -> int:
        self._quizzes.append(Quiz(question=question, answer=answer))
        index = len(self._quizzes) - 1
        self._logger.debug("Added quiz", extra={"index": index})
        self._persist()
        return index

    def delete_by_index(self, raw: object) -> Quiz:
        index = self.resolve_index(raw)
        removed = self._quizzes.pop(index)
        self._logger.debug("Deleted quiz", extra={"index": index})
        self._persist()
        return removed

    def update(self, raw: object, question: str, answer: str) -> Quiz:
        index = self.resolve_index(raw)
        quiz = Quiz(question=question, answer=answer)
        self._quizzes[index] = quiz
        self._logger.debug("Updated quiz", extra={"index": index})
        self._persist()
        return quiz

    def flush(self) -> None:
        """Retry a previously failed write; no-op when storage is current."""

        if self._dirty:
            self._persist()

    def _persist(self) -> None:
        try:
            self._storage.save(list(self._quizzes))
        except StorageError:
            self._dirty = True
            self._logger.exception(
                "Failed to save quizzes", extra={"count": len(self._quizzes)}
            )
            raise
        self._dirty = False
