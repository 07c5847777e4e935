"""Persistence backends for the quiz collection."""

from __future__ import annotations

import json
import os
import tempfile
from pathlib import Path
from typing import Iterable, Protocol, Sequence

from .errors import StorageError
from .models import Quiz

__all__ = [
    "DEFAULT_QUIZZES",
    "QuizStorage",
    "JsonQuizStorage",
    "MemoryQuizStorage",
]


DEFAULT_QUIZZES: tuple[Quiz, ...] = (
    Quiz("Capital of Italy", "Rome"),
    Quiz("Capital of France", "Paris"),
    Quiz("Capital of Spain", "Madrid"),
    Quiz("Capital of Portugal", "Lisbon"),
)


class QuizStorage(Protocol):
    """Backend the store reads at startup and writes after each change."""

    def load(self) -> list[Quiz]:
        """Return every persisted quiz in index order."""

    def save(self, quizzes: Sequence[Quiz]) -> None:
        """Persist ``quizzes``, replacing whatever was stored before."""


class JsonQuizStorage:
    """Store quizzes as a JSON array in a single UTF-8 file."""

    def __init__(
        self, path: Path, *, seed: Iterable[Quiz] | None = DEFAULT_QUIZZES
    ) -> None:
        self._path = Path(path)
        self._seed = tuple(seed) if seed is not None else ()

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> list[Quiz]:
        if not self._path.exists():
            quizzes = list(self._seed)
            self.save(quizzes)
            return quizzes
        try:
            payload = json.loads(self._path.read_text(encoding="utf-8"))
        except (json.JSONDecodeError, UnicodeDecodeError) as exc:
            raise StorageError(
                f"Failed to parse quiz file: {self._path}"
            ) from exc
        except OSError as exc:
            raise StorageError(
                f"Failed to read quiz file: {self._path}"
            ) from exc
        if not isinstance(payload, list):
            raise StorageError(
                f"Quiz file must contain a JSON array: {self._path}"
            )
        quizzes: list[Quiz] = []
        for item in payload:
            if not isinstance(item, dict):
                raise StorageError(
                    f"Quiz entries must be JSON objects: {self._path}"
                )
            quizzes.append(Quiz.from_dict(item))
        return quizzes

    def save(self, quizzes: Sequence[Quiz]) -> None:
        payload = [quiz.to_dict() for quiz in quizzes]
        try:
            _atomic_write_json(self._path, payload)
        except OSError as exc:
            raise StorageError(
                f"Failed to write quiz file: {self._path}"
            ) from exc


class MemoryQuizStorage:
    """In-process backend keeping every saved snapshot."""

    def __init__(
        self, initial: Iterable[Quiz] = (), *, fail_saves: bool = False
    ) -> None:
        self._quizzes = list(initial)
        self.fail_saves = fail_saves
        self.saves: list[list[Quiz]] = []

    def load(self) -> list[Quiz]:
        return list(self._quizzes)

    def save(self, quizzes: Sequence[Quiz]) -> None:
        if self.fail_saves:
            raise StorageError("Quiz storage is not writable.")
        self._quizzes = list(quizzes)
        self.saves.append(list(quizzes))


def _atomic_write_json(path: Path, payload: object) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    handle = tempfile.NamedTemporaryFile(
        "w",
        delete=False,
        encoding="utf-8",
        dir=str(path.parent),
        suffix=".tmp",
    )
    try:
        json.dump(payload, handle, indent=2, ensure_ascii=False)
        handle.write("\n")
        handle.flush()
        os.fsync(handle.fileno())
    except BaseException:
        handle.close()
        Path(handle.name).unlink(missing_ok=True)
        raise
    handle.close()
    os.replace(handle.name, path)
