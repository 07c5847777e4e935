from __future__ import annotations

import json

import pytest

from quiz_trainer.quizzes import (
    DEFAULT_QUIZZES,
    JsonQuizStorage,
    MemoryQuizStorage,
    Quiz,
    QuizStore,
    StorageError,
)


def test_missing_file_is_seeded(tmp_path):
    path = tmp_path / "data" / "quizzes.json"
    storage = JsonQuizStorage(path)

    quizzes = storage.load()

    assert quizzes == list(DEFAULT_QUIZZES)
    assert json.loads(path.read_text(encoding="utf-8"))[0] == {
        "question": "Capital of Italy",
        "answer": "Rome",
    }


def test_missing_file_without_seed_starts_empty(tmp_path):
    storage = JsonQuizStorage(tmp_path / "quizzes.json", seed=None)

    assert storage.load() == []
    assert json.loads(storage.path.read_text(encoding="utf-8")) == []


def test_save_then_load(tmp_path):
    storage = JsonQuizStorage(tmp_path / "quizzes.json")

    storage.save([Quiz("¿Capital de España?", "Madrid"), Quiz("x", "y")])

    assert storage.load() == [
        Quiz("¿Capital de España?", "Madrid"),
        Quiz("x", "y"),
    ]
    assert "¿Capital" in storage.path.read_text(encoding="utf-8")
    assert list(tmp_path.glob("*.tmp")) == []


@pytest.mark.parametrize(
    "content",
    [
        "{not json",
        '{"question": "q", "answer": "a"}',
        '["just a string"]',
        '[{"question": "q"}]',
        '[{"question": 1, "answer": "a"}]',
    ],
)
def test_invalid_files_raise_storage_error(workspace, content):
    path = workspace.write("quizzes.json", content)

    with pytest.raises(StorageError):
        JsonQuizStorage(path).load()


def test_non_utf8_file_raises_storage_error(tmp_path):
    path = tmp_path / "quizzes.json"
    path.write_bytes(b'[{"question": "\xff\xfe", "answer": "x"}]')

    with pytest.raises(StorageError, match="Failed to parse"):
        JsonQuizStorage(path).load()


def test_unwritable_target_raises_storage_error(tmp_path):
    blocker = tmp_path / "blocker"
    blocker.write_text("file, not a directory", encoding="utf-8")
    storage = JsonQuizStorage(blocker / "quizzes.json")

    with pytest.raises(StorageError):
        storage.save([Quiz("q", "a")])


def test_store_persists_through_json_file(tmp_path):
    path = tmp_path / "quizzes.json"
    store = QuizStore.open(JsonQuizStorage(path, seed=()))

    store.add("2+2?", "4")
    store.add("capital of France?", "Paris")
    store.delete_by_index(0)

    reopened = QuizStore.open(JsonQuizStorage(path, seed=()))
    assert reopened.get_all() == [Quiz("capital of France?", "Paris")]


def test_memory_storage_records_snapshots():
    storage = MemoryQuizStorage([Quiz("a", "b")])

    storage.save([Quiz("c", "d")])

    assert storage.load() == [Quiz("c", "d")]
    assert storage.saves == [[Quiz("c", "d")]]


def test_memory_storage_failure_mode():
    storage = MemoryQuizStorage(fail_saves=True)

    with pytest.raises(StorageError):
        storage.save([])
    assert storage.saves == []
