from __future__ import annotations

import sys
from pathlib import Path

import pytest
from rich.console import Console

TESTS_DIR = Path(__file__).resolve().parent
ROOT = TESTS_DIR.parent
for extra in (TESTS_DIR, ROOT / "src"):
    path_str = str(extra)
    if path_str not in sys.path:
        sys.path.insert(0, path_str)

from fixtures import WorkspaceBuilder  # noqa: E402


@pytest.fixture
def console() -> Console:
    """A wide, colourless console that records everything printed."""

    return Console(record=True, width=100, color_system=None)


@pytest.fixture
def workspace(tmp_path: Path) -> WorkspaceBuilder:
    """Provide a helper bound to pytest's per-test tmp directory."""

    return WorkspaceBuilder(tmp_path)


@pytest.fixture(autouse=True)
def _isolated_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("QUIZ_TRAINER_HOME", str(tmp_path / "home"))
    for suffix in ("CONFIG", "QUIZZES", "LOG_LEVEL"):
        monkeypatch.delenv(f"QUIZ_TRAINER_{suffix}", raising=False)
