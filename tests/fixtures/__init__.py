"""Shared testing fixtures for the quiz_trainer test suite."""

from .prompt import ScriptedPrompt  # noqa: F401
from .quizzes import GEOGRAPHY, make_store, questions  # noqa: F401
from .workspace import WorkspaceBuilder  # noqa: F401

__all__ = [
    "GEOGRAPHY",
    "ScriptedPrompt",
    "WorkspaceBuilder",
    "make_store",
    "questions",
]
