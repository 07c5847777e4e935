"""Interactive command loop for the quiz trainer."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from functools import partial
from typing import Awaitable, Callable, Mapping, Optional, Sequence

from rich.console import Console

from .prompt import Prompt
from .quizzes import view
from .quizzes.engine import SessionEngine
from .quizzes.errors import QuizError, StorageError
from .quizzes.models import QuizLookup
from .quizzes.store import QuizStore

__all__ = ["ShellCommand", "Shell", "COMMAND_PROMPT", "AUTHORS"]

COMMAND_PROMPT = "[blue]quiz > [/blue]"
AUTHORS: tuple[str, ...] = ("The quiz-trainer authors",)


@dataclass(frozen=True)
class ShellCommand:
    """One entry of the command table."""

    name: str
    usage: str
    summary: str
    method: str
    aliases: tuple[str, ...] = ()

    def help_usage(self) -> str:
        return "|".join((*self.aliases, self.usage))


_COMMANDS: Sequence[ShellCommand] = (
    ShellCommand("help", "help", "Show this help.", "_cmd_help", ("h",)),
    ShellCommand("list", "list", "List the existing quizzes.", "_cmd_list"),
    ShellCommand(
        "show",
        "show <id>",
        "Show the question and answer of a quiz.",
        "_cmd_show",
    ),
    ShellCommand("add", "add", "Add a new quiz interactively.", "_cmd_add"),
    ShellCommand("delete", "delete <id>", "Delete a quiz.", "_cmd_delete"),
    ShellCommand("edit", "edit <id>", "Edit a quiz.", "_cmd_edit"),
    ShellCommand("test", "test <id>", "Answer a single quiz.", "_cmd_test"),
    ShellCommand(
        "play",
        "play",
        "Answer every quiz in random order until one is wrong.",
        "_cmd_play",
        ("p",),
    ),
    ShellCommand("credits", "credits", "Show the authors.", "_cmd_credits"),
    ShellCommand(
        "quit", "quit", "Leave the program.", "_cmd_quit", ("q", "exit")
    ),
)


def _command_index(
    commands: Sequence[ShellCommand],
) -> Mapping[str, ShellCommand]:
    index: dict[str, ShellCommand] = {}
    for command in commands:
        for name in (command.name, *command.aliases):
            index[name] = command
    return index


COMMANDS: Mapping[str, ShellCommand] = _command_index(_COMMANDS)

Handler = Callable[[Sequence[str]], Awaitable[Optional[bool]]]


class Shell:
    """Read commands, run them against the store and report the outcome.

    Bad ids, missing arguments and failed writes are reported and the loop
    keeps going. Only ``quit`` or closed input end it.
    """

    def __init__(
        self,
        store: QuizStore,
        prompt: Prompt,
        console: Console,
        *,
        engine: SessionEngine | None = None,
        prefill_edit: bool = True,
        logger: logging.Logger | None = None,
    ) -> None:
        self._store = store
        self._prompt = prompt
        self._console = console
        self._engine = engine or SessionEngine(
            store, prompt, format_question=view.question_prompt
        )
        self._prefill_edit = prefill_edit
        self._logger = logger or logging.getLogger("quiz_trainer.shell")

    async def run(self) -> int:
        """Run until ``quit`` or end of input; return the exit status."""

        view.banner(self._console, "Quiz", "green")
        try:
            while True:
                try:
                    line = await self._prompt.ask(COMMAND_PROMPT)
                    if not await self.execute(line):
                        break
                except EOFError:
                    self._console.print()
                    break
        finally:
            status = self.close()
        return status

    async def execute(self, line: str) -> bool:
        """Run one command line; return False when the shell should stop."""

        words = line.split()
        if not words:
            return True
        name, args = words[0].lower(), words[1:]
        command = COMMANDS.get(name)
        if command is None:
            self._logger.debug("Unknown command", extra={"command": name})
            view.render_error(self._console, f"Unknown command: '{name}'.")
            self._console.print(" Use 'help' to see the available commands.")
            return True

        handler: Handler = getattr(self, command.method)
        try:
            return await handler(args) is not False
        except StorageError as exc:
            view.render_error(
                self._console,
                f"{exc} The change is kept in memory and will be saved "
                "with the next change or on exit.",
            )
        except QuizError as exc:
            view.render_error(self._console, str(exc))
        return True

    def close(self) -> int:
        """Write any unsaved changes; return 1 if that fails."""

        try:
            self._store.flush()
        except StorageError as exc:
            view.render_error(self._console, f"Unsaved changes lost: {exc}")
            return 1
        return 0

    def _lookup(self, args: Sequence[str]) -> QuizLookup | None:
        lookup = self._store.lookup(args[0] if args else None)
        if not lookup.found:
            view.render_error(self._console, lookup.message)
            return None
        return lookup

    async def _cmd_help(self, args: Sequence[str]) -> None:
        view.render_help(
            self._console,
            ((command.help_usage(), command.summary) for command in _COMMANDS),
        )

    async def _cmd_list(self, args: Sequence[str]) -> None:
        view.render_list(self._console, self._store.get_all())

    async def _cmd_show(self, args: Sequence[str]) -> None:
        lookup = self._lookup(args)
        if lookup is not None:
            view.render_quiz(self._console, lookup.index, lookup.quiz)

    async def _cmd_add(self, args: Sequence[str]) -> None:
        question = await self._prompt.ask(view.field_prompt("Question"))
        answer = await self._prompt.ask(view.field_prompt("Answer"))
        index = self._store.add(question, answer)
        view.render_added(
            self._console, index, self._store.get_by_index(index)
        )

    async def _cmd_delete(self, args: Sequence[str]) -> None:
        lookup = self._lookup(args)
        if lookup is not None:
            removed = self._store.delete_by_index(lookup.index)
            view.render_deleted(self._console, lookup.index, removed)

    async def _cmd_edit(self, args: Sequence[str]) -> None:
        lookup = self._lookup(args)
        if lookup is None:
            return
        current = lookup.quiz
        question = await self._prompt.ask(
            view.field_prompt("Question"),
            default=current.question if self._prefill_edit else None,
        )
        answer = await self._prompt.ask(
            view.field_prompt("Answer"),
            default=current.answer if self._prefill_edit else None,
        )
        quiz = self._store.update(lookup.index, question, answer)
        view.render_updated(self._console, lookup.index, quiz)

    async def _cmd_test(self, args: Sequence[str]) -> None:
        outcome = await self._engine.test_one(args[0] if args else None)
        view.render_outcome(self._console, outcome)

    async def _cmd_play(self, args: Sequence[str]) -> None:
        result = await self._engine.play_all(
            on_answer=partial(view.render_play_progress, self._console)
        )
        view.render_play_result(self._console, result)

    async def _cmd_credits(self, args: Sequence[str]) -> None:
        view.render_credits(self._console, AUTHORS)

    async def _cmd_quit(self, args: Sequence[str]) -> bool:
        return False
