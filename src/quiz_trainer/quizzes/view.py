"""Rich rendering for quiz listings, outcomes and score banners."""

from __future__ import annotations

from typing import Iterable, Sequence

from rich import box
from rich.align import Align
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .models import AnswerCheck, PlayResult, Quiz, TestOutcome


def question_prompt(quiz: Quiz) -> str:
    """Markup for the prompt shown when asking ``quiz``."""

    return f"[red] ¿ {escape(quiz.question)} ? [/red]"


def field_prompt(label: str) -> str:
    return f"[red] {escape(label)}: [/red]"


def _index(index: int) -> Text:
    return Text(f"[{index}]", style="magenta")


def _arrow() -> Text:
    return Text(" => ", style="magenta")


def banner(console: Console, message: str, style: str) -> None:
    """Print ``message`` large and centred inside a heavy panel."""

    title = Text(message.strip().upper(), style=f"bold {style}")
    console.print(
        Panel(
            Align.center(title),
            box=box.HEAVY,
            border_style=style,
            padding=(1, 4),
            expand=False,
        )
    )


def render_list(console: Console, quizzes: Sequence[Quiz]) -> None:
    if not quizzes:
        console.print("[dim] No quizzes yet. Use 'add' to create one.[/dim]")
        return
    for index, quiz in enumerate(quizzes):
        console.print(Text(" ") + _index(index) + Text(f": {quiz.question}"))


def render_quiz(console: Console, index: int, quiz: Quiz) -> None:
    console.print(
        Text(" ")
        + _index(index)
        + Text(f": {quiz.question}")
        + _arrow()
        + Text(quiz.answer)
    )


def render_added(console: Console, index: int, quiz: Quiz) -> None:
    console.print(
        Text(" Added ", style="magenta")
        + _index(index)
        + Text(f": {quiz.question}")
        + _arrow()
        + Text(quiz.answer)
    )


def render_deleted(console: Console, index: int, quiz: Quiz) -> None:
    console.print(
        Text(" Deleted ", style="magenta")
        + _index(index)
        + Text(f": {quiz.question}")
    )


def render_updated(console: Console, index: int, quiz: Quiz) -> None:
    console.print(
        Text(" Quiz ")
        + _index(index)
        + Text(f" changed to: {quiz.question}")
        + _arrow()
        + Text(quiz.answer)
    )


def render_outcome(console: Console, outcome: TestOutcome) -> None:
    if outcome.correct:
        console.print(" Your answer is correct.")
        banner(console, "Correct", "green")
    else:
        console.print(" Your answer is incorrect.")
        banner(console, "Incorrect", "red")


def render_play_progress(console: Console, check: AnswerCheck) -> None:
    if check.correct:
        console.print(
            f" [green]CORRECT[/green] - {check.score} correct so far"
        )
    else:
        console.print(" [red]INCORRECT.[/red]")


def render_play_result(console: Console, result: PlayResult) -> None:
    if result.finished:
        console.print(" Nothing left to ask.")
    console.print(f" Game over. Score: {result.score} of {result.total}")
    banner(console, str(result.score), "magenta")


def render_error(console: Console, message: str) -> None:
    console.print(
        Text(" Error", style="bold red") + Text(f": {message}", style="red")
    )


def render_help(
    console: Console, rows: Iterable[tuple[str, str]]
) -> None:
    table = Table(
        title="Commands", show_header=False, box=box.SIMPLE, expand=False
    )
    table.add_column("Usage", style="cyan", no_wrap=True)
    table.add_column("Description")
    for usage, summary in rows:
        table.add_row(usage, summary)
    console.print(table)


def render_credits(console: Console, authors: Sequence[str]) -> None:
    console.print(" Authors:")
    for author in authors:
        console.print(f"  [green]{escape(author)}[/green]")
