"""Command-line entry point for quiz-trainer."""

from __future__ import annotations

import argparse
import asyncio
import logging
import os
import sys
from importlib import metadata
from pathlib import Path
from typing import Sequence

from rich.console import Console

from .config import (
    ConfigOverrides,
    LoadResult,
    TrainerConfigError,
    load_config,
    resolve_config_path,
    write_template,
)
from .core import workspace as workspace_mod
from .core.logging import configure_logger
from .prompt import ConsolePrompt
from .quizzes import view
from .quizzes.engine import SessionEngine
from .quizzes.errors import StorageError
from .quizzes.storage import DEFAULT_QUIZZES, JsonQuizStorage
from .quizzes.store import QuizStore
from .shell import Shell


def _version() -> str:
    try:
        return metadata.version("quiz-trainer")
    except metadata.PackageNotFoundError:
        return "unknown"


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="quiz-trainer",
        description=(
            "Keep a set of question/answer quizzes and practise them from an "
            "interactive prompt."
        ),
        epilog=(
            "Run `quiz-trainer config init` to write the default "
            "quiz_trainer.toml template."
        ),
    )
    parser.add_argument(
        "command",
        nargs="*",
        help=(
            "Run a single shell command (e.g. `list` or `show 2`) and exit "
            "instead of starting the interactive prompt."
        ),
    )
    parser.add_argument(
        "--quizzes",
        type=Path,
        help="JSON file holding the quizzes (overrides storage.path).",
    )
    parser.add_argument(
        "--config",
        type=Path,
        help="Path to a TOML config file.",
    )
    parser.add_argument(
        "--workspace",
        type=Path,
        help="Override the data home (defaults to QUIZ_TRAINER_HOME).",
    )
    parser.add_argument(
        "--log-level",
        help="Logging level for the log file (defaults to INFO).",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Also print log records to stderr.",
    )
    parser.add_argument(
        "-V",
        "--version",
        action="version",
        version=f"%(prog)s {_version()}",
    )
    return parser


def _build_config_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="quiz-trainer config",
        description="Manage the quiz_trainer.toml configuration file.",
    )
    parser.add_argument("--config", type=Path)
    parser.add_argument("--workspace", type=Path)
    sub = parser.add_subparsers(dest="action", required=True)
    sp_init = sub.add_parser("init", help="Write the default template.")
    sp_init.add_argument(
        "--force", action="store_true", help="Overwrite an existing file."
    )
    sub.add_parser("path", help="Print the config file location.")
    return parser


def _handle_config(argv: Sequence[str]) -> int:
    parser = _build_config_parser()
    args = parser.parse_args(list(argv))
    try:
        layout = workspace_mod.ensure_workspace(path=args.workspace)
    except workspace_mod.WorkspaceError as exc:
        parser.error(str(exc))
    path = resolve_config_path(
        config_path=args.config, env=os.environ, layout=layout
    )
    if args.action == "path":
        sys.stdout.write(f"{path}\n")
        return 0
    try:
        written = write_template(path, overwrite=args.force)
    except TrainerConfigError as exc:
        sys.stderr.write(f"{exc}\n")
        return 1
    sys.stdout.write(f"Wrote {written}\n")
    return 0


def _open_store(
    load_result: LoadResult, logger: logging.Logger
) -> QuizStore:
    config = load_result.config
    storage = JsonQuizStorage(
        config.quizzes_path,
        seed=DEFAULT_QUIZZES if config.seed_defaults else (),
    )
    return QuizStore.open(storage, logger=logger.getChild("store"))


def main(argv: Sequence[str] | None = None) -> int:
    args_list = list(argv) if argv is not None else list(sys.argv[1:])

    if args_list[:1] == ["config"]:
        return _handle_config(args_list[1:])

    parser = _build_parser()
    args = parser.parse_args(args_list)

    overrides = ConfigOverrides(
        quizzes_path=args.quizzes,
        log_level=args.log_level,
    )
    try:
        load_result = load_config(
            config_path=args.config,
            overrides=overrides,
            workspace_path=args.workspace,
        )
    except TrainerConfigError as exc:
        parser.error(str(exc))

    logger, _ = configure_logger(
        "quiz_trainer",
        log_dir=load_result.layout.path_for("logs"),
        level=load_result.config.log_level,
        verbose=args.verbose,
    )
    logger.debug(
        "quiz-trainer invoked",
        extra={"quizzes_path": load_result.config.quizzes_path},
    )

    console = Console()
    try:
        store = _open_store(load_result, logger)
    except StorageError as exc:
        logger.exception("Failed to load quizzes")
        view.render_error(console, str(exc))
        return 1

    prompt = ConsolePrompt(console, prefill=load_result.config.prefill_edit)
    shell = Shell(
        store,
        prompt,
        console,
        engine=SessionEngine(
            store,
            prompt,
            format_question=view.question_prompt,
            logger=logger.getChild("engine"),
        ),
        prefill_edit=load_result.config.prefill_edit,
        logger=logger.getChild("shell"),
    )

    try:
        if args.command:
            return asyncio.run(_run_once(shell, " ".join(args.command)))
        return asyncio.run(shell.run())
    except KeyboardInterrupt:
        console.print()
        return 130
    except EOFError:
        view.render_error(console, "Input closed before the command finished.")
        return 1


async def _run_once(shell: Shell, line: str) -> int:
    try:
        await shell.execute(line)
    finally:
        status = shell.close()
    return status


if __name__ == "__main__":  # pragma: no cover - manual invocation guard
    raise SystemExit(main())
