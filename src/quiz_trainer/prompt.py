"""Line prompts awaited by the shell and the session engine."""

from __future__ import annotations

import asyncio
import sys
import threading
from typing import Protocol

from rich.console import Console

try:  # readline is missing on some platforms (e.g. Windows)
    import readline
except ImportError:  # pragma: no cover - platform dependent
    readline = None  # type: ignore[assignment]

__all__ = ["Prompt", "ConsolePrompt"]


class Prompt(Protocol):
    """Asks one question and resolves with the raw text typed back.

    Implementations raise ``EOFError`` once input is closed.
    """

    async def ask(self, text: str, *, default: str | None = None) -> str:
        ...


class ConsolePrompt:
    """Read answers from the terminal through a Rich console.

    Each ``ask`` reads one line on a daemon thread and resolves a future on
    the running loop, so the caller is suspended at exactly one prompt at a
    time. A cancelled ``ask`` leaves the read behind without blocking
    shutdown. When ``default`` is given on an interactive terminal, it is
    typed into the line buffer up front so the user can edit it in place.
    """

    def __init__(self, console: Console, *, prefill: bool = True) -> None:
        self._console = console
        self._prefill = prefill

    async def ask(self, text: str, *, default: str | None = None) -> str:
        loop = asyncio.get_running_loop()
        future: asyncio.Future[str] = loop.create_future()

        def _resolve(value: str | None, error: BaseException | None) -> None:
            if future.done():
                return
            if error is not None:
                future.set_exception(error)
            else:
                future.set_result(value or "")

        def _deliver(value: str | None, error: BaseException | None) -> None:
            try:
                loop.call_soon_threadsafe(_resolve, value, error)
            except RuntimeError:
                # Loop already closed: the prompt was abandoned.
                return

        def _worker() -> None:
            try:
                value = self._read(text, default)
            except (EOFError, KeyboardInterrupt) as exc:
                _deliver(None, EOFError(str(exc)))
                return
            _deliver(value, None)

        threading.Thread(
            target=_worker, name="quiz-trainer-prompt", daemon=True
        ).start()
        return await future

    def _read(self, text: str, default: str | None) -> str:
        if default is None or not self._can_prefill():
            return self._console.input(text)
        readline.set_startup_hook(lambda: readline.insert_text(default))
        try:
            return self._console.input(text)
        finally:
            readline.set_startup_hook()

    def _can_prefill(self) -> bool:
        return self._prefill and readline is not None and sys.stdin.isatty()
