"""Data home resolution for quiz-trainer (config, logs and quiz files)."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType
from typing import Mapping, MutableMapping


WORKSPACE_ENV = "QUIZ_TRAINER_HOME"
DEFAULT_WORKSPACE = Path.home() / ".quiz-trainer"

_SUBDIRS = {
    "config": "config",
    "logs": "logs",
    "data": "data",
}


class WorkspaceError(RuntimeError):
    """Raised when the data home cannot be prepared."""


@dataclass(frozen=True)
class WorkspaceLayout:
    """Resolved data home paths and whether each one was just created."""

    home: Path
    directories: Mapping[str, Path]
    created: Mapping[str, bool]

    def path_for(self, key: str) -> Path:
        try:
            return self.directories[key]
        except KeyError as exc:
            raise KeyError(f"Unknown workspace directory '{key}'.") from exc

    def items(self) -> tuple[tuple[str, Path], ...]:
        return tuple(self.directories.items())


def ensure_workspace(
    *,
    env: Mapping[str, str] | None = None,
    path: Path | None = None,
    create: bool = True,
) -> WorkspaceLayout:
    """Return the data home layout, creating missing directories if asked.

    ``path`` wins over ``QUIZ_TRAINER_HOME`` which wins over
    ``~/.quiz-trainer``.
    """

    env_map = os.environ if env is None else env
    home = _resolve_home(env_map, override=path)
    if home.exists() and not home.is_dir():
        raise WorkspaceError(
            f"Configured workspace exists and is not a directory: {home}"
        )

    created: MutableMapping[str, bool] = {
        "home": _ensure_dir(home) if create else False
    }
    directories: MutableMapping[str, Path] = {}
    for key, relative in _SUBDIRS.items():
        target = home / relative
        if create:
            created[key] = _ensure_dir(target)
        else:
            created[key] = False
        directories[key] = target

    return WorkspaceLayout(
        home=home,
        directories=MappingProxyType(dict(directories)),
        created=MappingProxyType(dict(created)),
    )


def _resolve_home(env: Mapping[str, str], *, override: Path | None) -> Path:
    if override is not None:
        target = override
    else:
        custom = (env.get(WORKSPACE_ENV) or "").strip()
        target = Path(custom) if custom else DEFAULT_WORKSPACE
    target = target.expanduser()
    try:
        return target.resolve()
    except FileNotFoundError:
        return target.absolute()


def _ensure_dir(path: Path) -> bool:
    existed = path.exists()
    if existed and not path.is_dir():
        raise WorkspaceError(
            f"Expected directory but found a non-directory entry: {path}"
        )
    try:
        path.mkdir(parents=True, exist_ok=True)
    except PermissionError as exc:
        raise WorkspaceError(f"Unable to create directory {path}") from exc
    try:
        path.chmod(0o700)
    except (PermissionError, NotImplementedError):
        pass
    return not existed
