"""Configuration loading for quiz-trainer.

Precedence is CLI overrides, then ``QUIZ_TRAINER_*`` environment variables,
then ``quiz_trainer.toml``, then built-in defaults.
"""

from __future__ import annotations

import os
import tomllib
from dataclasses import dataclass
from importlib import resources
from pathlib import Path
from typing import Any, Mapping, MutableMapping, Optional

from .core import workspace as workspace_mod

CONFIG_FILENAME = "quiz_trainer.toml"
CONFIG_ENV = "QUIZ_TRAINER_CONFIG"
ENV_PREFIX = "QUIZ_TRAINER_"

_DEFAULT_QUIZZES_PATH = "data/quizzes.json"
_DEFAULT_LOG_LEVEL = "INFO"


class TrainerConfigError(RuntimeError):
    """Raised when configuration parsing or validation fails."""


@dataclass(frozen=True)
class TrainerConfig:
    """Fully resolved settings for a trainer run."""

    quizzes_path: Path
    seed_defaults: bool
    log_level: str
    prefill_edit: bool


@dataclass(frozen=True)
class ConfigOverrides:
    """Values given on the command line."""

    quizzes_path: Optional[Path] = None
    log_level: Optional[str] = None


@dataclass(frozen=True)
class LoadResult:
    config: TrainerConfig
    layout: workspace_mod.WorkspaceLayout
    config_path: Optional[Path]


def load_config(
    *,
    config_path: Optional[Path] = None,
    overrides: Optional[ConfigOverrides] = None,
    env: Optional[Mapping[str, str]] = None,
    workspace_path: Optional[Path] = None,
) -> LoadResult:
    overrides = overrides or ConfigOverrides()
    env_map = os.environ if env is None else env

    try:
        layout = workspace_mod.ensure_workspace(
            env=env_map, path=workspace_path
        )
    except workspace_mod.WorkspaceError as exc:
        raise TrainerConfigError(str(exc)) from exc

    requested = resolve_config_path(
        config_path=config_path, env=env_map, layout=layout
    )
    table = _default_table()
    loaded_path: Optional[Path] = None
    if requested.exists():
        merge_defaults(table, load_toml(requested))
        loaded_path = requested
    elif config_path is not None or _env_value(env_map, "CONFIG"):
        raise TrainerConfigError(f"Config file not found: {requested}")

    storage = table["storage"]
    quizzes_path = _resolve_quizzes_path(
        _pick_first(
            overrides.quizzes_path,
            _env_path(env_map, "QUIZZES"),
            storage["path"],
        ),
        layout=layout,
    )
    log_level = _normalize_level(
        _pick_first(
            overrides.log_level,
            _env_value(env_map, "LOG_LEVEL"),
            table["logging"]["level"],
        )
    )
    config = TrainerConfig(
        quizzes_path=quizzes_path,
        seed_defaults=_require_bool(
            storage["seed_defaults"], "storage.seed_defaults"
        ),
        log_level=log_level,
        prefill_edit=_require_bool(
            table["prompt"]["prefill_edit"], "prompt.prefill_edit"
        ),
    )
    return LoadResult(config=config, layout=layout, config_path=loaded_path)


def resolve_config_path(
    *,
    config_path: Optional[Path],
    env: Mapping[str, str],
    layout: workspace_mod.WorkspaceLayout,
) -> Path:
    if config_path is not None:
        return config_path.expanduser()
    candidate = _env_value(env, "CONFIG")
    if candidate:
        return Path(candidate).expanduser()
    return layout.path_for("config") / CONFIG_FILENAME


def load_toml(path: Path) -> Mapping[str, Any]:
    try:
        with path.open("rb") as handle:
            return tomllib.load(handle)
    except FileNotFoundError as exc:
        raise TrainerConfigError(f"Config file not found: {path}") from exc
    except (tomllib.TOMLDecodeError, UnicodeDecodeError) as exc:
        raise TrainerConfigError(
            f"Failed to parse config TOML: {exc}"
        ) from exc


def merge_defaults(
    base: MutableMapping[str, Any],
    override: Mapping[str, Any],
    *,
    path: str = "",
) -> None:
    """Merge ``override`` into ``base`` in place, rejecting unknown keys."""

    for key, value in override.items():
        dotted = f"{path}{key}"
        if key not in base:
            raise TrainerConfigError(f"Unknown configuration key '{dotted}'.")
        if isinstance(base[key], MutableMapping):
            if not isinstance(value, Mapping):
                raise TrainerConfigError(
                    f"Expected table for '{dotted}', "
                    f"found {type(value).__name__}."
                )
            merge_defaults(base[key], value, path=f"{dotted}.")
            continue
        base[key] = value


def template_text() -> str:
    """Return the packaged ``quiz_trainer.toml`` template."""

    resource = resources.files("quiz_trainer").joinpath("template.toml")
    return resource.read_text(encoding="utf-8")


def write_template(path: Path, *, overwrite: bool = False) -> Path:
    if path.exists() and not overwrite:
        raise TrainerConfigError(f"Config already exists: {path}")
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(template_text(), encoding="utf-8")
    try:
        path.chmod(0o600)
    except PermissionError:  # pragma: no cover - depends on filesystem
        pass
    return path


def _default_table() -> MutableMapping[str, MutableMapping[str, Any]]:
    return {
        "storage": {
            "path": _DEFAULT_QUIZZES_PATH,
            "seed_defaults": True,
        },
        "logging": {"level": _DEFAULT_LOG_LEVEL},
        "prompt": {"prefill_edit": True},
    }


def _resolve_quizzes_path(
    candidate: object, *, layout: workspace_mod.WorkspaceLayout
) -> Path:
    if isinstance(candidate, str):
        candidate = candidate.strip()
        if not candidate:
            raise TrainerConfigError(
                "storage.path must be a non-empty string."
            )
        candidate = Path(candidate)
    if not isinstance(candidate, Path):
        raise TrainerConfigError("storage.path must be a string.")
    candidate = candidate.expanduser()
    if not candidate.is_absolute():
        candidate = layout.home / candidate
    return candidate.resolve()


def _normalize_level(value: object) -> str:
    if not isinstance(value, str) or not value.strip():
        raise TrainerConfigError("logging.level must be a non-empty string.")
    return value.strip().upper()


def _require_bool(value: object, name: str) -> bool:
    if not isinstance(value, bool):
        raise TrainerConfigError(f"{name} must be true or false.")
    return value


def _env_value(env: Mapping[str, str], key: str) -> Optional[str]:
    raw = env.get(f"{ENV_PREFIX}{key}")
    if raw is None:
        return None
    return raw.strip() or None


def _env_path(env: Mapping[str, str], key: str) -> Optional[Path]:
    raw = _env_value(env, key)
    return Path(raw) if raw is not None else None


def _pick_first(*candidates: object) -> object:
    for candidate in candidates:
        if candidate is not None:
            return candidate
    return None
