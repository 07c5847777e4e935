from __future__ import annotations

import json
import logging
from pathlib import Path

import pytest

from quiz_trainer.core import logging as core_logging


@pytest.fixture
def logger_name(request):
    name = f"quiz_trainer.test.{request.node.name}"
    yield name
    logger = logging.getLogger(name)
    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)


def _flush(logger: logging.Logger) -> None:
    for handler in logger.handlers:
        handler.flush()


def test_configure_logger_writes_json(tmp_path, logger_name):
    logger, log_path = core_logging.configure_logger(
        logger_name, log_dir=tmp_path / "logs"
    )

    logger.info("added quiz", extra={"index": 3, "path": Path("/tmp/q")})
    try:
        raise ValueError("boom")
    except ValueError:
        logger.exception("save failed", extra={"items": ({"k": "v"}, 1)})
    _flush(logger)

    lines = log_path.read_text(encoding="utf-8").strip().splitlines()
    first = json.loads(lines[0])
    assert first["message"] == "added quiz"
    assert first["level"] == "INFO"
    assert first["extra"] == {"index": 3, "path": "/tmp/q"}
    last = json.loads(lines[-1])
    assert "ValueError: boom" in last["exception"]
    assert last["extra"]["items"] == [{"k": "v"}, 1]


def test_level_filters_file_output(tmp_path, logger_name):
    logger, log_path = core_logging.configure_logger(
        logger_name, log_dir=tmp_path / "logs", level="warning"
    )

    logger.info("hidden")
    logger.warning("shown")
    _flush(logger)

    messages = [
        json.loads(line)["message"]
        for line in log_path.read_text(encoding="utf-8").splitlines()
    ]
    assert messages == ["shown"]


def test_unknown_level_falls_back_to_info(tmp_path, logger_name):
    logger, _ = core_logging.configure_logger(
        logger_name, log_dir=tmp_path, level="chatty"
    )

    file_handlers = [
        h for h in logger.handlers if getattr(h, "_quiz_trainer_file", False)
    ]
    assert file_handlers[0].level == logging.INFO


def test_reconfigure_reuses_or_moves_file_handler(tmp_path, logger_name):
    first_logger, first_path = core_logging.configure_logger(
        logger_name, log_dir=tmp_path / "a"
    )
    again, same_path = core_logging.configure_logger(
        logger_name, log_dir=tmp_path / "a"
    )
    moved, moved_path = core_logging.configure_logger(
        logger_name, log_dir=tmp_path / "b"
    )

    assert first_logger is again is moved
    assert same_path == first_path
    assert moved_path.parent == tmp_path / "b"
    assert len(moved.handlers) == 1


def test_verbose_toggles_console_handler(tmp_path, logger_name):
    logger, _ = core_logging.configure_logger(
        logger_name, log_dir=tmp_path, verbose=True
    )

    def console_handlers():
        return [
            h
            for h in logger.handlers
            if getattr(h, "_quiz_trainer_console", False)
        ]

    assert len(console_handlers()) == 1
    core_logging.configure_logger(logger_name, log_dir=tmp_path, verbose=True)
    assert len(console_handlers()) == 1
    core_logging.configure_logger(logger_name, log_dir=tmp_path)
    assert console_handlers() == []
