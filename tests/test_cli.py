from __future__ import annotations

import json
import logging

import pytest

from fixtures import ScriptedPrompt
from quiz_trainer import cli
from quiz_trainer.quizzes import storage as storage_mod


@pytest.fixture(autouse=True)
def _reset_logger():
    yield
    logger = logging.getLogger("quiz_trainer")
    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)


@pytest.fixture
def quizzes_file(workspace):
    return workspace.write(
        "quizzes.json",
        json.dumps(
            [
                {"question": "2+2?", "answer": "4"},
                {"question": "capital of France?", "answer": "Paris"},
            ]
        ),
    )


def _script(monkeypatch, answers):
    scripted = ScriptedPrompt(answers)
    monkeypatch.setattr(cli, "ConsolePrompt", lambda *a, **k: scripted)
    return scripted


def _stored(path):
    return json.loads(path.read_text(encoding="utf-8"))


def test_single_command_lists_seeded_quizzes(tmp_path, capsys):
    code = cli.main(["--workspace", str(tmp_path / "ws"), "list"])

    out = capsys.readouterr().out
    assert code == 0
    assert "Capital of Italy" in out
    assert (tmp_path / "ws" / "data" / "quizzes.json").is_file()
    assert (tmp_path / "ws" / "logs" / "quiz_trainer.log").is_file()


def test_single_command_with_arguments(quizzes_file, capsys):
    code = cli.main(["--quizzes", str(quizzes_file), "show", "1"])

    assert code == 0
    assert "capital of France? => Paris" in capsys.readouterr().out


def test_single_command_bad_id_is_not_fatal(quizzes_file, capsys):
    code = cli.main(["--quizzes", str(quizzes_file), "delete", "7"])

    assert code == 0
    assert "No quiz found at index 7." in capsys.readouterr().out
    assert len(_stored(quizzes_file)) == 2


def test_single_command_mutation_is_saved(quizzes_file):
    code = cli.main(["--quizzes", str(quizzes_file), "delete", "0"])

    assert code == 0
    assert _stored(quizzes_file) == [
        {"question": "capital of France?", "answer": "Paris"}
    ]


def test_interactive_session(quizzes_file, monkeypatch, capsys):
    scripted = _script(
        monkeypatch, ["add", "3*3?", "9", "test 2", " 9 ", "quit"]
    )

    code = cli.main(["--quizzes", str(quizzes_file)])

    out = capsys.readouterr().out
    assert code == 0
    assert scripted.remaining == []
    assert "Your answer is correct." in out
    assert _stored(quizzes_file)[-1] == {"question": "3*3?", "answer": "9"}


def test_interrupt_flushes_unsaved_changes(quizzes_file, monkeypatch):
    real_write = storage_mod._atomic_write_json
    calls = []

    def _flaky_write(path, payload):
        calls.append(path)
        if len(calls) == 1:
            raise OSError("disk full")
        real_write(path, payload)

    monkeypatch.setattr(storage_mod, "_atomic_write_json", _flaky_write)
    _script(monkeypatch, ["add", "3*3?", "9", KeyboardInterrupt()])

    code = cli.main(["--quizzes", str(quizzes_file)])

    assert code == 130
    assert len(calls) == 2
    assert _stored(quizzes_file)[-1] == {"question": "3*3?", "answer": "9"}


def test_input_closed_mid_command(quizzes_file, monkeypatch, capsys):
    _script(monkeypatch, ["only a question"])

    code = cli.main(["--quizzes", str(quizzes_file), "add"])

    assert code == 1
    assert "Input closed" in capsys.readouterr().out
    assert len(_stored(quizzes_file)) == 2


def test_corrupt_quiz_file_exits_with_error(workspace, capsys):
    broken = workspace.write("broken.json", "{oops")

    code = cli.main(["--quizzes", str(broken), "list"])

    assert code == 1
    assert "Failed to parse quiz file" in capsys.readouterr().out


def test_bad_config_is_a_usage_error(workspace, capsys):
    cfg = workspace.write("bad.toml", "[nope]\n")

    with pytest.raises(SystemExit) as info:
        cli.main(["--config", str(cfg), "list"])

    assert info.value.code == 2
    assert "Unknown configuration key 'nope'" in capsys.readouterr().err


def test_version_flag(capsys):
    with pytest.raises(SystemExit) as info:
        cli.main(["--version"])

    assert info.value.code == 0
    assert capsys.readouterr().out.startswith("quiz-trainer ")


def test_config_init_and_path(tmp_path, capsys):
    ws = str(tmp_path / "ws")

    assert cli.main(["config", "--workspace", ws, "path"]) == 0
    path = capsys.readouterr().out.strip()
    assert path.endswith("quiz_trainer.toml")

    assert cli.main(["config", "--workspace", ws, "init"]) == 0
    written = tmp_path / "ws" / "config" / "quiz_trainer.toml"
    assert "[storage]" in written.read_text(encoding="utf-8")
    assert cli.main(["config", "--workspace", ws, "init"]) == 1
    assert "already exists" in capsys.readouterr().err
    assert cli.main(["config", "--workspace", ws, "init", "--force"]) == 0
