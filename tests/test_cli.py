import importlib

import pytest
from typer.testing import CliRunner

cli_app_module = importlib.import_module("mallet.cli")


class ScriptedEditor:
    lines = []

    def __init__(self, history_file=None) -> None:
        self.history_file = history_file
        self._lines = list(self.lines)

    def read_line(self, prompt):
        if not self._lines:
            return None
        return self._lines.pop(0)


@pytest.fixture
def runner(monkeypatch):
    monkeypatch.delenv("MALLET_PRELUDE_PATH", raising=False)
    monkeypatch.delenv("MALLET_LOG_LEVEL", raising=False)
    return CliRunner()


def test_eval_prints_the_result(runner):
    result = runner.invoke(cli_app_module.app, ["eval", "(def! a 20) (+ a 22)"])
    assert result.exit_code == 0
    assert result.output == "42\n"


def test_eval_of_nothing_prints_nothing(runner):
    result = runner.invoke(cli_app_module.app, ["eval", "; nothing"])
    assert result.exit_code == 0
    assert result.output == ""


def test_eval_error_exits_nonzero(runner):
    result = runner.invoke(cli_app_module.app, ["eval", "(missing)"])
    assert result.exit_code == 1
    assert "Error! 'missing' not found" in result.output


def test_run_binds_argv(runner, tmp_path):
    script = tmp_path / "script.mal"
    script.write_text('(prn *ARGV*)\n(println "done")\n', encoding="utf-8")
    result = runner.invoke(cli_app_module.app, ["run", str(script), "one", "two"])
    assert result.exit_code == 0
    assert result.output == '("one" "two")\ndone\n'


def test_run_reports_errors(runner, tmp_path):
    script = tmp_path / "bad.mal"
    script.write_text("(println 1)\n(throw :oops)\n(println 2)\n", encoding="utf-8")
    result = runner.invoke(cli_app_module.app, ["run", str(script)])
    assert result.exit_code == 1
    assert "1\n" in result.output
    assert "Error! Exception: :oops" in result.output
    assert "2\n" not in result.output


def test_run_requires_an_existing_file(runner, tmp_path):
    result = runner.invoke(cli_app_module.app, ["run", str(tmp_path / "absent.mal")])
    assert result.exit_code != 0


def test_repl_command(runner, monkeypatch):
    monkeypatch.setattr(ScriptedEditor, "lines", ["(def! x 2)", "(* x 21)", "nope"])
    monkeypatch.setattr(cli_app_module, "LineEditor", ScriptedEditor)
    result = runner.invoke(cli_app_module.app, ["repl"])
    assert result.exit_code == 0
    assert result.output == "2\n42\nError! 'nope' not found\n"


def test_no_command_starts_the_repl(runner, monkeypatch):
    monkeypatch.setattr(ScriptedEditor, "lines", ["(+ 1 1)"])
    monkeypatch.setattr(cli_app_module, "LineEditor", ScriptedEditor)
    result = runner.invoke(cli_app_module.app, [])
    assert result.exit_code == 0
    assert result.output == "2\n"
