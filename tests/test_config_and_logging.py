from pathlib import Path

import pytest

from mallet import config
from mallet import line_editor as line_editor_module
from mallet import logging_utils
from mallet.line_editor import LineEditor


# -------------------------------
# config
# -------------------------------
def test_defaults(monkeypatch):
    for var in ("MALLET_HISTORY_FILE", "MALLET_PRELUDE_PATH", "MALLET_LOG_LEVEL",
                "MALLET_PROMPT", "MALLET_RECURSION_LIMIT"):
        monkeypatch.delenv(var, raising=False)
    assert config.get_history_file() == Path.home() / ".mallet_history"
    assert config.get_prelude_path() is None
    assert config.get_log_level() == "WARNING"
    assert config.get_prompt() == "user> "
    assert config.get_recursion_limit() == 10_000


def test_overrides(monkeypatch, tmp_path):
    monkeypatch.setenv("MALLET_HISTORY_FILE", str(tmp_path / "hist"))
    monkeypatch.setenv("MALLET_PRELUDE_PATH", " ~/prelude.mal ")
    monkeypatch.setenv("MALLET_LOG_LEVEL", "debug")
    monkeypatch.setenv("MALLET_PROMPT", "> ")
    monkeypatch.setenv("MALLET_RECURSION_LIMIT", "5000")
    assert config.get_history_file() == tmp_path / "hist"
    assert config.get_prelude_path() == Path.home() / "prelude.mal"
    assert config.get_log_level() == "DEBUG"
    assert config.get_prompt() == "> "
    assert config.get_recursion_limit() == 5000


@pytest.mark.parametrize("raw", ["", "   ", "lots", "-3"])
def test_bad_recursion_limit_falls_back(monkeypatch, raw):
    monkeypatch.setenv("MALLET_RECURSION_LIMIT", raw)
    assert config.get_recursion_limit() == 10_000


def test_blank_path_falls_back(monkeypatch):
    monkeypatch.setenv("MALLET_PRELUDE_PATH", "  ")
    assert config.get_prelude_path() is None


# -------------------------------
# logging
# -------------------------------
@pytest.fixture
def fresh_logging(monkeypatch):
    monkeypatch.setattr(logging_utils, "_CONFIGURED_LEVEL", None)


def test_configure_logging_level(fresh_logging):
    assert logging_utils.configure_logging("info") == "INFO"
    assert logging_utils.configure_logging("INFO") == "INFO"


def test_configure_logging_reads_environment(fresh_logging, monkeypatch):
    monkeypatch.setenv("MALLET_LOG_LEVEL", "error")
    assert logging_utils.configure_logging() == "ERROR"


# -------------------------------
# line editor
# -------------------------------
class FakeSession:
    """Stands in for a prompt_toolkit PromptSession."""

    responses = []

    def __init__(self, history=None):
        self.history = history
        self.responses = list(type(self).responses)

    def prompt(self, message):
        item = self.responses.pop(0)
        if isinstance(item, BaseException):
            raise item
        return item


@pytest.fixture
def fake_session(monkeypatch):
    monkeypatch.setattr(line_editor_module, "PromptSession", FakeSession)
    return FakeSession


def test_line_editor_reads_lines(fake_session, monkeypatch, tmp_path):
    monkeypatch.setattr(fake_session, "responses", ["(+ 1 2)", KeyboardInterrupt(), EOFError()])
    editor = LineEditor(tmp_path / "nested" / "history")
    assert editor.read_line("user> ") == "(+ 1 2)"
    assert editor.read_line("user> ") == ""
    assert editor.read_line("user> ") is None


def test_line_editor_persists_history(fake_session, tmp_path):
    history_file = tmp_path / "nested" / "history"
    editor = LineEditor(history_file)
    assert history_file.parent.is_dir()
    assert isinstance(editor._session.history, line_editor_module.FileHistory)


def test_line_editor_in_memory(fake_session, tmp_path):
    editor = LineEditor(tmp_path / "unused", persist=False)
    assert isinstance(editor._session.history, line_editor_module.InMemoryHistory)
    assert not (tmp_path / "unused").exists()
