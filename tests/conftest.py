import pytest

from mallet.builtin.env_builtin import register
from mallet.evaluation.evaluator import evaluate
from mallet.interpreter import Interpreter
from mallet.printer import pr_str
from mallet.reader.parser import read_all
from mallet.types.environment import Environment


class FakeLineEditor:
    """Feeds scripted lines; returns None once they run out."""

    def __init__(self, lines=()):
        self.lines = list(lines)
        self.prompts = []

    def read_line(self, prompt):
        self.prompts.append(prompt)
        if not self.lines:
            return None
        return self.lines.pop(0)


@pytest.fixture
def line_editor():
    return FakeLineEditor()


@pytest.fixture
def env(line_editor):
    """Fresh root environment with builtins loaded."""
    e = Environment.new()
    register(e, evaluate, line_editor.read_line)
    return e


@pytest.fixture
def run(env):
    """Evaluate every form in a source string against `env`; return the last."""
    def _run(source):
        result = None
        for form in read_all(source):
            result = evaluate(form, env)
        return result
    return _run


@pytest.fixture
def interp(line_editor, monkeypatch):
    monkeypatch.delenv("MALLET_PRELUDE_PATH", raising=False)
    return Interpreter(read_line=line_editor.read_line)


@pytest.fixture
def show(interp):
    """Evaluate with the full interpreter and render the result readably."""
    def _show(source):
        return pr_str(interp.eval(source), True)
    return _show
