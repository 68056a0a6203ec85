from __future__ import annotations
import sys
from pathlib import Path
from typing import Callable, Literal, Optional, Sequence

from loguru import logger

from mallet import SExpression, LispValue
from mallet.config import get_prelude_path, get_recursion_limit
from mallet.errors import EmptyProgram
from mallet.evaluation.evaluator import evaluate
from mallet.printer import pr_str
from mallet.reader.parser import read_all, read_str
from mallet.types.collections import List
from mallet.types.environment import Environment
from mallet.types.nil import Nil
from mallet.types.symbol import Symbol
from mallet.builtin.env_builtin import register


# Definitions written in the language itself, evaluated into every root env.
PRELUDE = """
(def! not (fn* (a) (if a false true)))
(def! load-file (fn* (f) (eval (read-string (str "(do " (slurp f) "\\nnil)")))))
"""


class Interpreter:
    """
    Orchestrates reading and evaluating Mallet code.
    Maintains a root Environment across calls.
    """

    def __init__(
        self,
        prelude: str | None | Literal['auto'] = 'auto',
        *,
        read_line: Optional[Callable[[str], Optional[str]]] = None,
        eval_fn: Callable[[SExpression, Environment], LispValue] = evaluate,
    ):
        # Each user-level call uses several Python frames
        limit = get_recursion_limit()
        if sys.getrecursionlimit() < limit:
            sys.setrecursionlimit(limit)

        self.eval_fn = eval_fn
        self.env: Environment = Environment.new()
        register(self.env, self.eval_fn, read_line)
        self.env.set(Symbol("*ARGV*"), List())

        if prelude is None:
            pass  # explicit: no prelude
        elif prelude == 'auto':
            self.eval_prelude(PRELUDE)
            extra = get_prelude_path()
            if extra is not None:
                logger.info("loading prelude {}", extra)
                self.load_file(extra)
        elif prelude:
            self.eval_prelude(prelude)

    def eval_prelude(self, code: str) -> None:
        for expr in read_all(code):
            self.eval_fn(expr, self.env)

    def read(self, code: str) -> SExpression:
        return read_str(code)

    def eval(self, code: str) -> LispValue:
        """Evaluate every form in `code` and return the last result.

        Raises EmptyProgram if `code` contains no forms.
        """
        result: LispValue = None
        found = False
        for expr in read_all(code):
            result = self.eval_fn(expr, self.env)
            found = True
        if not found:
            raise EmptyProgram()
        return result

    def rep(self, code: str) -> str:
        """Read one form, evaluate it, and return its readable rendering."""
        return pr_str(self.eval_fn(self.read(code), self.env), True)

    def load_file(self, path: Path | str) -> LispValue:
        logger.debug("loading file {}", path)
        with open(path, encoding="utf-8") as f:
            code = f.read()
        try:
            return self.eval(code)
        except EmptyProgram:
            return Nil

    def set_argv(self, argv: Sequence[str]) -> None:
        self.env.set(Symbol("*ARGV*"), List(argv))
