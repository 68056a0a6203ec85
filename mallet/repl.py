"""Read-eval-print loop.

Terminal errors are printed and the loop continues; an empty line or a
line holding only comments is ignored silently.
"""

from __future__ import annotations

from typing import Callable, Optional

from loguru import logger

from mallet.config import get_prompt
from mallet.errors import EmptyProgram, MalletError
from mallet.interpreter import Interpreter

ReadLineFn = Callable[[str], Optional[str]]


def rep_line(interp: Interpreter, line: str) -> Optional[str]:
    """Evaluate one line and return the text to show, or None for nothing."""
    try:
        return interp.rep(line)
    except EmptyProgram:
        return None
    except RecursionError:
        logger.debug("stack exhausted evaluating {!r}", line)
        return "Error! stack overflow"
    except MalletError as e:
        logger.debug("error evaluating {!r}: {}", line, e)
        return f"Error! {e}"
    except Exception as e:
        logger.exception("unexpected error evaluating {!r}", line)
        return f"Error! {type(e).__name__}: {e}"


def run_repl(
    interp: Interpreter,
    read_line: ReadLineFn,
    write: Callable[[str], None] = print,
    prompt: Optional[str] = None,
) -> None:
    """Loop until `read_line` signals end of input by returning None."""
    prompt = prompt if prompt is not None else get_prompt()
    logger.info("repl started")
    while True:
        line = read_line(prompt)
        if line is None:
            break
        if not line.strip():
            continue
        output = rep_line(interp, line)
        if output is not None:
            write(output)
    logger.info("repl finished")
