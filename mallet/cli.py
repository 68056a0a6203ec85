"""Typer CLI entrypoints."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated, Optional

import typer
from loguru import logger

from mallet.errors import EmptyProgram, MalletError
from mallet.interpreter import Interpreter
from mallet.line_editor import LineEditor
from mallet.logging_utils import configure_logging
from mallet.printer import pr_str
from mallet.repl import run_repl

app = typer.Typer(name="mallet", help="A small Lisp interpreter", add_completion=False)


@app.callback(invoke_without_command=True)
def _default(
    ctx: typer.Context,
    log_level: Annotated[Optional[str], typer.Option("--log-level", envvar="MALLET_LOG_LEVEL")] = None,
) -> None:
    configure_logging(log_level)
    if ctx.invoked_subcommand is None:
        repl()


@app.command()
def repl(
    history_file: Annotated[Optional[Path], typer.Option("--history-file", envvar="MALLET_HISTORY_FILE")] = None,
) -> None:
    """Start the interactive read-eval-print loop."""
    interp = Interpreter()
    editor = LineEditor(history_file)
    run_repl(interp, editor.read_line)


@app.command()
def run(
    path: Annotated[Path, typer.Argument(exists=True, dir_okay=False, readable=True)],
    args: Annotated[Optional[list[str]], typer.Argument()] = None,
) -> None:
    """Evaluate every form in PATH with *ARGV* bound to ARGS."""
    interp = Interpreter()
    interp.set_argv(args or [])
    try:
        interp.load_file(path)
    except (MalletError, RecursionError) as e:
        logger.debug("run {} failed: {}", path, e)
        typer.echo(f"Error! {e}", err=True)
        raise typer.Exit(code=1)


@app.command("eval")
def eval_command(expr: Annotated[str, typer.Argument()]) -> None:
    """Evaluate EXPR and print the readable result of the last form."""
    interp = Interpreter()
    try:
        result = interp.eval(expr)
    except EmptyProgram:
        return
    except (MalletError, RecursionError) as e:
        typer.echo(f"Error! {e}", err=True)
        raise typer.Exit(code=1)
    typer.echo(pr_str(result, True))


def main() -> None:
    app()
