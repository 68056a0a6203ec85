from __future__ import annotations

from typing import Any


class MalletError(Exception):
    """ Base class for all Mallet errors"""
    pass


class EmptyProgram(MalletError):
    """ Raised when the source text holds no form to evaluate"""

    def __init__(self, message: str = "Empty program."):
        super().__init__(message)


class ReaderError(MalletError):
    """ Raised when source text cannot be read"""


class TokenizerError(ReaderError):
    """ Raised when source text cannot be split into tokens"""

    def __str__(self) -> str:
        return f"Tokenizer error: {self.args[0]}"


class ParserError(ReaderError):
    """ Raised when tokens do not form a valid expression"""

    def __str__(self) -> str:
        return f"Parser error: {self.args[0]}"


class UndefinedSymbol(MalletError):
    """ Raised when a symbol lookup exhausts the environment chain"""

    def __init__(self, name: str):
        super().__init__(name)
        self.name = name

    def __str__(self) -> str:
        return f"'{self.name}' not found"


class EvaluationError(MalletError):
    """ Raised on structural misuse during evaluation"""

    def __str__(self) -> str:
        return f"Error in evaluation: {self.args[0]}"


class ArityError(EvaluationError):
    """ Raised when a closure is applied to the wrong number of arguments"""


class SpecialFormError(MalletError):
    """ Raised when a special form has the wrong shape or argument count"""

    def __str__(self) -> str:
        return f"Error when evaluating special form: {self.args[0]}"


class NativeFunctionError(MalletError):
    """ Raised by builtins on bad argument counts, types or I/O failures"""

    def __str__(self) -> str:
        return f"Error when calling native function: {self.args[0]}"


class LispException(MalletError):
    """ A value thrown by user code with (throw value)"""

    def __init__(self, value: Any):
        super().__init__(value)
        self.value = value

    def __str__(self) -> str:
        # Imported lazily: the printer depends on the value types.
        from mallet.printer import pr_str
        return f"Exception: {pr_str(self.value, True)}"
