"""Application engine for Mallet.

Function application for the evaluator lives here:
- NativeFunction: called with the evaluated arguments; it carries its own
  environment handle for builtins that re-enter the evaluator.
- Closure: a new scope chained to the closure's captured environment binds
  the parameters, and the body is evaluated there by a plain recursive call.
"""

from mallet import LispValue, EvaluatorFn
from mallet.errors import EvaluationError
from mallet.types.functions import Closure, NativeFunction


def apply_closure(fn: Closure, args: list[LispValue], evaluate_fn: EvaluatorFn) -> LispValue:
    """Apply a user closure. Raises ArityError if the argument count is wrong."""
    new_env = fn.extend_env(args)
    return evaluate_fn(fn.body, new_env)


def apply(head: LispValue, args: list[LispValue], evaluate_fn: EvaluatorFn) -> LispValue:
    """Apply either a Closure or a NativeFunction.

    Anything else in head position is an evaluation error.
    """
    if isinstance(head, NativeFunction):
        return head(args)
    elif isinstance(head, Closure):
        return apply_closure(head, args, evaluate_fn)
    else:
        raise EvaluationError("first element of a list must evaluate to a function")
