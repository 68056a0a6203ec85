"""Core evaluator for the Mallet interpreter.

Dispatches on the shape of the form: special forms by their literal head
symbol, other non-empty lists by application, symbols by environment lookup,
vectors and maps element-wise; everything else evaluates to itself.
"""

from __future__ import annotations

from mallet import SExpression, LispValue
from mallet.types.collections import HashMap, List, Vector
from mallet.types.environment import Environment
from mallet.types.symbol import Symbol
from mallet.evaluation.apply import apply
from mallet.evaluation.special_forms import SPECIAL_FORMS


def evaluate(expr: SExpression, env: Environment) -> LispValue:
    """Evaluate `expr` in `env`. Errors propagate as MalletError subclasses."""
    match expr:
        case List() if not expr:
            return expr

        case List():
            head = expr[0]
            if isinstance(head, Symbol) and head in SPECIAL_FORMS:
                return SPECIAL_FORMS[head](list(expr[1:]), env, evaluate)

            evaluated = [evaluate(e, env) for e in expr]
            return apply(evaluated[0], evaluated[1:], evaluate)

        case Symbol():
            return env.get(expr)

        case Vector():
            return Vector([evaluate(e, env) for e in expr])

        case HashMap():
            return HashMap.from_pairs((k, evaluate(v, env)) for k, v in expr.items())

    # --- Self-evaluating values return as-is ---
    return expr
