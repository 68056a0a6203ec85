from loguru import logger

from mallet import EvaluatorFn
from mallet import SExpression, LispValue
from mallet.errors import SpecialFormError
from mallet.types.environment import Environment
from mallet.types.symbol import Symbol


def def_form(
    tail: list[SExpression],
    env: Environment,
    evaluate_fn: EvaluatorFn,
) -> LispValue:
    """
    (def! name value)
    Binds into the current environment, never a new scope. Returns the value.
    """
    if len(tail) != 2:
        raise SpecialFormError(f"def! expected 2 arguments, got {len(tail)}")

    name, val_expr = tail
    if not isinstance(name, Symbol):
        raise SpecialFormError("def! first argument must be a valid symbol name")

    value = evaluate_fn(val_expr, env)
    env.set(name, value)
    logger.debug("def! {}", name)
    return value
