from mallet import EvaluatorFn
from mallet import SExpression, LispValue
from mallet.errors import SpecialFormError
from mallet.types.collections import Sequence
from mallet.types.environment import Environment, VARIADIC_MARKER
from mallet.types.functions import Closure
from mallet.types.symbol import Symbol


def fn_form(
    tail: list[SExpression],
    env: Environment,
    evaluate_fn: EvaluatorFn,
) -> LispValue:
    """
    (fn* (params) body)
    The body is kept unevaluated; the closure captures `env` by reference.
    """
    if len(tail) != 2:
        raise SpecialFormError(f"fn* expected 2 arguments, got {len(tail)}")

    params, body = tail
    if not isinstance(params, Sequence):
        raise SpecialFormError("fn* first argument must be a list or a vector")
    if not all(isinstance(p, Symbol) for p in params):
        raise SpecialFormError("fn* first argument must be a sequence of valid symbol names")

    if VARIADIC_MARKER in params:
        split = list(params).index(VARIADIC_MARKER)
        if len(params) - split != 2:
            raise SpecialFormError("fn* '&' must be followed by exactly one parameter name")

    return Closure(list(params), body, env)
