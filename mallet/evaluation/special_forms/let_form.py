from mallet import EvaluatorFn
from mallet import SExpression, LispValue
from mallet.errors import SpecialFormError
from mallet.types.collections import Sequence
from mallet.types.environment import Environment
from mallet.types.symbol import Symbol


def let_form(
    tail: list[SExpression],
    env: Environment,
    evaluate_fn: EvaluatorFn,
) -> LispValue:
    """
    (let* (name expr ...) body)
    Each expr is evaluated in the new scope, so later bindings see earlier ones.
    """
    if len(tail) != 2:
        raise SpecialFormError(f"let* expected 2 arguments, got {len(tail)}")

    bindings, body = tail
    if not isinstance(bindings, Sequence):
        raise SpecialFormError("let* first argument must be a list or a vector")
    if len(bindings) % 2 != 0:
        raise SpecialFormError("let* bindings list must have an even number of elements")

    inner_env = Environment.with_outer(env)
    for i in range(0, len(bindings), 2):
        name = bindings[i]
        if not isinstance(name, Symbol):
            raise SpecialFormError("let* odd numbered elements of binding list must be valid symbol names")
        inner_env.set(name, evaluate_fn(bindings[i + 1], inner_env))

    return evaluate_fn(body, inner_env)
