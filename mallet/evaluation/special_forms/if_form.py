from mallet import EvaluatorFn
from mallet import SExpression, LispValue
from mallet.errors import SpecialFormError
from mallet.types.environment import Environment
from mallet.types.nil import Nil
from mallet.types.predicates import is_truthy


def if_form(
    tail: list[SExpression],
    env: Environment,
    evaluate_fn: EvaluatorFn,
) -> LispValue:
    if len(tail) < 2 or len(tail) > 3:
        raise SpecialFormError(f"if expected 2 or 3 arguments, got {len(tail)}")

    cond = evaluate_fn(tail[0], env)

    if is_truthy(cond):
        return evaluate_fn(tail[1], env)
    elif len(tail) == 3:
        return evaluate_fn(tail[2], env)
    else:
        return Nil
