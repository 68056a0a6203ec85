from mallet import EvaluatorFn
from mallet import SExpression, LispValue
from mallet.errors import SpecialFormError
from mallet.types.environment import Environment


def quote_form(
    tail: list[SExpression],
    env: Environment,
    evaluate_fn: EvaluatorFn,
) -> LispValue:
    if len(tail) != 1:
        raise SpecialFormError(f"quote expected 1 argument, got {len(tail)}")
    return tail[0]
