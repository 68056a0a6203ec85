from mallet import EvaluatorFn
from mallet import SExpression, LispValue
from mallet.types.environment import Environment
from mallet.types.nil import Nil


def do_form(
    tail: list[SExpression],
    env: Environment,
    evaluate_fn: EvaluatorFn,
) -> LispValue:
    result: LispValue = Nil
    for e in tail:
        result = evaluate_fn(e, env)
    return result
