# Core type aliases for Mallet's data model.
# Forms produced by the reader and values produced by the evaluator share one
# representation (see mallet.types). The aliases below name the role a value
# plays at a call site.
#
# Naming guidance:
# - SExpression: reader/special-form code, for unevaluated forms.
# - LispValue:  evaluator/builtin code, for evaluated values.

from typing import Any, Callable

# Runtime value alias
LispValue = Any
SExpression = LispValue

# Evaluator capability handed to special forms and re-entrant builtins
EvaluatorFn = Callable[..., LispValue]

__version__ = "0.1.0"
