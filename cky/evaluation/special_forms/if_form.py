from cky.builtin.arguments import get_args
from cky.types.value import Value, Integer
from cky.types.cons import List
from cky.types.scope import Scope
from cky.evaluation.evaluator import evaluate


def is_truthy(value: Value) -> bool:
    # Only Integers take part in conditionals; every other value is falsy.
    return isinstance(value, Integer) and value.value != 0


def if_form(scope: Scope, tail: List) -> Value:
    """
    (if condition then else)
    Only the selected branch is evaluated.
    """
    condition, if_true, if_false = get_args("if", tail, "???")

    cond = evaluate(condition, scope)
    try:
        chosen = if_true if is_truthy(cond) else if_false
    finally:
        cond.decref()
    return evaluate(chosen, scope)
