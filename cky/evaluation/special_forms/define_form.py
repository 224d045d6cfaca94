from cky.builtin.arguments import get_args
from cky.types.value import Value
from cky.types.cons import List
from cky.types.scope import Scope
from cky.evaluation.evaluator import evaluate


def define_form(scope: Scope, tail: List) -> Value:
    """
    (define name value)
    Binds in the scope that is executing the define: at top level that is the
    global scope, inside a closure body it is the call's local scope.
    Returns the value.
    """
    name, val_expr = get_args("define", tail, "i?")
    value = evaluate(val_expr, scope)
    scope.bind(name.name, value.incref())  # one reference belongs to the scope
    return value
