from cky.errors import CkyTypeError
from cky.builtin.arguments import get_args
from cky.types.value import Value, Identifier
from cky.types.cons import List
from cky.types.funccall import FuncCall
from cky.types.closure import Closure
from cky.types.scope import Scope


def parameter_list(params: Value) -> List:
    """Rebuild a parameter List from what the reader produced.

    Outside list literals "(a b)" reads as a call of `a` with argument `b`, and
    "(n)" as a call of `n` with no arguments, so any call form is taken apart
    into function slot + arguments. "()" reads as the empty List.
    """
    if isinstance(params, FuncCall):
        names = [params.function, *params.arguments]
    elif isinstance(params, List) and params.is_empty:
        names = []
    else:
        raise CkyTypeError(
            f"lambda: argument 0: expected a parameter list, got type {params.type_name}"
        )

    for i, name in enumerate(names):
        if not isinstance(name, Identifier):
            raise CkyTypeError(
                f"lambda: parameter {i}: expected type {Identifier.type_name}, got type {name.type_name}"
            )
    return List.from_values(name.incref() for name in names)


def lambda_form(scope: Scope, tail: List) -> Value:
    """(lambda (params...) body) => a Closure; the body is not evaluated."""
    params, body = get_args("lambda", tail, "??")
    return Closure(parameter_list(params), body.incref())
