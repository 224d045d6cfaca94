from cky.types.value import Value, Integer, Atom, Identifier, live_values
from cky.types.cons import List
from cky.types.funccall import FuncCall
from cky.types.builtin import Builtin
from cky.types.closure import Closure
from cky.types.scope import Scope

__all__ = [
    "Value",
    "Integer",
    "Atom",
    "Identifier",
    "List",
    "FuncCall",
    "Builtin",
    "Closure",
    "Scope",
    "live_values",
]
