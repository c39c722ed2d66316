"""Surface syntax for Expressions.

`stringify` is the only externally visible rendering of each step, so its
output format is exact:

    #t / #f                 Booleans
    name                    Symbols
    name or <lambda>        Functions
    <tag v1 v2 ...>         Structs
    (a b c)                 Sequences
    5, 2.5, "text"          Numbers and Text
"""

import json
import math

from stepwise import Expression
from stepwise.types.function import Function
from stepwise.types.quoted import Quoted
from stepwise.types.struct import Struct
from stepwise.types.symbol import Symbol
from stepwise.types.undefined import UndefinedType


def format_number(value: float) -> str:
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    if value.is_integer() and abs(value) < 1e21:
        return str(int(value))
    return repr(value)


def stringify(expr: Expression) -> str:
    """Render any Expression; total over the closed set of variants."""
    if expr is True:
        return "#t"
    if expr is False:
        return "#f"
    if isinstance(expr, (int, float)):
        return format_number(float(expr))
    if isinstance(expr, str):
        return json.dumps(expr, ensure_ascii=False)
    if isinstance(expr, Symbol):
        return expr.name
    if isinstance(expr, Function):
        return expr.name
    if isinstance(expr, Struct):
        return "<" + " ".join([expr.tag, *(stringify(v) for v in expr.fields.values())]) + ">"
    if isinstance(expr, list):
        return "(" + " ".join(stringify(x) for x in expr) + ")"
    if isinstance(expr, Quoted):
        return "'" + stringify(expr.expr)
    if isinstance(expr, UndefinedType):
        return ""
    return str(expr)


def stringify_program(program: list[Expression]) -> str:
    """One line per top-level form."""
    return "\n".join(stringify(x) for x in program)
