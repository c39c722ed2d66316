"""Built-in procedures for the stepwise runtime.

This module defines the binary arithmetic and comparison operators, `not`,
and a 1:1 binding of Python's math library. Every operator coerces its
operands leniently: anything that does not read as a number becomes NaN,
which then propagates through further arithmetic instead of raising.
"""
from __future__ import annotations

import inspect
import math
import operator
import re
from typing import Callable

from stepwise import Expression
from stepwise.types.environment import Environment
from stepwise.types.function import NativeFunction


# -------------------------------
# Truthiness and coercion
# -------------------------------
def is_false(expr: Expression) -> bool:
    """Only #f and the empty Sequence are false."""
    if isinstance(expr, list):
        return len(expr) == 0
    return expr is False


_NUMERIC_PREFIX_RE = re.compile(
    r"\s*([+-]?(?:Infinity|(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?))"
)


def to_number(value: Expression) -> float:
    """Lenient numeric coercion; non-numbers become NaN rather than failing."""
    if isinstance(value, bool):
        return math.nan
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        m = _NUMERIC_PREFIX_RE.match(value)
        if m:
            return float(m.group(1).replace("Infinity", "inf"))
    return math.nan


def _operand(call: list, index: int) -> float:
    """Coerce the operand at `index`; a missing operand is NaN."""
    if index < len(call):
        return to_number(call[index])
    return math.nan


# -------------------------------
# Arithmetic and comparison
# -------------------------------
def divide(a: float, b: float) -> float:
    """IEEE division: a zero divisor gives a signed infinity or NaN."""
    if b == 0:
        if a == 0 or math.isnan(a):
            return math.nan
        return math.copysign(math.inf, a) * math.copysign(1.0, b)
    return a / b


BINARY_OPERATORS: dict[str, Callable[[float, float], Expression]] = {
    ">": operator.gt,
    "<": operator.lt,
    ">=": operator.ge,
    "<=": operator.le,
    "==": operator.eq,
    "+": operator.add,
    "-": operator.sub,
    "*": operator.mul,
    "/": divide,
}


def make_binary(op: Callable[[float, float], Expression]):
    def proc(call: list) -> Expression:
        return op(_operand(call, 1), _operand(call, 2))

    return proc


def logical_not(call: list) -> bool:
    return len(call) > 1 and is_false(call[1])


# -------------------------------
# Math library
# -------------------------------
def _positional_arity(fn) -> int | None:
    """Number of positional parameters `fn` takes, or None when unbounded or unknown."""
    try:
        sig = inspect.signature(fn)
    except (TypeError, ValueError):
        return None
    count = 0
    for param in sig.parameters.values():
        if param.kind is inspect.Parameter.VAR_POSITIONAL:
            return None
        if param.kind in (
            inspect.Parameter.POSITIONAL_ONLY,
            inspect.Parameter.POSITIONAL_OR_KEYWORD,
        ):
            count += 1
    return count


def _to_host(x: float):
    # math functions taking integers (factorial, comb, gcd) reject floats
    if math.isfinite(x) and x.is_integer():
        return int(x)
    return x


def _from_host(result) -> Expression:
    if isinstance(result, bool):
        return result
    if isinstance(result, tuple):
        return [_from_host(x) for x in result]
    try:
        return float(result)
    except OverflowError:
        return math.inf


def make_math_proc(fn, arity: int | None):
    def proc(call: list) -> Expression:
        args = [_to_host(to_number(x)) for x in call[1:]]
        if arity is not None:
            args = args[:arity]
        try:
            return _from_host(fn(*args))
        except (ValueError, TypeError, OverflowError):
            return math.nan

    return proc


def math_functions() -> dict[str, NativeFunction]:
    table: dict[str, NativeFunction] = {}
    for name in dir(math):
        if name.startswith("_"):
            continue
        fn = getattr(math, name)
        if not callable(fn):
            continue
        table[name] = NativeFunction(name, make_math_proc(fn, _positional_arity(fn)))
    return table


# -------------------------------
# Registration
# -------------------------------
def register(env: Environment):
    env.update(math_functions())
    env.update({
        name: NativeFunction(name, make_binary(op))
        for name, op in BINARY_OPERATORS.items()
    })
    env.define("=", NativeFunction("=", make_binary(operator.eq)))
    env.define("not", NativeFunction("not", logical_not))


def build_builtins() -> Environment:
    """Build the frozen built-in layer. Called once; never mutated afterwards."""
    env = Environment()
    register(env)
    return env.freeze()
