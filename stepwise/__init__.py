# Core type aliases for the stepwise data model.
# Plain Python values stand in for the simple variants:
#   Number -> float, Text -> str, Boolean -> bool, Sequence -> list
# The remaining variants are explicit classes under stepwise.types:
#   Symbol, NativeFunction / Lambda, Struct, Quoted and the Undefined sentinel.
#
# Naming guidance:
# - SExpression: use in reader/macro code to denote syntactic forms.
# - Expression:  use in stepper/runtime code for values flowing through steps.
# Both resolve to `Any`; the closed set of variants is enforced by isinstance checks.

from typing import Any, Callable

Expression = Any
SExpression = Expression

# Host callback backing a native procedure: receives the whole call Sequence,
# head included, and returns the replacement Expression.
NativeProc = Callable[[list], Expression]
