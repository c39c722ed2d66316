"""Application engine for stepwise.

A call Sequence whose head is a Function and whose arguments are fully
reduced is rewritten in one step:

- a NativeFunction receives the whole Sequence and returns the result;
- a Lambda has its body rewritten by substitution, binding each parameter to
  the argument in the same position (missing arguments bind to #f), or, for
  a collect-all parameter, binding it to the whole argument Sequence and
  marking it for splicing.
"""

from __future__ import annotations

from stepwise import Expression
from stepwise.errors import StepwiseTypeError
from stepwise.evaluation.substitute import substitute
from stepwise.types.function import Lambda, NativeFunction


def bind_arguments(fn: Lambda, args: list[Expression]) -> tuple[dict[str, Expression], frozenset[str]]:
    """Build the substitution map (and the splice set) for applying `fn` to `args`."""
    if fn.is_variadic:
        return {fn.params.name: list(args)}, frozenset({fn.params.name})
    bindings: dict[str, Expression] = {}
    for i, param in enumerate(fn.params):
        bindings[param.name] = args[i] if i < len(args) else False
    return bindings, frozenset()


def apply(call: list) -> Expression:
    """Apply the Function at the head of `call` to the rest of `call`."""
    head = call[0]
    if isinstance(head, NativeFunction):
        return head(call)
    if isinstance(head, Lambda):
        bindings, unpack = bind_arguments(head, call[1:])
        return substitute(bindings, head.body, unpack)
    raise StepwiseTypeError(f"Cannot apply non-function {head!r}", expected="function", actual=head)
