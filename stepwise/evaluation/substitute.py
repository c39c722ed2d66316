"""Substitution engine.

Application and closure construction are both expressed as structural
rewrites: every Symbol named in `bindings` is replaced by its bound
Expression. Names listed in `unpack` whose bound value is a Sequence are
spliced into the enclosing Sequence instead of nested, which is how a
collect-all parameter hands its arguments on.

Substitution stops at a closure's own parameters (they shadow the outer
bindings), for built closures and literal `(lambda params ...)` lists alike,
but does no renaming, so it is not hygienic: an argument that
mentions a symbol named like an inner parameter is captured by it.
"""

from __future__ import annotations

from stepwise import Expression
from stepwise.types.function import Lambda
from stepwise.types.symbol import Symbol

LAMBDA = Symbol("lambda")


def literal_param_names(spec: Expression) -> frozenset[str]:
    """Names bound by the parameter list of an unexpanded `(lambda params ...)`."""
    if isinstance(spec, Symbol):
        return frozenset({spec.name})
    if isinstance(spec, list):
        return frozenset(p.name for p in spec if isinstance(p, Symbol))
    return frozenset()


def substitute(
    bindings: dict[str, Expression], body: Expression, unpack: frozenset[str] = frozenset()
) -> Expression:
    """Return a copy of `body` with the bound symbols replaced."""
    if not bindings:
        return body
    if isinstance(body, Symbol):
        return bindings.get(body.name, body)
    if isinstance(body, list):
        if len(body) > 1 and body[0] == LAMBDA:
            shadowed = literal_param_names(body[1])
            inner = {k: v for k, v in bindings.items() if k not in shadowed}
            return [body[0], body[1], *substitute(inner, body[2:], unpack - shadowed)]
        result: list[Expression] = []
        for item in body:
            if (
                isinstance(item, Symbol)
                and item.name in unpack
                and isinstance(bindings.get(item.name), list)
            ):
                result.extend(bindings[item.name])
            else:
                result.append(substitute(bindings, item, unpack))
        return result
    if isinstance(body, Lambda):
        # Shadowing: the closure's own parameters are holes the outer bindings must not fill.
        shadowed = body.param_names
        inner = {k: v for k, v in bindings.items() if k not in shadowed}
        return Lambda(body.params, substitute(inner, body.body, unpack - shadowed), body.name)
    return body
