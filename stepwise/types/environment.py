"""Binding layers for stepwise.

An Environment maps names to Expressions and may fall back to an `outer`
layer on a lookup miss. Two layers exist at run time:

- the built-ins, built once and frozen;
- the user layer, created fresh by every prepare with the built-ins as `outer`
  and populated only by define / define-struct.

The macro table is kept apart (see MacroEnvironment) and consulted explicitly.
"""

from __future__ import annotations

from typing import Iterable, Optional

from stepwise import Expression
from stepwise.errors import StepwiseError, StepwiseSyntaxError
from stepwise.types.symbol import Symbol


class Environment:
    """Mapping from names to Expressions with an explicit fallback layer."""

    __slots__ = ("vars", "outer", "frozen")

    def __init__(self, outer: Optional[Environment] = None):
        self.vars: dict[str, Expression] = {}
        self.outer: Environment | None = outer
        self.frozen = False

    def freeze(self) -> Environment:
        """Reject any further define on this layer."""
        self.frozen = True
        return self

    def define(self, name: Symbol | str, value: Expression) -> None:
        """Bind `name` to `value` in this layer.

        Raises StepwiseSyntaxError if `name` is not a Symbol or string, and
        StepwiseError if the layer is frozen.
        """
        if isinstance(name, Symbol):
            name = name.name
        if not isinstance(name, str):
            raise StepwiseSyntaxError(f"Cannot define {name!r} as a symbol")
        if self.frozen:
            raise StepwiseError(f"Cannot define {name} in a frozen environment")
        self.vars[name] = value

    def find(self, name: str) -> Optional[Environment]:
        """Find the nearest layer in the chain that binds `name`."""
        env: Optional[Environment] = self
        while env is not None:
            if name in env.vars:
                return env
            env = env.outer
        return None

    def get(self, name: str) -> Optional[Expression]:
        """Return the value bound to `name`, or None when no layer binds it."""
        env = self.find(name)
        if env is None:
            return None
        return env.vars[name]

    def __contains__(self, name: str) -> bool:
        return self.find(name) is not None

    def update(self, mapping: dict[str, Expression]) -> None:
        """Bulk-define a mapping of name -> value in the current layer."""
        for k, v in mapping.items():
            self.define(k, v)

    def __repr__(self) -> str:
        return f"<Environment {len(self.vars)} bindings{' (frozen)' if self.frozen else ''}>"


def resolve(expr: Expression, envs: Iterable) -> Optional[Expression]:
    """Look a Symbol up in each of `envs` in order; first match wins.

    `envs` may hold Environments or plain dicts. Non-Symbol inputs are never
    searched and resolve to None, as does a Symbol bound nowhere.
    """
    if not isinstance(expr, Symbol):
        return None
    for env in envs:
        if isinstance(env, Environment):
            found = env.find(expr.name)
            if found is not None:
                return found.vars[expr.name]
        elif expr.name in env:
            return env[expr.name]
    return None
