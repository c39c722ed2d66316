from __future__ import annotations

from stepwise import Expression


class Quoted:
    """An expression marked inert: never stepped, never substituted into."""

    __slots__ = ("expr",)

    def __init__(self, expr: Expression):
        self.expr = expr

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Quoted) and self.expr == other.expr

    def __hash__(self) -> int:
        return hash(("quote", repr(self.expr)))

    def __repr__(self):
        return f"Quoted({self.expr!r})"
