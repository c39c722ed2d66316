"""Callable values: native procedures and substitution-based closures."""

from __future__ import annotations

from io import StringIO

from stepwise import Expression, NativeProc
from stepwise.types.symbol import Symbol

LAMBDA_NAME = "<lambda>"

# Parameter spec: a fixed ordered list of Symbols, or one Symbol collecting all arguments.
ParamSpec = list[Symbol] | Symbol


class Function:
    """Common base so the stepper can ask "is this position callable"."""

    __slots__ = ("name",)

    def __init__(self, name: str):
        self.name = name


class NativeFunction(Function):
    """A host procedure. `proc` receives the whole call Sequence, head included."""

    __slots__ = ("proc",)

    def __init__(self, name: str, proc: NativeProc):
        super().__init__(name)
        self.proc = proc

    def __call__(self, call: list) -> Expression:
        return self.proc(call)

    def __eq__(self, other: object) -> bool:
        return (
            isinstance(other, NativeFunction)
            and self.name == other.name
            and self.proc is other.proc
        )

    def __hash__(self) -> int:
        return hash(self.name)

    def __repr__(self) -> str:
        return f"<native {self.name}>"


class Lambda(Function):
    """A closure: parameter spec plus a body that is rewritten by substitution on application.

    There is no captured environment. Free symbols in the body are resolved
    against the global layers when the rewritten body is later stepped.
    """

    __slots__ = ("params", "body")

    def __init__(self, params: ParamSpec, body: Expression, name: str = LAMBDA_NAME):
        super().__init__(name)
        self.params: ParamSpec = params
        self.body: Expression = body

    @property
    def is_variadic(self) -> bool:
        return isinstance(self.params, Symbol)

    @property
    def param_names(self) -> set[str]:
        if isinstance(self.params, Symbol):
            return {self.params.name}
        return {p.name for p in self.params}

    def __eq__(self, other: object) -> bool:
        return (
            isinstance(other, Lambda)
            and self.name == other.name
            and self.params == other.params
            and self.body == other.body
        )

    def __hash__(self) -> int:
        return hash(self.name)

    def __str__(self) -> str:
        with StringIO() as buffer:
            buffer.write("(λ ")
            if isinstance(self.params, Symbol):
                buffer.write(str(self.params))
            else:
                buffer.write("(")
                buffer.write(" ".join(str(p) for p in self.params))
                buffer.write(")")
            buffer.write(" ")
            buffer.write(repr(self.body))
            buffer.write(")")
            return buffer.getvalue()

    def __repr__(self) -> str:
        """Return the Lisp-style representation of the lambda."""
        return str(self)
