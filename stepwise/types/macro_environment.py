"""Macro table and the macro-only pass of the stepper.

A macro transformer receives the whole, unreduced call form and answers with
one of three outcomes:

- Rewritten(expr): replace the call with `expr`;
- Deferred: not ready yet, leave the call untouched for this step;
- Failed(error): a genuine failure, raised by the macro pass.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Union

from stepwise import SExpression, Expression
from stepwise.errors import StepwiseError
from stepwise.types.environment import Environment
from stepwise.types.symbol import Symbol
from stepwise.types.undefined import Undefined


@dataclass(frozen=True)
class Rewritten:
    expr: Expression


class _DeferredType:
    def __repr__(self):
        return "Deferred"


Deferred = _DeferredType()


@dataclass(frozen=True)
class Failed:
    error: StepwiseError


LAMBDA_FORM = "lambda"

MacroOutcome = Union[Rewritten, _DeferredType, Failed]

StepFn = Callable[[Expression, Environment, "MacroEnvironment"], tuple[bool, Expression]]
TransformerFunction = Callable[[list, Environment, "MacroEnvironment", StepFn], MacroOutcome]


def rebuild(results: list[Expression]) -> list:
    """Collect child results into a new Sequence, dropping Undefined values."""
    return [r for r in results if r is not Undefined]


class MacroEnvironment:
    """Fixed table mapping macro names to Python transformer functions."""

    def __init__(self):
        self.macros: dict[str, TransformerFunction] = {}

    # ----------------- Macro Registration -----------------
    def define_macro(self, name: Symbol | str, transformer: TransformerFunction):
        if isinstance(name, Symbol):
            name = name.name
        self.macros[name] = transformer

    def is_macro(self, head: SExpression) -> bool:
        return isinstance(head, Symbol) and head.name in self.macros

    def is_macro_call(self, form: SExpression) -> bool:
        return isinstance(form, list) and bool(form) and self.is_macro(form[0])

    # ----------------- Single-step head expansion -----------------
    def expand_1(
        self, form: list, env: Environment, step_fn: StepFn
    ) -> tuple[bool, Expression]:
        """Run the head macro of `form` once.

        Expanding `lambda` only builds the closure, so it is carried forward
        without counting as a step here; the stepper decides whether the
        expansion shows on its own. Every other rewrite is a step.
        """
        transformer = self.macros[form[0].name]
        outcome = transformer(form, env, self, step_fn)
        match outcome:
            case Rewritten(expr=expr):
                return form[0].name != LAMBDA_FORM, expr
            case Failed(error=error):
                raise error
        return False, form

    # ----------------- Depth-first macro pass -----------------
    def expand_step(
        self, form: SExpression, env: Environment, step_fn: StepFn
    ) -> tuple[bool, Expression]:
        """Expand the leftmost expandable macro call anywhere in `form`.

        Children of a macro call are left to that macro; children of any other
        Sequence are visited left to right and copied through unchanged once
        one of them has stepped.
        """
        if not isinstance(form, list) or not form:
            return False, form
        if self.is_macro(form[0]):
            return self.expand_1(form, env, step_fn)

        stepped = False
        changed = False
        results: list[Expression] = []
        for child in form:
            if stepped:
                results.append(child)
                continue
            child_stepped, child_result = self.expand_step(child, env, step_fn)
            stepped = child_stepped
            changed = changed or child_result is not child
            results.append(child_result)
        if not changed:
            return False, form
        return stepped, rebuild(results)
