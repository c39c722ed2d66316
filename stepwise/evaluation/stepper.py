"""The single-step reduction relation.

`step` is the transition function of the interpreter: the state is the
expression tree itself, and every call performs at most one visible
rewrite. Each call runs two passes:

1. the macro pass expands the leftmost ready macro call anywhere in the tree
   (MacroEnvironment.expand_step);
2. if no macro stepped, the reduce pass resolves symbols and reduces the
   leftmost reducible call, applying a call once its children are done.

Resolving a symbol to a Function, or expanding a lambda that is applied
in the same call, rewrites the tree without counting as a step of its own,
so that a call shows only the application itself. `stepped` is False only
when the displayed tree is unchanged.
"""

from __future__ import annotations

from stepwise import Expression
from stepwise.evaluation.apply import apply
from stepwise.types.environment import Environment, resolve
from stepwise.types.function import Function
from stepwise.types.macro_environment import MacroEnvironment, rebuild
from stepwise.types.quoted import Quoted


def step(expr: Expression, env: Environment, macros: MacroEnvironment) -> tuple[bool, Expression]:
    """Perform one reduction on `expr`; returns (stepped, result)."""
    stepped, expanded = macros.expand_step(expr, env, step)
    if stepped:
        return True, expanded
    stepped, reduced = reduce_step(expanded, env, macros)
    # A lambda expansion with nothing to apply it is still a visible change.
    return stepped or expanded is not expr, reduced


def reduce_step(expr: Expression, env: Environment, macros: MacroEnvironment) -> tuple[bool, Expression]:
    """The reduce pass: symbol resolution and leftmost-first application."""
    if not isinstance(expr, list):
        if isinstance(expr, Quoted):
            return False, expr
        resolved = resolve(expr, [env])
        if resolved is None:
            return False, expr
        return not isinstance(resolved, Function), resolved

    # A macro call that survived the macro pass has deferred; leave it alone.
    if macros.is_macro_call(expr):
        return False, expr

    stepped = False
    results: list[Expression] = []
    for child in expr:
        if stepped:
            results.append(child)
            continue
        stepped, child_result = reduce_step(child, env, macros)
        results.append(child_result)

    call = rebuild(results)
    if stepped:
        return True, call
    if call and isinstance(call[0], Function):
        return True, apply(call)
    return False, expr


def step_program(program: list, env: Environment, macros: MacroEnvironment) -> tuple[bool, list]:
    """Step the leftmost top-level form that can step; the program itself is never applied."""
    results: list[Expression] = []
    stepped = False
    for form in program:
        if stepped:
            results.append(form)
            continue
        stepped, form_result = step(form, env, macros)
        results.append(form_result)
    return stepped, rebuild(results)
