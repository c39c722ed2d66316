from __future__ import annotations

from stepwise import SExpression
from stepwise.builtin.env_builtin import is_false
from stepwise.errors import StepwiseSyntaxError
from stepwise.evaluation.substitute import LAMBDA, literal_param_names
from stepwise.types.environment import Environment, resolve
from stepwise.types.function import Lambda
from stepwise.types.macro_environment import (
    MacroEnvironment, MacroOutcome, Rewritten, Deferred, Failed, StepFn,
)
from stepwise.types.symbol import Symbol


def contains_unbound(
    expr: SExpression,
    env: Environment,
    macros: MacroEnvironment,
    params: frozenset[str] = frozenset(),
) -> bool:
    """True if `expr` mentions a symbol bound nowhere (closure parameters excluded)."""
    if isinstance(expr, Symbol):
        if expr.name in params:
            return False
        return resolve(expr, [env, macros.macros]) is None
    if isinstance(expr, list):
        if len(expr) > 1 and expr[0] == LAMBDA:
            # Unexpanded lambda: its parameters are bound inside its body
            return contains_unbound(expr[2:], env, macros, params | literal_param_names(expr[1]))
        return any(contains_unbound(x, env, macros, params) for x in expr)
    if isinstance(expr, Lambda):
        return contains_unbound(expr.body, env, macros, params | expr.param_names)
    return False


def if_form(
    form: list,
    env: Environment,
    macros: MacroEnvironment,
    step_fn: StepFn,
) -> MacroOutcome:
    """(if test then [else]), reducing the test one step per call."""
    if len(form) < 3:
        return Failed(StepwiseSyntaxError("if requires a test and a then-branch"))

    test = form[1]
    if is_false(test):
        return Rewritten(form[3] if len(form) > 3 else False)
    if test is True:
        return Rewritten(form[2])
    # A guard with holes still waiting on substitution must not be half-reduced.
    if contains_unbound(test, env, macros):
        return Deferred

    stepped, new_test = step_fn(test, env, macros)
    if stepped:
        return Rewritten([form[0], new_test, *form[2:]])
    # Irreducible and not false: true.
    return Rewritten(form[2])
