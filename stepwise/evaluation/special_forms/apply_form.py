from stepwise.types.environment import Environment
from stepwise.types.function import Function
from stepwise.types.macro_environment import (
    MacroEnvironment, MacroOutcome, Rewritten, Deferred, StepFn,
)


def apply_form(
    form: list,
    env: Environment,
    macros: MacroEnvironment,
    step_fn: StepFn,
) -> MacroOutcome:
    """
    (apply fn arg ... args)
    Reduces the function position, then the final argument list, one step per
    call. Once the function is a Function and the final argument is a
    Sequence, rewrites to the plain call (fn arg ... args...) and lets ordinary
    application take over. Anything else, including a missing argument list,
    defers.
    """
    # Nothing to spread yet
    if len(form) < 3:
        return Deferred

    head, fn_expr, *lead, last = form

    stepped, fn_val = step_fn(fn_expr, env, macros)
    if stepped:
        return Rewritten([head, fn_val, *lead, last])
    if not isinstance(fn_val, Function):
        return Deferred

    stepped, args = step_fn(last, env, macros)
    if stepped:
        return Rewritten([head, fn_val, *lead, args])
    if isinstance(args, list):
        return Rewritten([fn_val, *lead, *args])
    return Deferred
