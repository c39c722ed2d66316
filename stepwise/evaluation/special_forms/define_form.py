from stepwise.errors import StepwiseSyntaxError
from stepwise.evaluation.special_forms.lambda_form import parse_params
from stepwise.types.environment import Environment
from stepwise.types.function import Lambda
from stepwise.types.macro_environment import MacroEnvironment, MacroOutcome, Rewritten, Failed, StepFn
from stepwise.types.symbol import Symbol
from stepwise.types.undefined import Undefined


def define_form(
    form: list,
    env: Environment,
    macros: MacroEnvironment,
    step_fn: StepFn,
) -> MacroOutcome:
    """
    (define name expr)          binds name to expr, unevaluated
    (define (name params) body) binds name to a closure
    Registers into the user layer right away and leaves Undefined behind.
    """
    if len(form) < 3:
        return Failed(StepwiseSyntaxError("define requires a name and a value"))

    target, value = form[1], form[2]
    if isinstance(target, list):
        if not target or not isinstance(target[0], Symbol):
            return Failed(StepwiseSyntaxError("define requires a function name"))
        try:
            params = parse_params(target[1:])
        except StepwiseSyntaxError as e:
            return Failed(e)
        env.define(target[0], Lambda(params, value, target[0].name))
    elif isinstance(target, Symbol):
        env.define(target, value)
    else:
        return Failed(StepwiseSyntaxError(f"Cannot define {target!r} as a symbol"))
    return Rewritten(Undefined)
