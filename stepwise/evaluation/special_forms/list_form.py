from stepwise.types.environment import Environment
from stepwise.types.macro_environment import MacroEnvironment, MacroOutcome, Rewritten, StepFn


def list_form(
    form: list,
    env: Environment,
    macros: MacroEnvironment,
    step_fn: StepFn,
) -> MacroOutcome:
    """(list a b ...) => (a b ...)"""
    return Rewritten(list(form[1:]))
