from stepwise import SExpression
from stepwise.errors import StepwiseSyntaxError
from stepwise.types.environment import Environment
from stepwise.types.function import Lambda, ParamSpec
from stepwise.types.macro_environment import MacroEnvironment, MacroOutcome, Rewritten, Failed, StepFn
from stepwise.types.symbol import Symbol
from stepwise.types.undefined import Undefined

DOT = Symbol(".")


def parse_params(spec: SExpression) -> ParamSpec:
    """Normalise a literal parameter spec.

    A bare Symbol, or a list of the form (. rest), collects all arguments;
    otherwise every element must be a Symbol.
    """
    if isinstance(spec, Symbol):
        return spec
    if not isinstance(spec, list):
        raise StepwiseSyntaxError(f"Malformed parameter list: {spec!r}")
    if DOT in spec:
        if len(spec) == 2 and spec[0] == DOT and isinstance(spec[1], Symbol):
            return spec[1]
        raise StepwiseSyntaxError("Only (. rest) is supported as a dotted parameter list")
    for param in spec:
        if not isinstance(param, Symbol):
            raise StepwiseSyntaxError(f"Parameter must be a symbol, got {param!r}")
    return list(spec)


def lambda_form(
    form: list,
    env: Environment,
    macros: MacroEnvironment,
    step_fn: StepFn,
) -> MacroOutcome:
    """(lambda params body): build the closure as written, evaluating nothing."""
    if len(form) < 2:
        return Failed(StepwiseSyntaxError("lambda requires at least a parameter list"))
    try:
        params = parse_params(form[1])
    except StepwiseSyntaxError as e:
        return Failed(e)
    body = form[2] if len(form) > 2 else Undefined
    return Rewritten(Lambda(params, body))
