from __future__ import annotations

from stepwise import Expression
from stepwise.errors import StepwiseSyntaxError, StepwiseTypeError
from stepwise.printer import stringify
from stepwise.types.environment import Environment
from stepwise.types.function import NativeFunction
from stepwise.types.macro_environment import MacroEnvironment, MacroOutcome, Rewritten, Failed, StepFn
from stepwise.types.struct import Struct
from stepwise.types.symbol import Symbol
from stepwise.types.undefined import Undefined


def struct_procedures(struct_name: str, fields: list[str]) -> dict[str, NativeFunction]:
    """Generate make-<name>, <name>? and one <name>-<field> accessor per field."""

    def make_struct(call: list) -> Struct:
        args = call[1:]
        return Struct(
            struct_name,
            {f: args[i] if i < len(args) else False for i, f in enumerate(fields)},
        )

    def is_struct(call: list) -> bool:
        return len(call) > 1 and isinstance(call[1], Struct) and call[1].tag == struct_name

    def make_accessor(field: str):
        accessor_name = f"{struct_name}-{field}"

        def accessor(call: list) -> Expression:
            value = call[1] if len(call) > 1 else Undefined
            if not isinstance(value, Struct) or value.tag != struct_name:
                raise StepwiseTypeError(
                    f"{accessor_name}: expected a {struct_name}, given {stringify(value) or 'nothing'}",
                    expected=struct_name,
                    actual=value,
                )
            return value.fields[field]

        return NativeFunction(accessor_name, accessor)

    procs = {
        f"make-{struct_name}": NativeFunction(f"make-{struct_name}", make_struct),
        f"{struct_name}?": NativeFunction(f"{struct_name}?", is_struct),
    }
    for field in fields:
        accessor = make_accessor(field)
        procs[accessor.name] = accessor
    return procs


def defstruct_form(
    form: list,
    env: Environment,
    macros: MacroEnvironment,
    step_fn: StepFn,
) -> MacroOutcome:
    """
    (define-struct name (field ...)) or (define-struct name field ...)
    Registers the generated procedures immediately; nothing is left to step.
    """
    if len(form) < 2 or not isinstance(form[1], Symbol):
        return Failed(StepwiseSyntaxError("define-struct requires a struct name"))
    struct_name = form[1].name
    fields = form[2] if len(form) == 3 and isinstance(form[2], list) else form[2:]

    for field in fields:
        if not isinstance(field, Symbol):
            return Failed(StepwiseSyntaxError(f"define-struct field must be a symbol, got {field!r}"))

    env.update(struct_procedures(struct_name, [f.name for f in fields]))
    return Rewritten(Undefined)
