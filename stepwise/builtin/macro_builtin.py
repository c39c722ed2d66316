from stepwise.evaluation.special_forms import SPECIAL_FORMS
from stepwise.types.macro_environment import MacroEnvironment


def register(macro_env: MacroEnvironment):
    for name, transformer in SPECIAL_FORMS.items():
        macro_env.define_macro(name, transformer)


def build_macros() -> MacroEnvironment:
    """Build the fixed macro table: define, lambda, if, apply, list, define-struct."""
    macros = MacroEnvironment()
    register(macros)
    return macros
