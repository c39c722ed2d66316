import pytest

from stepwise.builtin.env_builtin import build_builtins
from stepwise.builtin.macro_builtin import build_macros
from stepwise.interpreter import Interpreter
from stepwise.types.environment import Environment


@pytest.fixture
def env():
    """Fresh user layer over the built-ins."""
    return Environment(outer=build_builtins())


@pytest.fixture
def macros():
    return build_macros()


@pytest.fixture
def interp():
    return Interpreter(strict=False)
