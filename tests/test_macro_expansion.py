import pytest

from stepwise.errors import StepwiseSyntaxError
from stepwise.evaluation.stepper import step
from stepwise.interpreter import Interpreter
from stepwise.printer import stringify
from stepwise.reader.parser import tokenize
from stepwise.types.function import Lambda
from stepwise.types.macro_environment import MacroEnvironment, Rewritten, Deferred, Failed
from stepwise.types.symbol import Symbol
from stepwise.types.undefined import Undefined


def parse_one(source: str):
    return tokenize(source)[0]


def trace(source: str, definitions: str = "") -> list[str]:
    """Every intermediate program, as displayed."""
    interp = Interpreter(strict=False)
    program = interp.prepare(definitions, source)
    texts = []
    while True:
        result = interp.step_once(program)
        assert result.ok, result.format_error()
        if not result.stepped:
            return texts
        program = result.value
        texts.append(result.text)


# -----------------------------
# define
# -----------------------------

def test_define_value_is_stored_unevaluated(env, macros):
    stepped, result = step(parse_one("(define x (+ 1 2))"), env, macros)
    assert stepped and result is Undefined
    assert env.get("x") == [Symbol("+"), 1.0, 2.0]


def test_define_function_shorthand(env, macros):
    step(parse_one("(define (add a b) (+ a b))"), env, macros)
    fn = env.get("add")
    assert isinstance(fn, Lambda)
    assert fn.name == "add"
    assert fn.params == [Symbol("a"), Symbol("b")]
    assert fn.body == [Symbol("+"), Symbol("a"), Symbol("b")]


def test_define_collect_all_shorthand(env, macros):
    step(parse_one("(define (f . xs) (list xs))"), env, macros)
    fn = env.get("f")
    assert fn.is_variadic and fn.params == Symbol("xs")


@pytest.mark.parametrize("source", ["(define 5 1)", "(define x)", "(define (5 a) a)", "(define (f a . b) a)"])
def test_malformed_define(env, macros, source):
    with pytest.raises(StepwiseSyntaxError):
        step(parse_one(source), env, macros)


def test_defined_value_is_reduced_when_used():
    assert trace("(* x 2)", "(define x (+ 1 2))") == ["(* (+ 1 2) 2)", "(* 3 2)", "6"]


# -----------------------------
# lambda
# -----------------------------

def test_lambda_expansion_is_not_a_macro_step(env, macros):
    form = parse_one("(lambda (x) (+ x 1))")
    stepped, result = macros.expand_step(form, env, step)
    assert not stepped
    assert isinstance(result, Lambda)


def test_bare_lambda_expansion_is_a_visible_step(env, macros):
    stepped, result = step(parse_one("(lambda (x) (+ x 1))"), env, macros)
    assert stepped
    assert isinstance(result, Lambda)
    assert result.params == [Symbol("x")]
    assert stringify(result) == "<lambda>"


def test_lambda_with_symbol_params_collects_all(env, macros):
    _, result = step(parse_one("(lambda args args)"), env, macros)
    assert result.is_variadic


def test_lambda_with_dotted_params(env, macros):
    _, result = step(parse_one("(lambda (. rest) rest)"), env, macros)
    assert result.params == Symbol("rest")


@pytest.mark.parametrize("source", ["(lambda)", "(lambda (1) 1)", "(lambda 5 1)"])
def test_malformed_lambda(env, macros, source):
    with pytest.raises(StepwiseSyntaxError):
        step(parse_one(source), env, macros)


# -----------------------------
# if
# -----------------------------

@pytest.mark.parametrize(
    "source, expected",
    [
        ("(if #f 1 2)", "2"),
        ("(if #t 1 2)", "1"),
        ("(if () 1 2)", "2"),
        ("(if #f 1)", "#f"),
        ("(if 5 1 2)", "1"),
        ('(if "" 1 2)', "1"),
        ("(if (< 1 2) (+ 1 1) (undefined-thing))", "2"),
    ]
)
def test_if_results(source, expected):
    assert trace(source)[-1] == expected


def test_if_reduces_its_test_one_step_at_a_time():
    assert trace("(if (< (+ 1 1) 3) 10 20)") == [
        "(if (< 2 3) 10 20)",
        "(if #t 10 20)",
        "10",
    ]


def test_if_defers_on_unbound_guard(env, macros):
    form = parse_one("(if (< n 1) 1 2)")
    stepped, result = step(form, env, macros)
    assert not stepped
    assert result is form


def test_if_guard_may_mention_closure_parameters(env, macros):
    form = parse_one("(if ((lambda (n) (< n 1)) 0) 1 2)")
    stepped, _ = step(form, env, macros)
    assert stepped


def test_if_never_touches_the_branches():
    # The else-branch would recurse forever if it were reduced early
    texts = trace("(loop 0)", "(define (loop n) (if (> n 2) n (loop (+ n 1))))")
    assert texts[-1] == "3"


def test_if_choosing_a_function_is_a_step():
    defs = "(define (pick f) (if #t f 0))"
    assert trace("(pick +)", defs) == ["(if #t + 0)", "+"]
    assert trace("((pick +) 1 2)", defs) == ["((if #t + 0) 1 2)", "(+ 1 2)", "3"]


def test_if_selecting_a_function_value_steps(env, macros):
    plus = env.get("+")
    stepped, result = macros.expand_step([Symbol("if"), True, plus, 0.0], env, step)
    assert stepped and result is plus


def test_if_requires_a_then_branch(env, macros):
    with pytest.raises(StepwiseSyntaxError):
        step(parse_one("(if #t)"), env, macros)


# -----------------------------
# list and apply
# -----------------------------

def test_list_builds_a_sequence():
    assert trace("(list 1 (+ 1 1))") == ["(1 (+ 1 1))", "(1 2)"]


def test_empty_list():
    assert trace("(list)") == ["()"]


def test_apply_steps():
    assert trace("(apply + (list 1 2))") == ["(apply + (1 2))", "(+ 1 2)", "3"]


def test_apply_with_leading_arguments():
    assert trace("(apply + 1 (list 2))")[-1] == "3"


def test_apply_user_function():
    assert trace("(apply add (list 10 20))", "(define (add a b) (+ a b))")[-1] == "30"


def test_apply_reduces_a_computed_function_position():
    texts = trace("(apply (pick #t) (list 3 4))", "(define (pick x) (if x * +))")
    assert texts[:2] == ["(apply (if #t * +) (list 3 4))", "(apply * (list 3 4))"]
    assert texts[-1] == "12"


def test_apply_defers_on_non_function():
    assert trace("(apply 5 (list 1))") == []


def test_apply_defers_without_an_argument_list(env, macros):
    form = parse_one("(apply +)")
    stepped, result = step(form, env, macros)
    assert not stepped and result is form


def test_apply_shows_a_lambda_in_function_position():
    assert trace("(apply (lambda (x) x) (list 1))") == [
        "(apply <lambda> (list 1))",
        "(apply <lambda> (1))",
        "(<lambda> 1)",
        "1",
    ]


def test_apply_defers_on_non_sequence_arguments(env, macros):
    form = parse_one("(apply + 5)")
    stepped, result = step(form, env, macros)
    assert not stepped and result is form


# -----------------------------
# macro outcomes
# -----------------------------

def test_deferred_macro_leaves_the_form_untouched(env):
    macros = MacroEnvironment()
    macros.define_macro("wait", lambda form, env, macros, step_fn: Deferred)
    form = [Symbol("wait"), 1.0]
    assert macros.expand_step(form, env, step) == (False, form)


def test_failed_macro_raises(env):
    macros = MacroEnvironment()
    error = StepwiseSyntaxError("nope")
    macros.define_macro("boom", lambda form, env, macros, step_fn: Failed(error))
    with pytest.raises(StepwiseSyntaxError):
        macros.expand_step([Symbol("boom")], env, step)


def test_macro_pass_reaches_into_arguments(env):
    macros = MacroEnvironment()
    macros.define_macro("two", lambda form, env, macros, step_fn: Rewritten(2.0))
    form = [Symbol("f"), [Symbol("g"), [Symbol("two")]], [Symbol("two")]]
    stepped, result = macros.expand_step(form, env, step)
    assert stepped
    # Only the leftmost expansion happens
    assert result == [Symbol("f"), [Symbol("g"), 2.0], [Symbol("two")]]


def test_macro_pass_drops_undefined(env, macros):
    stepped, result = macros.expand_step(parse_one("(f (define y 1) 2)"), env, step)
    assert stepped
    assert result == [Symbol("f"), 2.0]
    assert env.get("y") == 1.0
