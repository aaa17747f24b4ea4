"""Tests for the tree-walking interpreter."""

import math

import pytest

from tests.utils import parse_expr, parse_text, run
from ast_interpreter import interpret, interpret_program
from ast_nodes import BinaryOpNode, IdentifierNode, NumericLiteralNode
from environment import Closure, Environment
from errors import (
    ArityError,
    ErrorKind,
    EvaluationError,
    InvalidOperandError,
    NotCallableError,
    StackExhaustedError,
    UnresolvedIdentifierError,
)


@pytest.mark.parametrize(
    "src, expected",
    [
        ("1", 1),
        ("2 + 3", 5),
        ("1 + 2 * 3", 7),
        ("1 + 2 * 18", 37),
        ("1 + 2 * 18 / 3", 13),
        ("1 + 2 * 18 / 3 * 2", 25),
        ("1 - 2 - 3", -4),
        ("2 ** 3", 8),
        ("2 ** 3 ** 2", 512),
        ("2 ** 3 ** 2 ** 2", 2.4178516392292583e24),
        ("(1 + 2) * 3", 9),
        ("1 + 2 * (3 + 4)", 15),
        ("2 * 3 ** 2", 18),
        ("10 ** 2 * 3", 300),
        ("-1", -1),
        ("-1 + 2", 1),
        ("-2 ** 2", 4),
        ("7 % 2", 1),
        ("7 % 3", 1),
        ("7 % 4", 3),
        ("1.5 * 2", 3),
    ],
)
def test_evaluates_arithmetic(src, expected):
    assert run(src) == expected


def test_remainder_truncates_toward_zero():
    assert run("-7 % 2") == -1
    assert run("7 % -2") == 1
    assert run("5.5 % 2") == 1.5


def test_division_by_zero_follows_ieee():
    assert run("1 / 0") == math.inf
    assert run("-1 / 0") == -math.inf
    assert run("1 / -0") == -math.inf
    assert math.isnan(run("0 / 0"))
    assert math.isnan(run("1 % 0"))


def test_power_edge_cases_follow_ieee():
    assert run("10 ** 400") == math.inf
    assert run("-10 ** 401") == -math.inf
    assert run("0 ** -1") == math.inf
    assert math.isnan(run("-8 ** 0.5"))
    assert run("2 ** -1") == 0.5


def test_parenthesization_is_neutral():
    for src in ["1 - 2 - 3", "2 ** 3 ** 2", "7 % 4 * 2", "-3 + 4 / 2"]:
        assert run(f"({src})") == run(src)


def test_closure_over_declaration():
    assert run("let inc = (x) => x + 1\ninc(1)") == 2


def test_nested_scopes_resolve_outer_bindings():
    src = """
    let square = (x) => { x ** 2 }
    let inc = (x) => x + 1
    let main = (x) => { let y = inc(x); square(y) }
    main(11)
    """
    assert run(src) == 144
    assert run(src.replace("main(11)", "main(11) + main(12)")) == 313


def test_inner_functions_shadow_parameters():
    src = """
    let test = (x) => {
      let inc = (y) => y + 1
      let z = inc(inc(x))
      x ** z
    }
    test(2) + test(3)
    """
    assert run(src) == 259


def test_deeply_nested_functions():
    src = """
    let test = (x) => {
      let test2 = (y) => {
        let inc = (z) => z + 1
        let z = inc(inc(y))
        y ** z
      }
      test2(x)
    }
    test(2)
    """
    assert run(src) == 16


def test_closures_capture_environment_by_reference():
    src = """
    let n = 1
    let get = () => n
    n = 5
    get()
    """
    assert run(src) == 5


def test_closures_see_later_definitions_in_captured_scope():
    src = """
    let f = () => g()
    let g = () => 42
    f()
    """
    assert run(src) == 42


def test_closure_returned_from_function_keeps_its_scope():
    src = """
    let adder = (a) => (b) => a + b
    let add3 = adder(3)
    let a = 100
    add3(4)
    """
    assert run(src) == 7


def test_declaration_shadows_outer_binding_only_in_inner_scope():
    src = """
    let x = 1
    let f = () => { let x = 2; x }
    f() * 10 + x
    """
    assert run(src) == 21


def test_assignment_rebinds_nearest_defining_scope():
    src = """
    let counter = 0
    let bump = () => { counter = counter + 1 }
    bump(); bump(); bump()
    counter
    """
    assert run(src) == 3


def test_assignment_to_undeclared_name_defines_it_in_current_scope():
    env = Environment()
    assert run("a = 4; a * 2", env) == 8
    assert env.lookup("a") == 4


def test_assignment_inside_function_to_undeclared_name_stays_local():
    src = """
    let f = () => { fresh = 1; fresh + 1 }
    f()
    fresh
    """
    with pytest.raises(UnresolvedIdentifierError) as excinfo:
        run(src)
    assert excinfo.value.name == "fresh"


def test_assignment_and_declaration_yield_the_value():
    assert run("let a = 3") == 3
    assert run("let a = 1; a = 7") == 7
    assert run("let a = 0; let b = 0; a = b = 2; a + b") == 4


def test_redeclaration_in_same_scope_replaces_binding():
    assert run("let a = 1; let a = a + 1; a") == 2


def test_self_reference_is_visible_at_call_time():
    src = """
    let f = () => f
    f()
    """
    result = run(src)
    assert isinstance(result, Closure)
    assert result.arity == 0


def test_unbounded_recursion_raises_stack_exhausted():
    src = """
    let loop = (n) => loop(n + 1)
    loop(0)
    """
    with pytest.raises(StackExhaustedError) as excinfo:
        run(src)
    assert excinfo.value.kind == ErrorKind.RUNTIME


def test_max_call_depth_limits_recursion():
    src = "let loop = (n) => loop(n + 1); loop(0)"
    with pytest.raises(StackExhaustedError) as excinfo:
        run(src, max_call_depth=25)
    assert "25" in excinfo.value.message


def test_max_call_depth_allows_shallow_calls():
    src = "let f = (x) => x * 2; let g = (x) => f(x) + 1; g(3)"
    assert run(src, max_call_depth=2) == 7


def test_empty_body_and_empty_program_have_no_value():
    assert run("let f = () => {}; f()") is None
    assert run("") is None


def test_function_expression_evaluates_to_closure():
    env = Environment()
    value = interpret(parse_expr("(a, b) => a + b"), env)
    assert isinstance(value, Closure)
    assert [p.name for p in value.parameters] == ["a", "b"]
    assert value.env is env


def test_unresolved_identifier():
    with pytest.raises(UnresolvedIdentifierError) as excinfo:
        run("1 + missing")
    err = excinfo.value
    assert err.name == "missing"
    assert (err.start, err.end) == (4, 11)
    assert isinstance(err, RuntimeError)


def test_calling_unresolved_function():
    with pytest.raises(UnresolvedIdentifierError):
        run("nope(1)")


def test_calling_non_function():
    with pytest.raises(NotCallableError) as excinfo:
        run("let a = 1; a(2)")
    assert excinfo.value.name == "a"


def test_arity_mismatch_names_expected_and_actual():
    with pytest.raises(ArityError) as excinfo:
        run("let f = (x) => x; f(1, 2)")
    err = excinfo.value
    assert (err.expected, err.actual) == (1, 2)
    assert "expected=1" in err.message and "actual=2" in err.message


def test_arity_checked_before_arguments_are_evaluated():
    with pytest.raises(ArityError):
        run("let f = () => 1; f(missing)")


def test_arguments_evaluate_left_to_right():
    src = """
    let log = 0
    let note = (d) => log = log * 10 + d
    let pair = (a, b) => log
    pair(note(1), note(2))
    """
    assert run(src) == 12


def test_arithmetic_on_functions_is_rejected():
    with pytest.raises(InvalidOperandError) as excinfo:
        run("let f = () => 1; f + 1")
    assert "a function" in excinfo.value.message
    with pytest.raises(InvalidOperandError):
        run("let f = () => {}; -f()")


def test_state_persists_in_shared_environment(global_env):
    run("let total = 10", global_env)
    run("let add = (n) => total = total + n", global_env)
    run("add(5)", global_env)
    assert run("total", global_env) == 15


def test_interpret_program_returns_global_environment():
    env = interpret_program(parse_text("let a = 3; let b = 4; let c = a + b"))
    assert env.lookup("c") == 7


def test_assignment_node_with_non_identifier_target_is_rejected():
    node = BinaryOpNode(left=NumericLiteralNode(value=1.0), operator="=", right=NumericLiteralNode(value=2.0))
    with pytest.raises(EvaluationError):
        interpret(node)


def test_identifier_node_evaluates_from_given_environment():
    env = Environment(bindings={"x": 2.0})
    assert interpret(IdentifierNode(name="x"), env) == 2.0
