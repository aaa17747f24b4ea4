"""Tree-walking interpreter for lilt ASTs.

The interpreter dispatches on node shape with structural pattern matching and
threads an `Environment` through evaluation. It supports every node the
parser produces: `ProgramNode`, `VariableDeclarationNode`,
`FunctionExpressionNode`, `FunctionCallNode`, `BlockNode`, `BinaryOpNode`
(including assignment), `UnaryOpNode`, `NumericLiteralNode` and
`IdentifierNode`.

Values are floats, `Closure` objects, or `None` for the result of an empty
body or an empty program. Arithmetic follows IEEE-754 double semantics:
division by zero and overflow give infinities or NaN instead of raising.
"""

from __future__ import annotations
import logging
import math
from dataclasses import dataclass
from typing import Any, Optional, Sequence, Union
from ast_nodes import *
from environment import Closure, Environment
from errors import (
    ArityError,
    EvaluationError,
    InvalidOperandError,
    NotCallableError,
    StackExhaustedError,
    UnresolvedIdentifierError,
)

logger = logging.getLogger(__name__)

Value = Union[float, Closure, None]


@dataclass
class CallStack:
    max_depth: Optional[int] = None
    depth: int = 0


def _describe(value: Any) -> str:
    if value is None:
        return "no value"
    if isinstance(value, Closure):
        return "a function"
    return type(value).__name__


def _number(value: Any, op: str, node: ASTNode) -> float:
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return float(value)
    raise InvalidOperandError(
        f"Operator '{op}' expects a number, got {_describe(value)}",
        node.start,
        node.end,
    )


def _is_odd_integer(x: float) -> bool:
    return math.isfinite(x) and x.is_integer() and x % 2 == 1


def _divide(lv: float, rv: float) -> float:
    if rv == 0.0:
        if lv == 0.0 or math.isnan(lv):
            return math.nan
        # The sign of a zero divisor matters: 1 / -0 is -inf
        return math.copysign(math.inf, lv) * math.copysign(1.0, rv)
    return lv / rv


def _remainder(lv: float, rv: float) -> float:
    # Truncating remainder: the result takes the sign of the dividend
    try:
        return math.fmod(lv, rv)
    except ValueError:
        # x % 0 and inf % y
        return math.nan


def _power(base: float, exponent: float) -> float:
    try:
        return math.pow(base, exponent)
    except OverflowError:
        if base < 0 and _is_odd_integer(exponent):
            return -math.inf
        return math.inf
    except ValueError:
        if base == 0.0:
            # Zero to a negative power
            if _is_odd_integer(exponent):
                return math.copysign(math.inf, base)
            return math.inf
        # Negative base with a fractional exponent
        return math.nan


def _arithmetic(op: str, lv: float, rv: float, node: ASTNode) -> float:
    match op:
        case "+":
            return lv + rv
        case "-":
            return lv - rv
        case "*":
            return lv * rv
        case "/":
            return _divide(lv, rv)
        case "%":
            return _remainder(lv, rv)
        case "**":
            return _power(lv, rv)
        case _:
            raise EvaluationError(
                f"Unsupported binary operator: {op}", node.start, node.end
            )


def _eval_sequence(
    statements: Sequence[ASTNode], env: Environment, calls: CallStack
) -> Value:
    result: Value = None
    for stmt in statements:
        result = _eval_expr(stmt, env, calls)
    return result


def _call(node: FunctionCallNode, env: Environment, calls: CallStack) -> Value:
    name = node.callee.name
    scope = env.resolve(name)
    if scope is None:
        raise UnresolvedIdentifierError(name, node.callee.start, node.callee.end)

    func = scope.values[name]
    if not isinstance(func, Closure):
        raise NotCallableError(name, node.start, node.end)
    if len(node.arguments) != func.arity:
        raise ArityError(name, func.arity, len(node.arguments), node.start, node.end)

    args = [_eval_expr(a, env, calls) for a in node.arguments]

    if calls.max_depth is not None and calls.depth >= calls.max_depth:
        raise StackExhaustedError(
            f"Call depth limit of {calls.max_depth} exceeded calling '{name}'",
            node.start,
            node.end,
        )

    local_env = func.env.child()
    for param, value in zip(func.parameters, args):
        local_env.define(param.name, value)

    calls.depth += 1
    logger.debug("call %s with %d argument(s), depth %d", name, len(args), calls.depth)
    try:
        match func.body:
            case BlockNode(statements=stmts):
                return _eval_sequence(stmts, local_env, calls)
            case body:
                return _eval_expr(body, local_env, calls)
    finally:
        calls.depth -= 1


def _eval_expr(node: ASTNode, env: Environment, calls: CallStack) -> Value:
    match node:
        case NumericLiteralNode(value=v):
            return v
        case IdentifierNode(name=n):
            scope = env.resolve(n)
            if scope is None:
                raise UnresolvedIdentifierError(n, node.start, node.end)
            return scope.values[n]
        case UnaryOpNode(operator="-", operand=operand):
            return -_number(_eval_expr(operand, env, calls), "-", operand)
        case UnaryOpNode(operator=op):
            raise EvaluationError(
                f"Unsupported unary operator: {op}", node.start, node.end
            )
        case BinaryOpNode(left=IdentifierNode(name=n), operator="=", right=right):
            rhs = _eval_expr(right, env, calls)
            return env.assign(n, rhs)
        case BinaryOpNode(operator="="):
            raise EvaluationError(
                "Can only assign to identifiers", node.start, node.end
            )
        case BinaryOpNode(left=l, operator=op, right=r):
            lv = _eval_expr(l, env, calls)
            rv = _eval_expr(r, env, calls)
            return _arithmetic(op, _number(lv, op, l), _number(rv, op, r), node)
        case VariableDeclarationNode(name=IdentifierNode(name=n), initializer=init):
            return env.define(n, _eval_expr(init, env, calls))
        case FunctionExpressionNode(parameters=params, body=body):
            return Closure(params, body, env)
        case FunctionCallNode():
            return _call(node, env, calls)
        case BlockNode(statements=stmts):
            return _eval_sequence(stmts, env.child(), calls)
        case ProgramNode(statements=stmts):
            return _eval_sequence(stmts, env, calls)
        case _:
            raise EvaluationError(
                f"Unhandled node type: {node.type}", node.start, node.end
            )


def interpret(
    node: ASTNode,
    env: Optional[Environment] = None,
    *,
    max_call_depth: Optional[int] = None,
) -> Value:
    """Evaluate a program or expression and return its value.

    Evaluation happens in `env` (a fresh global environment when omitted), so
    callers can keep bindings alive across calls. `max_call_depth` caps the
    number of nested interpreted calls; exhausting it, or the host stack,
    raises `StackExhaustedError`.
    """
    if env is None:
        env = Environment()
    calls = CallStack(max_depth=max_call_depth)
    logger.debug("interpreting %s", node.type)
    try:
        return _eval_expr(node, env, calls)
    except RecursionError:
        raise StackExhaustedError(
            "Maximum recursion depth exceeded", node.start, node.end
        ) from None


def interpret_program(
    prog: ProgramNode, *, max_call_depth: Optional[int] = None
) -> Environment:
    """Interpret a ProgramNode in a fresh global environment and return it."""
    env = Environment()
    interpret(prog, env, max_call_depth=max_call_depth)
    return env
