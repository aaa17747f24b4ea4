"""Pretty-printer for the AST.

Provides `PrettyPrinter.print_ast(node, indent, prefix)` which renders an
AST into a readable multi-line string, and `PrettyPrinter.print_surface(node)`
which renders it back to source text. The tree printer is intended for
debugging, tests and development; the surface printer parenthesizes every
compound operand so its output always parses back to an equal tree.

Examples:
    PrettyPrinter.print_ast(program_node)
    PrettyPrinter.print_surface(parse_expression("1 + 2 * 3"))  # "1 + (2 * 3)"
"""

from __future__ import annotations
import math
from decimal import Decimal
from ast_nodes import *


def _format_number(value: float) -> str:
    if value == math.inf:
        # Overflowing literals parse to inf; emit digits that overflow again
        return "1" + "0" * 309
    if not math.isfinite(value):
        return str(value)
    # Literals have no exponent notation, so expand e.g. 1e+24 to plain digits
    text = format(Decimal(repr(value)), "f")
    if text.endswith(".0"):
        text = text[:-2]
    return text


class PrettyPrinter:
    @staticmethod
    def print_ast(node: ASTNode, indent: int = 0, prefix: str = "") -> str:
        """Pretty print AST and return as string."""
        lines = []
        indent_str = " " * indent

        if not isinstance(node, ASTNode):
            lines.append(f"{indent_str}{prefix}{node}")
            return "\n".join(lines)

        match node:
            case NumericLiteralNode(value=v):
                lines.append(f"{indent_str}{prefix}NumericLiteral({_format_number(v)})")

            case IdentifierNode(name=n):
                lines.append(f"{indent_str}{prefix}Identifier({n})")

            case UnaryOpNode(operator=op, operand=operand):
                lines.append(f"{indent_str}{prefix}UnaryOp({op})")
                lines.append(PrettyPrinter.print_ast(operand, indent + 2))

            case BinaryOpNode(left=left, operator="=", right=right):
                lines.append(f"{indent_str}{prefix}Assignment")
                lines.append(PrettyPrinter.print_ast(left, indent + 2, "target: "))
                lines.append(PrettyPrinter.print_ast(right, indent + 2, "value: "))

            case BinaryOpNode(left=left, operator=op, right=right):
                lines.append(f"{indent_str}{prefix}BinaryOp({op})")
                lines.append(PrettyPrinter.print_ast(left, indent + 2, "left: "))
                lines.append(PrettyPrinter.print_ast(right, indent + 2, "right: "))

            case VariableDeclarationNode(name=name, initializer=init):
                lines.append(f"{indent_str}{prefix}VarDecl({name.name})")
                lines.append(PrettyPrinter.print_ast(init, indent + 2, "init: "))

            case FunctionExpressionNode(parameters=params, body=body):
                names = ", ".join(p.name for p in params)
                lines.append(f"{indent_str}{prefix}FunctionExpression(params=[{names}])")
                lines.append(PrettyPrinter.print_ast(body, indent + 4, "body: "))

            case FunctionCallNode(callee=callee, arguments=args):
                lines.append(f"{indent_str}{prefix}FunctionCall({callee.name})")
                for i, arg in enumerate(args):
                    lines.append(PrettyPrinter.print_ast(arg, indent + 4, f"arg[{i}]: "))

            case BlockNode(statements=stmts):
                lines.append(f"{indent_str}{prefix}Block")
                for i, stmt in enumerate(stmts):
                    lines.append(PrettyPrinter.print_ast(stmt, indent + 4, f"stmt[{i}]: "))

            case ProgramNode(statements=stmts):
                lines.append(f"{indent_str}{prefix}Program")
                for i, stmt in enumerate(stmts):
                    lines.append(PrettyPrinter.print_ast(stmt, indent + 4, f"stmt[{i}]: "))

            case _:
                lines.append(f"{indent_str}{prefix}Unknown node type: {type(node)}")

        return "\n".join(line for line in lines if line)

    @staticmethod
    def print_surface(node: ASTNode) -> str:
        """Return source text for an AST node.

        Compound operands (binary, unary and function expressions) are always
        wrapped in parentheses, so the result re-parses to an equal tree.
        """
        if node is None:
            return ""

        def _p(n: ASTNode) -> str:
            return PrettyPrinter.print_surface(n)

        def _operand(n: ASTNode) -> str:
            if isinstance(n, (BinaryOpNode, UnaryOpNode, FunctionExpressionNode)):
                return f"({_p(n)})"
            return _p(n)

        match node:
            case NumericLiteralNode(value=v):
                return _format_number(v)
            case IdentifierNode(name=n):
                return n
            case UnaryOpNode(operator=op, operand=operand):
                return f"{op}{_operand(operand)}"
            case BinaryOpNode(left=l, operator="=", right=r):
                return f"{_p(l)} = {_p(r)}"
            case BinaryOpNode(left=l, operator=op, right=r):
                return f"{_operand(l)} {op} {_operand(r)}"
            case VariableDeclarationNode(name=name, initializer=init):
                return f"let {name.name} = {_p(init)}"
            case FunctionExpressionNode(parameters=params, body=body):
                names = ", ".join(p.name for p in params)
                return f"({names}) => {_p(body)}"
            case FunctionCallNode(callee=callee, arguments=args):
                args_s = ", ".join(_p(a) for a in args)
                return f"{callee.name}({args_s})"
            case BlockNode(statements=stmts):
                if not stmts:
                    return "{}"
                return "{ " + "; ".join(_p(s) for s in stmts) + " }"
            case ProgramNode(statements=stmts):
                return ";\n".join(_p(s) for s in stmts)
            case _:
                s = PrettyPrinter.print_ast(node)
                return " ".join(line.strip() for line in s.splitlines())
