"""Graphviz visualization helpers for ASTs.

Provides `render_ast_dot(node)` which returns a `graphviz.Digraph` object
(not rendered). Optionally `write_and_render` can write the file to disk.

Layout: every AST node becomes one box labelled with its kind and key data
(operator, name or value). Edges point from parent to child and are labelled
with the field the child sits in (`left`, `right`, `arg[0]`, `stmt[1]`, ...).
"""

from typing import Iterator, Optional, Tuple
from graphviz import Digraph
from ast_nodes import *
from pretty_printer import _format_number


def _label(node: ASTNode) -> str:
    match node:
        case NumericLiteralNode(value=v):
            return f"NumericLiteral\n{_format_number(v)}"
        case IdentifierNode(name=n):
            return f"Identifier\n{n}"
        case UnaryOpNode(operator=op):
            return f"UnaryOp\n{op}"
        case BinaryOpNode(operator="="):
            return "Assignment\n="
        case BinaryOpNode(operator=op):
            return f"BinaryOp\n{op}"
        case VariableDeclarationNode(name=name):
            return f"VarDecl\n{name.name}"
        case FunctionExpressionNode(parameters=params):
            return "FunctionExpression\n(" + ", ".join(p.name for p in params) + ")"
        case FunctionCallNode(callee=callee):
            return f"FunctionCall\n{callee.name}"
        case BlockNode():
            return "Block"
        case ProgramNode():
            return "Program"
        case _:
            return type(node).__name__


def _children(node: ASTNode) -> Iterator[Tuple[str, ASTNode]]:
    match node:
        case UnaryOpNode(operand=operand):
            yield "operand", operand
        case BinaryOpNode(left=l, right=r):
            yield "left", l
            yield "right", r
        case VariableDeclarationNode(initializer=init):
            yield "init", init
        case FunctionExpressionNode(parameters=params, body=body):
            for i, p in enumerate(params):
                yield f"param[{i}]", p
            yield "body", body
        case FunctionCallNode(arguments=args):
            for i, a in enumerate(args):
                yield f"arg[{i}]", a
        case BlockNode(statements=stmts) | ProgramNode(statements=stmts):
            for i, s in enumerate(stmts):
                yield f"stmt[{i}]", s


def render_ast_dot(node: ASTNode, include_positions: bool = False) -> Digraph:
    """Return a graphviz.Digraph for the given AST.

    The caller may call `dot.source` to inspect the dot text, or call
    `dot.render(filename, format=...)` to write files (requires Graphviz installed).
    """
    dot = Digraph(format="svg")
    dot.attr("graph", rankdir="TB")
    dot.attr("node", shape="box", style="rounded", fontname="monospace")

    counter = 0

    def visit(n: ASTNode, parent: Optional[str], edge_label: str) -> None:
        nonlocal counter
        node_id = f"n{counter}"
        counter += 1

        label = _label(n)
        if include_positions:
            label += f"\n[{n.start}:{n.end}]"
        dot.node(node_id, label=label.replace("\n", "\\n"))
        if parent is not None:
            dot.edge(parent, node_id, label=edge_label)

        for child_label, child in _children(n):
            visit(child, node_id, child_label)

    visit(node, None, "")
    return dot


def write_and_render(
    node: ASTNode,
    out_path: str,
    fmt: str = "svg",
    include_positions: bool = False,
) -> str:
    """Write and render the AST to the given path (without extension).

    Example: write_and_render(ast, 'out/ast', fmt='png') will create out/ast.png
    (requires Graphviz). Returns the path of the rendered file."""
    dot = render_ast_dot(node, include_positions=include_positions)
    dot.format = fmt
    # Note: render will append extension automatically
    return dot.render(out_path, cleanup=True)
