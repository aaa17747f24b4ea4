"""Convert AST nodes into JSON-serializable structures.

This module provides `ast_to_json(node)` which returns a nested structure
of dicts/lists/primitives describing the AST node. It encodes the node type
and key fields, and the source range when `include_positions` is set.
Two trees that compare equal produce equal output with positions left out.
"""

import math
from typing import Any, Dict, Optional
from ast_nodes import *


def ast_to_json(node: Optional[ASTNode], include_positions: bool = False) -> Any:
    if node is None:
        return None

    def conv(child: Optional[ASTNode]) -> Any:
        return ast_to_json(child, include_positions)

    data: Dict[str, Any]
    match node:
        case NumericLiteralNode(value=v):
            # JSON has no inf or nan, so non-finite values are written as strings
            value = v if math.isfinite(v) else str(v)
            data = {"node_type": "NumericLiteral", "value": value}
        case IdentifierNode(name=n):
            data = {"node_type": "Identifier", "name": n}
        case UnaryOpNode(operator=op, operand=operand):
            data = {"node_type": "UnaryOp", "operator": op, "operand": conv(operand)}
        case BinaryOpNode(left=l, operator=op, right=r):
            data = {
                "node_type": "BinaryOp",
                "operator": op,
                "left": conv(l),
                "right": conv(r),
            }
        case VariableDeclarationNode(name=name, initializer=init):
            data = {
                "node_type": "VarDecl",
                "name": conv(name),
                "initializer": conv(init),
            }
        case FunctionExpressionNode(parameters=params, body=body):
            data = {
                "node_type": "FunctionExpression",
                "parameters": [conv(p) for p in params],
                "body": conv(body),
            }
        case FunctionCallNode(callee=callee, arguments=args):
            data = {
                "node_type": "FunctionCall",
                "callee": conv(callee),
                "arguments": [conv(a) for a in args],
            }
        case BlockNode(statements=stmts):
            data = {"node_type": "Block", "statements": [conv(s) for s in stmts]}
        case ProgramNode(statements=stmts):
            data = {"node_type": "Program", "statements": [conv(s) for s in stmts]}
        case _:
            raise TypeError(f"Cannot serialize node of type {type(node).__name__}")

    if include_positions:
        data["start"] = node.start
        data["end"] = node.end
    return data
