"""AST node definitions for the lilt expression language.

This module defines the concrete AST node dataclasses produced by the parser
and consumed by the interpreter and the debugging tools. Each node is a
frozen dataclass carrying the relevant information (an operator, child
nodes, names). The `NodeType` enum identifies node kinds and is the
discriminator the rest of the toolchain pattern-matches on.

Conventions:
- All AST node dataclasses inherit from `ASTNode` which records the node
    kind (`NodeType`) and the `start`/`end` source offsets. Offsets do not
    take part in equality, so two parses of the same text compare equal and
    so do `(1 + 2)` and `1 + 2`.
- Nodes are immutable and child sequences are tuples, so a tree can never
    be modified after the parser builds it.
- Every language construct is an expression. `ProgramNode` and `BlockNode`
    hold statement sequences; a statement is any expression node or a
    `VariableDeclarationNode`.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Tuple


class NodeType(Enum):
    NUMERIC_LITERAL = auto()
    IDENTIFIER = auto()
    UNARY_OP = auto()
    BINARY_OP = auto()
    VAR_DECL = auto()
    FUNC_EXPR = auto()
    BLOCK = auto()
    FUNC_CALL = auto()
    PROGRAM = auto()

    def __str__(self) -> str:
        return self.name


# Base AST Node
@dataclass(frozen=True)
class ASTNode:
    type: NodeType
    start: int = field(default=0, compare=False)
    end: int = field(default=0, compare=False)


# Expression Nodes
@dataclass(frozen=True)
class NumericLiteralNode(ASTNode):
    type: NodeType = NodeType.NUMERIC_LITERAL
    value: float = 0.0


@dataclass(frozen=True)
class IdentifierNode(ASTNode):
    type: NodeType = NodeType.IDENTIFIER
    name: str = ""


@dataclass(frozen=True)
class UnaryOpNode(ASTNode):
    type: NodeType = NodeType.UNARY_OP
    operator: str = "-"
    operand: ASTNode = field(default_factory=lambda: NumericLiteralNode())


@dataclass(frozen=True)
class BinaryOpNode(ASTNode):
    type: NodeType = NodeType.BINARY_OP
    left: ASTNode = field(default_factory=lambda: NumericLiteralNode())
    operator: str = ""
    right: ASTNode = field(default_factory=lambda: NumericLiteralNode())


@dataclass(frozen=True)
class VariableDeclarationNode(ASTNode):
    type: NodeType = NodeType.VAR_DECL
    name: IdentifierNode = field(default_factory=lambda: IdentifierNode())
    initializer: ASTNode = field(default_factory=lambda: NumericLiteralNode())


@dataclass(frozen=True)
class BlockNode(ASTNode):
    type: NodeType = NodeType.BLOCK
    statements: Tuple[ASTNode, ...] = ()


@dataclass(frozen=True)
class FunctionExpressionNode(ASTNode):
    type: NodeType = NodeType.FUNC_EXPR
    parameters: Tuple[IdentifierNode, ...] = ()
    # Either a single expression or a brace-delimited BlockNode
    body: ASTNode = field(default_factory=lambda: BlockNode())


@dataclass(frozen=True)
class FunctionCallNode(ASTNode):
    type: NodeType = NodeType.FUNC_CALL
    callee: IdentifierNode = field(default_factory=lambda: IdentifierNode())
    arguments: Tuple[ASTNode, ...] = ()


# Program Node
@dataclass(frozen=True)
class ProgramNode(ASTNode):
    type: NodeType = NodeType.PROGRAM
    statements: Tuple[ASTNode, ...] = ()

BINARY_OPERATORS = ("=", "+", "-", "*", "/", "%", "**")
