"""Entry points into the lilt pipeline.

These functions are what embedders, test harnesses and any outer tooling
call: lexing, the three parser variants and the interpreter. Each stage
either returns its complete result or raises one of the categorized errors
from `errors.py`; nothing here prints or configures logging.
"""

from __future__ import annotations
import logging
from typing import Optional
from lexer import Lexer
from tokens import TokenStream
from ast_nodes import ASTNode, ProgramNode
from parser import Parser
from environment import Environment
from ast_interpreter import Value, interpret

logger = logging.getLogger(__name__)

__all__ = [
    "tokenize",
    "parse_program",
    "parse_expression",
    "parse_statement",
    "interpret",
    "evaluate",
]


def tokenize(source: str) -> TokenStream:
    """Tokenize input string."""
    tokens = Lexer(source).tokenize()
    logger.debug("lexed %d token(s)", len(tokens))
    return tokens


def parse_program(source: str) -> ProgramNode:
    """Parse a whole program: statements separated by `;` or juxtaposed."""
    return Parser(tokenize(source)).parse_program()


def parse_expression(source: str) -> ASTNode:
    """Parse source that must be exactly one expression."""
    return Parser(tokenize(source)).parse_single_expression()


def parse_statement(source: str) -> ASTNode:
    """Parse source that must be exactly one statement."""
    return Parser(tokenize(source)).parse_single_statement()


def evaluate(
    source: str,
    *,
    env: Optional[Environment] = None,
    max_call_depth: Optional[int] = None,
) -> Value:
    """Parse and interpret a program, returning its last statement's value."""
    program = parse_program(source)
    logger.debug("parsed program with %d statement(s)", len(program.statements))
    return interpret(program, env, max_call_depth=max_call_depth)
