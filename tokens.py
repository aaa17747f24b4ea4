"""Token definitions for the lexer.

This module defines the `TokenType` enum for all token kinds recognized by
the lexer, a small `Token` dataclass that holds a token type, its raw lexeme
and its source range, and the `TokenStream` cursor the parser walks. Tokens
are the atomic units produced by the lexer and consumed by the parser.
"""

from __future__ import annotations
from enum import Enum, auto
from dataclasses import dataclass
from typing import Iterator, List


class TokenType(Enum):
    # Literals
    NUMBER = auto()
    IDENTIFIER = auto()

    # Keywords
    LET = auto()

    # Arithmetic operators
    PLUS = auto()
    MINUS = auto()
    STAR = auto()
    STAR_STAR = auto()
    SLASH = auto()
    PERCENT = auto()

    # Grouping
    LPAREN = auto()
    RPAREN = auto()
    LBRACE = auto()
    RBRACE = auto()

    # Punctuation
    ASSIGN = auto()
    COMMA = auto()
    SEMICOLON = auto()
    ARROW = auto()

    # Special
    EOF = auto()

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class Token:
    type: TokenType
    value: str = ""
    start: int = 0
    end: int = 0

    def __repr__(self) -> str:
        return f"Token({self.type}, {repr(self.value)}, {self.start}:{self.end})"

    @property
    def lexeme(self) -> str:
        if not self.value:
            return str(self.type)
        return self.value


class TokenStream:
    """Materialized token buffer with a mark/reset cursor.

    The buffer always ends with an EOF token. Reading past the end keeps
    returning that EOF token.
    """

    def __init__(self, tokens: List[Token]):
        if not tokens or tokens[-1].type != TokenType.EOF:
            end = tokens[-1].end if tokens else 0
            tokens = list(tokens) + [Token(TokenType.EOF, "", end, end)]
        self.tokens = tuple(tokens)
        self.pos = 0

    def __iter__(self) -> Iterator[Token]:
        return iter(self.tokens)

    def __len__(self) -> int:
        return len(self.tokens)

    def __getitem__(self, index: int) -> Token:
        return self.tokens[index]

    def __repr__(self) -> str:
        return f"TokenStream(pos={self.pos}, tokens={list(self.tokens)!r})"

    @property
    def current(self) -> Token:
        return self.peek()

    def peek(self, offset: int = 0) -> Token:
        """Return the token `offset` positions ahead without consuming it."""
        index = self.pos + offset
        if index < len(self.tokens):
            return self.tokens[index]
        return self.tokens[-1]

    def advance(self) -> Token:
        """Consume the current token and return it."""
        token = self.current
        if self.pos < len(self.tokens) - 1:
            self.pos += 1
        return token

    def at_end(self) -> bool:
        return self.current.type == TokenType.EOF

    def mark(self) -> int:
        """Save the cursor position for a later `reset`."""
        return self.pos

    def reset(self, mark: int) -> None:
        """Rewind the cursor to a position returned by `mark`."""
        if not 0 <= mark < len(self.tokens):
            raise ValueError(f"Invalid token stream mark: {mark}")
        self.pos = mark
