"""
Lexer for the lilt expression language.

Overview:
- This module implements a small hand-written lexical analyzer (scanner) that
    transforms an input source string into a `TokenStream` of `Token` objects
    defined in `tokens.py`.
- It recognizes the declaration keywords (`let` and its short form `v`),
    identifiers, numeric literals, single- and two-character operators
    (`**`, `=>`), punctuation (commas, semicolons, parentheses, braces) and
    skips whitespace, newlines included.

Examples:
    Input:  "let inc = (x) => x + 1"
    Tokens: [LET, IDENTIFIER('inc'), ASSIGN, LPAREN, IDENTIFIER('x'), RPAREN,
             ARROW, IDENTIFIER('x'), PLUS, NUMBER('1'), EOF]

Implementation notes:
- The lexer is a simple stateful scanner using `self.pos` and `self.current_char`.
- Two-character operators are checked first (`**`, `=>`) so they are never
    split into two tokens.
- Identifiers are scanned and then mapped to keywords using `self.keywords`.
- Numeric literals are digits with an optional single decimal point and
    optional fractional digits. There is no exponent notation and no sign;
    negative numbers come from the unary minus rule in the parser.
- Every token records its `start`/`end` character offsets.
"""

from __future__ import annotations
from typing import Optional, List
from tokens import Token, TokenType, TokenStream
from errors import LexicalError


class Lexer:
    def __init__(self, text: str):
        self.text = text
        self.pos = 0
        self.line = 1
        self.column = 1
        self.current_char = self.text[self.pos] if self.text else None

        self.keywords = {
            "let": TokenType.LET,
            "v": TokenType.LET,
        }

        self.single_char_tokens = {
            "+": TokenType.PLUS,
            "-": TokenType.MINUS,
            "*": TokenType.STAR,
            "/": TokenType.SLASH,
            "%": TokenType.PERCENT,
            "(": TokenType.LPAREN,
            ")": TokenType.RPAREN,
            "{": TokenType.LBRACE,
            "}": TokenType.RBRACE,
            ",": TokenType.COMMA,
            ";": TokenType.SEMICOLON,
            "=": TokenType.ASSIGN,
        }

    def error(self, message: str = "") -> LexicalError:
        msg = f"Lexical error at line {self.line}, column {self.column}: {message}"
        return LexicalError(msg, self.pos, self.current_char or "")

    def advance(self) -> None:
        """Advance to next character."""
        # Newlines reset the column and increment the line number.
        if self.current_char == "\n":
            self.line += 1
            self.column = 1
        else:
            self.column += 1

        self.pos += 1
        if self.pos < len(self.text):
            self.current_char = self.text[self.pos]
        else:
            self.current_char = None

    def peek_char(self) -> Optional[str]:
        """Look at next character without consuming it."""
        next_pos = self.pos + 1
        if next_pos < len(self.text):
            return self.text[next_pos]
        return None

    def skip_whitespace(self) -> None:
        """Skip whitespace characters."""
        while self.current_char is not None and self.current_char.isspace():
            self.advance()

    def number(self) -> Token:
        """Scan a numeric literal: digits, optionally `.` and more digits."""
        start = self.pos

        while self.current_char is not None and self.current_char in "0123456789":
            self.advance()

        if self.current_char == ".":
            self.advance()
            while self.current_char is not None and self.current_char in "0123456789":
                self.advance()

        return Token(TokenType.NUMBER, self.text[start : self.pos], start, self.pos)

    def identifier(self) -> Token:
        """Scan an identifier or keyword."""
        start = self.pos

        # Following characters can be ASCII letters, digits, or underscores.
        while self.current_char is not None and _is_ident_char(self.current_char):
            self.advance()

        name = self.text[start : self.pos]
        token_type = self.keywords.get(name, TokenType.IDENTIFIER)
        return Token(token_type, name, start, self.pos)

    def _two_char(self, token_type: TokenType) -> Token:
        start = self.pos
        self.advance()
        self.advance()
        return Token(token_type, self.text[start : self.pos], start, self.pos)

    def get_next_token(self) -> Token:
        """Lexical analyzer that returns tokens one at a time."""
        while self.current_char is not None:
            if self.current_char.isspace():
                self.skip_whitespace()
                continue

            # Two-character operators first so `**` is not lexed as `*` `*`.
            if self.current_char == "*" and self.peek_char() == "*":
                return self._two_char(TokenType.STAR_STAR)

            if self.current_char == "=" and self.peek_char() == ">":
                return self._two_char(TokenType.ARROW)

            token_type = self.single_char_tokens.get(self.current_char)
            if token_type is not None:
                start = self.pos
                char = self.current_char
                self.advance()
                return Token(token_type, char, start, self.pos)

            if self.current_char in "0123456789":
                return self.number()

            if _is_ident_start(self.current_char):
                return self.identifier()

            raise self.error(f"Unexpected character '{self.current_char}'")

        return Token(TokenType.EOF, "", self.pos, self.pos)

    def tokenize(self) -> TokenStream:
        """Return all tokens from the input string, ending with EOF."""
        tokens: List[Token] = []
        while True:
            token = self.get_next_token()
            tokens.append(token)
            if token.type == TokenType.EOF:
                break
        return TokenStream(tokens)


def _is_ident_start(char: str) -> bool:
    return char == "_" or ("a" <= char <= "z") or ("A" <= char <= "Z")


def _is_ident_char(char: str) -> bool:
    return _is_ident_start(char) or char in "0123456789"
