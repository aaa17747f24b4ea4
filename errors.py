"""Error types shared by the lexer, parser and interpreter.

Every error carries a message, a source range (`start`/`end` character
offsets) and an `ErrorKind` tag so that callers can render diagnostics
without re-deriving context. Each pipeline stage raises exactly one family:

- `LexicalError` from the lexer,
- `ParseError` from the parser,
- `EvaluationError` (and its subclasses) from the interpreter.
"""

from __future__ import annotations
from enum import Enum, auto
from typing import Optional


class ErrorKind(Enum):
    LEXICAL = auto()
    SYNTAX = auto()
    RUNTIME = auto()

    def __str__(self) -> str:
        return self.name.lower()


class LanguageError(Exception):
    kind: ErrorKind

    def __init__(self, message: str, start: int = 0, end: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.start = start
        self.end = start if end is None else end

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}({self.message!r}, start={self.start}, end={self.end})"
        )


class LexicalError(LanguageError):
    kind = ErrorKind.LEXICAL

    def __init__(self, message: str, offset: int, character: str):
        super().__init__(message, offset, offset + len(character))
        self.offset = offset
        self.character = character


class ParseError(LanguageError):
    kind = ErrorKind.SYNTAX

    def __init__(
        self,
        message: str,
        offset: int,
        end: Optional[int] = None,
        expected: str = "",
        found: str = "",
    ):
        super().__init__(message, offset, end)
        self.offset = offset
        self.expected = expected
        self.found = found


class EvaluationError(LanguageError, RuntimeError):
    kind = ErrorKind.RUNTIME


class UnresolvedIdentifierError(EvaluationError):
    def __init__(self, name: str, start: int = 0, end: Optional[int] = None):
        super().__init__(f"Unresolved identifier '{name}'", start, end)
        self.name = name


class NotCallableError(EvaluationError):
    def __init__(self, name: str, start: int = 0, end: Optional[int] = None):
        super().__init__(f"'{name}' is not callable", start, end)
        self.name = name


class ArityError(EvaluationError):
    def __init__(
        self,
        name: str,
        expected: int,
        actual: int,
        start: int = 0,
        end: Optional[int] = None,
    ):
        super().__init__(
            f"'{name}' expects {expected} argument(s), got {actual} "
            f"(expected={expected}, actual={actual})",
            start,
            end,
        )
        self.name = name
        self.expected = expected
        self.actual = actual


class InvalidOperandError(EvaluationError):
    pass


class StackExhaustedError(EvaluationError):
    pass
