from lexer import Lexer
from parser import Parser
from ast_interpreter import interpret


def lex(text: str):
    """Return the token stream for the given source text."""
    return Lexer(text).tokenize()


def parse_text(text: str):
    """Convenience: lex+parse a whole program."""
    return Parser(lex(text)).parse_program()


def parse_expr(text: str):
    """Convenience: lex+parse a single expression."""
    return Parser(lex(text)).parse_single_expression()


def parse_stmt(text: str):
    """Convenience: lex+parse a single statement."""
    return Parser(lex(text)).parse_single_statement()


def run(text: str, env=None, **kwargs):
    """Parse and interpret a program, returning its value."""
    return interpret(parse_text(text), env, **kwargs)
