"""
Parser for the lilt expression language.

Overview and approach:
- This parser implements a small, hand-written recursive-descent parser for
    statements and a precedence-climbing parser for binary expressions. The
    operator table in `self.precedence` and `self.right_associative` encodes
    every binary operator's binding power and associativity, which keeps
    expression parsing concise.

Key points:
- Expression parsing:
    - `parse_primary()` recognizes numeric literals, identifiers (optionally
        followed by a call argument list), parenthesized expressions and
        function expressions.
    - `parse_unary()` handles prefix minus, which binds tighter than every
        binary operator: `-2 ** 2` is `(-2) ** 2`.
    - `parse_binary_expression()` implements the climbing loop: while the
        next operator binds at least as tightly as the current minimum, bind
        it and parse the right-hand side. Left-associative operators parse
        the right operand one level tighter so `a - b - c` folds to
        `(a - b) - c`; right-associative operators (`**` and `=`) parse it at
        the same level so `a ** b ** c` nests as `a ** (b ** c)`.
    - Only an identifier may appear on the left of `=`.

- Parentheses:
    - A `(` either opens a function header `(a, b) =>` or a grouped
        expression. The parser marks the token stream, tries the header
        (identifiers only, then `=>`) and on failure rewinds to parse exactly
        one parenthesized expression. There are no tuples, so `()` must be
        followed by `=>` and `(1, 2)` is an error.

- Statements:
    - A statement is a variable declaration (`let x = e` or `v x = e`) or an
        expression. Statements in a program or a brace body are separated by
        `;` or may simply follow one another; each statement is parsed
        greedily so every input has a single derivation. A program may end
        with `;`, a brace body may not, and empty statements are rejected.

Examples:
    - `let inc = (x) => x + 1; inc(1)`
    - `let main = (x) => { let y = inc(x); y ** 2 }`

Errors are reported by raising `ParseError` with the offending token's
offset, what was expected and what was found. The parser never recovers:
the first failure aborts the whole parse.
"""

from __future__ import annotations
from typing import Callable, List, Optional, Dict, Set, Tuple, Union
from tokens import Token, TokenType, TokenStream
from ast_nodes import *
from errors import ParseError


class Parser:
    def __init__(self, tokens: Union[TokenStream, List[Token]]):
        if not isinstance(tokens, TokenStream):
            tokens = TokenStream(list(tokens))
        self.tokens = tokens

        # Operator precedence table (higher = tighter binding)
        self.precedence: Dict[TokenType, int] = {
            TokenType.ASSIGN: 1,
            TokenType.PLUS: 2,
            TokenType.MINUS: 2,
            TokenType.STAR: 3,
            TokenType.SLASH: 3,
            TokenType.PERCENT: 3,
            TokenType.STAR_STAR: 4,
        }
        self.right_associative: Set[TokenType] = {
            TokenType.ASSIGN,
            TokenType.STAR_STAR,
        }

        # Tokens that may begin a statement
        self.statement_starts: Set[TokenType] = {
            TokenType.LET,
            TokenType.NUMBER,
            TokenType.IDENTIFIER,
            TokenType.MINUS,
            TokenType.LPAREN,
        }

    @property
    def current(self) -> Token:
        return self.tokens.current

    def advance(self) -> Token:
        """Consume the current token and return it."""
        return self.tokens.advance()

    def error(self, expected: str, token: Optional[Token] = None) -> ParseError:
        token = token or self.current
        found = "end of input" if token.type == TokenType.EOF else f"'{token.value}'"
        return ParseError(
            f"Expected {expected}, found {found} at offset {token.start}",
            token.start,
            token.end,
            expected=expected,
            found=found,
        )

    def expect(self, expected_type: TokenType, expected: Optional[str] = None) -> Token:
        """Expect and consume token of given type."""
        if self.current.type == expected_type:
            return self.advance()
        raise self.error(expected or str(expected_type))

    def match(self, token_type: TokenType) -> bool:
        """Check if current token matches type, consume if true."""
        if self.current.type == token_type:
            self.advance()
            return True
        return False

    def parse_primary(self) -> ASTNode:
        """Parse primary expressions (literals, identifiers, calls, parentheses)."""
        token = self.current

        match token.type:
            case TokenType.NUMBER:
                self.advance()
                return NumericLiteralNode(
                    value=float(token.value), start=token.start, end=token.end
                )

            case TokenType.IDENTIFIER:
                self.advance()
                ident = IdentifierNode(name=token.value, start=token.start, end=token.end)
                if self.current.type == TokenType.LPAREN:
                    return self.parse_call(ident)
                return ident

            case TokenType.LPAREN:
                return self.parse_parenthesized()

            case _:
                raise self.error("expression")

    def parse_call(self, callee: IdentifierNode) -> FunctionCallNode:
        """Parse a call argument list: '(' (expr (',' expr)*)? ')'"""
        self.expect(TokenType.LPAREN, "'('")
        args: List[ASTNode] = []

        if self.current.type != TokenType.RPAREN:
            args.append(self.parse_expression())
            while self.match(TokenType.COMMA):
                args.append(self.parse_expression())

        rparen = self.expect(TokenType.RPAREN, "')'")
        return FunctionCallNode(
            callee=callee, arguments=tuple(args), start=callee.start, end=rparen.end
        )

    def try_parse_function_header(self) -> Optional[Tuple[IdentifierNode, ...]]:
        """Parse '(' (ident (',' ident)*)? ')' '=>' or return None.

        Leaves the cursor wherever the attempt stopped; callers rewind on None.
        """
        if not self.match(TokenType.LPAREN):
            return None

        params: List[IdentifierNode] = []
        if self.current.type == TokenType.IDENTIFIER:
            while True:
                if self.current.type != TokenType.IDENTIFIER:
                    return None
                token = self.advance()
                params.append(
                    IdentifierNode(name=token.value, start=token.start, end=token.end)
                )
                if not self.match(TokenType.COMMA):
                    break

        if not self.match(TokenType.RPAREN):
            return None
        if not self.match(TokenType.ARROW):
            return None
        return tuple(params)

    def parse_parenthesized(self) -> ASTNode:
        """Parse a function expression or a single parenthesized expression."""
        lparen = self.current
        mark = self.tokens.mark()

        params = self.try_parse_function_header()
        if params is not None:
            seen: Set[str] = set()
            for param in params:
                if param.name in seen:
                    raise ParseError(
                        f"Duplicate parameter '{param.name}' at offset {param.start}",
                        param.start,
                        param.end,
                        expected="unique parameter name",
                        found=f"'{param.name}'",
                    )
                seen.add(param.name)
            body = self.parse_function_body()
            return FunctionExpressionNode(
                parameters=params, body=body, start=lparen.start, end=body.end
            )

        # Not a function header: rewind and parse exactly one grouped expression
        self.tokens.reset(mark)
        self.expect(TokenType.LPAREN, "'('")
        expr = self.parse_expression()
        self.expect(TokenType.RPAREN, "')'")
        return expr

    def parse_function_body(self) -> ASTNode:
        """Parse a function body: a brace block or a single expression."""
        if self.current.type == TokenType.LBRACE:
            return self.parse_block()
        return self.parse_expression()

    def parse_block(self) -> BlockNode:
        """Parse a block of statements: '{' statements? '}'"""
        lbrace = self.expect(TokenType.LBRACE, "'{'")
        statements = self.parse_statement_sequence(TokenType.RBRACE, allow_trailing=False)
        rbrace = self.expect(TokenType.RBRACE, "'}'")
        return BlockNode(statements=tuple(statements), start=lbrace.start, end=rbrace.end)

    def parse_unary(self) -> ASTNode:
        """Parse prefix minus or fall through to a primary expression."""
        if self.current.type == TokenType.MINUS:
            minus = self.advance()
            operand = self.parse_unary()
            return UnaryOpNode(
                operator="-", operand=operand, start=minus.start, end=operand.end
            )
        return self.parse_primary()

    def parse_binary_expression(self, min_precedence: int = 1) -> ASTNode:
        """Parse binary expressions by precedence climbing."""
        left = self.parse_unary()

        while True:
            token = self.current
            precedence = self.precedence.get(token.type)
            if precedence is None or precedence < min_precedence:
                break

            # The target must be the bare identifier token, not a group like `(a)`
            previous = self.tokens[self.tokens.pos - 1]
            if token.type == TokenType.ASSIGN and not (
                isinstance(left, IdentifierNode)
                and previous.type == TokenType.IDENTIFIER
                and previous.end == left.end
            ):
                raise ParseError(
                    f"Can only assign to identifiers at offset {token.start}",
                    token.start,
                    token.end,
                    expected="identifier before '='",
                    found="'='",
                )

            self.advance()
            if token.type in self.right_associative:
                right = self.parse_binary_expression(precedence)
            else:
                right = self.parse_binary_expression(precedence + 1)

            left = BinaryOpNode(
                left=left,
                operator=token.value,
                right=right,
                start=left.start,
                end=right.end,
            )

        return left

    def parse_expression(self) -> ASTNode:
        """Parse an expression."""
        return self.parse_binary_expression()

    def parse_variable_declaration(self) -> VariableDeclarationNode:
        """Parse variable declaration: ('let' | 'v') identifier '=' expression"""
        keyword = self.expect(TokenType.LET, "'let'")
        name_token = self.expect(TokenType.IDENTIFIER, "variable name")
        self.expect(TokenType.ASSIGN, "'='")
        initializer = self.parse_expression()

        return VariableDeclarationNode(
            name=IdentifierNode(
                name=name_token.value, start=name_token.start, end=name_token.end
            ),
            initializer=initializer,
            start=keyword.start,
            end=initializer.end,
        )

    def parse_statement(self) -> ASTNode:
        """Parse a statement."""
        if self.current.type == TokenType.LET:
            return self.parse_variable_declaration()
        return self.parse_expression()

    def parse_statement_sequence(
        self, terminator: TokenType, allow_trailing: bool
    ) -> List[ASTNode]:
        """Parse statements up to (not including) `terminator`."""
        statements: List[ASTNode] = []

        while self.current.type != terminator:
            statements.append(self.parse_statement())

            if self.match(TokenType.SEMICOLON):
                if self.current.type == terminator and not allow_trailing:
                    raise self.error("statement")
            elif (
                self.current.type != terminator
                and self.current.type not in self.statement_starts
            ):
                closing = "end of input" if terminator == TokenType.EOF else "'}'"
                raise self.error(f"';' or {closing}")

        return statements

    def parse_program(self) -> ProgramNode:
        """Parse a complete program (sequence of statements) up to EOF."""

        def program() -> ProgramNode:
            statements = self.parse_statement_sequence(TokenType.EOF, allow_trailing=True)
            start = statements[0].start if statements else 0
            end = statements[-1].end if statements else 0
            return ProgramNode(statements=tuple(statements), start=start, end=end)

        return self._parse_to_end(program)

    def parse_single_expression(self) -> ASTNode:
        """Parse one expression that must span the whole token stream."""
        return self._parse_to_end(self.parse_expression)

    def parse_single_statement(self) -> ASTNode:
        """Parse one statement that must span the whole token stream."""
        return self._parse_to_end(self.parse_statement)

    def _parse_to_end(self, rule: Callable[[], ASTNode]) -> ASTNode:
        try:
            node = rule()
        except RecursionError:
            token = self.current
            raise ParseError(
                f"Expression nested too deeply at offset {token.start}",
                token.start,
                token.end,
                expected="shallower nesting",
                found=token.lexeme,
            ) from None
        if self.current.type != TokenType.EOF:
            raise self.error("end of input")
        return node
