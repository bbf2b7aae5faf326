"""
Monkey Language Parser

Parses the Monkey token stream into an abstract syntax tree (AST).

Statements are parsed by recursive descent on the current token; expressions
are parsed with precedence climbing (Pratt parsing). Every token kind that can
start an expression has a prefix parse rule, every binary operator has an infix
parse rule plus a fixed precedence from `monkey_constants.precedences`.

Supported Constructs
--------------------
- Statements:
    * `let <ident> = <expr>;`
    * `return <expr>;`
    * expression statements (`<expr>;`), trailing semicolons optional
- Expressions:
    * identifiers, integer and boolean literals
    * prefix `!`, `-` and `+`
    * infix `+ - * / < > == !=`, left-associative
    * grouping with `( )`
    * `if (<cond>) { ... } else { ... }`
    * function literals `fn(a, b) { ... }` and calls `f(1, 2)`

Parser Behavior
---------------
- Pulls tokens lazily from the Lexer with one token of lookahead
  (`cur_token` plus `peek_token`).
- Never raises on malformed input. Errors are accumulated as
  `ParseDiagnostic` records and parsing resumes at the next statement
  boundary, so a single pass reports as many problems as possible.

Entry Points
------------
- `Parser.parse_program()`: Parse a full program from a Lexer.
- `parse()`: Lex and parse source text in one call, returning the program
  together with its error messages.
"""

from __future__ import annotations

from collections.abc import Callable

from monkey.monkey_ast import (
    BlockStatement,
    BooleanLiteral,
    CallExpression,
    Expression,
    ExpressionStatement,
    FunctionLiteral,
    Identifier,
    IfExpression,
    InfixExpression,
    IntegerLiteral,
    LetStatement,
    PrefixExpression,
    Program,
    ReturnStatement,
    Statement,
)
from monkey.monkey_constants import Precedence, TokenKind, precedences
from monkey.monkey_lexer import CharacterStream, Lexer, Token

PrefixParseFn = Callable[[], Expression | None]
InfixParseFn = Callable[[Expression], Expression | None]

INT64_MAX = 2**63 - 1


class ParseDiagnostic:
    """A syntax error recorded by the parser.

    Attributes:
        message (str): Human-readable description, e.g.
            "expected next token to be ASSIGN, got INT instead".
        line (int): Line of the offending token.
        col (int): Column of the offending token.
    """

    def __init__(self, message: str, line: int = 0, col: int = 0) -> None:
        self.message = message
        self.line = line
        self.col = col

    def __str__(self) -> str:
        return self.message

    def __repr__(self) -> str:
        return f"ParseDiagnostic({self.message!r}, line={self.line}, col={self.col})"

    def format(self) -> str:
        return f"line {self.line}, col {self.col}: {self.message}"


class Parser:
    """
    Monkey Parser Class

    Turns the tokens produced by a `Lexer` into a `Program`.

    Attributes
    ----------
    lexer : Lexer
        Token source. Tokens are pulled on demand, never buffered beyond the peek token.
    cur_token : Token
        Token under examination.
    peek_token : Token
        The token right after `cur_token`.
    diagnostics : list[ParseDiagnostic]
        Errors recorded so far, in the order they were found.
    prefix_parse_fns : dict[TokenKind, PrefixParseFn]
        Prefix rule for every token kind that can start an expression.
    infix_parse_fns : dict[TokenKind, InfixParseFn]
        Infix rule for every token kind that can continue an expression.
    precedences : dict[TokenKind, Precedence]
        Binding power of every infix token kind.
    """

    def __init__(self, lexer: Lexer) -> None:
        self.lexer = lexer
        self.diagnostics: list[ParseDiagnostic] = []

        self.cur_token: Token = Token(TokenKind.EOF, "")
        self.peek_token: Token = Token(TokenKind.EOF, "")

        self.precedences: dict[TokenKind, Precedence] = dict(precedences)
        self.prefix_parse_fns: dict[TokenKind, PrefixParseFn] = {}
        self.infix_parse_fns: dict[TokenKind, InfixParseFn] = {}

        self.register_prefix(TokenKind.IDENT, self.parse_identifier)
        self.register_prefix(TokenKind.INT, self.parse_integer_literal)
        self.register_prefix(TokenKind.TRUE, self.parse_boolean)
        self.register_prefix(TokenKind.FALSE, self.parse_boolean)
        self.register_prefix(TokenKind.BANG, self.parse_prefix_expression)
        self.register_prefix(TokenKind.MINUS, self.parse_prefix_expression)
        self.register_prefix(TokenKind.PLUS, self.parse_prefix_expression)
        self.register_prefix(TokenKind.LPAREN, self.parse_grouped_expression)
        self.register_prefix(TokenKind.IF, self.parse_if_expression)
        self.register_prefix(TokenKind.FUNCTION, self.parse_function_literal)

        for kind in (
            TokenKind.PLUS,
            TokenKind.MINUS,
            TokenKind.ASTERISK,
            TokenKind.SLASH,
            TokenKind.EQ,
            TokenKind.NOT_EQ,
            TokenKind.LT,
            TokenKind.GT,
        ):
            self.register_infix(kind, self.parse_infix_expression)
        self.register_infix(TokenKind.LPAREN, self.parse_call_expression)

        # Fill cur_token and peek_token
        self.advance()
        self.advance()

    # ------------------------------------------------------------------
    # Rule registration
    # ------------------------------------------------------------------

    def register_prefix(self, kind: TokenKind, fn: PrefixParseFn) -> None:
        self.prefix_parse_fns[kind] = fn

    def register_infix(
        self, kind: TokenKind, fn: InfixParseFn, precedence: Precedence | None = None
    ) -> None:
        """Registers an infix rule; `precedence` adds or overrides the binding power of `kind`."""
        self.infix_parse_fns[kind] = fn
        if precedence is not None:
            self.precedences[kind] = precedence

    # ------------------------------------------------------------------
    # Token cursor
    # ------------------------------------------------------------------

    def advance(self) -> Token:
        self.cur_token = self.peek_token
        self.peek_token = self.lexer.next_token()
        return self.cur_token

    def cur_token_is(self, *kinds: TokenKind) -> bool:
        return self.cur_token.kind in kinds

    def peek_token_is(self, *kinds: TokenKind) -> bool:
        return self.peek_token.kind in kinds

    def expect_peek(self, kind: TokenKind) -> bool:
        """Advances if the peek token is `kind`, otherwise records an error and stays put."""
        if self.peek_token_is(kind):
            self.advance()
            return True
        self.peek_error(kind)
        return False

    def peek_precedence(self) -> Precedence:
        return self.precedences.get(self.peek_token.kind, Precedence.LOWEST)

    def cur_precedence(self) -> Precedence:
        return self.precedences.get(self.cur_token.kind, Precedence.LOWEST)

    # ------------------------------------------------------------------
    # Errors
    # ------------------------------------------------------------------

    @property
    def errors(self) -> list[str]:
        return [d.message for d in self.diagnostics]

    def error(self, message: str, tok: Token) -> None:
        self.diagnostics.append(ParseDiagnostic(message, tok.line, tok.col))

    def peek_error(self, kind: TokenKind) -> None:
        self.error(
            f"expected next token to be {kind.value}, got {self.peek_token.kind.value} instead",
            self.peek_token,
        )

    def no_prefix_parse_fn_error(self, kind: TokenKind) -> None:
        self.error(f"no prefix parse function for {kind.value} found", self.cur_token)

    def failed_on_cur_token(self) -> bool:
        """True if the latest diagnostic points at `cur_token` itself."""
        if not self.diagnostics:
            return False
        last = self.diagnostics[-1]
        return (last.line, last.col) == self.cur_token.position

    def synchronize(self) -> None:
        """Skips the rest of a statement that failed to parse.

        Stops on the statement's `;`, or right before a closing `}`, a `let`
        or `return` keyword, or the end of input, so the caller's next
        `advance()` lands on the start of the following statement.
        """
        while not self.cur_token_is(TokenKind.SEMICOLON, TokenKind.EOF):
            if self.peek_token_is(
                TokenKind.RBRACE, TokenKind.EOF, TokenKind.LET, TokenKind.RETURN
            ):
                return
            self.advance()

    # ------------------------------------------------------------------
    # Statements
    # ------------------------------------------------------------------

    def parse_program(self) -> Program:
        """Parse statements until EOF and return the resulting Program."""
        statements: list[Statement] = []
        while not self.cur_token_is(TokenKind.EOF):
            try:
                stmt = self.parse_statement()
            except RecursionError:
                self.error("expression nested too deeply", self.cur_token)
                break
            if stmt is not None:
                statements.append(stmt)
            else:
                self.synchronize()
            self.advance()
        return Program(statements)

    def parse_statement(self) -> Statement | None:
        if self.cur_token_is(TokenKind.LET):
            return self.parse_let_statement()
        if self.cur_token_is(TokenKind.RETURN):
            return self.parse_return_statement()
        return self.parse_expression_statement()

    def parse_let_statement(self) -> LetStatement | None:
        tok = self.cur_token

        if not self.expect_peek(TokenKind.IDENT):
            return None
        name = Identifier(self.cur_token.literal, self.cur_token.line, self.cur_token.col)

        if not self.expect_peek(TokenKind.ASSIGN):
            return None
        self.advance()

        value = self.parse_expression(Precedence.LOWEST)
        if value is None:
            return None

        if self.peek_token_is(TokenKind.SEMICOLON):
            self.advance()
        return LetStatement(name, value, tok.line, tok.col)

    def parse_return_statement(self) -> ReturnStatement | None:
        tok = self.cur_token
        self.advance()

        value = self.parse_expression(Precedence.LOWEST)
        if value is None:
            return None

        if self.peek_token_is(TokenKind.SEMICOLON):
            self.advance()
        return ReturnStatement(value, tok.line, tok.col)

    def parse_expression_statement(self) -> ExpressionStatement | None:
        tok = self.cur_token
        value = self.parse_expression(Precedence.LOWEST)
        if value is None:
            return None

        # optional so that bare expressions such as `5 + 5` parse
        if self.peek_token_is(TokenKind.SEMICOLON):
            self.advance()
        return ExpressionStatement(value, tok.line, tok.col)

    def parse_block_statement(self) -> BlockStatement | None:
        """Parse a `{}`-enclosed statement sequence; `cur_token` must be the `{`."""
        tok = self.cur_token
        statements: list[Statement] = []
        self.advance()

        while not self.cur_token_is(TokenKind.RBRACE):
            if self.cur_token_is(TokenKind.EOF):
                self.error(
                    f"expected next token to be {TokenKind.RBRACE.value}, got {TokenKind.EOF.value} instead",
                    self.cur_token,
                )
                return None
            stmt = self.parse_statement()
            if stmt is not None:
                statements.append(stmt)
            elif self.cur_token_is(TokenKind.RBRACE) and self.failed_on_cur_token():
                # the statement broke on this block's own closing brace
                break
            else:
                self.synchronize()
            self.advance()

        return BlockStatement(statements, tok.line, tok.col)

    # ------------------------------------------------------------------
    # Expressions
    # ------------------------------------------------------------------

    def parse_expression(self, precedence: Precedence) -> Expression | None:
        """Precedence climbing over the prefix/infix rule tables.

        Keeps folding infix operators into `left` while the next operator
        binds tighter than `precedence`. Operators of equal precedence stop
        the loop, which makes them associate to the left.
        """
        prefix = self.prefix_parse_fns.get(self.cur_token.kind)
        if prefix is None:
            self.no_prefix_parse_fn_error(self.cur_token.kind)
            return None

        left = prefix()
        if left is None:
            return None

        while (
            not self.peek_token_is(TokenKind.SEMICOLON)
            and precedence < self.peek_precedence()
        ):
            infix = self.infix_parse_fns.get(self.peek_token.kind)
            if infix is None:
                return left  # pragma: no cover
            self.advance()
            combined = infix(left)
            if combined is None:
                return None
            left = combined

        return left

    def parse_identifier(self) -> Identifier:
        tok = self.cur_token
        return Identifier(tok.literal, tok.line, tok.col)

    def parse_integer_literal(self) -> Expression | None:
        tok = self.cur_token
        # values must fit a signed 64-bit integer; leading zeros don't count
        digits = tok.literal.lstrip("0") or "0"
        if len(digits) > 19 or int(digits) > INT64_MAX:
            self.error(f"could not parse {tok.literal} as integer", tok)
            return None
        return IntegerLiteral(int(digits), tok.line, tok.col)

    def parse_boolean(self) -> Expression:
        tok = self.cur_token
        return BooleanLiteral(self.cur_token_is(TokenKind.TRUE), tok.line, tok.col)

    def parse_prefix_expression(self) -> Expression | None:
        tok = self.cur_token
        self.advance()

        operand = self.parse_expression(Precedence.PREFIX)
        if operand is None:
            return None
        return PrefixExpression(tok.literal, operand, tok.line, tok.col)

    def parse_infix_expression(self, left: Expression) -> Expression | None:
        tok = self.cur_token
        precedence = self.cur_precedence()
        self.advance()

        right = self.parse_expression(precedence)
        if right is None:
            return None
        return InfixExpression(tok.literal, left, right, tok.line, tok.col)

    def parse_grouped_expression(self) -> Expression | None:
        self.advance()

        expr = self.parse_expression(Precedence.LOWEST)
        if expr is None or not self.expect_peek(TokenKind.RPAREN):
            return None
        return expr

    def parse_if_expression(self) -> Expression | None:
        """Parse `if (<cond>) { ... }` with an optional `else { ... }` branch."""
        tok = self.cur_token

        if not self.expect_peek(TokenKind.LPAREN):
            return None
        self.advance()

        condition = self.parse_expression(Precedence.LOWEST)
        if condition is None:
            return None

        if not self.expect_peek(TokenKind.RPAREN):
            return None
        if not self.expect_peek(TokenKind.LBRACE):
            return None

        consequence = self.parse_block_statement()
        if consequence is None:
            return None

        alternative = None
        if self.peek_token_is(TokenKind.ELSE):
            self.advance()
            if not self.expect_peek(TokenKind.LBRACE):
                return None
            alternative = self.parse_block_statement()
            if alternative is None:
                return None

        return IfExpression(condition, consequence, alternative, tok.line, tok.col)

    def parse_function_literal(self) -> Expression | None:
        tok = self.cur_token

        if not self.expect_peek(TokenKind.LPAREN):
            return None

        parameters = self.parse_function_parameters()
        if parameters is None:
            return None

        if not self.expect_peek(TokenKind.LBRACE):
            return None

        body = self.parse_block_statement()
        if body is None:
            return None
        return FunctionLiteral(parameters, body, tok.line, tok.col)

    def parse_function_parameters(self) -> list[Identifier] | None:
        """Parse a comma-separated identifier list; `cur_token` must be the `(`."""
        identifiers: list[Identifier] = []

        if self.peek_token_is(TokenKind.RPAREN):
            self.advance()
            return identifiers

        if not self.expect_peek(TokenKind.IDENT):
            return None
        identifiers.append(self.parse_identifier())

        while self.peek_token_is(TokenKind.COMMA):
            self.advance()
            if not self.expect_peek(TokenKind.IDENT):
                return None
            identifiers.append(self.parse_identifier())

        if not self.expect_peek(TokenKind.RPAREN):
            return None
        return identifiers

    def parse_call_expression(self, function: Expression) -> Expression | None:
        tok = self.cur_token
        arguments = self.parse_expression_list(TokenKind.RPAREN)
        if arguments is None:
            return None
        return CallExpression(function, arguments, tok.line, tok.col)

    def parse_expression_list(self, end: TokenKind) -> list[Expression] | None:
        """Parse comma-separated expressions up to and including `end`."""
        items: list[Expression] = []

        if self.peek_token_is(end):
            self.advance()
            return items

        self.advance()
        item = self.parse_expression(Precedence.LOWEST)
        if item is None:
            return None
        items.append(item)

        while self.peek_token_is(TokenKind.COMMA):
            self.advance()
            self.advance()
            item = self.parse_expression(Precedence.LOWEST)
            if item is None:
                return None
            items.append(item)

        if not self.expect_peek(end):
            return None
        return items


def parse(source: str) -> tuple[Program, list[str]]:
    """Lex and parse `source` with a fresh Lexer/Parser pair.

    Returns:
        tuple[Program, list[str]]: The parsed program and the error messages,
        in the order they were recorded. A non-empty error list means the
        program is incomplete and should not be evaluated.
    """
    parser = Parser(Lexer(CharacterStream(source)))
    program = parser.parse_program()
    return program, parser.errors


__all__ = ["ParseDiagnostic", "Parser", "parse"]
