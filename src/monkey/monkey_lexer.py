"""
Lexical analyzer for the Monkey programming language.

This module turns raw source text into a stream of tokens, one token per call:

Classes:
    CharacterStream: Stream abstraction for reading characters with line/column tracking.
    Token: A single classified lexeme with its kind, literal text and source location.
    Lexer: Converts a CharacterStream into a sequence of tokens on demand.

Features:
    - Skips whitespace (space, tab, newline, carriage return)
    - Recognizes:
        * Identifiers and keywords (`fn`, `let`, `true`, `false`, `if`, `else`, `return`)
        * Decimal integer literals
        * Two-character operators (`==`, `!=`) ahead of their one-character forms
        * Single-character operators and delimiters
    - Never raises on bad input: unknown characters become ILLEGAL tokens

Example:
    >>> lexer = Lexer(CharacterStream("let x = 5;"))
    >>> lexer.next_token()
    Token(LET, 'let')

Exports:
    - CharacterStream
    - Token
    - Lexer
    - tokenize
    - token_hashmap
"""

from typing import Any

from monkey.monkey_constants import (
    WHITESPACE,
    TokenKind,
    keywords,
    operator_tokens,
    token_hashmap,
)


class CharacterStream:
    """
    A utility for reading characters from a string source with line and column tracking.

    Attributes:
        source (str): The input source string.
        position (int): Current index in the source.
        line (int): Current line number (1-indexed).
        column (int): Current column number (1-indexed).
    """

    def __init__(self, source: str, position: int = 0, line: int = 1, column: int = 1):
        self.source = source
        self.position = position
        self.line = line
        self.column = column

    def next(self) -> str:
        """
        Consumes and returns the next character in the stream.

        Raises:
            EOFError: If reading past the end of the source.
        """
        if self.position >= len(self.source):
            raise EOFError(
                f"CharacterStreamError: Attempted to read past end of source at position=<{self.position}>, line=<{self.line}>"
            )
        char = self.source[self.position]
        if char == "\n":
            self.line += 1
            self.column = 1
        else:
            self.column += 1
        self.position += 1
        return char

    def peek(self, offset: int = 0) -> str:
        """Returns the character `offset` places ahead without advancing, or "" if out of bounds."""
        index = self.position + offset
        if index < 0 or index >= len(self.source):
            return ""
        return self.source[index]

    def current(self) -> str | None:
        return self.source[self.position] if self.position < len(self.source) else None

    def end_of_file(self) -> bool:
        return self.position >= len(self.source)


class Token:
    """Represents a single lexical token.

    Attributes:
        kind (TokenKind): The lexical category.
        literal (str): The exact lexeme the token was scanned from ("" for EOF).
        line (int): The 1-based line number where the token starts.
        col (int): The 1-based column number where the token starts.
    """

    __slots__ = ("kind", "literal", "line", "col")

    kind: TokenKind
    literal: str
    line: int
    col: int

    def __init__(self, kind: TokenKind, literal: str, line: int = 0, col: int = 0):
        object.__setattr__(self, "kind", kind)
        object.__setattr__(self, "literal", literal)
        object.__setattr__(self, "line", line)
        object.__setattr__(self, "col", col)

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError("Token is immutable")

    def __delattr__(self, name: str) -> None:
        raise AttributeError("Token is immutable")

    @property
    def position(self) -> tuple[int, int]:
        return (self.line, self.col)

    def __repr__(self) -> str:
        return f"Token({self.kind.value}, {self.literal!r})"

    def __eq__(self, other: Any) -> bool:
        return (
            isinstance(other, Token)
            and self.kind == other.kind
            and self.literal == other.literal
            and self.line == other.line
            and self.col == other.col
        )

    def __hash__(self) -> int:
        return hash((self.kind, self.literal, self.line, self.col))


def is_letter(ch: str) -> bool:
    return ch.isalpha() or ch == "_"


def is_digit(ch: str) -> bool:
    return "0" <= ch <= "9"


class Lexer:
    """Lexical analyzer for the Monkey language.

    The Lexer pulls characters from a CharacterStream and produces one Token
    per `next_token()` call. It has no knowledge of the grammar.

    Attributes:
        stream (CharacterStream): The source stream to tokenize.
    """

    def __init__(self, stream: CharacterStream) -> None:
        self.stream = stream

    def peek(self, offset: int = 0) -> str:
        """Returns the current character (offset 0) or a lookahead character, "" at EOF."""
        return self.stream.peek(offset)

    def advance(self) -> str:
        return self.stream.next()

    def skip_whitespace(self) -> None:
        while not self.stream.end_of_file() and self.peek() in WHITESPACE:
            self.advance()

    def read_identifier(self) -> str:
        ident = ""
        while not self.stream.end_of_file() and (
            is_letter(self.peek()) or is_digit(self.peek())
        ):
            ident += self.advance()
        return ident

    def read_number(self) -> str:
        num = ""
        while not self.stream.end_of_file() and is_digit(self.peek()):
            num += self.advance()
        return num

    def match_operator(self) -> tuple[TokenKind, str] | None:
        """Matches a two-character operator first, then a single-character one.

        Returns:
            tuple[TokenKind, str] | None: The kind and lexeme, or None if the
            current character starts no operator.
        """
        pair = self.peek() + self.peek(1)
        if len(pair) == 2 and pair in operator_tokens:
            self.advance()
            self.advance()
            return operator_tokens[pair], pair

        ch = self.peek()
        if ch in operator_tokens:
            self.advance()
            return operator_tokens[ch], ch

        return None

    def next_token(self) -> Token:
        """Consumes and returns the next Token from the stream.

        Past the end of input every call returns an EOF token.
        """
        self.skip_whitespace()

        line, col = self.stream.line, self.stream.column
        if self.stream.end_of_file():
            return Token(TokenKind.EOF, "", line, col)

        ch = self.peek()

        # 1. Identifier or keyword
        if is_letter(ch):
            ident = self.read_identifier()
            return Token(keywords.get(ident, TokenKind.IDENT), ident, line, col)

        # 2. Integer
        if is_digit(ch):
            return Token(TokenKind.INT, self.read_number(), line, col)

        # 3. Operator or delimiter
        matched = self.match_operator()
        if matched:
            kind, literal = matched
            return Token(kind, literal, line, col)

        # 4. Unknown character
        return Token(TokenKind.ILLEGAL, self.advance(), line, col)


def tokenize(source: str) -> list[Token]:
    """Scans `source` completely and returns every token, including the final EOF."""
    lexer = Lexer(CharacterStream(source))
    tokens = []
    while True:
        tok = lexer.next_token()
        tokens.append(tok)
        if tok.kind == TokenKind.EOF:
            break
    return tokens


__all__ = ["CharacterStream", "Lexer", "Token", "tokenize", "token_hashmap"]
