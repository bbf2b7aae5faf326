"""
Defines the abstract syntax tree (AST) node structure for the Monkey programming language.

Classes:
    Node:
        Base of every syntax tree node. Tracks the source position of the token
        the node was built from and provides rendering, equality and serialization.

    Statement, Expression:
        The two node capability sets. Every concrete node is exactly one of them.

    Program:
        Root of a parsed source text: an ordered tuple of top-level statements.

    ASTDict:
        TypedDict representation for serializing nodes to plain Python dictionaries,
        suitable for JSON output or debugging.

Statement variants:
    LetStatement, ReturnStatement, ExpressionStatement, BlockStatement

Expression variants:
    Identifier, IntegerLiteral, BooleanLiteral, PrefixExpression, InfixExpression,
    IfExpression, FunctionLiteral, CallExpression

Nodes are immutable once constructed and own their children exclusively, so a
parsed program is always a tree. Equality is structural and ignores source
positions, which makes trees built by hand in tests comparable to parser output.

`str(node)` renders canonical source with every prefix and infix expression
fully parenthesized, e.g. ``-a * b`` renders as ``((-a) * b)``.

Example:
    node = InfixExpression("+", IntegerLiteral(1), Identifier("x"))
    str(node)  # "(1 + x)"
"""

from __future__ import annotations

from typing import Any, TypedDict


class ASTDict(TypedDict, total=False):
    """
    TypedDict representation of a serialized node.

    Only `kind`, `line` and `col` are present on every node; the remaining keys
    depend on the variant (e.g. `left`/`operator`/`right` for infix expressions).
    """

    kind: str
    line: int
    col: int
    name: Any
    value: Any
    operator: str
    operand: ASTDict
    left: ASTDict
    right: ASTDict
    condition: ASTDict
    consequence: ASTDict
    alternative: ASTDict | None
    parameters: list[ASTDict]
    body: ASTDict
    function: ASTDict
    arguments: list[ASTDict]
    statements: list[ASTDict]


def _serialize(value: Any) -> Any:
    if isinstance(value, Node):
        return value.to_dict()
    if isinstance(value, tuple):
        return [_serialize(v) for v in value]
    return value


class Node:
    """
    Base class for all syntax tree nodes.

    Subclasses declare their payload attribute names in `_fields`; equality,
    `repr()` and `to_dict()` are driven by that declaration.

    Attributes:
        kind (str): Short variant name used in serialized output (e.g. "infix").
        line (int): Source line of the token the node was built from (0 when built by hand).
        col (int): Source column of that token (0 when built by hand).
    """

    kind: str = "node"
    line: int
    col: int
    _fields: tuple[str, ...] = ()

    def __init__(self, line: int = 0, col: int = 0, **fields: Any) -> None:
        object.__setattr__(self, "line", line)
        object.__setattr__(self, "col", col)
        for name in self._fields:
            object.__setattr__(self, name, fields[name])

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(f"{type(self).__name__} nodes are immutable")

    def token_literal(self) -> str:
        """Literal text of the token this node was built from."""
        raise NotImplementedError

    def __repr__(self) -> str:
        parts = ", ".join(f"{name}={getattr(self, name)!r}" for name in self._fields)
        return f"{type(self).__name__}({parts})"

    def __eq__(self, other: Any) -> bool:
        if type(self) is not type(other):
            return False
        return all(getattr(self, n) == getattr(other, n) for n in self._fields)

    __hash__ = None  # type: ignore[assignment]

    def to_dict(self) -> ASTDict:
        out: dict[str, Any] = {"kind": self.kind, "line": self.line, "col": self.col}
        for name in self._fields:
            out[name] = _serialize(getattr(self, name))
        return out  # type: ignore[return-value]


class Statement(Node):
    """A node that appears in statement position."""


class Expression(Node):
    """A node that produces a value."""


# ----------------------------------------------------------------------
# Expressions
# ----------------------------------------------------------------------


class Identifier(Expression):
    kind = "identifier"
    _fields = ("name",)
    name: str

    def __init__(self, name: str, line: int = 0, col: int = 0) -> None:
        super().__init__(line, col, name=name)

    def token_literal(self) -> str:
        return self.name

    def __str__(self) -> str:
        return self.name


class IntegerLiteral(Expression):
    kind = "int"
    _fields = ("value",)
    value: int

    def __init__(self, value: int, line: int = 0, col: int = 0) -> None:
        super().__init__(line, col, value=value)

    def token_literal(self) -> str:
        return str(self.value)

    def __str__(self) -> str:
        return str(self.value)


class BooleanLiteral(Expression):
    kind = "bool"
    _fields = ("value",)
    value: bool

    def __init__(self, value: bool, line: int = 0, col: int = 0) -> None:
        super().__init__(line, col, value=value)

    def token_literal(self) -> str:
        return "true" if self.value else "false"

    def __str__(self) -> str:
        return self.token_literal()


class PrefixExpression(Expression):
    """Unary operator applied to one operand, e.g. ``!ok`` or ``-x``."""

    kind = "prefix"
    _fields = ("operator", "operand")
    operator: str
    operand: Expression

    def __init__(
        self, operator: str, operand: Expression, line: int = 0, col: int = 0
    ) -> None:
        super().__init__(line, col, operator=operator, operand=operand)

    def token_literal(self) -> str:
        return self.operator

    def __str__(self) -> str:
        return f"({self.operator}{self.operand})"


class InfixExpression(Expression):
    """Binary operator applied to two operands, e.g. ``a + b``."""

    kind = "infix"
    _fields = ("operator", "left", "right")
    operator: str
    left: Expression
    right: Expression

    def __init__(
        self,
        operator: str,
        left: Expression,
        right: Expression,
        line: int = 0,
        col: int = 0,
    ) -> None:
        super().__init__(line, col, operator=operator, left=left, right=right)

    def token_literal(self) -> str:
        return self.operator

    def __str__(self) -> str:
        return f"({self.left} {self.operator} {self.right})"


class IfExpression(Expression):
    kind = "if"
    _fields = ("condition", "consequence", "alternative")
    condition: Expression
    consequence: BlockStatement
    alternative: BlockStatement | None

    def __init__(
        self,
        condition: Expression,
        consequence: BlockStatement,
        alternative: BlockStatement | None = None,
        line: int = 0,
        col: int = 0,
    ) -> None:
        super().__init__(
            line,
            col,
            condition=condition,
            consequence=consequence,
            alternative=alternative,
        )

    def token_literal(self) -> str:
        return "if"

    def __str__(self) -> str:
        out = f"if {self.condition} {{ {self.consequence} }}"
        if self.alternative is not None:
            out += f" else {{ {self.alternative} }}"
        return out


class FunctionLiteral(Expression):
    kind = "fn"
    _fields = ("parameters", "body")
    parameters: tuple[Identifier, ...]
    body: BlockStatement

    def __init__(
        self,
        parameters: tuple[Identifier, ...] | list[Identifier],
        body: BlockStatement,
        line: int = 0,
        col: int = 0,
    ) -> None:
        super().__init__(line, col, parameters=tuple(parameters), body=body)

    def token_literal(self) -> str:
        return "fn"

    def __str__(self) -> str:
        params = ", ".join(str(p) for p in self.parameters)
        return f"fn({params}) {{ {self.body} }}"


class CallExpression(Expression):
    kind = "call"
    _fields = ("function", "arguments")
    function: Expression
    arguments: tuple[Expression, ...]

    def __init__(
        self,
        function: Expression,
        arguments: tuple[Expression, ...] | list[Expression],
        line: int = 0,
        col: int = 0,
    ) -> None:
        super().__init__(line, col, function=function, arguments=tuple(arguments))

    def token_literal(self) -> str:
        return "("

    def __str__(self) -> str:
        args = ", ".join(str(a) for a in self.arguments)
        return f"{self.function}({args})"


# ----------------------------------------------------------------------
# Statements
# ----------------------------------------------------------------------


class LetStatement(Statement):
    kind = "let"
    _fields = ("name", "value")
    name: Identifier
    value: Expression

    def __init__(
        self, name: Identifier, value: Expression, line: int = 0, col: int = 0
    ) -> None:
        super().__init__(line, col, name=name, value=value)

    def token_literal(self) -> str:
        return "let"

    def __str__(self) -> str:
        return f"let {self.name} = {self.value};"


class ReturnStatement(Statement):
    kind = "return"
    _fields = ("value",)
    value: Expression

    def __init__(self, value: Expression, line: int = 0, col: int = 0) -> None:
        super().__init__(line, col, value=value)

    def token_literal(self) -> str:
        return "return"

    def __str__(self) -> str:
        return f"return {self.value};"


class ExpressionStatement(Statement):
    """A bare expression used as a statement, e.g. ``add(1, 2);``."""

    kind = "expr_stmt"
    _fields = ("value",)
    value: Expression

    def __init__(self, value: Expression, line: int = 0, col: int = 0) -> None:
        super().__init__(line, col, value=value)

    def token_literal(self) -> str:
        return self.value.token_literal()

    def __str__(self) -> str:
        return str(self.value)


class BlockStatement(Statement):
    """Brace-delimited statement sequence used for function and branch bodies."""

    kind = "block"
    _fields = ("statements",)
    statements: tuple[Statement, ...]

    def __init__(
        self,
        statements: tuple[Statement, ...] | list[Statement],
        line: int = 0,
        col: int = 0,
    ) -> None:
        super().__init__(line, col, statements=tuple(statements))

    def token_literal(self) -> str:
        return "{"

    def __str__(self) -> str:
        return "".join(str(s) for s in self.statements)


class Program(Node):
    """Root node: the ordered top-level statements of one source text."""

    kind = "program"
    _fields = ("statements",)
    statements: tuple[Statement, ...]

    def __init__(
        self, statements: tuple[Statement, ...] | list[Statement] = ()
    ) -> None:
        super().__init__(1, 1, statements=tuple(statements))

    def __len__(self) -> int:
        return len(self.statements)

    def token_literal(self) -> str:
        return self.statements[0].token_literal() if self.statements else ""

    def __str__(self) -> str:
        return "".join(str(s) for s in self.statements)


__all__ = [
    "ASTDict",
    "Node",
    "Statement",
    "Expression",
    "Program",
    "LetStatement",
    "ReturnStatement",
    "ExpressionStatement",
    "BlockStatement",
    "Identifier",
    "IntegerLiteral",
    "BooleanLiteral",
    "PrefixExpression",
    "InfixExpression",
    "IfExpression",
    "FunctionLiteral",
    "CallExpression",
]
