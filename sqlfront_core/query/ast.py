"""SQLFront AST nodes.

Every node is a frozen dataclass; sequences are stored as tuples, so a tree
cannot change once the parser has built it. Each node class carries a
``node_type`` tag used by printers and downstream tools.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, ClassVar, Iterator, Optional, Tuple


class NodeType(Enum):
    """Statement or expression kind of an AST node."""

    ROOT = "RootQueries"
    USE = "UseStatement"
    SELECT = "SelectStatement"
    INSERT = "InsertStatement"
    DELETE = "DeleteStatement"
    UPDATE = "UpdateStatement"
    EXPRESSION = "BinaryExpression"
    FUNCTION_CALL = "FunctionCall"
    IDENTIFIER = "Identifier"
    LITERAL = "Literal"


def _freeze(node: Any, name: str) -> None:
    """Store a sequence field as a tuple."""
    value = getattr(node, name)
    if value is not None and not isinstance(value, tuple):
        object.__setattr__(node, name, tuple(value))


# =============================================================================
# Base classes
# =============================================================================


@dataclass(frozen=True)
class ASTNode:
    """Base class for AST nodes."""

    node_type: ClassVar[NodeType]


@dataclass(frozen=True)
class Expression(ASTNode):
    """Base class for expressions."""


@dataclass(frozen=True)
class Statement(ASTNode):
    """Base class for statements."""


# =============================================================================
# Expressions
# =============================================================================


@dataclass(frozen=True)
class Identifier(Expression):
    """Table or column name, possibly qualified (``db.t``) or ``t.*``."""

    node_type: ClassVar[NodeType] = NodeType.IDENTIFIER

    name: str


@dataclass(frozen=True)
class Literal(Expression):
    """Literal value. Concrete variants fix the value type."""

    node_type: ClassVar[NodeType] = NodeType.LITERAL
    type_name: ClassVar[str] = "unknown"


@dataclass(frozen=True)
class IntegerLiteral(Literal):
    type_name: ClassVar[str] = "integer"

    value: int


@dataclass(frozen=True)
class FloatLiteral(Literal):
    type_name: ClassVar[str] = "float"

    value: float


@dataclass(frozen=True)
class StringLiteral(Literal):
    type_name: ClassVar[str] = "string"

    value: str


@dataclass(frozen=True)
class BooleanLiteral(Literal):
    type_name: ClassVar[str] = "boolean"

    value: bool


@dataclass(frozen=True)
class NullLiteral(Literal):
    type_name: ClassVar[str] = "null"

    @property
    def value(self) -> None:
        return None


@dataclass(frozen=True)
class BinaryExpression(Expression):
    """Binary operation, or a unary one when ``right`` is None.

    A unary expression applies ``op`` to ``left``: a sign prefix such as
    ``-x``, a sort direction (``x DESC``) or an aggregate qualifier
    (``DISTINCT x``).
    """

    node_type: ClassVar[NodeType] = NodeType.EXPRESSION

    left: Expression
    op: str
    right: Optional[Expression] = None

    @property
    def is_unary(self) -> bool:
        return self.right is None


@dataclass(frozen=True)
class FunctionCall(Expression):
    """Function call."""

    node_type: ClassVar[NodeType] = NodeType.FUNCTION_CALL

    name: str
    args: Tuple[Expression, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        _freeze(self, "args")


# =============================================================================
# Statements
# =============================================================================


@dataclass(frozen=True)
class UseStatement(Statement):
    """USE statement."""

    node_type: ClassVar[NodeType] = NodeType.USE

    database: str


@dataclass(frozen=True)
class SelectStatement(Statement):
    """SELECT statement."""

    node_type: ClassVar[NodeType] = NodeType.SELECT

    columns: Tuple[Expression, ...]
    from_clause: Tuple[Identifier, ...]
    distinct: bool = False
    where: Optional[Expression] = None
    group_by: Optional[Tuple[Expression, ...]] = None
    having: Optional[Expression] = None
    order_by: Optional[Tuple[Expression, ...]] = None
    limit: Optional[Expression] = None

    def __post_init__(self) -> None:
        for name in ("columns", "from_clause", "group_by", "order_by"):
            _freeze(self, name)
        if not self.from_clause:
            raise ValueError("SELECT requires at least one FROM target")


@dataclass(frozen=True)
class InsertStatement(Statement):
    """INSERT statement."""

    node_type: ClassVar[NodeType] = NodeType.INSERT

    table: Identifier
    columns: Optional[Tuple[Expression, ...]] = None
    values: Optional[Tuple[Expression, ...]] = None

    def __post_init__(self) -> None:
        _freeze(self, "columns")
        _freeze(self, "values")


@dataclass(frozen=True)
class DeleteStatement(Statement):
    """DELETE statement."""

    node_type: ClassVar[NodeType] = NodeType.DELETE

    table: Identifier
    where: Optional[Expression] = None


@dataclass(frozen=True)
class UpdateStatement(Statement):
    """Placeholder for UPDATE, whose grammar is not supported."""

    node_type: ClassVar[NodeType] = NodeType.UPDATE


@dataclass(frozen=True)
class Root(ASTNode):
    """Ordered top-level statements of one SQL source."""

    node_type: ClassVar[NodeType] = NodeType.ROOT

    statements: Tuple[Statement, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        _freeze(self, "statements")

    def __len__(self) -> int:
        return len(self.statements)

    def __iter__(self) -> Iterator[Statement]:
        return iter(self.statements)


__all__ = [
    "NodeType",
    "ASTNode",
    "Expression",
    "Statement",
    "Identifier",
    "Literal",
    "IntegerLiteral",
    "FloatLiteral",
    "StringLiteral",
    "BooleanLiteral",
    "NullLiteral",
    "BinaryExpression",
    "FunctionCall",
    "UseStatement",
    "SelectStatement",
    "InsertStatement",
    "DeleteStatement",
    "UpdateStatement",
    "Root",
]
