"""SQLFront Query Parser - SQL parsing and AST generation.

Recursive-descent parser for a literature-standard SQL subset:
- SELECT with DISTINCT, WHERE, GROUP BY, HAVING and ORDER BY
- INSERT INTO ... [(columns)] [VALUES (...)]
- DELETE FROM ... [WHERE ...]
- USE <database>
- UPDATE (placeholder only)

Expressions are parsed with operator-precedence climbing over the table in
``sqlfront_core.query.tokens.PRECEDENCE``.

Architecture:
    ┌──────────────┐   ┌──────────────┐   ┌──────────────┐   ┌──────────┐
    │  Character   │──▶│  Tokenizer   │──▶│    Parser    │──▶│   AST    │
    │   Stream     │   │ (1 lookahead)│   │  (grammar)   │   │  (Root)  │
    └──────────────┘   └──────────────┘   └──────────────┘   └──────────┘
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, FrozenSet, List, Optional, Tuple, Union

from sqlfront_core.config import ParserConfig
from sqlfront_core.query.ast import (
    BinaryExpression,
    BooleanLiteral,
    DeleteStatement,
    Expression,
    FloatLiteral,
    FunctionCall,
    Identifier,
    InsertStatement,
    IntegerLiteral,
    Literal,
    NullLiteral,
    Root,
    SelectStatement,
    Statement,
    StringLiteral,
    UpdateStatement,
    UseStatement,
)
from sqlfront_core.query.errors import ParseError, SqlFrontError
from sqlfront_core.query.printer import dump
from sqlfront_core.query.stream import CharacterStream
from sqlfront_core.query.tokenizer import Tokenizer
from sqlfront_core.query.tokens import (
    PRECEDENCE,
    Token,
    TokenKind,
    is_operator,
    is_word_operator,
)

logger = logging.getLogger(__name__)

INT64_MIN = -(2 ** 63)
INT64_MAX = 2 ** 63 - 1


# =============================================================================
# Sentinel tokens
# =============================================================================

LEFT_PAREN = Token.punctuation("(")
RIGHT_PAREN = Token.punctuation(")")
COMMA = Token.punctuation(",")
SEMICOLON = Token.punctuation(";")
FROM = Token.keyword("FROM")
WHERE = Token.keyword("WHERE")
GROUP = Token.keyword("GROUP")
HAVING = Token.keyword("HAVING")
ORDER = Token.keyword("ORDER")
ASC = Token.keyword("ASC")
DESC = Token.keyword("DESC")

SELECT_LIST_STOP: FrozenSet[Token] = frozenset({FROM})
FROM_STOP: FrozenSet[Token] = frozenset({WHERE, GROUP, HAVING, ORDER, SEMICOLON})
GROUP_BY_STOP: FrozenSet[Token] = frozenset({HAVING, ORDER, SEMICOLON})
ORDER_BY_STOP: FrozenSet[Token] = frozenset({ASC, DESC, SEMICOLON})

ItemParser = Callable[[], Expression]


# =============================================================================
# Parser
# =============================================================================


class Parser:
    """SQL parser."""

    def __init__(self, tokenizer: Tokenizer):
        """Initialize parser.

        Args:
            tokenizer: Token source positioned at the start of the input
        """
        self.tokenizer = tokenizer
        self.root: Optional[Root] = None

    @classmethod
    def from_string(cls, sql: str, config: Optional[ParserConfig] = None) -> "Parser":
        """Create a parser over an in-memory SQL string."""
        return cls(Tokenizer.from_string(sql, config))

    def parse(self) -> Root:
        """Parse every statement in the input.

        Returns:
            Root node holding the statements in source order
        """
        statements: List[Statement] = []
        while not self.tokenizer.is_at_end:
            token = self.tokenizer.next()
            if token.kind is not TokenKind.KEYWORD:
                raise self._error(f"Expecting a statement. Got {token}")
            try:
                statements.append(self._parse_statement(token))
            except RecursionError:
                raise self._error("Expression nested too deeply") from None

        self.root = Root(statements=statements)
        logger.debug(f"Parsed {len(statements)} statement(s)")
        return self.root

    def parse_expression(self) -> Expression:
        """Parse a single expression from the current position."""
        try:
            return self._parse_expression()
        except RecursionError:
            raise self._error("Expression nested too deeply") from None

    def dump(self) -> str:
        """Render the parsed tree, or an empty string before parse()."""
        if self.root is None:
            return ""
        return dump(self.root, indent=self.tokenizer.config.indent)

    # -------------------------------------------------------------------------
    # Token helpers
    # -------------------------------------------------------------------------

    @staticmethod
    def is_operator(op: str) -> bool:
        """Check if a string is an operator with a known precedence."""
        return is_operator(op)

    @staticmethod
    def is_word_operator(op: str) -> bool:
        return is_word_operator(op)

    def is_keyword(self, keyword: str) -> bool:
        """Check if the next token is the given keyword."""
        token = self.tokenizer.peek()
        return token is not None and token.is_keyword(keyword)

    def is_punctuation(self, punct: str) -> bool:
        token = self.tokenizer.peek()
        return token is not None and token.is_punctuation(punct)

    def skip_punctuation(self, punct: str) -> None:
        """Consume the given punctuation or fail."""
        token = self.tokenizer.next()
        if token is None or not token.is_punctuation(punct):
            raise self._error(f"Expecting '{punct}'. Got {self._describe(token)}")

    def _expect(self, expected: Token) -> Token:
        token = self.tokenizer.next()
        if token != expected:
            raise self._error(f"Expecting '{expected.text}'. Got {self._describe(token)}")
        return token

    def _match_keyword(self, keyword: str) -> bool:
        if self.is_keyword(keyword):
            self.tokenizer.next()
            return True
        return False

    def _peek_operator(self) -> Optional[Token]:
        """Return the next token if it is a binary operator."""
        token = self.tokenizer.peek()
        if token is None:
            return None
        if token.kind is TokenKind.OPERATOR or token.is_keyword("IS"):
            return token
        return None

    def _require_input(self) -> None:
        if self.tokenizer.is_at_end:
            raise self._error("Unexpected end of input")

    @staticmethod
    def _describe(token: Optional[Token]) -> str:
        return "end of input" if token is None else str(token)

    def _error(self, message: str) -> ParseError:
        return ParseError(message, self.tokenizer.position())

    # -------------------------------------------------------------------------
    # Lists
    # -------------------------------------------------------------------------

    def _parse_delimited_list(
        self,
        start: Optional[Token],
        stop: Token,
        separator: Token,
        parse_item: ItemParser,
        consume_stop: bool = True,
    ) -> List[Expression]:
        """Parse a list such as ``(a, b, c)``.

        Args:
            start: Opening token, or None if it has already been consumed
            stop: Closing token
            separator: Token between items
            parse_item: Parser for a single item
            consume_stop: Whether to consume the closing token
        """
        if start is not None:
            token = self.tokenizer.peek()
            if token != start:
                raise self._error(f"Expecting '{start.text}'. Got {self._describe(token)}")
            self.tokenizer.next()

        items: List[Expression] = []
        while not self.tokenizer.is_at_end:
            if self.tokenizer.peek() == stop:
                break
            if items:
                self._expect(separator)
            items.append(parse_item())

        if consume_stop:
            self._expect(stop)
        return items

    def _parse_list_until(
        self,
        stop: FrozenSet[Token],
        separator: Token,
        parse_item: ItemParser,
    ) -> Tuple[List[Expression], Optional[Token]]:
        """Parse a separated list ended by any token of a stop set.

        The stop token is peeked, not consumed, and returned alongside the
        items (None at end of input).
        """
        items: List[Expression] = []
        while not self.tokenizer.is_at_end:
            if self.tokenizer.peek() in stop:
                break
            if items:
                self._expect(separator)
            items.append(parse_item())
        return items, self.tokenizer.peek()

    # -------------------------------------------------------------------------
    # Statements
    # -------------------------------------------------------------------------

    def _parse_statement(self, keyword: Token) -> Statement:
        name = keyword.text.upper()
        if name == "SELECT":
            return self._parse_select()
        if name == "UPDATE":
            return self._parse_update()
        if name == "INSERT":
            return self._parse_insert()
        if name == "DELETE":
            return self._parse_delete()
        if name == "USE":
            return self._parse_use()
        raise self._error(f"Invalid statement {keyword}")

    def _parse_select(self) -> SelectStatement:
        """Parse SELECT statement."""
        self._require_input()

        distinct = self._match_keyword("DISTINCT")
        columns = self._parse_select_list()

        if not self._match_keyword("FROM"):
            raise self._error(f"Expecting FROM. Got {self._describe(self.tokenizer.peek())}")
        tables, _ = self._parse_list_until(FROM_STOP, COMMA, self._parse_identifier)
        if not tables:
            raise self._error("Expecting a table name after FROM")

        where = None
        if not self.is_punctuation(";") and self._match_keyword("WHERE"):
            where = self._parse_expression()

        group_by = None
        if not self.is_punctuation(";") and self._match_keyword("GROUP"):
            self._expect_by()
            group_by, _ = self._parse_list_until(GROUP_BY_STOP, COMMA, self._parse_expression)
            if not group_by:
                raise self._error("Expecting an expression after GROUP BY")

        having = None
        if not self.is_punctuation(";") and self._match_keyword("HAVING"):
            having = self._parse_expression()

        order_by = None
        if not self.is_punctuation(";") and self._match_keyword("ORDER"):
            self._expect_by()
            order_by, stop = self._parse_list_until(ORDER_BY_STOP, COMMA, self._parse_order_item)
            if stop is not None and stop in (ASC, DESC):
                raise self._error(f"Sort direction {stop} must follow a column name")
            if not order_by:
                raise self._error("Expecting a column after ORDER BY")

        if self.is_punctuation(";"):
            self.skip_punctuation(";")

        return SelectStatement(
            columns=columns,
            from_clause=tables,
            distinct=distinct,
            where=where,
            group_by=group_by,
            having=having,
            order_by=order_by,
        )

    def _expect_by(self) -> None:
        token = self.tokenizer.next()
        if token is None or not token.is_keyword("BY"):
            raise self._error(f"Expecting BY keyword. Got {self._describe(token)}")

    def _parse_select_list(self) -> List[Expression]:
        """Parse SELECT list."""
        token = self.tokenizer.peek()
        if token is None:
            raise self._error("Unexpected end of input")

        if token.is_operator("*"):
            self.tokenizer.next()
            return [Identifier("*")]

        if token.is_identifier("COUNT"):
            return [self._parse_count(token)]

        columns, _ = self._parse_list_until(SELECT_LIST_STOP, COMMA, self._parse_expression)
        if not columns:
            raise self._error("Expecting a select list before FROM")
        return columns

    def _parse_count(self, count: Token) -> FunctionCall:
        """Parse COUNT(*), COUNT(ALL|DISTINCT column) or COUNT(column)."""
        lparen = self.tokenizer.skip_and_peek()
        if lparen is None or not lparen.is_punctuation("("):
            raise self._error(f"Expecting '('. Got {self._describe(lparen)}")

        argument = self.tokenizer.skip()
        if argument is None:
            raise self._error("Unexpected end of input")

        if argument.is_operator("*"):
            arg: Expression = Identifier("*")
        elif argument.is_keyword("ALL") or argument.is_keyword("DISTINCT"):
            column = self.tokenizer.next()
            if column is None or column.kind is not TokenKind.IDENTIFIER:
                raise self._error(f"Expecting a column name. Got {self._describe(column)}")
            arg = BinaryExpression(Identifier(column.text), argument.text)
        elif argument.kind is TokenKind.IDENTIFIER:
            arg = Identifier(argument.text)
        else:
            raise self._error(f"Expecting a column name. Got {argument}")

        self.skip_punctuation(")")
        return FunctionCall(count.text, (arg,))

    def _parse_order_item(self) -> Expression:
        """Parse one ORDER BY item: a column with an optional direction."""
        token = self.tokenizer.next()
        if token is None or token.kind is not TokenKind.IDENTIFIER:
            raise self._error(f"Expecting an identifier. Got {self._describe(token)}")

        identifier = Identifier(token.text)
        direction = self.tokenizer.peek()
        if direction is not None and direction in (ASC, DESC):
            self.tokenizer.next()
            return BinaryExpression(identifier, direction.text)
        return identifier

    def _parse_update(self) -> UpdateStatement:
        # Placeholder only; UPDATE ... SET is unsupported
        self._require_input()
        logger.warning("UPDATE statements are not supported; emitting a placeholder node")
        self.skip_punctuation(";")
        return UpdateStatement()

    def _parse_insert(self) -> InsertStatement:
        """Parse INSERT statement."""
        self._require_input()

        token = self.tokenizer.next()
        if not token.is_keyword("INTO"):
            raise self._error(f"Expecting INTO keyword. Got {token}")

        table = self._parse_identifier()

        columns = None
        if self.is_punctuation("("):
            columns = self._parse_delimited_list(LEFT_PAREN, RIGHT_PAREN, COMMA, self._parse_expression)

        values = None
        if self._match_keyword("VALUES"):
            values = self._parse_delimited_list(LEFT_PAREN, RIGHT_PAREN, COMMA, self._parse_expression)

        self.skip_punctuation(";")
        return InsertStatement(table=table, columns=columns, values=values)

    def _parse_delete(self) -> DeleteStatement:
        """Parse DELETE statement."""
        self._require_input()

        token = self.tokenizer.next()
        if not token.is_keyword("FROM"):
            raise self._error(f"Expecting FROM keyword. Got {token}")

        table = self._parse_identifier()

        where = None
        if self._match_keyword("WHERE"):
            where = self._parse_expression()

        self.skip_punctuation(";")
        return DeleteStatement(table=table, where=where)

    def _parse_use(self) -> UseStatement:
        """Parse USE statement."""
        self._require_input()

        database = self._parse_identifier()
        self.skip_punctuation(";")
        return UseStatement(database=database.name)

    # -------------------------------------------------------------------------
    # Expression parsing
    # -------------------------------------------------------------------------

    def _parse_expression(self) -> Expression:
        atom = self._parse_atom()
        return self._parse_function_or_single(lambda: self._parse_binary(atom, 0))

    def _parse_atom(self) -> Expression:
        return self._parse_function_or_single(self._parse_primary)

    def _parse_primary(self) -> Expression:
        """Parse an optionally signed operand."""
        token = self.tokenizer.peek()
        if token is None:
            raise self._error("Unexpected end of input")

        sign = None
        if token.is_operator("-") or token.is_operator("+"):
            sign = self.tokenizer.next()

        if sign is None:
            return self._parse_operand()

        operand = self._parse_function_or_single(self._parse_operand)
        return BinaryExpression(operand, sign.text)

    def _parse_operand(self) -> Expression:
        """Parse a parenthesized expression, identifier or literal."""
        token = self.tokenizer.peek()
        if token is None:
            raise self._error("Unexpected end of input")

        if token.is_punctuation("("):
            self.tokenizer.next()
            expr = self._parse_expression()
            self.skip_punctuation(")")
            return expr

        token = self.tokenizer.next()
        if token.kind is TokenKind.IDENTIFIER:
            return Identifier(token.text)
        return self._parse_literal(token)

    def _parse_literal(self, token: Token) -> Literal:
        """Convert a literal token into a literal node."""
        if token.kind is TokenKind.INTEGER:
            value = int(token.text)
            if not INT64_MIN <= value <= INT64_MAX:
                raise self._error(f"Integer literal out of range: {token.text}")
            return IntegerLiteral(value)
        if token.kind is TokenKind.FLOAT:
            return FloatLiteral(float(token.text))
        if token.kind is TokenKind.STRING:
            return StringLiteral(token.text)
        if token.kind is TokenKind.BOOLEAN:
            return BooleanLiteral(token.text.upper() == "TRUE")
        if token.is_keyword("NULL"):
            return NullLiteral()
        raise self._error(f"Unexpected token {token}")

    def _parse_identifier(self) -> Identifier:
        token = self.tokenizer.next()
        if token is None or token.kind is not TokenKind.IDENTIFIER:
            raise self._error(f"Expecting an identifier. Got {self._describe(token)}")
        return Identifier(token.text)

    def _parse_binary(self, lhs: Expression, floor: int) -> Expression:
        """Precedence climbing.

        Operators binding tighter than ``floor`` are folded into ``lhs``;
        equal precedence stops the inner climb, so chains associate left.
        """
        while True:
            token = self._peek_operator()
            if token is None:
                return lhs
            precedence = PRECEDENCE.get(token.text.upper())
            if precedence is None or precedence <= floor:
                return lhs
            self.tokenizer.next()
            rhs = self._parse_binary(self._parse_atom(), precedence)
            lhs = BinaryExpression(lhs, token.text, rhs)

    def _parse_function_or_single(self, parse: ItemParser) -> Expression:
        """Run ``parse`` and turn the result into a call if '(' follows."""
        node = parse()
        if self.is_punctuation("("):
            return self._parse_function(node)
        return node

    def _parse_function(self, func: Expression) -> FunctionCall:
        if not isinstance(func, Identifier):
            raise self._error(f"Expecting a function name. Got {type(func).__name__}")
        args = self._parse_delimited_list(LEFT_PAREN, RIGHT_PAREN, COMMA, self._parse_expression)
        return FunctionCall(func.name, args)


# =============================================================================
# Convenience API
# =============================================================================


@dataclass(frozen=True)
class ParseResult:
    """Outcome of try_parse(): either a tree or the error that stopped it."""

    root: Optional[Root] = None
    error: Optional[SqlFrontError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> Root:
        """Return the tree, re-raising the error if parsing failed."""
        if self.error is not None:
            raise self.error
        return self.root


def parse(sql: str, config: Optional[ParserConfig] = None) -> Root:
    """Parse SQL text into a Root node."""
    return Parser.from_string(sql, config).parse()


def parse_file(path: Union[str, Path], config: Optional[ParserConfig] = None) -> Root:
    """Parse the SQL statements stored in a file."""
    config = config or ParserConfig()
    stream = CharacterStream.from_file(path, encoding=config.encoding)
    return Parser(Tokenizer(stream, config)).parse()


def parse_expression(sql: str, config: Optional[ParserConfig] = None) -> Expression:
    """Parse a single SQL expression."""
    return Parser.from_string(sql, config).parse_expression()


def try_parse(sql: str, config: Optional[ParserConfig] = None) -> ParseResult:
    """Parse SQL text, returning errors instead of raising them."""
    try:
        return ParseResult(root=parse(sql, config))
    except SqlFrontError as e:
        logger.debug(f"Parse failed: {e}")
        return ParseResult(error=e)


# Convenience alias
QueryParser = Parser


__all__ = [
    "Parser",
    "QueryParser",
    "ParseResult",
    "parse",
    "parse_file",
    "parse_expression",
    "try_parse",
]
