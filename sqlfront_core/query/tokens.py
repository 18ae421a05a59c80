"""SQLFront tokens - lexical classes and the shared lookup tables.

The tables below are built once at import time and never modified, so any
number of tokenizers and parsers can read them at the same time.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Mapping, Tuple


# =============================================================================
# Token Types
# =============================================================================


class TokenKind(Enum):
    """Lexical class of a token."""

    KEYWORD = "Keyword"
    IDENTIFIER = "Identifier"
    OPERATOR = "Operator"
    PUNCTUATION = "Punctuation"
    INTEGER = "Integer"
    FLOAT = "Float"
    BOOLEAN = "Boolean"
    STRING = "String"
    INVALID = "Invalid"


@dataclass(frozen=True, eq=False)
class Token:
    """Lexical token.

    Two tokens are equal when their kinds match and their texts match
    ignoring case. ``position`` is informational and not compared.
    """

    kind: TokenKind
    text: str
    position: int = field(default=-1)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Token):
            return NotImplemented
        return self.kind is other.kind and self.text.upper() == other.text.upper()

    def __hash__(self) -> int:
        return hash((self.kind, self.text.upper()))

    def __repr__(self) -> str:
        return f"Token({self.kind.name}, {self.text!r})"

    def __str__(self) -> str:
        return f"'{self.text}' ({self.kind.value})"

    def is_keyword(self, keyword: str) -> bool:
        return self.kind is TokenKind.KEYWORD and self.text.upper() == keyword.upper()

    def is_operator(self, op: str) -> bool:
        return self.kind is TokenKind.OPERATOR and self.text.upper() == op.upper()

    def is_punctuation(self, punct: str) -> bool:
        return self.kind is TokenKind.PUNCTUATION and self.text == punct

    def is_identifier(self, name: str) -> bool:
        return self.kind is TokenKind.IDENTIFIER and self.text.upper() == name.upper()

    @classmethod
    def keyword(cls, text: str) -> "Token":
        return cls(TokenKind.KEYWORD, text)

    @classmethod
    def punctuation(cls, text: str) -> "Token":
        return cls(TokenKind.PUNCTUATION, text)


# =============================================================================
# Lookup tables
# =============================================================================

KEYWORDS = frozenset({
    "USE", "SELECT", "WHERE", "IS", "NOT", "NULL", "GROUP", "ORDER", "BY",
    "INSERT", "VALUES", "DELETE", "UPDATE",
    "FROM", "INTO",
    "CASE", "WHEN",
    "LIKE", "GLOB", "MATCH", "REGEXP", "IN",
    "BETWEEN", "AND", "OR",
    "AS",
    "DISTINCT", "ALL", "HAVING",
    "TRUE", "FALSE",
    "ASC", "DESC",
})

# Keywords that act as binary operators.
WORD_OPERATORS = frozenset({
    "IS", "IS NOT", "IN", "LIKE", "GLOB", "MATCH", "REGEXP",
    "BETWEEN", "AND", "OR", "AS",
})

# Binding strength; a higher number binds tighter.
PRECEDENCE: Mapping[str, int] = MappingProxyType({
    "||": 9,
    "*": 8, "/": 8, "%": 8,
    "+": 7, "-": 7,
    "<<": 6, ">>": 6, "&": 6, "|": 6,
    "=": 4, "==": 4, "!=": 4, "<>": 4,
    "<": 4, ">": 4, "<=": 4, ">=": 4,
    "IS": 4, "IS NOT": 4, "IN": 4, "LIKE": 4,
    "GLOB": 4, "MATCH": 4, "REGEXP": 4,
    "BETWEEN": 3, "AND": 3,
    "OR": 2,
    "AS": 1,
})

# Operator characters mapped to the characters that may follow them to form
# a two-character operator. An empty tuple means single-character only.
OPERATOR_CHARS: Mapping[str, Tuple[str, ...]] = MappingProxyType({
    "+": (),
    "-": (),
    "*": (),
    "/": (),
    "%": (),
    "&": (),
    "<": ("<", "=", ">"),
    ">": (">", "="),
    "=": ("=",),
    "!": ("=",),
    "|": ("|",),
})

PUNCTUATION_CHARS = frozenset({".", ",", "(", ")", ";"})

QUOTE_CHARS = frozenset({"'", '"'})

WHITESPACE_CHARS = frozenset({" ", "\t", "\r", "\n"})

ESCAPE_CHARACTERS: Mapping[str, str] = MappingProxyType({
    "n": "\n",
    "r": "\r",
    "t": "\t",
    "0": "\0",
    "'": "'",
    '"': '"',
})


def is_keyword(text: str) -> bool:
    return text.upper() in KEYWORDS


def is_word_operator(text: str) -> bool:
    return text.upper() in WORD_OPERATORS


def is_operator(text: str) -> bool:
    return text.upper() in PRECEDENCE


__all__ = [
    "TokenKind",
    "Token",
    "KEYWORDS",
    "WORD_OPERATORS",
    "PRECEDENCE",
    "OPERATOR_CHARS",
    "PUNCTUATION_CHARS",
    "QUOTE_CHARS",
    "WHITESPACE_CHARS",
    "ESCAPE_CHARACTERS",
    "is_keyword",
    "is_word_operator",
    "is_operator",
]
