"""SQLFront errors - lexical and syntax failures.

Both kinds carry a human-readable message plus the offset into the input
where the problem was detected. Neither is recoverable: the caller reports
the error and discards whatever was built so far.
"""

from __future__ import annotations


class SqlFrontError(Exception):
    """Base class for every failure raised while reading SQL text."""

    def __init__(self, message: str, offset: int):
        self.message = message
        self.offset = offset
        super().__init__(f"Error at offset {offset}: {message}")


class TokenizeError(SqlFrontError):
    """Malformed lexeme (bad operator, bad exponent, unterminated string)."""


class ParseError(SqlFrontError):
    """SQL syntax error."""


__all__ = ["SqlFrontError", "TokenizeError", "ParseError"]
