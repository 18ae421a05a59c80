"""SQLFront tokenizer - splits a character stream into SQL tokens.

Tokens are produced lazily with exactly one token of lookahead. The
dispatch order after skipping whitespace and ``--`` comments is:

    quote      -> string literal
    digit      -> integer / float literal
    op char    -> operator
    . , ( ) ;  -> punctuation
    letter, _  -> identifier, keyword, word operator or boolean
"""

from __future__ import annotations

import logging
from typing import Callable, Iterator, List, Optional

from sqlfront_core.config import ParserConfig
from sqlfront_core.query.errors import TokenizeError
from sqlfront_core.query.stream import EOF, CharacterStream
from sqlfront_core.query.tokens import (
    ESCAPE_CHARACTERS,
    KEYWORDS,
    OPERATOR_CHARS,
    PUNCTUATION_CHARS,
    QUOTE_CHARS,
    WHITESPACE_CHARS,
    WORD_OPERATORS,
    Token,
    TokenKind,
)

logger = logging.getLogger(__name__)


def _is_digit(char: str) -> bool:
    return "0" <= char <= "9"


def _is_identifier_start(char: str) -> bool:
    return ("a" <= char <= "z") or ("A" <= char <= "Z") or char == "_"


def _is_identifier_char(char: str) -> bool:
    return _is_identifier_start(char) or _is_digit(char) or char == "."


class Tokenizer:
    """SQL tokenizer with one token of lookahead."""

    def __init__(self, stream: CharacterStream, config: Optional[ParserConfig] = None):
        """Initialize tokenizer.

        Args:
            stream: Character stream to read from
            config: Optional parser configuration
        """
        self.stream = stream
        self.config = config or ParserConfig()
        self._lookahead: Optional[Token] = None

    @classmethod
    def from_string(cls, sql: str, config: Optional[ParserConfig] = None) -> "Tokenizer":
        """Create a tokenizer over an in-memory SQL string."""
        return cls(CharacterStream(sql), config)

    # -------------------------------------------------------------------------
    # Public interface
    # -------------------------------------------------------------------------

    def next(self) -> Optional[Token]:
        """Consume and return the next token, or None at end of input."""
        token = self._lookahead
        self._lookahead = None
        if token is None:
            token = self._read_next()
        return token

    def peek(self) -> Optional[Token]:
        """Return the next token without consuming it."""
        if self._lookahead is None:
            self._lookahead = self._read_next()
        return self._lookahead

    def skip(self) -> Optional[Token]:
        """Discard the next token and return the one after it."""
        self.next()
        return self.next()

    def skip_and_peek(self) -> Optional[Token]:
        """Discard the next token and peek the one after it."""
        self.next()
        return self.peek()

    @property
    def is_at_end(self) -> bool:
        return self.peek() is None

    def position(self) -> int:
        """Offset of the character stream."""
        return self.stream.position()

    def __iter__(self) -> Iterator[Token]:
        while True:
            token = self.next()
            if token is None:
                return
            yield token

    # -------------------------------------------------------------------------
    # Scanning
    # -------------------------------------------------------------------------

    def _read_next(self) -> Optional[Token]:
        self._skip_whitespace()

        char = self.stream.peek()
        if char == EOF:
            return None

        start = self.stream.position()

        if char in QUOTE_CHARS:
            return self._read_string(start)
        if _is_digit(char):
            return self._read_number(start)
        if char in OPERATOR_CHARS:
            return self._read_operator(start)
        if char in PUNCTUATION_CHARS:
            return Token(TokenKind.PUNCTUATION, self.stream.next(), start)
        if _is_identifier_start(char):
            return self._read_identifier(start)

        # Unknown character; the parser reports it
        return Token(TokenKind.INVALID, self.stream.next(), start)

    def _read_while(self, condition: Callable[[str], bool]) -> str:
        chars: List[str] = []
        while self.stream.peek() != EOF and condition(self.stream.peek()):
            chars.append(self.stream.next())
        return "".join(chars)

    def _skip_whitespace(self) -> None:
        """Skip whitespace and ``--`` line comments."""
        while True:
            self._read_while(lambda c: c in WHITESPACE_CHARS)
            if self.stream.peek() != "-":
                return
            if self.stream.skip_and_peek() != "-":
                # A lone minus is an operator
                self.stream.push_back(1)
                return
            self._read_while(lambda c: c != "\n")

    def _read_string(self, start: int) -> Token:
        """Read a quoted string literal."""
        quote = self.stream.next()
        chars: List[str] = []
        escaped = False

        while True:
            char = self.stream.next()
            if char == EOF:
                break
            if escaped:
                chars.append(ESCAPE_CHARACTERS.get(char, char))
                escaped = False
            elif char == "\\":
                escaped = True
            elif char == quote:
                # Two consecutive quotes stand for one literal quote
                if self.stream.peek() == quote:
                    chars.append(self.stream.next())
                else:
                    return Token(TokenKind.STRING, "".join(chars), start)
            else:
                chars.append(char)

        if not self.config.allow_unterminated_strings:
            raise TokenizeError("Unterminated string literal", start)
        logger.warning(f"Unterminated string literal starting at offset {start}")
        return Token(TokenKind.STRING, "".join(chars), start)

    def _read_number(self, start: int) -> Token:
        """Read an integer or floating-point literal."""
        text = self._read_while(_is_digit)
        if self.stream.peek() != ".":
            return Token(TokenKind.INTEGER, text, start)

        text += self.stream.next()
        if _is_digit(self.stream.peek()):
            text += self._read_while(_is_digit)
            marker = self.stream.peek()
            if marker in ("e", "E"):
                self.stream.next()
                sign = ""
                if self.stream.peek() in ("+", "-"):
                    sign = self.stream.next()
                lookahead = self.stream.peek()
                if _is_digit(lookahead):
                    text += marker + sign + self._read_while(_is_digit)
                elif lookahead not in PUNCTUATION_CHARS:
                    raise TokenizeError("Invalid floating-point exponent", self.position())
                # An empty exponent right before punctuation is dropped

        return Token(TokenKind.FLOAT, text, start)

    def _read_operator(self, start: int) -> Token:
        """Read an operator made of special characters."""
        first = self.stream.next()
        followers = OPERATOR_CHARS[first]
        if followers and self.stream.peek() in followers:
            return Token(TokenKind.OPERATOR, first + self.stream.next(), start)
        if first == "!":
            raise TokenizeError("Invalid operator !", self.position())
        return Token(TokenKind.OPERATOR, first, start)

    def _read_identifier(self, start: int) -> Token:
        """Read an identifier, keyword, word operator or boolean."""
        text = self._read_while(_is_identifier_char)

        if text.upper() == "IS":
            merged = self._merge_is_not(text, start)
            if merged is not None:
                return merged
        elif text.endswith(".") and self.stream.peek() == "*":
            # Qualified wildcard such as t.*
            text += self.stream.next()

        upper = text.upper()
        if upper in KEYWORDS:
            if upper in WORD_OPERATORS and upper != "IS":
                return Token(TokenKind.OPERATOR, text, start)
            if upper in ("TRUE", "FALSE"):
                return Token(TokenKind.BOOLEAN, text, start)
            return Token(TokenKind.KEYWORD, text, start)
        return Token(TokenKind.IDENTIFIER, text, start)

    def _merge_is_not(self, text: str, start: int) -> Optional[Token]:
        """Fold ``IS NOT`` into one operator token.

        Reads the following token speculatively; when it is not the NOT
        keyword the stream is reset to the saved checkpoint.
        """
        self._skip_whitespace()
        if self.stream.peek() not in ("N", "n"):
            return None

        checkpoint = self.stream.mark()
        lookahead = self._read_next()
        if lookahead is not None and lookahead.is_keyword("NOT"):
            return Token(TokenKind.OPERATOR, f"{text} {lookahead.text}", start)

        self.stream.reset(checkpoint)
        return None


def tokenize(sql: str, config: Optional[ParserConfig] = None) -> List[Token]:
    """Tokenize a SQL string into a list of tokens."""
    return list(Tokenizer.from_string(sql, config))


__all__ = ["Tokenizer", "tokenize"]
