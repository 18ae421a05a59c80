"""SQLFront character stream - single-character lookahead over SQL text."""

from __future__ import annotations

from pathlib import Path
from typing import Union

# Returned by peek()/next() once the input is exhausted. No real character
# compares equal to the empty string.
EOF = ""


class CharacterStream:
    """Cursor over SQL source text.

    Offers one character of lookahead, consumption, push-back and explicit
    checkpoints. Offsets are measured in characters of the decoded text.
    """

    def __init__(self, source: Union[str, bytes], encoding: str = "utf-8"):
        """Initialize stream.

        Args:
            source: SQL text, or raw bytes decoded with ``encoding``
            encoding: Encoding used when ``source`` is bytes
        """
        if isinstance(source, bytes):
            source = source.decode(encoding)
        self._text = source
        self._pos = 0

    @classmethod
    def from_file(cls, path: Union[str, Path], encoding: str = "utf-8") -> "CharacterStream":
        """Open a stream over the contents of a file."""
        return cls(Path(path).read_bytes(), encoding=encoding)

    def peek(self) -> str:
        """Return the next character without consuming it."""
        if self._pos < len(self._text):
            return self._text[self._pos]
        return EOF

    def next(self) -> str:
        """Consume and return the next character."""
        char = self.peek()
        if char != EOF:
            self._pos += 1
        return char

    def skip_and_peek(self) -> str:
        """Consume one character and peek the one after it."""
        self.next()
        return self.peek()

    def push_back(self, count: int = 1) -> None:
        """Rewind by ``count`` characters."""
        if count < 0 or count > self._pos:
            raise ValueError(f"Cannot push back {count} characters at offset {self._pos}")
        self._pos -= count

    def position(self) -> int:
        """Current offset in the input."""
        return self._pos

    def is_eof(self) -> bool:
        return self._pos >= len(self._text)

    def mark(self) -> int:
        """Save the current position for a later reset()."""
        return self._pos

    def reset(self, mark: int) -> None:
        """Return to a position saved with mark()."""
        if mark < 0 or mark > len(self._text):
            raise ValueError(f"Invalid stream checkpoint: {mark}")
        self._pos = mark

    def __repr__(self) -> str:
        return f"CharacterStream(pos={self._pos}, next={self.peek()!r})"


__all__ = ["EOF", "CharacterStream"]
