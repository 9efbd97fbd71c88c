"""
Soft line wrapping.

Text after a wrapping point is buffered until either the line is completed
(the buffered text fits and is flushed as is) or the buffered text would
cross the column limit (a line break and continuation indent are inserted at
the wrapping point).
"""

from __future__ import annotations

from enum import Enum


class FlushType(Enum):
    WRAP = "wrap"
    SPACE = "space"
    EMPTY = "empty"


class LineWrapper:
    """Column-aware writer that resolves pending wrap points lazily.

    Args:
        indent: One indentation unit
        column_limit: Maximum line length before a pending wrap point breaks the line
    """

    def __init__(self, indent: str = "  ", column_limit: int = 100):
        self.indent = indent
        self.column_limit = column_limit
        self._out: list[str] = []
        self._last_char = ""
        self._buffer: list[str] = []
        self._buffer_length = 0
        # Characters since the most recent newline, including the buffer
        self.column = 0
        # Indentation levels to write after a wrap, -1 when nothing is pending
        self._indent_level = -1
        self._next_flush: FlushType | None = None
        self._closed = False

    @property
    def last_char(self) -> str:
        return self._last_char

    def append(self, s: str) -> None:
        if self._closed:
            raise RuntimeError("closed")
        if not s:
            return
        self._last_char = s[-1]

        if self._next_flush is not None:
            next_newline = s.find("\n")

            # Text that keeps the line within the limit waits for the next decision
            if next_newline == -1 and self.column + len(s) <= self.column_limit:
                self._buffer.append(s)
                self._buffer_length += len(s)
                self.column += len(s)
                return

            wrap = next_newline == -1 or self.column + next_newline > self.column_limit
            self._flush(FlushType.WRAP if wrap else self._next_flush)

        self._write(s)
        last_newline = s.rfind("\n")
        if last_newline != -1:
            self.column = len(s) - last_newline - 1
        else:
            self.column += len(s)

    def wrapping_space(self, indent_level: int) -> None:
        """Emit a space that becomes a line break if the following text overflows."""
        if self._closed:
            raise RuntimeError("closed")
        if self._next_flush is not None:
            self._flush(self._next_flush)
        # The space itself is deferred until the flush
        self.column += 1
        self._next_flush = FlushType.SPACE
        self._indent_level = indent_level

    def zero_width_space(self, indent_level: int) -> None:
        """Emit nothing, or a line break if the following text overflows."""
        if self._closed:
            raise RuntimeError("closed")
        if self.column == 0:
            return
        if self._next_flush is not None:
            self._flush(self._next_flush)
        self._next_flush = FlushType.EMPTY
        self._indent_level = indent_level

    def close(self) -> None:
        if self._next_flush is not None:
            self._flush(self._next_flush)
        self._closed = True

    def getvalue(self) -> str:
        """Return everything written so far, resolving any pending wrap point."""
        if self._next_flush is not None:
            self._flush(self._next_flush)
        return "".join(self._out)

    def _write(self, s: str) -> None:
        if s:
            self._out.append(s)

    def _flush(self, flush_type: FlushType) -> None:
        if flush_type is FlushType.WRAP:
            self._write("\n" + self.indent * self._indent_level)
            self.column = self._indent_level * len(self.indent) + self._buffer_length
        elif flush_type is FlushType.SPACE:
            self._write(" ")

        self._write("".join(self._buffer))
        self._buffer.clear()
        self._buffer_length = 0
        self._indent_level = -1
        self._next_flush = None
