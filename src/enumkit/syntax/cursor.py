"""Immutable cursor infrastructure for type-safe parsing.

Implements the immutable cursor pattern for zero-`None` parsing.
Python 3.13+. Zero external dependencies.

Design Philosophy:
    - Cursor is immutable (frozen dataclass)
    - EOF is a state (is_eof), not a return value
    - Every advance() returns NEW cursor (prevents infinite loops)
    - Line:column computed on-demand, only when building diagnostics

Line Ending Support:
    LF and CRLF are supported; \\n is the line delimiter. CR-only sources
    report every position on line 1.
"""

from dataclasses import dataclass

from enumkit.diagnostics import ErrorTemplate, SourceSpan

__all__ = ["Cursor", "LineOffsetCache", "ParseResult"]


@dataclass(frozen=True, slots=True)
class Cursor:
    """Immutable source position tracker.

    Example:
        >>> cursor = Cursor("hello", 0)
        >>> cursor.current
        'h'
        >>> new_cursor = cursor.advance()
        >>> new_cursor.current
        'e'
        >>> cursor.current  # Original unchanged (immutability)
        'h'
        >>> Cursor("hi", 2).is_eof
        True
    """

    source: str
    pos: int

    @property
    def is_eof(self) -> bool:
        """True if position >= source length."""
        return self.pos >= len(self.source)

    @property
    def current(self) -> str:
        """Get current character.

        Returns:
            Current character at position

        Raises:
            EOFError: If at end of input
        """
        if self.is_eof:
            diagnostic = ErrorTemplate.unexpected_eof(self.pos)
            raise EOFError(diagnostic.message)
        return self.source[self.pos]

    def peek(self, offset: int = 0) -> str | None:
        """Peek at character with offset without advancing.

        Args:
            offset: Offset from current position (0 = current, 1 = next)

        Returns:
            Character at position + offset, or None if beyond EOF
        """
        target_pos = self.pos + offset
        if target_pos >= len(self.source):
            return None
        return self.source[target_pos]

    def advance(self, count: int = 1) -> "Cursor":
        """Return new cursor advanced by count positions (clamped to EOF).

        Example:
            >>> cursor = Cursor("hello", 0)
            >>> cursor.advance(2).pos
            2
            >>> cursor.pos  # Original unchanged
            0
        """
        new_pos = min(self.pos + count, len(self.source))
        return Cursor(self.source, new_pos)

    def slice_to(self, end_pos: int) -> str:
        """Extract source slice from current position to end_pos (exclusive)."""
        return self.source[self.pos : end_pos]

    def slice_ahead(self, n: int) -> str:
        """Get next n characters without advancing cursor."""
        return self.source[self.pos : self.pos + n]

    def starts_with(self, text: str) -> bool:
        """True if the source continues with ``text`` at this position."""
        return self.source.startswith(text, self.pos)

    def skip_spaces(self) -> "Cursor":
        """Skip inline whitespace (space and tab).

        Example:
            >>> Cursor("   hello", 0).skip_spaces().pos
            3
        """
        c = self
        while not c.is_eof and c.current in (" ", "\t"):
            c = c.advance()
        return c

    def skip_whitespace(self) -> "Cursor":
        """Skip whitespace characters (space, tab, newline, carriage return).

        Example:
            >>> Cursor("  \\n\\r  hello", 0).skip_whitespace().pos
            6
        """
        c = self
        while not c.is_eof and c.current in (" ", "\t", "\n", "\r"):
            c = c.advance()
        return c

    def expect(self, char: str) -> "Cursor | None":
        """Consume character if it matches expected, return None otherwise.

        Example:
            >>> Cursor("hello", 0).expect('h').pos
            1
            >>> Cursor("hello", 0).expect('x') is None
            True
        """
        if not self.is_eof and self.current == char:
            return self.advance()
        return None

    def skip_line_end(self) -> "Cursor":
        """Skip LF, CR, or CRLF line ending; unchanged if not at a line end."""
        if self.is_eof:
            return self
        if self.current == "\r":
            cursor = self.advance()
            if not cursor.is_eof and cursor.current == "\n":
                return cursor.advance()
            return cursor
        if self.current == "\n":
            return self.advance()
        return self

    def skip_to_line_end(self) -> "Cursor":
        """Advance to the next line ending character (not consumed)."""
        cursor = self
        while not cursor.is_eof and cursor.current not in ("\n", "\r"):
            cursor = cursor.advance()
        return cursor

    def compute_line_col(self) -> tuple[int, int]:
        """Compute 1-indexed (line, column) for current position.

        Performance:
            O(n) where n = current position. Only call for error reporting.

        Example:
            >>> Cursor("line1\\nline2", 8).compute_line_col()
            (2, 3)
        """
        line = self.source.count("\n", 0, self.pos) + 1
        last_newline = self.source.rfind("\n", 0, self.pos)
        col = self.pos - last_newline if last_newline >= 0 else self.pos + 1
        return (line, col)


class LineOffsetCache:
    """Cached line offset computation for efficient position lookups.

    Precomputes line start offsets in O(n) single pass, then provides
    O(log n) lookups using binary search. Used by the normalizer and
    generators, which convert many AST spans into SourceSpans.

    Example:
        >>> cache = LineOffsetCache("line1\\nline2\\nline3")
        >>> cache.get_line_col(6)   # Start of line 2
        (2, 1)
        >>> cache.span(6, 11).column
        1

    Thread Safety:
        Thread-safe. Internal state is only set during __init__.
    """

    __slots__ = ("_offsets", "_source_len")

    def __init__(self, source: str) -> None:
        """Build line offset cache from source.

        Args:
            source: Source text to index
        """
        offsets = [0]
        for i, char in enumerate(source):
            if char == "\n":
                offsets.append(i + 1)
        self._offsets: tuple[int, ...] = tuple(offsets)
        self._source_len = len(source)

    def get_line_col(self, pos: int) -> tuple[int, int]:
        """Get 1-indexed (line, column) for position using binary search."""
        if pos < 0:
            pos = 0
        elif pos > self._source_len:
            pos = self._source_len

        # Line index = index of largest offset <= pos
        left, right = 0, len(self._offsets) - 1
        while left < right:
            mid = (left + right + 1) // 2
            if self._offsets[mid] <= pos:
                left = mid
            else:
                right = mid - 1

        return (left + 1, pos - self._offsets[left] + 1)

    def span(self, start: int, end: int) -> SourceSpan:
        """Build a SourceSpan for the character range [start, end)."""
        line, column = self.get_line_col(start)
        return SourceSpan(start=start, end=max(start, end), line=line, column=column)


@dataclass(frozen=True, slots=True)
class ParseResult[T]:
    """Parser result containing parsed value and new cursor position.

    Pattern:
        Every rule has signature:
            def parse_foo(cursor: Cursor) -> ParseResult[Foo] | None

    Example:
        >>> cursor = Cursor("hello", 0)
        >>> result = ParseResult('h', cursor.advance())
        >>> result.value
        'h'
        >>> result.cursor.pos
        1
    """

    value: T
    cursor: Cursor
