"""Indented line buffer used by every generator.

Python 3.13+. Zero external dependencies.
"""

from collections.abc import Iterator
from contextlib import contextmanager

__all__ = ["CodeWriter", "py_literal", "py_string", "py_tuple"]

_INDENT = "    "


def py_string(text: str) -> str:
    """Python source literal for ``text``.

    ``repr`` is exact for any str, including quotes, backslashes and
    control characters, so schema content cannot break out of the literal.
    """
    return repr(text)


def py_literal(value: str | int | bool | None) -> str:
    """Python source literal for a property or message value."""
    if isinstance(value, str):
        return py_string(value)
    return repr(value)


def py_tuple(items: list[str] | tuple[str, ...]) -> str:
    """Tuple display for already-rendered ``items``; handles the one-element comma."""
    if len(items) == 1:
        return f"({items[0]},)"
    return f"({', '.join(items)})"


class CodeWriter:
    """Accumulates generated source lines with managed indentation.

    Example:
        >>> out = CodeWriter()
        >>> out.line("class Color:")
        >>> with out.indented():
        ...     out.line("__slots__ = ()")
        >>> print(out.render())
        class Color:
            __slots__ = ()
    """

    __slots__ = ("_depth", "_lines")

    def __init__(self) -> None:
        self._lines: list[str] = []
        self._depth = 0

    def line(self, text: str = "") -> None:
        """Append one line at the current indentation (blank if empty)."""
        self._lines.append(f"{_INDENT * self._depth}{text}" if text else "")

    def lines(self, texts: list[str] | tuple[str, ...]) -> None:
        """Append several lines at the current indentation."""
        for text in texts:
            self.line(text)

    def blank(self, count: int = 1) -> None:
        """Append ``count`` blank lines, collapsing runs at the end."""
        trailing = 0
        for existing in reversed(self._lines):
            if existing:
                break
            trailing += 1
        self._lines.extend([""] * max(0, count - trailing))

    def docstring(self, text: str | None) -> None:
        """Emit a docstring if ``text`` is non-empty."""
        if text:
            self.line(py_string(text))

    @contextmanager
    def indented(self) -> Iterator[None]:
        """Indent lines appended inside the ``with`` block by one level."""
        self._depth += 1
        try:
            yield
        finally:
            self._depth -= 1

    def extend(self, other: "CodeWriter") -> None:
        """Append another writer's lines at the current indentation."""
        for text in other._lines:
            self.line(text)

    def render(self) -> str:
        """Joined source text with a single trailing newline."""
        text = "\n".join(self._lines).rstrip("\n")
        return f"{text}\n"
