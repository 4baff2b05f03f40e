"""Primitive parsing utilities for the enum schema parser.

This module provides low-level parsers for identifiers, dotted paths,
integers and string literals.

Error Context:
    Functions store error context on failure via _set_parse_error().
    Retrieve with get_last_parse_error() for detailed diagnostics.
"""

import keyword
from dataclasses import dataclass
from threading import local as thread_local

from enumkit.syntax.cursor import Cursor, ParseResult

# \uXXXX = 4 hex digits (BMP characters U+0000 to U+FFFF)
_UNICODE_ESCAPE_LEN_SHORT: int = 4

# \UXXXXXXXX = 8 hex digits, as in Python string literals
_UNICODE_ESCAPE_LEN_LONG: int = 8

# Maximum valid Unicode code point per Unicode Standard.
_MAX_UNICODE_CODE_POINT: int = 0x10FFFF

# UTF-16 surrogate code point range (D800-DFFF), invalid in isolation.
_SURROGATE_RANGE_START: int = 0xD800
_SURROGATE_RANGE_END: int = 0xDFFF

_HEX_DIGITS: str = "0123456789abcdefABCDEF"

# ASCII digits only: str.isdigit() accepts ² and friends, which int() rejects.
_ASCII_DIGITS: str = "0123456789"

_SIMPLE_ESCAPES: dict[str, str] = {
    '"': '"',
    "\\": "\\",
    "n": "\n",
    "t": "\t",
    "r": "\r",
    "0": "\0",
}

# Thread-local storage for parse error context
_error_thread_local = thread_local()


@dataclass(frozen=True, slots=True)
class ParseErrorContext:
    """Context information for parse failures.

    Attributes:
        message: Human-readable error description
        position: Character position in source where error occurred
        expected: What the parser expected to find (optional)
    """

    message: str
    position: int
    expected: tuple[str, ...] = ()


def _set_parse_error(message: str, position: int, expected: tuple[str, ...] = ()) -> None:
    """Store parse error context for later retrieval."""
    _error_thread_local.last_error = ParseErrorContext(
        message=message, position=position, expected=expected
    )


def get_last_parse_error() -> ParseErrorContext | None:
    """Get the last parse error context (if any).

    Example:
        >>> result = parse_identifier(cursor)
        >>> if result is None:
        ...     error = get_last_parse_error()
        ...     print(f"Error at position {error.position}: {error.message}")
    """
    return getattr(_error_thread_local, "last_error", None)


def clear_parse_error() -> None:
    """Clear the last parse error context."""
    _error_thread_local.last_error = None


def is_identifier_start(ch: str) -> bool:
    """True if ``ch`` may start a Python identifier."""
    return ch == "_" or ch.isalpha()


def is_identifier_char(ch: str) -> bool:
    """True if ``ch`` may continue a Python identifier."""
    return ch == "_" or ch.isalnum()


def parse_identifier(cursor: Cursor) -> ParseResult[str] | None:
    """Parse a Python identifier: [A-Za-z_][A-Za-z0-9_]*

    Unicode letters are accepted as Python accepts them. Reserved Python
    keywords (``class``, ``None``...) are rejected because every identifier
    ends up as a name in generated code.

    Examples:
        Color → "Color"
        dark_black → "dark_black"

    Args:
        cursor: Current position in source

    Returns:
        ParseResult(identifier, new_cursor) on success, None otherwise
    """
    clear_parse_error()

    if cursor.is_eof or not is_identifier_start(cursor.current):
        _set_parse_error(
            "Expected identifier (must start with a letter or '_')",
            cursor.pos,
            ("a-z", "A-Z", "_"),
        )
        return None

    start_pos = cursor.pos
    cursor = cursor.advance()
    while not cursor.is_eof and is_identifier_char(cursor.current):
        cursor = cursor.advance()

    identifier = Cursor(cursor.source, start_pos).slice_to(cursor.pos)
    if not identifier.isidentifier() or keyword.iskeyword(identifier):
        _set_parse_error(f"'{identifier}' is not a valid identifier", start_pos)
        return None
    return ParseResult(identifier, cursor)


def parse_keyword(cursor: Cursor) -> ParseResult[str] | None:
    """Parse a bare word, allowing Python keywords.

    Attribute keywords such as ``default`` or ``true`` are not Python
    keywords, but ``True``/``False`` are; this parser accepts both.
    """
    clear_parse_error()

    if cursor.is_eof or not is_identifier_start(cursor.current):
        _set_parse_error("Expected keyword", cursor.pos, ("a-z", "A-Z", "_"))
        return None

    start_pos = cursor.pos
    cursor = cursor.advance()
    while not cursor.is_eof and is_identifier_char(cursor.current):
        cursor = cursor.advance()
    return ParseResult(Cursor(cursor.source, start_pos).slice_to(cursor.pos), cursor)


def parse_dotted_path(cursor: Cursor) -> ParseResult[str] | None:
    """Parse a dotted name: word ('.' word)*

    Examples:
        Hash → "Hash"
        enum.unique → "enum.unique"

    Args:
        cursor: Current position in source

    Returns:
        ParseResult(path, new_cursor) on success, None otherwise
    """
    first = parse_keyword(cursor)
    if first is None:
        return None

    parts = [first.value]
    cursor = first.cursor
    while not cursor.is_eof and cursor.current == "." and cursor.peek(1) is not None:
        segment = parse_keyword(cursor.advance())
        if segment is None:
            _set_parse_error("Expected name after '.'", cursor.pos + 1, ("a-z", "A-Z", "_"))
            return None
        parts.append(segment.value)
        cursor = segment.cursor
    return ParseResult(".".join(parts), cursor)


def parse_integer(cursor: Cursor) -> ParseResult[int] | None:
    """Parse integer literal: -?[0-9]+

    Floats are not part of the grammar; a '.' after the digits is left
    for the caller, which reports it as an unexpected token.

    Examples:
        42 → 42
        -7 → -7
    """
    clear_parse_error()

    start_pos = cursor.pos
    if not cursor.is_eof and cursor.current == "-":
        cursor = cursor.advance()

    if cursor.is_eof or cursor.current not in _ASCII_DIGITS:
        _set_parse_error("Expected integer", cursor.pos, ("0-9",))
        return None

    while not cursor.is_eof and cursor.current in _ASCII_DIGITS:
        cursor = cursor.advance()

    text = Cursor(cursor.source, start_pos).slice_to(cursor.pos)
    return ParseResult(int(text), cursor)


def parse_escape_sequence(cursor: Cursor) -> tuple[str, Cursor] | None:
    """Parse escape sequence after backslash in string.

    Supported escape sequences:
        \\" \\\\ \\n \\t \\r \\0
        \\uXXXX → Unicode character (4 hex digits)
        \\UXXXXXXXX → Unicode character (8 hex digits)

    Args:
        cursor: Position AFTER the backslash

    Returns:
        (escaped_char, new_cursor) on success, None on invalid escape
    """
    if cursor.is_eof:
        _set_parse_error("Unexpected EOF in escape sequence", cursor.pos)
        return None

    escape_ch = cursor.current
    if escape_ch in _SIMPLE_ESCAPES:
        return (_SIMPLE_ESCAPES[escape_ch], cursor.advance())

    if escape_ch in ("u", "U"):
        length = _UNICODE_ESCAPE_LEN_SHORT if escape_ch == "u" else _UNICODE_ESCAPE_LEN_LONG
        cursor = cursor.advance()
        hex_digits = cursor.slice_ahead(length)
        if len(hex_digits) < length or not all(c in _HEX_DIGITS for c in hex_digits):
            _set_parse_error(
                f"Invalid Unicode escape (expected {length} hex digits)",
                cursor.pos,
                ("0-9", "a-f", "A-F"),
            )
            return None
        code_point = int(hex_digits, 16)
        if code_point > _MAX_UNICODE_CODE_POINT:
            _set_parse_error(
                f"Invalid Unicode code point: U+{hex_digits} (max U+10FFFF)", cursor.pos
            )
            return None
        if _SURROGATE_RANGE_START <= code_point <= _SURROGATE_RANGE_END:
            _set_parse_error(
                f"Invalid surrogate code point: U+{hex_digits} (surrogates not allowed)",
                cursor.pos,
            )
            return None
        return (chr(code_point), cursor.advance(length))

    _set_parse_error(f"Invalid escape sequence: \\{escape_ch}", cursor.pos)
    return None


def parse_string_literal(cursor: Cursor) -> ParseResult[str] | None:
    """Parse string literal: "text"

    String literals may not span lines.

    Examples:
        "snake_case" → "snake_case"
        "with \\"quotes\\"" → 'with "quotes"'

    Args:
        cursor: Current position in source

    Returns:
        ParseResult(string_value, new_cursor) on success, None otherwise
    """
    clear_parse_error()

    if cursor.is_eof or cursor.current != '"':
        _set_parse_error("Expected opening quote", cursor.pos, ('"',))
        return None

    cursor = cursor.advance()
    chars: list[str] = []

    while not cursor.is_eof:
        ch = cursor.current

        if ch == '"':
            return ParseResult("".join(chars), cursor.advance())

        if ch in ("\n", "\r"):
            break

        if ch == "\\":
            escape_result = parse_escape_sequence(cursor.advance())
            if escape_result is None:
                return None
            escaped_char, cursor = escape_result
            chars.append(escaped_char)
        else:
            chars.append(ch)
            cursor = cursor.advance()

    _set_parse_error("Unterminated string literal", cursor.pos, ('"',))
    return None
