"""Diagnostic codes and data structures.

Defines error codes, source spans, and diagnostic messages.
Python 3.13+. Zero external dependencies.
"""

from dataclasses import dataclass, replace
from enum import Enum
from typing import Literal

__all__ = [
    "Diagnostic",
    "DiagnosticCode",
    "SourceSpan",
]


class DiagnosticCode(Enum):
    """Error codes with unique identifiers.

    Organized by pipeline stage:
        1000-1999: Syntax errors (schema and attribute grammar)
        2000-2999: Normalization errors (option and flag consistency)
        3000-3999: Generation errors (string conversion plans)
    """

    # Syntax errors (1000-1999)
    INVALID_ATTRIBUTE_SYNTAX = 1001
    UNEXPECTED_EOF = 1002
    SOURCE_TOO_LARGE = 1003

    # Normalization errors (2000-2999)
    DUPLICATE_OPTION = 2001
    CONFLICTING_VARIANT_FLAGS = 2002
    ARITY_MISMATCH = 2003
    DUPLICATE_PROPERTY = 2004

    # Generation errors (3000-3999)
    CONFLICTING_SERIALIZATION = 3001
    PERFECT_HASH_FAILED = 3002


@dataclass(frozen=True, slots=True)
class SourceSpan:
    """Source code location for error reporting.

    Note:
        Python strings measure positions in characters (Unicode code points),
        not bytes. For multi-byte UTF-8 characters, character offset differs
        from byte offset.

    Attributes:
        start: Starting character offset (0-indexed)
        end: Ending character offset (exclusive)
        line: Line number (1-indexed)
        column: Column number (1-indexed)
    """

    start: int
    end: int
    line: int
    column: int

    def __post_init__(self) -> None:
        """Validate SourceSpan invariants.

        Raises:
            ValueError: If start is negative, end precedes start, line is
                less than 1 (lines are 1-indexed), or column is less than 1
                (columns are 1-indexed).
        """
        if self.start < 0:
            msg = f"SourceSpan.start must be >= 0, got {self.start}"
            raise ValueError(msg)
        if self.end < self.start:
            msg = f"SourceSpan.end ({self.end}) must be >= start ({self.start})"
            raise ValueError(msg)
        if self.line < 1:
            msg = f"SourceSpan.line must be >= 1 (1-indexed), got {self.line}"
            raise ValueError(msg)
        if self.column < 1:
            msg = f"SourceSpan.column must be >= 1 (1-indexed), got {self.column}"
            raise ValueError(msg)

    def format_location(self) -> str:
        """Return ``line L, column C`` for this span."""
        return f"line {self.line}, column {self.column}"


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """Structured diagnostic message.

    Inspired by Rust compiler diagnostics. Provides rich error information
    for both humans and tools.

    Attributes:
        code: Unique error code
        message: Human-readable error description
        span: Primary source location (the offending annotation)
        related_span: Secondary location (first occurrence, other variant)
        related_label: Description of the secondary location
        hint: Suggestion for fixing the error
        origin: Schema file name or other origin label
        enum_name: Enum being processed when the error occurred
        variant_name: Variant being processed when the error occurred
        severity: Error severity level
    """

    code: DiagnosticCode
    message: str
    span: SourceSpan | None = None
    related_span: SourceSpan | None = None
    related_label: str | None = None
    hint: str | None = None
    origin: str | None = None
    enum_name: str | None = None
    variant_name: str | None = None
    severity: Literal["error", "warning"] = "error"

    def __str__(self) -> str:
        """Return human-readable error description."""
        return self.message

    def format_error(self) -> str:
        """Format diagnostic like Rust compiler.

        Delegates to DiagnosticFormatter for consistent output with
        control-character escaping.

        Example output:
            error[DUPLICATE_OPTION]: Option 'prefix' declared more than once
              --> schema.enums: line 3, column 22
              = note: first declared at line 3, column 9
              = help: Remove one of the declarations

        Returns:
            Formatted error message
        """
        from .formatter import DiagnosticFormatter  # noqa: PLC0415 - circular

        return DiagnosticFormatter().format(self)

    def with_origin(self, origin: str | None) -> "Diagnostic":
        """Return a copy of this diagnostic labelled with ``origin``."""
        if origin is None or self.origin == origin:
            return self
        return replace(self, origin=origin)
