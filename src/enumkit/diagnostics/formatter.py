"""Diagnostic formatting service.

Centralizes diagnostic output formatting with configurable options.
Python 3.13+. Zero external dependencies.
"""

import json
from collections.abc import Iterable
from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING

from .codes import Diagnostic

if TYPE_CHECKING:
    from .validation import ValidationResult

__all__ = [
    "DiagnosticFormatter",
    "OutputFormat",
]

# Control characters are escaped so schema content cannot forge log lines.
_CONTROL_ESCAPES = str.maketrans({"\n": "\\n", "\r": "\\r", "\t": "\\t", "\x1b": "\\x1b"})


class OutputFormat(StrEnum):
    """Output format options for diagnostic formatting."""

    RUST = "rust"  # Rust compiler-style output (default)
    SIMPLE = "simple"  # Single-line format
    JSON = "json"  # JSON format for tooling integration


@dataclass(frozen=True, slots=True)
class DiagnosticFormatter:
    """Diagnostic formatting service.

    Centralizes formatting of Diagnostic objects into human-readable
    or machine-readable output.

    Attributes:
        output_format: Output style (rust, simple, json)
        color: Enable ANSI color codes (for terminal output)

    Example:
        >>> formatter = DiagnosticFormatter(output_format=OutputFormat.SIMPLE)
        >>> print(formatter.format(diagnostic))
        DUPLICATE_OPTION: Option 'prefix' declared more than once on enum 'Color'
    """

    output_format: OutputFormat = OutputFormat.RUST
    color: bool = False

    def format(self, diagnostic: Diagnostic) -> str:
        """Format a single diagnostic.

        Args:
            diagnostic: Diagnostic to format

        Returns:
            Formatted diagnostic string
        """
        match self.output_format:
            case OutputFormat.RUST:
                return self._format_rust(diagnostic)
            case OutputFormat.SIMPLE:
                return self._format_simple(diagnostic)
            case OutputFormat.JSON:
                return self._format_json(diagnostic)

    def format_all(self, diagnostics: Iterable[Diagnostic]) -> str:
        """Format multiple diagnostics separated by blank lines."""
        return "\n\n".join(self.format(d) for d in diagnostics)

    def format_validation_result(self, result: "ValidationResult") -> str:
        """Format a ValidationResult with a summary line and every diagnostic.

        Args:
            result: ValidationResult to format

        Returns:
            Formatted string with summary and details
        """
        if result.is_valid:
            return f"Validation passed: {result.enum_count} enum(s)"
        parts = [f"Validation failed: {result.error_count} error(s)"]
        parts.extend(self.format(d) for d in result.diagnostics)
        return "\n\n".join(parts)

    def _format_rust(self, diagnostic: Diagnostic) -> str:
        """Format diagnostic in Rust compiler style.

        Example output:
            error[CONFLICTING_SERIALIZATION]: Variants 'A' and 'B' of 'E' both match 'x'
              --> colors.enums: line 7, column 22
              = note: 'A' serialization declared here: line 5, column 22
              = help: Give one variant a distinct serialize or to_string value
        """
        severity = diagnostic.severity if diagnostic.severity == "warning" else "error"

        if self.color:
            if severity == "error":
                severity_str = f"\033[1;31m{severity}\033[0m"  # Bold red
            else:
                severity_str = f"\033[1;33m{severity}\033[0m"  # Bold yellow
        else:
            severity_str = severity

        message = _escape(diagnostic.message)
        parts = [f"{severity_str}[{diagnostic.code.name}]: {message}"]

        origin = f"{diagnostic.origin}: " if diagnostic.origin else ""
        if diagnostic.span:
            parts.append(f"  --> {origin}{diagnostic.span.format_location()}")
        elif diagnostic.origin:
            parts.append(f"  --> {diagnostic.origin}")

        if diagnostic.related_span:
            label = diagnostic.related_label or "related"
            parts.append(f"  = note: {label}: {diagnostic.related_span.format_location()}")

        if diagnostic.hint:
            parts.append(f"  = help: {_escape(diagnostic.hint)}")

        return "\n".join(parts)

    def _format_simple(self, diagnostic: Diagnostic) -> str:
        """Format diagnostic in single-line format.

        Example output:
            DUPLICATE_OPTION: Option 'prefix' declared more than once on enum 'Color'
        """
        message = _escape(diagnostic.message)
        if diagnostic.span:
            return f"{diagnostic.code.name}: {message} ({diagnostic.span.format_location()})"
        return f"{diagnostic.code.name}: {message}"

    def _format_json(self, diagnostic: Diagnostic) -> str:
        """Format diagnostic as JSON.

        Example output:
            {"code": "ARITY_MISMATCH", "code_value": 2003, "message": "...", ...}
        """
        data: dict[str, str | int | None] = {
            "code": diagnostic.code.name,
            "code_value": diagnostic.code.value,
            "message": diagnostic.message,
            "severity": diagnostic.severity,
        }

        if diagnostic.span:
            data["line"] = diagnostic.span.line
            data["column"] = diagnostic.span.column
            data["start"] = diagnostic.span.start
            data["end"] = diagnostic.span.end

        if diagnostic.related_span:
            data["related_line"] = diagnostic.related_span.line
            data["related_column"] = diagnostic.related_span.column

        if diagnostic.origin:
            data["origin"] = diagnostic.origin

        if diagnostic.enum_name:
            data["enum"] = diagnostic.enum_name

        if diagnostic.variant_name:
            data["variant"] = diagnostic.variant_name

        if diagnostic.hint:
            data["hint"] = diagnostic.hint

        return json.dumps(data, ensure_ascii=False)


def _escape(text: str) -> str:
    """Escape control characters in user-controlled text."""
    return text.translate(_CONTROL_ESCAPES)
