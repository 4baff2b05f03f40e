"""Diagnostic system for enumkit errors.

Provides structured error diagnostics with codes, spans and hints.
Inspired by Rust compiler diagnostics and Elm error messages.

Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic, DiagnosticCode, SourceSpan
from .errors import (
    ArityMismatchError,
    ConflictingSerializationError,
    ConflictingVariantFlagsError,
    DuplicateOptionError,
    DuplicatePropertyError,
    EnumKitError,
    InvalidAttributeSyntaxError,
    PerfectHashError,
    error_for_diagnostic,
)
from .formatter import DiagnosticFormatter, OutputFormat
from .templates import ErrorTemplate
from .validation import ValidationResult

__all__ = [
    "ArityMismatchError",
    "ConflictingSerializationError",
    "ConflictingVariantFlagsError",
    "Diagnostic",
    "DiagnosticCode",
    "DiagnosticFormatter",
    "DuplicateOptionError",
    "DuplicatePropertyError",
    "EnumKitError",
    "ErrorTemplate",
    "InvalidAttributeSyntaxError",
    "OutputFormat",
    "PerfectHashError",
    "SourceSpan",
    "ValidationResult",
    "error_for_diagnostic",
]
