"""Unified validation result for enum schema validation.

Collects the diagnostics produced by every pipeline stage (syntax,
normalization, string conversion planning) for callers that want a
report instead of an exception.

Python 3.13+.
"""

from dataclasses import dataclass

from .codes import Diagnostic

__all__ = ["ValidationResult"]


@dataclass(frozen=True, slots=True)
class ValidationResult:
    """Immutable result of validating a schema.

    Each enum contributes at most one diagnostic: the first error aborts
    processing of that enum, other enums are still checked.

    Attributes:
        diagnostics: Errors found, in source order
        enum_count: Number of enums declared in the schema

    Example:
        >>> result = ValidationResult.valid(enum_count=2)
        >>> result.is_valid
        True
        >>> result.error_count
        0
    """

    diagnostics: tuple[Diagnostic, ...]
    enum_count: int = 0

    @property
    def is_valid(self) -> bool:
        """True if no diagnostic of severity 'error' was recorded."""
        return self.error_count == 0

    @property
    def error_count(self) -> int:
        """Number of error diagnostics."""
        return sum(1 for d in self.diagnostics if d.severity == "error")

    @staticmethod
    def valid(enum_count: int = 0) -> "ValidationResult":
        """Create a result with no diagnostics."""
        return ValidationResult(diagnostics=(), enum_count=enum_count)

    @staticmethod
    def invalid(diagnostics: tuple[Diagnostic, ...], enum_count: int = 0) -> "ValidationResult":
        """Create a result carrying diagnostics."""
        return ValidationResult(diagnostics=diagnostics, enum_count=enum_count)

    def format(self) -> str:
        """Format validation result as human-readable string."""
        from .formatter import DiagnosticFormatter  # noqa: PLC0415 - circular

        return DiagnosticFormatter().format_validation_result(self)
