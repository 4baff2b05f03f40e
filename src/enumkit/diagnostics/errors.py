"""enumkit exception hierarchy with structured diagnostics.

Every error raised while parsing, normalizing or planning a schema is a
compile-time diagnostic: it aborts generation for the enum being processed
and points at the offending annotation. All exceptions store Diagnostic
objects for rich error information.

Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic, DiagnosticCode

__all__ = [
    "ArityMismatchError",
    "ConflictingSerializationError",
    "ConflictingVariantFlagsError",
    "DuplicateOptionError",
    "DuplicatePropertyError",
    "EnumKitError",
    "InvalidAttributeSyntaxError",
    "PerfectHashError",
    "error_for_diagnostic",
]


class EnumKitError(Exception):
    """Base exception for all enumkit errors.

    Attributes:
        diagnostic: Structured diagnostic information (optional)
    """

    def __init__(self, message: str | Diagnostic) -> None:
        """Initialize EnumKitError.

        Args:
            message: Error message string OR Diagnostic object
        """
        if isinstance(message, Diagnostic):
            self.diagnostic: Diagnostic | None = message
            super().__init__(message.format_error())
        else:
            self.diagnostic = None
            super().__init__(message)


class InvalidAttributeSyntaxError(EnumKitError):
    """Malformed schema, keyword/value pair, or unknown keyword.

    Example:
        @enumkit(serialise = "x")  ← unknown keyword
    """


class DuplicateOptionError(EnumKitError):
    """An exclusive option declared more than once.

    The diagnostic carries both occurrence sites: ``span`` is the second
    declaration and ``related_span`` the first.
    """


class ConflictingVariantFlagsError(EnumKitError):
    """Mutually exclusive variant flags combined.

    Examples:
    - disabled + default
    - transparent + serialize
    """


class ArityMismatchError(EnumKitError):
    """Variant shape does not fit the requested behavior.

    Examples:
    - default on a unit variant
    - transparent on a variant with two fields
    """


class DuplicatePropertyError(EnumKitError):
    """Same property key declared twice on one variant."""


class ConflictingSerializationError(EnumKitError):
    """Two variants share a candidate string under their case-sensitivity mode.

    Example:
        @enumkit(serialize = "x")  Left
        @enumkit(serialize = "x")  Right  ← "x" would match both
    """


class PerfectHashError(EnumKitError):
    """Perfect hash table construction exhausted its seed budget."""


_ERRORS_BY_CODE: dict[DiagnosticCode, type[EnumKitError]] = {
    DiagnosticCode.INVALID_ATTRIBUTE_SYNTAX: InvalidAttributeSyntaxError,
    DiagnosticCode.UNEXPECTED_EOF: InvalidAttributeSyntaxError,
    DiagnosticCode.SOURCE_TOO_LARGE: InvalidAttributeSyntaxError,
    DiagnosticCode.DUPLICATE_OPTION: DuplicateOptionError,
    DiagnosticCode.CONFLICTING_VARIANT_FLAGS: ConflictingVariantFlagsError,
    DiagnosticCode.ARITY_MISMATCH: ArityMismatchError,
    DiagnosticCode.DUPLICATE_PROPERTY: DuplicatePropertyError,
    DiagnosticCode.CONFLICTING_SERIALIZATION: ConflictingSerializationError,
    DiagnosticCode.PERFECT_HASH_FAILED: PerfectHashError,
}


def error_for_diagnostic(diagnostic: Diagnostic) -> EnumKitError:
    """Build the exception matching a diagnostic's code.

    Args:
        diagnostic: Diagnostic produced by ErrorTemplate

    Returns:
        Exception instance ready to raise
    """
    return _ERRORS_BY_CODE[diagnostic.code](diagnostic)
