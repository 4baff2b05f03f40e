"""Runtime errors raised by generated code.

These are ordinary fallible-operation outcomes, not compile-time
diagnostics: callers handle them as part of normal control flow.

Python 3.13+. Zero external dependencies.
"""

__all__ = ["ParseError", "VariantDisabledError", "VariantNotFoundError"]


class ParseError(ValueError):
    """Base class for string-to-variant failures.

    Subclasses ValueError so generated ``from_str`` behaves like other
    Python parsers (``int("x")``, ``Enum("x")``).
    """


class VariantNotFoundError(ParseError):
    """No variant matched the input and the enum has no catch-all variant.

    Carries no detail beyond the rejected input.

    Attributes:
        value: The input that matched nothing (None if not recorded)
    """

    def __init__(self, value: str | None = None) -> None:
        self.value = value
        super().__init__("Matching variant not found")


class VariantDisabledError(ValueError):
    """A disabled variant was rendered to a string.

    Attributes:
        variant: Qualified variant name (``Color.Gray``)
    """

    def __init__(self, variant: str) -> None:
        self.variant = variant
        super().__init__(f"Variant {variant} is disabled and has no string form")
