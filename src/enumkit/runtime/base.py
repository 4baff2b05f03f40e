"""Base class and helpers shared by every generated enum.

Python 3.13+. Zero external dependencies.
"""

import inspect
from collections.abc import Callable
from typing import Any, ClassVar

__all__ = [
    "VariantBase",
    "ascii_lower",
    "build_parse_error",
    "eq_ignore_ascii_case",
]

# Maps only A-Z; non-ASCII letters keep their case.
_ASCII_LOWER = str.maketrans("ABCDEFGHIJKLMNOPQRSTUVWXYZ", "abcdefghijklmnopqrstuvwxyz")


class VariantBase:
    """Root of generated enums.

    Each generated enum subclasses VariantBase; each of its variants is a
    frozen, slotted dataclass subclassing the enum. Unit variants are
    exposed as singleton instances, data variants as classes:

        >>> Color.Red
        Color.Red()
        >>> Color.Blue(hue=3)
        Color.Blue(hue=3)
    """

    __slots__ = ()

    _ordinal: ClassVar[int] = -1

    @property
    def ordinal(self) -> int:
        """Zero-based declaration index of this variant."""
        return type(self)._ordinal

    @property
    def variant_name(self) -> str:
        """Declared identifier of this variant."""
        return type(self).__name__


def ascii_lower(text: str) -> str:
    """Lower-case ASCII letters only; other characters are left as they are."""
    return text.translate(_ASCII_LOWER)


def eq_ignore_ascii_case(left: str, right: str) -> bool:
    """Compare strings ignoring ASCII case.

    Example:
        >>> eq_ignore_ascii_case("BLK", "blk")
        True
        >>> eq_ignore_ascii_case("É", "é")
        False
    """
    return len(left) == len(right) and ascii_lower(left) == ascii_lower(right)


def build_parse_error(factory: Callable[..., Any], value: str) -> Any:
    """Build a custom parse error, passing ``value`` if the factory takes it.

    Args:
        factory: Error class or function named by parse_err_type / parse_err_fn
        value: The input that matched no variant

    Returns:
        Whatever the factory returns (raised by the caller)
    """
    try:
        signature = inspect.signature(factory)
    except (TypeError, ValueError):
        # Builtins without introspectable signatures accept a message
        return factory(value)
    try:
        signature.bind(value)
    except TypeError:
        return factory()
    return factory(value)
