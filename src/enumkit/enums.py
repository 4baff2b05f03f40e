"""Enumerations for enumkit type-safe constants.

Uses StrEnum (Python 3.11+) for automatic string conversion.
StrEnum members are strings themselves, eliminating boilerplate __str__ methods.

Python 3.13+.
"""

from enum import StrEnum


class Generator(StrEnum):
    """Generator selectable with ``@derive(...)`` on an enum.

    StrEnum provides automatic string conversion: str(Generator.FROM_STR) == "from_str"
    """

    FROM_STR = "from_str"
    """Parse-from-string classmethod: Color.from_str("red")"""

    DISPLAY = "display"
    """Rendering via __str__: str(Color.Red)"""

    MESSAGE = "message"
    """Message, detailed message, documentation and serializations accessors"""

    PROPERTY = "property"
    """Typed property lookup: get_str / get_int / get_bool"""

    DISCRIMINANTS = "discriminants"
    """Payload-free companion enum and discriminant() accessor"""

    COUNT = "count"
    """COUNT class constant"""

    VARIANT_NAMES = "variant_names"
    """VARIANTS class constant listing rendered names"""

    VARIANT_ARRAY = "variant_array"
    """VARIANT_VALUES class constant (field-less enums only)"""

    ITER = "iter"
    """iter() classmethod yielding every variant"""

    FROM_REPR = "from_repr"
    """from_repr(int) classmethod mapping ordinals back to variants"""

    IS_VARIANT = "is_variant"
    """is_<variant>() predicates"""


class MatchStrategy(StrEnum):
    """Lookup strategy chosen for a generated from_str.

    StrEnum provides automatic string conversion: str(MatchStrategy.LINEAR) == "linear"
    """

    PERFECT_HASH = "perfect_hash"
    """Compile-time perfect hash table, O(1) lookup"""

    LINEAR = "linear"
    """Ordered chain of equality tests in declaration order"""


class Visibility(StrEnum):
    """Visibility of a generated discriminant enum.

    StrEnum provides automatic string conversion: str(Visibility.PUBLIC) == "public"
    """

    PUBLIC = "public"
    """Listed in the generated module's __all__"""

    PRIVATE = "private"
    """Defined but left out of __all__"""


__all__ = [
    "Generator",
    "MatchStrategy",
    "Visibility",
]
