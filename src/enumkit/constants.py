"""Shared constants for enumkit.

This module provides centralized configuration constants used across
the syntax, model and codegen packages. Placing constants here avoids
circular imports and provides a single source of truth.

Constants are grouped by domain:
- Input limits: Size constraints on schema sources
- Perfect hash: Tuning of the hash-and-displace table generator
- Generated code: Names and defaults emitted into generated modules

Python 3.13+. Zero external dependencies.
"""

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Input limits
    "MAX_SOURCE_SIZE",
    # Perfect hash
    "PHF_LAMBDA",
    "PHF_MAX_ATTEMPTS",
    # Generated code
    "DEFAULT_RUNTIME_MODULE",
    "DECORATOR_ENUMKIT",
    "DECORATOR_DISCRIMINANTS",
    "DECORATOR_DERIVE",
    "DECORATOR_REPR",
    "DISCRIMINANTS_SUFFIX",
    "GENERATED_HEADER",
    "MODULE_PRELUDE_NAMES",
    "RESERVED_MEMBER_NAMES",
    "RUNTIME_ALIAS",
]

# ============================================================================
# INPUT LIMITS
# ============================================================================

# Default maximum schema source size in characters (1 MB).
# A schema describing even thousands of enums stays far below this.
MAX_SOURCE_SIZE: int = 1024 * 1024

# ============================================================================
# PERFECT HASH
# ============================================================================

# Average number of keys per displacement bucket.
# Same load factor as the classic hash-and-displace construction.
PHF_LAMBDA: int = 5

# Number of seeds tried before giving up on a perfect hash table.
# Each attempt succeeds with high probability; exhausting this is a bug.
PHF_MAX_ATTEMPTS: int = 64

# ============================================================================
# GENERATED CODE
# ============================================================================

# Module imported by generated code for VariantBase, errors and PhfMap.
# Overridable per enum with @enumkit(runtime = "...").
DEFAULT_RUNTIME_MODULE: str = "enumkit.runtime"

# Local alias under which generated modules import the runtime.
RUNTIME_ALIAS: str = "_rt"

# Module-level names every generated module binds before its classes.
# Runtime aliases (_rt, _rt1, ...) are reserved as well.
MODULE_PRELUDE_NAMES: frozenset[str] = frozenset({"__all__", "_dataclasses", "_enum", "_typing"})

# Decorator names recognized in schema sources.
DECORATOR_ENUMKIT: str = "enumkit"
DECORATOR_DISCRIMINANTS: str = "discriminants"
DECORATOR_DERIVE: str = "derive"
DECORATOR_REPR: str = "repr"

# Appended to the enum name when no discriminant name override is given.
DISCRIMINANTS_SUFFIX: str = "Discriminants"

# First line of every generated module.
GENERATED_HEADER: str = "# Generated by enumkit from {origin}. Do not edit."

# Members every generated enum may define; variants cannot use these names.
RESERVED_MEMBER_NAMES: frozenset[str] = frozenset({
    "COUNT",
    "STRS",
    "VARIANTS",
    "VARIANT_VALUES",
    "discriminant",
    "from_repr",
    "from_str",
    "get_bool",
    "get_detailed_message",
    "get_documentation",
    "get_int",
    "get_message",
    "get_property",
    "get_serializations",
    "get_str",
    "iter",
    "ordinal",
    "variant_name",
})
