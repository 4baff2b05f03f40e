"""Enum schema AST (Abstract Syntax Tree) node definitions.

The schema parser produces these nodes; the metadata reader turns the
decorator nodes into typed metadata items. Nothing here is resolved:
decorators keep their raw meta items and spans.

Python 3.13+. Zero external dependencies.
"""

from dataclasses import dataclass

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Base types
    "Span",
    "Identifier",
    # Literals
    "StringLiteral",
    "IntegerLiteral",
    "BooleanLiteral",
    "PathLiteral",
    # Attribute grammar
    "MetaWord",
    "MetaNameValue",
    "MetaList",
    "Decorator",
    # Declarations
    "DocComment",
    "TypeExpr",
    "FieldDecl",
    "VariantDecl",
    "EnumDecl",
    "ImportLine",
    "Schema",
    # Type aliases
    "Literal",
    "MetaItem",
]

# ============================================================================
# BASE TYPES
# ============================================================================


@dataclass(frozen=True, slots=True)
class Span:
    """Source position span.

    Attributes:
        start: Starting character offset (inclusive)
        end: Ending character offset (exclusive)

    Example:
        Source: "enum Color:"
        Identifier "Color" span: Span(start=5, end=10)
    """

    start: int
    end: int

    def __post_init__(self) -> None:
        """Validate span invariants."""
        if self.start < 0:
            msg = f"Span start must be >= 0, got {self.start}"
            raise ValueError(msg)
        if self.end < self.start:
            msg = f"Span end ({self.end}) must be >= start ({self.start})"
            raise ValueError(msg)


@dataclass(frozen=True, slots=True)
class Identifier:
    """Python identifier naming an enum, variant or field."""

    name: str
    span: Span


# ============================================================================
# LITERALS
# ============================================================================


@dataclass(frozen=True, slots=True)
class StringLiteral:
    """Double-quoted string literal with escapes resolved."""

    value: str
    span: Span


@dataclass(frozen=True, slots=True)
class IntegerLiteral:
    """Decimal integer literal, optionally negative."""

    value: int
    span: Span


@dataclass(frozen=True, slots=True)
class BooleanLiteral:
    """``true`` / ``false`` (``True`` / ``False`` also accepted)."""

    value: bool
    span: Span


@dataclass(frozen=True, slots=True)
class PathLiteral:
    """Unquoted dotted name such as ``errors.ColorError``."""

    value: str
    span: Span


type Literal = StringLiteral | IntegerLiteral | BooleanLiteral | PathLiteral

# ============================================================================
# ATTRIBUTE GRAMMAR
# ============================================================================


@dataclass(frozen=True, slots=True)
class MetaWord:
    """Bare keyword item: ``use_phf``."""

    name: str
    span: Span


@dataclass(frozen=True, slots=True)
class MetaNameValue:
    """Keyword with a literal value: ``prefix = "x-"``.

    Attributes:
        name: Keyword (dotted path allowed)
        value: Literal after ``=``
        span: Whole item, keyword through value
        name_span: Keyword only
    """

    name: str
    value: Literal
    span: Span
    name_span: Span


@dataclass(frozen=True, slots=True)
class MetaList:
    """Keyword with a parenthesized item list: ``props(size = 3)``."""

    name: str
    items: tuple["MetaItem", ...]
    span: Span
    name_span: Span


type MetaItem = MetaWord | MetaNameValue | MetaList


@dataclass(frozen=True, slots=True)
class Decorator:
    """``@name`` or ``@name(items...)`` line preceding a declaration.

    Attributes:
        name: Decorator name (enumkit, discriminants, derive, repr)
        items: Parsed meta items (empty when no parentheses were given)
        raw: Source text between the parentheses, verbatim
        span: Whole decorator including ``@``
    """

    name: Identifier
    items: tuple[MetaItem, ...]
    raw: str
    span: Span


# ============================================================================
# DECLARATIONS
# ============================================================================


@dataclass(frozen=True, slots=True)
class DocComment:
    """``##`` documentation line (content without the marker)."""

    content: str
    span: Span


@dataclass(frozen=True, slots=True)
class TypeExpr:
    """Declared field type.

    Attributes:
        text: Source text as written (``list[int]``)
        origin: Callable part used to build a zero value (``list``)
        span: Location of the type expression
    """

    text: str
    origin: str
    span: Span


@dataclass(frozen=True, slots=True)
class FieldDecl:
    """Variant field; ``name`` is None for positional fields."""

    name: Identifier | None
    type: TypeExpr
    decorators: tuple[Decorator, ...]
    span: Span


@dataclass(frozen=True, slots=True)
class VariantDecl:
    """One variant line of an enum body."""

    name: Identifier
    fields: tuple[FieldDecl, ...]
    decorators: tuple[Decorator, ...]
    docs: tuple[DocComment, ...]
    span: Span

    @property
    def is_unit(self) -> bool:
        """True if the variant carries no data."""
        return not self.fields


@dataclass(frozen=True, slots=True)
class EnumDecl:
    """``enum Name:`` declaration with its decorators and variants."""

    name: Identifier
    decorators: tuple[Decorator, ...]
    docs: tuple[DocComment, ...]
    variants: tuple[VariantDecl, ...]
    span: Span


@dataclass(frozen=True, slots=True)
class ImportLine:
    """``import ...`` / ``from ... import ...`` line copied into generated code."""

    text: str
    span: Span


@dataclass(frozen=True, slots=True)
class Schema:
    """Root node: a whole schema source.

    Attributes:
        imports: Import lines in source order
        enums: Enum declarations in source order
        source: Original source text (for line/column computation)
        origin: File name or label used in diagnostics
    """

    imports: tuple[ImportLine, ...]
    enums: tuple[EnumDecl, ...]
    source: str
    origin: str | None = None
