"""Enum schema syntax package.

Provides the schema parser, AST definitions and the typed metadata
reader. Separate from model and codegen so tooling can inspect schemas
without generating code.

Python 3.13+.
"""

from .ast import (
    BooleanLiteral,
    Decorator,
    DocComment,
    EnumDecl,
    FieldDecl,
    Identifier,
    ImportLine,
    IntegerLiteral,
    Literal,
    MetaItem,
    MetaList,
    MetaNameValue,
    MetaWord,
    PathLiteral,
    Schema,
    Span,
    StringLiteral,
    TypeExpr,
    VariantDecl,
)
from .cursor import Cursor, LineOffsetCache, ParseResult
from .metadata import (
    MetadataReader,
    read_enum_metadata,
    read_field_metadata,
    read_variant_metadata,
)
from .parser import SchemaParser, parse_schema

__all__ = [
    "BooleanLiteral",
    "Cursor",
    "Decorator",
    "DocComment",
    "EnumDecl",
    "FieldDecl",
    "Identifier",
    "ImportLine",
    "IntegerLiteral",
    "LineOffsetCache",
    "Literal",
    "MetaItem",
    "MetaList",
    "MetaNameValue",
    "MetaWord",
    "MetadataReader",
    "ParseResult",
    "PathLiteral",
    "Schema",
    "SchemaParser",
    "Span",
    "StringLiteral",
    "TypeExpr",
    "VariantDecl",
    "parse_schema",
    "read_enum_metadata",
    "read_field_metadata",
    "read_variant_metadata",
]
