"""Enum schema parser module.

Module Organization:
- core.py: SchemaParser class and parse_schema() entry point
- primitives.py: Basic parsers (identifiers, paths, integers, strings)
- rules.py: Attribute grammar, decorators, field lists and type expressions

Public API:
    SchemaParser: Main parser class
    parse_schema: Parse with default settings
    ParseContext: Per-parse state shared by the grammar rules
"""

from enumkit.syntax.parser.core import SchemaParser, parse_schema
from enumkit.syntax.parser.rules import ParseContext

__all__ = ["ParseContext", "SchemaParser", "parse_schema"]
