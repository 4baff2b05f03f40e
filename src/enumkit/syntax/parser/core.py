"""Core enum schema parser implementation.

This module provides the SchemaParser class that turns schema source
into the AST defined in :mod:`enumkit.syntax.ast`.

Architecture:
    The schema is line-oriented at the top level. Each line is one of:

    - blank line or ``#`` comment (skipped)
    - ``##`` doc comment (attached to the next enum or variant)
    - ``@decorator(...)`` (attached to the next enum or variant)
    - ``import ...`` / ``from ... import ...`` (copied into generated code)
    - ``enum Name:`` followed by an indented block of variants

    Inside parentheses newlines are insignificant, so long attribute
    lists and field lists may span several lines. The attribute grammar
    itself lives in :mod:`enumkit.syntax.parser.rules`.

Errors:
    The first malformed token aborts parsing with
    InvalidAttributeSyntaxError. There is no error recovery: a schema
    that does not parse cannot produce a partial module.

Security:
    Includes a configurable input size limit.
"""

import logging

from enumkit.constants import MAX_SOURCE_SIZE
from enumkit.diagnostics import ErrorTemplate, InvalidAttributeSyntaxError
from enumkit.syntax.ast import (
    Decorator,
    DocComment,
    EnumDecl,
    Identifier,
    ImportLine,
    Schema,
    Span,
    VariantDecl,
)
from enumkit.syntax.cursor import Cursor, ParseResult
from enumkit.syntax.parser.primitives import parse_identifier, parse_keyword
from enumkit.syntax.parser.rules import ParseContext, parse_decorator, parse_field_list

__all__ = ["SchemaParser", "parse_schema"]

logger = logging.getLogger(__name__)

_DOC_MARKER = "##"
_COMMENT_MARKER = "#"
_IMPORT_KEYWORDS = frozenset({"import", "from"})
_ENUM_KEYWORD = "enum"


def _is_line_end(cursor: Cursor) -> bool:
    return cursor.is_eof or cursor.current in ("\n", "\r")


def _doc_content(cursor: Cursor) -> tuple[str, Cursor]:
    """Read a ``##`` line; cursor is on the marker. Returns (content, line end)."""
    text_start = cursor.advance(len(_DOC_MARKER))
    end = text_start.skip_to_line_end()
    content = text_start.slice_to(end.pos)
    # One space after the marker is conventional, not content
    if content.startswith(" "):
        content = content[1:]
    return content.rstrip(), end


class SchemaParser:
    """Enum schema parser using the immutable cursor pattern.

    Attributes:
        max_source_size: Maximum allowed source size in characters (default: 1 MB)
    """

    __slots__ = ("_max_source_size",)

    def __init__(self, *, max_source_size: int | None = None) -> None:
        """Initialize parser with an optional size limit.

        Args:
            max_source_size: Maximum source size in characters (default: 1 MB).
                            Set to 0 to disable the limit.
        """
        self._max_source_size = (
            max_source_size if max_source_size is not None else MAX_SOURCE_SIZE
        )

    @property
    def max_source_size(self) -> int:
        """Maximum allowed source size in characters."""
        return self._max_source_size

    def parse(self, source: str, *, origin: str | None = None) -> Schema:
        """Parse schema source into a Schema node.

        Args:
            source: Schema text
            origin: File name or label used in diagnostics

        Returns:
            Schema with import lines and enum declarations in source order

        Raises:
            InvalidAttributeSyntaxError: On the first malformed token, or
                when the source exceeds max_source_size

        Example:
            >>> schema = SchemaParser().parse("enum Color:\\n    Red\\n")
            >>> schema.enums[0].variants[0].name.name
            'Red'
        """
        if self._max_source_size > 0 and len(source) > self._max_source_size:
            diagnostic = ErrorTemplate.source_too_large(len(source), self._max_source_size)
            raise InvalidAttributeSyntaxError(diagnostic.with_origin(origin))

        context = ParseContext(source, origin)
        cursor = Cursor(source, 0)
        imports: list[ImportLine] = []
        enums: list[EnumDecl] = []
        seen_enums: dict[str, Identifier] = {}

        docs: list[DocComment] = []
        decorators: list[Decorator] = []

        while not cursor.is_eof:
            line_start = cursor
            cursor = cursor.skip_spaces()

            if _is_line_end(cursor):
                cursor = cursor.skip_line_end()
                continue

            if cursor.pos != line_start.pos:
                context.fail("Unexpected indentation outside an enum body", line_start.pos,
                             cursor.pos)

            if cursor.starts_with(_DOC_MARKER):
                content, cursor = _doc_content(cursor)
                docs.append(DocComment(content, Span(line_start.pos, cursor.pos)))
                cursor = cursor.skip_line_end()
                continue

            if cursor.current == _COMMENT_MARKER:
                cursor = cursor.skip_to_line_end().skip_line_end()
                continue

            if cursor.current == "@":
                decorator = parse_decorator(context, cursor)
                decorators.append(decorator.value)
                cursor = self._finish_line(context, decorator.cursor)
                continue

            word = parse_keyword(cursor)
            if word is not None and word.value in _IMPORT_KEYWORDS:
                if decorators or docs:
                    pending = decorators[0].span if decorators else docs[0].span
                    context.fail("Decorators and doc comments cannot precede an import",
                                 pending.start, pending.end)
                end = cursor.skip_to_line_end()
                text = cursor.slice_to(end.pos).rstrip()
                imports.append(ImportLine(text, Span(cursor.pos, end.pos)))
                cursor = end.skip_line_end()
                continue

            if word is not None and word.value == _ENUM_KEYWORD:
                result = self._parse_enum(context, cursor, tuple(decorators), tuple(docs))
                enum = result.value
                if enum.name.name in seen_enums:
                    context.fail(f"Enum '{enum.name.name}' is declared more than once",
                                 enum.name.span.start, enum.name.span.end)
                seen_enums[enum.name.name] = enum.name
                enums.append(enum)
                decorators.clear()
                docs.clear()
                cursor = result.cursor
                continue

            context.fail("Expected 'enum', 'import', a decorator or a comment", cursor.pos,
                         expected=("enum", "import", "from", "@", "#"))

        if decorators or docs:
            dangling = decorators[-1].span if decorators else docs[-1].span
            context.fail("Decorator or doc comment is not followed by a declaration",
                         dangling.start, dangling.end)

        logger.debug("Parsed schema %s: %d enum(s), %d import(s)",
                     origin or "<string>", len(enums), len(imports))
        return Schema(imports=tuple(imports), enums=tuple(enums), source=source, origin=origin)

    def _finish_line(self, context: ParseContext, cursor: Cursor) -> Cursor:
        """Allow trailing spaces and a comment, then consume the line end."""
        cursor = cursor.skip_spaces()
        if not cursor.is_eof and cursor.current == _COMMENT_MARKER:
            cursor = cursor.skip_to_line_end()
        if not _is_line_end(cursor):
            context.fail(f"Unexpected '{cursor.current}' after declaration", cursor.pos,
                         expected=("end of line",))
        return cursor.skip_line_end()

    def _parse_enum(
        self,
        context: ParseContext,
        cursor: Cursor,
        decorators: tuple[Decorator, ...],
        docs: tuple[DocComment, ...],
    ) -> ParseResult[EnumDecl]:
        """Parse ``enum Name:`` and its indented body."""
        start = decorators[0].span.start if decorators else cursor.pos
        if docs:
            start = min(start, docs[0].span.start)

        header = cursor.advance(len(_ENUM_KEYWORD))
        after_keyword = header.skip_spaces()
        if after_keyword.pos == header.pos:
            context.fail("Expected space after 'enum'", header.pos)

        name = parse_identifier(after_keyword)
        if name is None:
            context.fail_primitive(after_keyword.pos)
        identifier = Identifier(name.value, Span(after_keyword.pos, name.cursor.pos))

        colon = name.cursor.skip_spaces().expect(":")
        if colon is None:
            context.fail(f"Expected ':' after enum name '{name.value}'", name.cursor.pos,
                         expected=(":",))
        cursor = self._finish_line(context, colon)

        variants: list[VariantDecl] = []
        seen: dict[str, Identifier] = {}
        variant_docs: list[DocComment] = []
        variant_decorators: list[Decorator] = []
        end = cursor.pos

        while not cursor.is_eof:
            line_start = cursor
            cursor = cursor.skip_spaces()

            if _is_line_end(cursor):
                cursor = cursor.skip_line_end()
                continue

            if cursor.pos == line_start.pos:
                # Dedent: the body is over
                cursor = line_start
                break

            if cursor.starts_with(_DOC_MARKER):
                content, cursor = _doc_content(cursor)
                variant_docs.append(DocComment(content, Span(line_start.pos, cursor.pos)))
                cursor = cursor.skip_line_end()
                continue

            if cursor.current == _COMMENT_MARKER:
                cursor = cursor.skip_to_line_end().skip_line_end()
                continue

            if cursor.current == "@":
                decorator = parse_decorator(context, cursor)
                variant_decorators.append(decorator.value)
                cursor = self._finish_line(context, decorator.cursor)
                continue

            variant = self._parse_variant(
                context, cursor, tuple(variant_decorators), tuple(variant_docs)
            )
            vname = variant.value.name
            if vname.name in seen:
                context.fail(
                    f"Variant '{vname.name}' is declared more than once in enum '{name.value}'",
                    vname.span.start,
                    vname.span.end,
                )
            seen[vname.name] = vname
            variants.append(variant.value)
            variant_decorators.clear()
            variant_docs.clear()
            end = variant.value.span.end
            cursor = self._finish_line(context, variant.cursor)

        if variant_decorators or variant_docs:
            dangling = variant_decorators[-1].span if variant_decorators else variant_docs[-1].span
            context.fail("Decorator or doc comment is not followed by a variant",
                         dangling.start, dangling.end)

        enum = EnumDecl(
            name=identifier,
            decorators=decorators,
            docs=docs,
            variants=tuple(variants),
            span=Span(start, max(end, identifier.span.end)),
        )
        return ParseResult(enum, cursor)

    def _parse_variant(
        self,
        context: ParseContext,
        cursor: Cursor,
        decorators: tuple[Decorator, ...],
        docs: tuple[DocComment, ...],
    ) -> ParseResult[VariantDecl]:
        """Parse ``Name`` or ``Name(fields...)``."""
        start = cursor.pos
        name = parse_identifier(cursor)
        if name is None:
            context.fail_primitive(start)
        identifier = Identifier(name.value, Span(start, name.cursor.pos))

        cursor = name.cursor
        fields = ()
        if not cursor.is_eof and cursor.current == "(":
            field_list = parse_field_list(context, cursor)
            fields = field_list.value
            cursor = field_list.cursor

        variant = VariantDecl(
            name=identifier,
            fields=fields,
            decorators=decorators,
            docs=docs,
            span=Span(start, cursor.pos),
        )
        return ParseResult(variant, cursor)


def parse_schema(
    source: str, *, origin: str | None = None, max_source_size: int | None = None
) -> Schema:
    """Parse schema source with a default-configured SchemaParser.

    Args:
        source: Schema text
        origin: File name or label used in diagnostics
        max_source_size: Optional override of the size limit

    Returns:
        Parsed Schema

    Raises:
        InvalidAttributeSyntaxError: If the schema is malformed
    """
    return SchemaParser(max_source_size=max_source_size).parse(source, origin=origin)
