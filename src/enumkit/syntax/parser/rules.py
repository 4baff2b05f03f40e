"""Grammar rules for the attribute grammar and variant declarations.

Attribute grammar (inside ``@decorator(...)``):

    meta_list  ::= (meta_item ("," meta_item)* ","?)?
    meta_item  ::= path ("=" literal | "(" meta_list ")")?
    literal    ::= string | integer | boolean | path
    path       ::= word ("." word)*

Variant declarations:

    variant    ::= identifier ("(" field ("," field)* ","? ")")?
    field      ::= decorator* (identifier ":")? type_expr
    type_expr  ::= path ("[" ... "]")?

Rules take a ParseContext and a Cursor and return a ParseResult. Unlike
the primitives, rules never return None: a failure raises
InvalidAttributeSyntaxError pointing at the offending token, because a
malformed annotation aborts generation for the whole schema.
"""

from dataclasses import dataclass, field
from typing import NoReturn

from enumkit.diagnostics import ErrorTemplate, InvalidAttributeSyntaxError
from enumkit.syntax.ast import (
    BooleanLiteral,
    Decorator,
    FieldDecl,
    Identifier,
    IntegerLiteral,
    Literal,
    MetaItem,
    MetaList,
    MetaNameValue,
    MetaWord,
    PathLiteral,
    Span,
    StringLiteral,
    TypeExpr,
)
from enumkit.syntax.cursor import Cursor, LineOffsetCache, ParseResult
from enumkit.syntax.parser.primitives import (
    get_last_parse_error,
    is_identifier_start,
    parse_dotted_path,
    parse_identifier,
    parse_integer,
    parse_keyword,
    parse_string_literal,
)

__all__ = [
    "ParseContext",
    "parse_decorator",
    "parse_field_list",
    "parse_literal",
    "parse_meta_item",
    "parse_meta_list",
    "parse_type_expr",
]

_BOOLEAN_WORDS: dict[str, bool] = {
    "true": True,
    "false": False,
    "True": True,
    "False": False,
}


@dataclass(slots=True)
class ParseContext:
    """Per-parse state shared by all rules.

    Attributes:
        source: Complete schema source
        origin: File name or label for diagnostics
    """

    source: str
    origin: str | None = None
    _line_cache: LineOffsetCache | None = field(default=None, repr=False)

    @property
    def line_cache(self) -> LineOffsetCache:
        """Line offset cache, built on first use."""
        if self._line_cache is None:
            self._line_cache = LineOffsetCache(self.source)
        return self._line_cache

    def fail(
        self, message: str, start: int, end: int | None = None, expected: tuple[str, ...] = ()
    ) -> NoReturn:
        """Raise InvalidAttributeSyntaxError for the range [start, end)."""
        span = self.line_cache.span(start, start + 1 if end is None else end)
        diagnostic = ErrorTemplate.invalid_syntax(message, span, expected)
        raise InvalidAttributeSyntaxError(diagnostic.with_origin(self.origin))

    def fail_primitive(self, fallback_pos: int) -> NoReturn:
        """Raise using the context recorded by the last failing primitive."""
        error = get_last_parse_error()
        if error is None:
            self.fail("Unexpected token", fallback_pos)
        self.fail(error.message, error.position, expected=error.expected)


def _skip_inline_ws(cursor: Cursor) -> Cursor:
    """Skip whitespace inside parentheses, where newlines are insignificant."""
    while True:
        cursor = cursor.skip_whitespace()
        if not cursor.is_eof and cursor.current == "#":
            # Comments may appear between items of a multi-line list
            cursor = cursor.skip_to_line_end()
            continue
        return cursor


def _describe(cursor: Cursor) -> str:
    """Describe the token at cursor for error messages."""
    if cursor.is_eof:
        return "end of input"
    ch = cursor.current
    if ch == "\n" or ch == "\r":
        return "end of line"
    return f"'{ch}'"


def parse_literal(context: ParseContext, cursor: Cursor) -> ParseResult[Literal]:
    """Parse a literal value: string, integer, boolean or dotted path.

    Examples:
        "kebab-case" → StringLiteral
        -3 → IntegerLiteral
        true → BooleanLiteral
        errors.ColorError → PathLiteral
    """
    start = cursor.pos
    if cursor.is_eof:
        context.fail("Expected literal, found end of input", start)

    ch = cursor.current
    if ch == '"':
        text = parse_string_literal(cursor)
        if text is None:
            context.fail_primitive(start)
        return ParseResult(StringLiteral(text.value, Span(start, text.cursor.pos)), text.cursor)

    if ch == "-" or ch.isdigit():
        number = parse_integer(cursor)
        if number is None:
            context.fail_primitive(start)
        if number.cursor.peek() == ".":
            context.fail(
                "Floating-point literals are not supported", start, number.cursor.pos + 1
            )
        return ParseResult(
            IntegerLiteral(number.value, Span(start, number.cursor.pos)), number.cursor
        )

    if is_identifier_start(ch):
        path = parse_dotted_path(cursor)
        if path is None:
            context.fail_primitive(start)
        span = Span(start, path.cursor.pos)
        if path.value in _BOOLEAN_WORDS:
            return ParseResult(BooleanLiteral(_BOOLEAN_WORDS[path.value], span), path.cursor)
        return ParseResult(PathLiteral(path.value, span), path.cursor)

    context.fail(
        f"Expected literal, found {_describe(cursor)}", start, expected=('"', "0-9", "a-z")
    )


def parse_meta_item(context: ParseContext, cursor: Cursor) -> ParseResult[MetaItem]:
    """Parse one attribute item: ``word``, ``word = literal`` or ``word(items)``."""
    start = cursor.pos
    path = parse_dotted_path(cursor)
    if path is None:
        context.fail(f"Expected keyword, found {_describe(cursor)}", start, expected=("a-z",))

    name_span = Span(start, path.cursor.pos)
    after = _skip_inline_ws(path.cursor)

    if not after.is_eof and after.current == "=":
        value = parse_literal(context, _skip_inline_ws(after.advance()))
        item = MetaNameValue(
            name=path.value,
            value=value.value,
            span=Span(start, value.cursor.pos),
            name_span=name_span,
        )
        return ParseResult(item, value.cursor)

    if not after.is_eof and after.current == "(":
        items = parse_meta_list(context, after.advance())
        closing = items.cursor.expect(")")
        if closing is None:
            context.fail(
                f"Expected ')', found {_describe(items.cursor)}", items.cursor.pos, expected=(")",)
            )
        item = MetaList(
            name=path.value,
            items=items.value,
            span=Span(start, closing.pos),
            name_span=name_span,
        )
        return ParseResult(item, closing)

    return ParseResult(MetaWord(path.value, name_span), path.cursor)


def parse_meta_list(context: ParseContext, cursor: Cursor) -> ParseResult[tuple[MetaItem, ...]]:
    """Parse comma-separated items up to (not including) the closing ')'.

    A trailing comma is allowed. The returned cursor sits on ')'.
    """
    items: list[MetaItem] = []
    cursor = _skip_inline_ws(cursor)

    while not cursor.is_eof and cursor.current != ")":
        item = parse_meta_item(context, cursor)
        items.append(item.value)
        cursor = _skip_inline_ws(item.cursor)

        if cursor.is_eof:
            break
        if cursor.current == ",":
            cursor = _skip_inline_ws(cursor.advance())
            continue
        if cursor.current != ")":
            context.fail(
                f"Expected ',' or ')', found {_describe(cursor)}", cursor.pos, expected=(",", ")")
            )

    if cursor.is_eof:
        context.fail("Unclosed '(' in attribute list", cursor.pos, expected=(")",))
    return ParseResult(tuple(items), cursor)


def parse_decorator(context: ParseContext, cursor: Cursor) -> ParseResult[Decorator]:
    """Parse ``@name`` or ``@name(items...)``.

    The cursor must be on '@'. Trailing text on the line is left to the
    caller, which decides whether the decorator stands on its own line
    (enum and variant decorators) or precedes a field inline.
    """
    start = cursor.pos
    at = cursor.expect("@")
    if at is None:
        context.fail(f"Expected '@', found {_describe(cursor)}", start, expected=("@",))

    name = parse_identifier(at)
    if name is None:
        context.fail_primitive(at.pos)
    identifier = Identifier(name.value, Span(at.pos, name.cursor.pos))

    cursor = name.cursor
    if cursor.is_eof or cursor.current != "(":
        return ParseResult(Decorator(identifier, (), "", Span(start, cursor.pos)), cursor)

    raw_start = cursor.pos + 1
    items = parse_meta_list(context, cursor.advance())
    raw = context.source[raw_start : items.cursor.pos].strip()
    end = items.cursor.advance()
    return ParseResult(Decorator(identifier, items.value, raw, Span(start, end.pos)), end)


def parse_type_expr(context: ParseContext, cursor: Cursor) -> ParseResult[TypeExpr]:
    """Parse a field type: dotted path with an optional subscript.

    The subscript is kept verbatim; only its brackets are balanced.

    Examples:
        int → TypeExpr("int", "int")
        list[int] → TypeExpr("list[int]", "list")
        decimal.Decimal → TypeExpr("decimal.Decimal", "decimal.Decimal")
    """
    start = cursor.pos
    path = parse_dotted_path(cursor)
    if path is None:
        context.fail(f"Expected type, found {_describe(cursor)}", start, expected=("a-z",))

    cursor = path.cursor
    if not cursor.is_eof and cursor.current == "[":
        depth = 0
        while not cursor.is_eof:
            ch = cursor.current
            if ch == "[":
                depth += 1
            elif ch == "]":
                depth -= 1
                if depth == 0:
                    cursor = cursor.advance()
                    break
            elif ch in ("\n", "\r", "(", ")", '"'):
                break
            cursor = cursor.advance()
        if depth != 0:
            context.fail("Unbalanced '[' in type expression", start, cursor.pos, expected=("]",))

    after = cursor.skip_spaces()
    if after.peek() == "|":
        context.fail("Union types are not supported in field types", after.pos)

    text = context.source[start : cursor.pos]
    return ParseResult(TypeExpr(text, path.value, Span(start, cursor.pos)), cursor)


def _parse_field(context: ParseContext, cursor: Cursor) -> ParseResult[FieldDecl]:
    """Parse one field with its inline decorators."""
    start = cursor.pos
    decorators: list[Decorator] = []
    while not cursor.is_eof and cursor.current == "@":
        decorator = parse_decorator(context, cursor)
        decorators.append(decorator.value)
        cursor = _skip_inline_ws(decorator.cursor)

    name: Identifier | None = None
    word = parse_identifier(cursor)
    if word is None:
        keyword_word = parse_keyword(cursor)
        if keyword_word is not None and keyword_word.cursor.skip_spaces().peek() == ":":
            context.fail(
                f"'{keyword_word.value}' is not a valid field name",
                cursor.pos,
                keyword_word.cursor.pos,
            )
    else:
        after = word.cursor.skip_spaces()
        if not after.is_eof and after.current == ":":
            name = Identifier(word.value, Span(cursor.pos, word.cursor.pos))
            cursor = _skip_inline_ws(after.advance())

    type_expr = parse_type_expr(context, cursor)
    return ParseResult(
        FieldDecl(name, type_expr.value, tuple(decorators), Span(start, type_expr.cursor.pos)),
        type_expr.cursor,
    )


def parse_field_list(context: ParseContext, cursor: Cursor) -> ParseResult[tuple[FieldDecl, ...]]:
    """Parse ``(field, ...)``; the cursor must be on '('.

    Fields must be either all named or all positional.
    """
    open_pos = cursor.pos
    cursor = _skip_inline_ws(cursor.advance())
    fields: list[FieldDecl] = []

    while not cursor.is_eof and cursor.current != ")":
        parsed = _parse_field(context, cursor)
        fields.append(parsed.value)
        cursor = _skip_inline_ws(parsed.cursor)
        if not cursor.is_eof and cursor.current == ",":
            cursor = _skip_inline_ws(cursor.advance())
        elif not cursor.is_eof and cursor.current != ")":
            context.fail(
                f"Expected ',' or ')', found {_describe(cursor)}", cursor.pos, expected=(",", ")")
            )

    if cursor.is_eof:
        context.fail("Unclosed '(' in field list", open_pos, expected=(")",))
    if not fields:
        context.fail("Empty field list; omit the parentheses for a unit variant", open_pos)

    named = [f.name is not None for f in fields]
    if any(named) and not all(named):
        culprit = fields[named.index(not named[0])]
        context.fail(
            "Cannot mix named and positional fields", culprit.span.start, culprit.span.end
        )

    return ParseResult(tuple(fields), cursor.advance())
