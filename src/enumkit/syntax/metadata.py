"""Typed metadata items read from declaration decorators.

The schema parser keeps decorators as raw meta items. This module
dispatches each item on its keyword over a closed keyword set and
produces typed, still unvalidated, metadata items:

    @enumkit(serialize_all = "snake_case", use_phf)
        → (SerializeAll(CaseStyle.SNAKE_CASE), UsePhf())

Item order follows the source, so the normalizer can report the first
and second occurrence of a duplicated option. Unknown keywords and
values of the wrong shape raise InvalidAttributeSyntaxError.

Doc comments on variants are not part of the keyword grammar; they are
harvested separately and appended as Documentation items.
"""

from collections.abc import Iterable
from dataclasses import dataclass
from typing import NoReturn

from enumkit.casing import CaseStyle
from enumkit.constants import (
    DECORATOR_DERIVE,
    DECORATOR_DISCRIMINANTS,
    DECORATOR_ENUMKIT,
    DECORATOR_REPR,
)
from enumkit.diagnostics import Diagnostic, ErrorTemplate, InvalidAttributeSyntaxError
from enumkit.enums import Generator, Visibility
from enumkit.syntax.ast import (
    BooleanLiteral,
    Decorator,
    EnumDecl,
    FieldDecl,
    Literal,
    MetaItem,
    MetaList,
    MetaNameValue,
    MetaWord,
    PathLiteral,
    Span,
    StringLiteral,
    VariantDecl,
)
from enumkit.syntax.cursor import LineOffsetCache

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Enum-level items
    "SerializeAll",
    "AsciiCaseInsensitive",
    "RuntimePath",
    "UsePhf",
    "Prefix",
    "Suffix",
    "ParseErrType",
    "ParseErrFn",
    "ConstIntoStr",
    "DiscriminantDerive",
    "DiscriminantName",
    "DiscriminantVis",
    "DiscriminantPassthrough",
    "DeriveGenerator",
    "ReprType",
    # Variant-level items
    "Message",
    "DetailedMessage",
    "Serialize",
    "ToString",
    "Transparent",
    "Disabled",
    "Default",
    "DefaultWith",
    "PropEntry",
    "Props",
    "Documentation",
    # Type aliases
    "EnumMeta",
    "VariantMeta",
    "FieldMeta",
    "PropValue",
    # Reader
    "MetadataReader",
    "read_enum_metadata",
    "read_variant_metadata",
    "read_field_metadata",
]

type PropValue = str | int | bool

# ============================================================================
# ENUM-LEVEL ITEMS
# ============================================================================


@dataclass(frozen=True, slots=True)
class SerializeAll:
    """``serialize_all = "<style>"``"""

    style: CaseStyle
    span: Span


@dataclass(frozen=True, slots=True)
class AsciiCaseInsensitive:
    """``ascii_case_insensitive`` (enum or variant level, optional ``= bool``)."""

    value: bool
    span: Span


@dataclass(frozen=True, slots=True)
class RuntimePath:
    """``runtime = "<module>"``: module generated code imports helpers from."""

    path: str
    span: Span


@dataclass(frozen=True, slots=True)
class UsePhf:
    """``use_phf``"""

    span: Span


@dataclass(frozen=True, slots=True)
class Prefix:
    """``prefix = "<str>"``"""

    value: str
    span: Span


@dataclass(frozen=True, slots=True)
class Suffix:
    """``suffix = "<str>"``"""

    value: str
    span: Span


@dataclass(frozen=True, slots=True)
class ParseErrType:
    """``parse_err_type = <path>``"""

    path: str
    span: Span


@dataclass(frozen=True, slots=True)
class ParseErrFn:
    """``parse_err_fn = <path>``"""

    path: str
    span: Span


@dataclass(frozen=True, slots=True)
class ConstIntoStr:
    """``const_into_str``"""

    span: Span


@dataclass(frozen=True, slots=True)
class DiscriminantDerive:
    """``@discriminants(derive(a.b, c))``: decorators for the discriminant enum."""

    paths: tuple[str, ...]
    span: Span


@dataclass(frozen=True, slots=True)
class DiscriminantName:
    """``@discriminants(name(Kind))``"""

    name: str
    span: Span


@dataclass(frozen=True, slots=True)
class DiscriminantVis:
    """``@discriminants(vis(private))``"""

    visibility: Visibility
    span: Span


@dataclass(frozen=True, slots=True)
class DiscriminantPassthrough:
    """Any other ``@discriminants`` item, kept verbatim.

    Attributes:
        name: Item keyword
        value: Literal value for ``key = literal`` items, else None
        raw: Item source text
        span: Item location
    """

    name: str
    value: PropValue | None
    raw: str
    span: Span


@dataclass(frozen=True, slots=True)
class DeriveGenerator:
    """One entry of ``@derive(...)``."""

    generator: Generator
    span: Span


@dataclass(frozen=True, slots=True)
class ReprType:
    """``@repr(<type>)``, captured verbatim."""

    type_name: str
    span: Span


type EnumMeta = (
    SerializeAll
    | AsciiCaseInsensitive
    | RuntimePath
    | UsePhf
    | Prefix
    | Suffix
    | ParseErrType
    | ParseErrFn
    | ConstIntoStr
    | DiscriminantDerive
    | DiscriminantName
    | DiscriminantVis
    | DiscriminantPassthrough
    | DeriveGenerator
    | ReprType
)

# ============================================================================
# VARIANT-LEVEL ITEMS
# ============================================================================


@dataclass(frozen=True, slots=True)
class Message:
    """``message = "..."``"""

    value: str
    span: Span


@dataclass(frozen=True, slots=True)
class DetailedMessage:
    """``detailed_message = "..."``"""

    value: str
    span: Span


@dataclass(frozen=True, slots=True)
class Serialize:
    """``serialize = "..."`` (repeatable)."""

    value: str
    span: Span


@dataclass(frozen=True, slots=True)
class ToString:
    """``to_string = "..."``"""

    value: str
    span: Span


@dataclass(frozen=True, slots=True)
class Transparent:
    """``transparent``"""

    span: Span


@dataclass(frozen=True, slots=True)
class Disabled:
    """``disabled``"""

    span: Span


@dataclass(frozen=True, slots=True)
class Default:
    """``default``"""

    span: Span


@dataclass(frozen=True, slots=True)
class DefaultWith:
    """``default_with = "<callable path>"`` on a variant or a field."""

    path: str
    span: Span


@dataclass(frozen=True, slots=True)
class PropEntry:
    """One ``key = literal`` pair inside ``props(...)``."""

    key: str
    value: PropValue
    span: Span


@dataclass(frozen=True, slots=True)
class Props:
    """``props(key = literal, ...)``"""

    entries: tuple[PropEntry, ...]
    span: Span


@dataclass(frozen=True, slots=True)
class Documentation:
    """One ``##`` doc comment line."""

    value: str
    span: Span


type VariantMeta = (
    Message
    | DetailedMessage
    | Serialize
    | ToString
    | Transparent
    | Disabled
    | Default
    | DefaultWith
    | AsciiCaseInsensitive
    | Props
    | Documentation
)

type FieldMeta = DefaultWith

# ============================================================================
# READER
# ============================================================================

_ENUM_DECORATORS = (DECORATOR_ENUMKIT, DECORATOR_DISCRIMINANTS, DECORATOR_DERIVE, DECORATOR_REPR)

_ENUM_KEYWORDS = frozenset(
    {
        "serialize_all",
        "ascii_case_insensitive",
        "runtime",
        "use_phf",
        "prefix",
        "suffix",
        "parse_err_type",
        "parse_err_fn",
        "const_into_str",
    }
)

_VARIANT_KEYWORDS = frozenset(
    {
        "message",
        "detailed_message",
        "serialize",
        "to_string",
        "transparent",
        "disabled",
        "default",
        "default_with",
        "ascii_case_insensitive",
        "props",
    }
)

_FIELD_KEYWORDS = frozenset({"default_with"})


def _literal_value(literal: Literal) -> PropValue:
    return literal.value


def _is_dotted_name(text: str) -> bool:
    return bool(text) and all(part.isidentifier() for part in text.split("."))


class MetadataReader:
    """Reads typed metadata items from the decorators of one schema.

    Example:
        >>> reader = MetadataReader(schema.source, schema.origin)
        >>> reader.read_enum(schema.enums[0])
        (SerializeAll(style=<CaseStyle.SNAKE_CASE: 'snake_case'>, ...),)
    """

    __slots__ = ("_lines", "_origin", "_source")

    def __init__(self, source: str, origin: str | None = None) -> None:
        """Initialize reader for one schema source.

        Args:
            source: Schema text the declarations were parsed from
            origin: File name or label used in diagnostics
        """
        self._source = source
        self._origin = origin
        self._lines = LineOffsetCache(source)

    # ------------------------------------------------------------------
    # Error helpers
    # ------------------------------------------------------------------

    def _raise(self, diagnostic: Diagnostic) -> NoReturn:
        raise InvalidAttributeSyntaxError(diagnostic.with_origin(self._origin))

    def _unknown(self, name: str, context: str, allowed: Iterable[str], span: Span) -> NoReturn:
        self._raise(
            ErrorTemplate.unknown_keyword(
                name, context, allowed, self._lines.span(span.start, span.end)
            )
        )

    def _invalid(self, keyword: str, expected: str, span: Span) -> NoReturn:
        self._raise(
            ErrorTemplate.invalid_value(keyword, expected, self._lines.span(span.start, span.end))
        )

    # ------------------------------------------------------------------
    # Value shapes
    # ------------------------------------------------------------------

    def _name_span(self, item: MetaItem) -> Span:
        match item:
            case MetaWord(span=span):
                return span
            case MetaNameValue(name_span=span) | MetaList(name_span=span):
                return span

    def _string(self, item: MetaItem) -> str:
        """``keyword = "text"``"""
        if isinstance(item, MetaNameValue) and isinstance(item.value, StringLiteral):
            return item.value.value
        self._invalid(item.name, 'a string literal (keyword = "...")', item.span)

    def _path(self, item: MetaItem) -> str:
        """``keyword = a.b`` or ``keyword = "a.b"``"""
        if isinstance(item, MetaNameValue) and isinstance(
            item.value, (PathLiteral, StringLiteral)
        ):
            path = item.value.value
            if _is_dotted_name(path):
                return path
        self._invalid(item.name, "a dotted name (keyword = module.name)", item.span)

    def _word(self, item: MetaItem) -> None:
        """Bare ``keyword`` with no value."""
        if not isinstance(item, MetaWord):
            self._invalid(item.name, "a bare keyword without a value", item.span)

    def _flag(self, item: MetaItem) -> bool:
        """``keyword`` (true) or ``keyword = true|false``."""
        if isinstance(item, MetaWord):
            return True
        if isinstance(item, MetaNameValue) and isinstance(item.value, BooleanLiteral):
            return item.value.value
        self._invalid(item.name, "a bare keyword or keyword = true|false", item.span)

    def _single_word(self, item: MetaItem) -> str:
        """``keyword(word)``"""
        if isinstance(item, MetaList) and len(item.items) == 1:
            inner = item.items[0]
            if isinstance(inner, MetaWord):
                return inner.name
        self._invalid(item.name, f"a single name in parentheses ({item.name}(...))", item.span)

    def _raw(self, span: Span) -> str:
        return self._source[span.start : span.end]

    # ------------------------------------------------------------------
    # Enum level
    # ------------------------------------------------------------------

    def read_enum(self, decl: EnumDecl) -> tuple[EnumMeta, ...]:
        """Read every decorator of an enum declaration, in source order.

        Raises:
            InvalidAttributeSyntaxError: Unknown decorator, keyword or value shape
        """
        items: list[EnumMeta] = []
        for decorator in decl.decorators:
            match decorator.name.name:
                case "enumkit":
                    items.extend(self._enum_item(item) for item in decorator.items)
                case "discriminants":
                    items.extend(self._discriminants_item(item) for item in decorator.items)
                case "derive":
                    items.extend(self._derive_item(item) for item in decorator.items)
                case "repr":
                    items.append(self._repr(decorator))
                case other:
                    self._unknown(other, "enum decorator", _ENUM_DECORATORS, decorator.name.span)
        return tuple(items)

    def _enum_item(self, item: MetaItem) -> EnumMeta:  # noqa: PLR0911 - keyword dispatch
        span = item.span
        match item.name:
            case "serialize_all":
                if isinstance(item, MetaNameValue) and isinstance(
                    item.value, (StringLiteral, PathLiteral)
                ):
                    style = CaseStyle.parse(item.value.value)
                    if style is None:
                        value_span = item.value.span
                        self._raise(
                            ErrorTemplate.unknown_case_style(
                                item.value.value,
                                CaseStyle.spellings(),
                                self._lines.span(value_span.start, value_span.end),
                            )
                        )
                    return SerializeAll(style, span)
                self._invalid(item.name, 'a case style (serialize_all = "snake_case")', span)
            case "ascii_case_insensitive":
                return AsciiCaseInsensitive(self._flag(item), span)
            case "runtime":
                return RuntimePath(self._path(item), span)
            case "use_phf":
                self._word(item)
                return UsePhf(span)
            case "prefix":
                return Prefix(self._string(item), span)
            case "suffix":
                return Suffix(self._string(item), span)
            case "parse_err_type":
                return ParseErrType(self._path(item), span)
            case "parse_err_fn":
                return ParseErrFn(self._path(item), span)
            case "const_into_str":
                self._word(item)
                return ConstIntoStr(span)
            case other:
                self._unknown(other, "enum", _ENUM_KEYWORDS, self._name_span(item))

    def _discriminants_item(self, item: MetaItem) -> EnumMeta:
        span = item.span
        match item:
            case MetaList(name="derive", items=paths):
                names: list[str] = []
                for path in paths:
                    if not isinstance(path, MetaWord) or not _is_dotted_name(path.name):
                        self._invalid("derive", "a list of decorator names", path.span)
                    names.append(path.name)
                return DiscriminantDerive(tuple(names), span)
            case MetaList(name="name"):
                name = self._single_word(item)
                if not _is_dotted_name(name) or "." in name:
                    self._invalid("name", "a class name", span)
                return DiscriminantName(name, span)
            case MetaList(name="vis"):
                word = self._single_word(item)
                if word not in Visibility:
                    self._invalid("vis", "public or private", span)
                return DiscriminantVis(Visibility(word), span)
            case MetaWord(name=name) | MetaNameValue(name=name) if name in (
                "derive",
                "name",
                "vis",
            ):
                self._invalid(name, f"parenthesized arguments ({name}(...))", span)
            case MetaNameValue(name=name, value=literal):
                return DiscriminantPassthrough(
                    name, _literal_value(literal), self._raw(span), span
                )
            case _:
                return DiscriminantPassthrough(item.name, None, self._raw(span), span)

    def _derive_item(self, item: MetaItem) -> DeriveGenerator:
        if isinstance(item, MetaWord) and item.name in Generator:
            return DeriveGenerator(Generator(item.name), item.span)
        if not isinstance(item, MetaWord):
            self._invalid(item.name, "a generator name", item.span)
        self._unknown(item.name, "generator", (g.value for g in Generator), item.span)

    def _repr(self, decorator: Decorator) -> ReprType:
        items = decorator.items
        if len(items) == 1 and isinstance(items[0], MetaWord):
            return ReprType(decorator.raw, decorator.span)
        self._invalid("repr", "a single type name (@repr(int))", decorator.span)

    # ------------------------------------------------------------------
    # Variant and field level
    # ------------------------------------------------------------------

    def read_variant(self, decl: VariantDecl) -> tuple[VariantMeta, ...]:
        """Read the decorators and doc comments of a variant.

        Doc comment lines are appended after the keyword items.

        Raises:
            InvalidAttributeSyntaxError: Unknown decorator, keyword or value shape
        """
        items: list[VariantMeta] = []
        for decorator in decl.decorators:
            if decorator.name.name != DECORATOR_ENUMKIT:
                self._unknown(
                    decorator.name.name,
                    "variant decorator",
                    (DECORATOR_ENUMKIT,),
                    decorator.name.span,
                )
            items.extend(self._variant_item(item) for item in decorator.items)
        items.extend(Documentation(doc.content, doc.span) for doc in decl.docs)
        return tuple(items)

    def _variant_item(self, item: MetaItem) -> VariantMeta:  # noqa: PLR0911 - keyword dispatch
        span = item.span
        match item.name:
            case "message":
                return Message(self._string(item), span)
            case "detailed_message":
                return DetailedMessage(self._string(item), span)
            case "serialize":
                return Serialize(self._string(item), span)
            case "to_string":
                return ToString(self._string(item), span)
            case "transparent":
                self._word(item)
                return Transparent(span)
            case "disabled":
                self._word(item)
                return Disabled(span)
            case "default":
                self._word(item)
                return Default(span)
            case "default_with":
                return DefaultWith(self._path(item), span)
            case "ascii_case_insensitive":
                return AsciiCaseInsensitive(self._flag(item), span)
            case "props":
                return self._props(item)
            case other:
                self._unknown(other, "variant", _VARIANT_KEYWORDS, self._name_span(item))

    def _props(self, item: MetaItem) -> Props:
        if not isinstance(item, MetaList):
            self._invalid("props", "props(key = literal, ...)", item.span)
        entries: list[PropEntry] = []
        for entry in item.items:
            if (
                not isinstance(entry, MetaNameValue)
                or "." in entry.name
                or isinstance(entry.value, PathLiteral)
            ):
                self._invalid(
                    "props", "key = string, integer or boolean literal", entry.span
                )
            entries.append(PropEntry(entry.name, _literal_value(entry.value), entry.span))
        return Props(tuple(entries), item.span)

    def read_field(self, decl: FieldDecl) -> tuple[FieldMeta, ...]:
        """Read the inline decorators of a field (only ``default_with``)."""
        items: list[FieldMeta] = []
        for decorator in decl.decorators:
            if decorator.name.name != DECORATOR_ENUMKIT:
                self._unknown(
                    decorator.name.name, "field decorator", (DECORATOR_ENUMKIT,),
                    decorator.name.span,
                )
            for item in decorator.items:
                if item.name != "default_with":
                    self._unknown(item.name, "field", _FIELD_KEYWORDS, self._name_span(item))
                items.append(DefaultWith(self._path(item), item.span))
        return tuple(items)


def read_enum_metadata(
    decl: EnumDecl, *, source: str, origin: str | None = None
) -> tuple[EnumMeta, ...]:
    """Read typed enum-level metadata items. See MetadataReader.read_enum."""
    return MetadataReader(source, origin).read_enum(decl)


def read_variant_metadata(
    decl: VariantDecl, *, source: str, origin: str | None = None
) -> tuple[VariantMeta, ...]:
    """Read typed variant-level metadata items. See MetadataReader.read_variant."""
    return MetadataReader(source, origin).read_variant(decl)


def read_field_metadata(
    decl: FieldDecl, *, source: str, origin: str | None = None
) -> tuple[FieldMeta, ...]:
    """Read typed field-level metadata items. See MetadataReader.read_field."""
    return MetadataReader(source, origin).read_field(decl)
