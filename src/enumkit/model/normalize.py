"""Metadata normalizer: typed metadata items → validated configuration.

Enforces, per enum:
    - exclusive options declared at most once (DuplicateOptionError,
      reporting both sites)
    - mutually exclusive variant flags (ConflictingVariantFlagsError)
    - single-field requirement of default / default_with / transparent
      (ArityMismatchError)
    - unique property keys per variant (DuplicatePropertyError)
    - usable names: variants and fields may not shadow generated members,
      field names are unique per variant (InvalidAttributeSyntaxError)

and resolves every default: derived candidate names, effective matching
mode, discriminant enum name, generator selection.

Python 3.13+. Zero external dependencies.
"""

import logging
from collections.abc import Iterable
from typing import NoReturn

from enumkit.casing import CaseStyle, render
from enumkit.constants import DISCRIMINANTS_SUFFIX, RESERVED_MEMBER_NAMES
from enumkit.diagnostics import Diagnostic, ErrorTemplate, SourceSpan, error_for_diagnostic
from enumkit.enums import Generator, Visibility
from enumkit.model.config import (
    DiscriminantConfig,
    EnumModel,
    FieldConfig,
    SchemaModel,
    Serialization,
    TypeConfig,
    VariantConfig,
)
from enumkit.syntax.ast import EnumDecl, Identifier, Schema, Span, VariantDecl
from enumkit.syntax.cursor import LineOffsetCache
from enumkit.syntax.metadata import (
    AsciiCaseInsensitive,
    ConstIntoStr,
    Default,
    DefaultWith,
    DeriveGenerator,
    DetailedMessage,
    Disabled,
    DiscriminantDerive,
    DiscriminantName,
    DiscriminantPassthrough,
    DiscriminantVis,
    Documentation,
    Message,
    MetadataReader,
    ParseErrFn,
    ParseErrType,
    Prefix,
    Props,
    PropValue,
    ReprType,
    RuntimePath,
    Serialize,
    SerializeAll,
    Suffix,
    ToString,
    Transparent,
    UsePhf,
)

__all__ = ["MetadataNormalizer", "normalize_enum", "normalize_schema"]

logger = logging.getLogger(__name__)

# Pairs of variant flags that cannot be combined.
_EXCLUSIVE_FLAGS: tuple[tuple[str, str], ...] = (
    ("disabled", "default"),
    ("disabled", "default_with"),
    ("disabled", "transparent"),
    ("default", "default_with"),
    ("transparent", "default"),
    ("transparent", "default_with"),
    ("transparent", "to_string"),
    ("transparent", "serialize"),
)

# Flags that need a variant with exactly one field.
_SINGLE_FIELD_FLAGS: tuple[str, ...] = ("default", "default_with", "transparent")


class _OptionTracker:
    """Remembers where each exclusive option was first declared."""

    __slots__ = ("_enum_name", "_normalizer", "_seen", "_variant_name")

    def __init__(
        self, normalizer: "MetadataNormalizer", enum_name: str, variant_name: str | None = None
    ) -> None:
        self._normalizer = normalizer
        self._enum_name = enum_name
        self._variant_name = variant_name
        self._seen: dict[str, Span] = {}

    def claim(self, option: str, span: Span) -> None:
        """Record ``option``; raise DuplicateOptionError if already declared."""
        first = self._seen.get(option)
        if first is not None:
            self._normalizer.fail(
                ErrorTemplate.duplicate_option(
                    option,
                    self._normalizer.source_span(span),
                    self._normalizer.source_span(first),
                    enum_name=self._enum_name,
                    variant_name=self._variant_name,
                )
            )
        self._seen[option] = span


class MetadataNormalizer:
    """Folds the metadata of one schema into EnumModels.

    Example:
        >>> normalizer = MetadataNormalizer(schema.source, schema.origin)
        >>> model = normalizer.normalize_enum(schema.enums[0])
        >>> model.variants[0].derived_name
        'dark_black'
    """

    __slots__ = ("_lines", "_origin", "_reader")

    def __init__(self, source: str, origin: str | None = None) -> None:
        """Initialize normalizer for one schema source.

        Args:
            source: Schema text (for line/column computation)
            origin: File name or label used in diagnostics
        """
        self._origin = origin
        self._reader = MetadataReader(source, origin)
        self._lines = LineOffsetCache(source)

    def source_span(self, span: Span) -> SourceSpan:
        """Convert an AST span to a SourceSpan with line and column."""
        return self._lines.span(span.start, span.end)

    def fail(self, diagnostic: Diagnostic) -> NoReturn:
        """Raise the exception matching ``diagnostic``."""
        raise error_for_diagnostic(diagnostic.with_origin(self._origin))

    # ------------------------------------------------------------------
    # Enum level
    # ------------------------------------------------------------------

    def normalize_enum(self, decl: EnumDecl) -> EnumModel:
        """Normalize one enum declaration.

        Raises:
            InvalidAttributeSyntaxError: Malformed or unknown metadata
            DuplicateOptionError: Exclusive option declared twice
            ConflictingVariantFlagsError: Incompatible variant flags
            ArityMismatchError: Field count does not fit a flag
            DuplicatePropertyError: Property key repeated on a variant
        """
        name = decl.name.name
        items = self._reader.read_enum(decl)
        options = _OptionTracker(self, name)

        case_style: CaseStyle | None = None
        ascii_case_insensitive = False
        runtime_module: str | None = None
        use_phf = False
        prefix: str | None = None
        suffix: str | None = None
        parse_err_type: str | None = None
        parse_err_fn: str | None = None
        const_into_str = False
        repr_type: str | None = None
        derives: list[str] = []
        discriminant_name: str | None = None
        visibility = Visibility.PUBLIC
        discriminant_doc: str | None = None
        passthrough: list[tuple[str, str]] = []
        selected: dict[Generator, Span] = {}

        for item in items:
            match item:
                case SerializeAll(style=style, span=span):
                    options.claim("serialize_all", span)
                    case_style = style
                case AsciiCaseInsensitive(value=value, span=span):
                    options.claim("ascii_case_insensitive", span)
                    ascii_case_insensitive = value
                case RuntimePath(path=path, span=span):
                    options.claim("runtime", span)
                    runtime_module = path
                case UsePhf(span=span):
                    options.claim("use_phf", span)
                    use_phf = True
                case Prefix(value=value, span=span):
                    options.claim("prefix", span)
                    prefix = value
                case Suffix(value=value, span=span):
                    options.claim("suffix", span)
                    suffix = value
                case ParseErrType(path=path, span=span):
                    options.claim("parse_err_type", span)
                    parse_err_type = path
                case ParseErrFn(path=path, span=span):
                    options.claim("parse_err_fn", span)
                    parse_err_fn = path
                case ConstIntoStr(span=span):
                    options.claim("const_into_str", span)
                    const_into_str = True
                case ReprType(type_name=type_name, span=span):
                    options.claim("repr", span)
                    repr_type = type_name
                case DiscriminantDerive(paths=paths):
                    derives.extend(paths)
                case DiscriminantName(name=value, span=span):
                    options.claim("name", span)
                    discriminant_name = value
                case DiscriminantVis(visibility=value, span=span):
                    options.claim("vis", span)
                    visibility = value
                case DiscriminantPassthrough(name="doc", value=str() as value, span=span):
                    options.claim("doc", span)
                    discriminant_doc = value
                case DiscriminantPassthrough(name=key, raw=raw):
                    passthrough.append((key, raw))
                case DeriveGenerator(generator=generator, span=span):
                    options.claim(generator.value, span)
                    selected[generator] = span

        variants = self._normalize_variants(
            decl, case_style, ascii_case_insensitive, prefix, suffix
        )
        generators = self._select_generators(name, variants, selected, decl)

        type_config = TypeConfig(
            name=name,
            case_style=case_style,
            ascii_case_insensitive=ascii_case_insensitive,
            runtime_module=runtime_module,
            use_phf=use_phf,
            prefix=prefix,
            suffix=suffix,
            parse_err_type=parse_err_type,
            parse_err_fn=parse_err_fn,
            const_into_str=const_into_str,
            discriminants=DiscriminantConfig(
                name=discriminant_name or f"{name}{DISCRIMINANTS_SUFFIX}",
                derives=tuple(derives),
                visibility=visibility,
                doc=discriminant_doc,
                passthrough=tuple(passthrough),
            ),
            repr_type=repr_type,
            generators=generators,
            doc="\n".join(doc.content for doc in decl.docs) if decl.docs else None,
            span=self.source_span(decl.name.span),
        )

        logger.debug(
            "Normalized enum %s: %d variant(s), generators=%s",
            name,
            len(variants),
            ",".join(generators),
        )
        return EnumModel(type=type_config, variants=variants)

    def _select_generators(
        self,
        enum_name: str,
        variants: tuple[VariantConfig, ...],
        selected: dict[Generator, Span],
        decl: EnumDecl,
    ) -> tuple[Generator, ...]:
        """Resolve @derive into the generators to run, in canonical order."""
        data_variant = next((v for v in variants if not v.is_unit), None)

        if not selected:
            # Every generator whose precondition holds
            return tuple(
                g for g in Generator if g != Generator.VARIANT_ARRAY or data_variant is None
            )

        if Generator.VARIANT_ARRAY in selected and data_variant is not None:
            variant_decl = decl.variants[data_variant.ordinal]
            self.fail(
                ErrorTemplate.variant_array_requires_unit(
                    data_variant.name,
                    self.source_span(variant_decl.span),
                    enum_name=enum_name,
                )
            )
        return tuple(g for g in Generator if g in selected)

    # ------------------------------------------------------------------
    # Variant level
    # ------------------------------------------------------------------

    def _normalize_variants(
        self,
        decl: EnumDecl,
        case_style: CaseStyle | None,
        ascii_case_insensitive: bool,
        prefix: str | None,
        suffix: str | None,
    ) -> tuple[VariantConfig, ...]:
        variants: list[VariantConfig] = []
        catch_all: tuple[str, Span] | None = None

        for ordinal, variant_decl in enumerate(decl.variants):
            variant, catch_all_span = self._normalize_variant(
                decl.name.name,
                ordinal,
                variant_decl,
                case_style,
                ascii_case_insensitive,
                prefix,
                suffix,
            )
            if catch_all_span is not None:
                if catch_all is not None:
                    self.fail(
                        ErrorTemplate.duplicate_option(
                            "default",
                            self.source_span(catch_all_span),
                            self.source_span(catch_all[1]),
                            enum_name=decl.name.name,
                        )
                    )
                catch_all = (variant.name, catch_all_span)
            variants.append(variant)

        return tuple(variants)

    def _normalize_variant(  # noqa: PLR0912, PLR0915 - one branch per keyword
        self,
        enum_name: str,
        ordinal: int,
        decl: VariantDecl,
        case_style: CaseStyle | None,
        type_ascii_case_insensitive: bool,
        prefix: str | None,
        suffix: str | None,
    ) -> tuple[VariantConfig, Span | None]:
        """Normalize one variant; also returns its catch-all flag span."""
        name = decl.name.name
        if name in RESERVED_MEMBER_NAMES or name.startswith("_"):
            self.fail(
                ErrorTemplate.reserved_variant_name(
                    name, self.source_span(decl.name.span), enum_name=enum_name
                )
            )
        options = _OptionTracker(self, enum_name, name)

        aliases: list[Serialization] = []
        to_string: Serialization | None = None
        message: str | None = None
        detailed_message: str | None = None
        default_with: str | None = None
        ascii_override: bool | None = None
        docs: list[str] = []
        props: dict[str, tuple[PropValue, Span]] = {}
        flags: dict[str, Span] = {}

        for item in self._reader.read_variant(decl):
            match item:
                case Message(value=value, span=span):
                    options.claim("message", span)
                    message = value
                case DetailedMessage(value=value, span=span):
                    options.claim("detailed_message", span)
                    detailed_message = value
                case Serialize(value=value, span=span):
                    aliases.append(Serialization(value, self.source_span(span)))
                    flags.setdefault("serialize", span)
                case ToString(value=value, span=span):
                    options.claim("to_string", span)
                    to_string = Serialization(value, self.source_span(span))
                    flags["to_string"] = span
                case Transparent(span=span):
                    options.claim("transparent", span)
                    flags["transparent"] = span
                case Disabled(span=span):
                    options.claim("disabled", span)
                    flags["disabled"] = span
                case Default(span=span):
                    options.claim("default", span)
                    flags["default"] = span
                case DefaultWith(path=path, span=span):
                    options.claim("default_with", span)
                    default_with = path
                    flags["default_with"] = span
                case AsciiCaseInsensitive(value=value, span=span):
                    options.claim("ascii_case_insensitive", span)
                    ascii_override = value
                case Props(entries=entries):
                    for entry in entries:
                        first = props.get(entry.key)
                        if first is not None:
                            self.fail(
                                ErrorTemplate.duplicate_property(
                                    entry.key,
                                    self.source_span(entry.span),
                                    self.source_span(first[1]),
                                    enum_name=enum_name,
                                    variant_name=name,
                                )
                            )
                        props[entry.key] = (entry.value, entry.span)
                case Documentation(value=value):
                    docs.append(value)

        self._check_flags(enum_name, name, flags)
        for flag in _SINGLE_FIELD_FLAGS:
            span = flags.get(flag)
            if span is not None and len(decl.fields) != 1:
                self.fail(
                    ErrorTemplate.arity_mismatch(
                        flag,
                        len(decl.fields),
                        self.source_span(span),
                        enum_name=enum_name,
                        variant_name=name,
                    )
                )

        derived = render(name, case_style) if case_style is not None else name
        derived = f"{prefix or ''}{derived}{suffix or ''}"

        variant = VariantConfig(
            name=name,
            ordinal=ordinal,
            fields=tuple(self._normalize_fields(enum_name, decl)),
            aliases=tuple(aliases),
            to_string=to_string,
            derived_name=derived,
            disabled="disabled" in flags,
            default="default" in flags,
            default_with=default_with,
            transparent="transparent" in flags,
            ascii_case_insensitive=(
                ascii_override if ascii_override is not None else type_ascii_case_insensitive
            ),
            message=message,
            detailed_message=detailed_message,
            documentation="\n".join(docs) if docs else None,
            props=tuple((key, value) for key, (value, _) in props.items()),
            span=self.source_span(decl.name.span),
        )
        catch_all_span = flags.get("default") or flags.get("default_with")
        return variant, catch_all_span

    def _check_flags(self, enum_name: str, variant_name: str, flags: dict[str, Span]) -> None:
        """Raise ConflictingVariantFlagsError for the first incompatible pair."""
        for left, right in _EXCLUSIVE_FLAGS:
            left_span = flags.get(left)
            right_span = flags.get(right)
            if left_span is None or right_span is None:
                continue
            # Report at the later declaration, pointing back at the earlier one
            (first, first_span), (second, second_span) = sorted(
                ((left, left_span), (right, right_span)), key=lambda pair: pair[1].start
            )
            self.fail(
                ErrorTemplate.conflicting_flags(
                    first,
                    second,
                    self.source_span(second_span),
                    self.source_span(first_span),
                    enum_name=enum_name,
                    variant_name=variant_name,
                )
            )

    def _check_field_name(
        self, enum_name: str, decl: VariantDecl, name: Identifier, seen: dict[str, Span]
    ) -> None:
        """Field names become dataclass attributes and constructor keywords."""
        variant_name = decl.name.name
        if name.name in RESERVED_MEMBER_NAMES or name.name.startswith("_"):
            self.fail(
                ErrorTemplate.reserved_field_name(
                    name.name,
                    self.source_span(name.span),
                    enum_name=enum_name,
                    variant_name=variant_name,
                )
            )
        first = seen.get(name.name)
        if first is not None:
            self.fail(
                ErrorTemplate.duplicate_field(
                    name.name,
                    self.source_span(name.span),
                    self.source_span(first),
                    enum_name=enum_name,
                    variant_name=variant_name,
                )
            )
        seen[name.name] = name.span

    def _normalize_fields(self, enum_name: str, decl: VariantDecl) -> Iterable[FieldConfig]:
        seen: dict[str, Span] = {}
        for field in decl.fields:
            if field.name is not None:
                self._check_field_name(enum_name, decl, field.name, seen)
            options = _OptionTracker(self, enum_name, decl.name.name)
            default_with: str | None = None
            for item in self._reader.read_field(field):
                options.claim("default_with", item.span)
                default_with = item.path
            yield FieldConfig(
                name=field.name.name if field.name is not None else None,
                type_text=field.type.text,
                type_origin=field.type.origin,
                default_with=default_with,
            )

    # ------------------------------------------------------------------
    # Schema level
    # ------------------------------------------------------------------

    def normalize_schema(self, schema: Schema) -> SchemaModel:
        """Normalize every enum of a schema, stopping at the first error."""
        enums = tuple(self.normalize_enum(decl) for decl in schema.enums)
        return SchemaModel(
            imports=tuple(line.text for line in schema.imports),
            enums=enums,
            origin=schema.origin,
        )


def normalize_enum(decl: EnumDecl, *, source: str, origin: str | None = None) -> EnumModel:
    """Normalize one enum declaration. See MetadataNormalizer.normalize_enum."""
    return MetadataNormalizer(source, origin).normalize_enum(decl)


def normalize_schema(schema: Schema) -> SchemaModel:
    """Normalize a parsed schema into immutable enum models.

    Args:
        schema: Result of parse_schema()

    Returns:
        SchemaModel with one EnumModel per enum, in declaration order
    """
    return MetadataNormalizer(schema.source, schema.origin).normalize_schema(schema)
