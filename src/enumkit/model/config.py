"""Normalized, immutable configuration model.

The normalizer folds typed metadata items into these objects. Generators
read nothing else: every default is resolved and every consistency rule
has been checked by the time a TypeConfig / VariantConfig exists.

Python 3.13+. Zero external dependencies.
"""

from dataclasses import dataclass

from enumkit.casing import CaseStyle
from enumkit.diagnostics import SourceSpan
from enumkit.enums import Generator, Visibility
from enumkit.syntax.metadata import PropValue

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    "Serialization",
    "FieldConfig",
    "VariantConfig",
    "DiscriminantConfig",
    "TypeConfig",
    "EnumModel",
    "SchemaModel",
]


@dataclass(frozen=True, slots=True)
class Serialization:
    """A declared string (alias or to_string) with its source location."""

    value: str
    span: SourceSpan


@dataclass(frozen=True, slots=True)
class FieldConfig:
    """One variant field.

    Attributes:
        name: Field name; None for positional fields
        type_text: Declared type as written (``list[int]``)
        type_origin: Callable part of the type (``list``)
        default_with: Field-level factory overriding the zero value
    """

    name: str | None
    type_text: str
    type_origin: str
    default_with: str | None = None

    @property
    def factory(self) -> str:
        """Callable producing this field's value when the input carries none."""
        return self.default_with or self.type_origin


@dataclass(frozen=True, slots=True)
class VariantConfig:
    """Resolved configuration of one variant.

    Attributes:
        name: Variant identifier
        ordinal: Zero-based declaration index
        fields: Declared fields (empty for unit variants)
        aliases: ``serialize`` values in declaration order
        to_string: Explicit rendering override
        derived_name: Case-styled identifier wrapped in prefix/suffix
        disabled: Excluded from parsing and rendering
        default: Catch-all variant built from unmatched input
        default_with: Constructor applied to unmatched input (implies catch-all)
        transparent: Rendering delegates to the sole field
        ascii_case_insensitive: Effective matching mode of this variant
        message: ``message`` value
        detailed_message: ``detailed_message`` value
        documentation: Doc comment lines joined with newlines
        props: Property entries in declaration order (keys unique)
        span: Location of the variant name
    """

    name: str
    ordinal: int
    fields: tuple[FieldConfig, ...]
    aliases: tuple[Serialization, ...]
    to_string: Serialization | None
    derived_name: str
    disabled: bool
    default: bool
    default_with: str | None
    transparent: bool
    ascii_case_insensitive: bool
    message: str | None
    detailed_message: str | None
    documentation: str | None
    props: tuple[tuple[str, PropValue], ...]
    span: SourceSpan

    @property
    def is_unit(self) -> bool:
        """True if the variant carries no data."""
        return not self.fields

    @property
    def has_named_fields(self) -> bool:
        """True for ``Name(a: int)``; False for unit and positional variants."""
        return bool(self.fields) and self.fields[0].name is not None

    @property
    def is_catch_all(self) -> bool:
        """True if unmatched input falls through to this variant."""
        return self.default or self.default_with is not None

    @property
    def rendering(self) -> str:
        """Rendering string: to_string, else first alias, else derived name.

        Not meaningful for transparent variants, which render their field.
        """
        if self.to_string is not None:
            return self.to_string.value
        if self.aliases:
            return self.aliases[0].value
        return self.derived_name

    def get_property(self, key: str) -> PropValue | None:
        """Look up a property value by key."""
        for name, value in self.props:
            if name == key:
                return value
        return None


@dataclass(frozen=True, slots=True)
class DiscriminantConfig:
    """Settings of the generated discriminant enum.

    Attributes:
        name: Class name (default ``<Enum>Discriminants``)
        derives: Decorators applied to the class, in order
        visibility: Whether the class is listed in ``__all__``
        doc: Class docstring from ``doc = "..."``
        passthrough: Other items, verbatim, as (keyword, source text)
    """

    name: str
    derives: tuple[str, ...] = ()
    visibility: Visibility = Visibility.PUBLIC
    doc: str | None = None
    passthrough: tuple[tuple[str, str], ...] = ()


@dataclass(frozen=True, slots=True)
class TypeConfig:
    """Resolved configuration of one enum.

    Attributes:
        name: Enum identifier
        case_style: ``serialize_all`` style; None keeps identifiers verbatim
        ascii_case_insensitive: Type-wide matching default
        runtime_module: Override of the module generated code imports helpers from
        use_phf: Perfect hash lookup requested
        prefix: Prepended to derived names
        suffix: Appended to derived names
        parse_err_type: Custom error raised on lookup failure
        parse_err_fn: Custom error constructor called on lookup failure
        const_into_str: Emit renderings as a constant table
        discriminants: Discriminant enum settings
        repr_type: Captured ``@repr`` type, mixed into the discriminant enum
        generators: Generators to run, in canonical order
        doc: Enum doc comment lines joined with newlines
        span: Location of the enum name
    """

    name: str
    case_style: CaseStyle | None
    ascii_case_insensitive: bool
    runtime_module: str | None
    use_phf: bool
    prefix: str | None
    suffix: str | None
    parse_err_type: str | None
    parse_err_fn: str | None
    const_into_str: bool
    discriminants: DiscriminantConfig
    repr_type: str | None
    generators: tuple[Generator, ...]
    doc: str | None
    span: SourceSpan

    @property
    def has_custom_error(self) -> bool:
        """True if lookup failure raises a user-supplied error."""
        return self.parse_err_fn is not None or self.parse_err_type is not None

    def runs(self, generator: Generator) -> bool:
        """True if ``generator`` is selected for this enum."""
        return generator in self.generators


@dataclass(frozen=True, slots=True)
class EnumModel:
    """Configuration pair handed to the generators."""

    type: TypeConfig
    variants: tuple[VariantConfig, ...]

    @property
    def name(self) -> str:
        """Enum identifier."""
        return self.type.name

    @property
    def catch_all(self) -> VariantConfig | None:
        """The catch-all variant, if any."""
        for variant in self.variants:
            if variant.is_catch_all:
                return variant
        return None

    @property
    def is_fieldless(self) -> bool:
        """True if no variant carries data."""
        return all(variant.is_unit for variant in self.variants)


@dataclass(frozen=True, slots=True)
class SchemaModel:
    """Normalized schema: imports plus one EnumModel per declared enum."""

    imports: tuple[str, ...]
    enums: tuple[EnumModel, ...]
    origin: str | None = None
