"""Naming and expression helpers shared by the generators.

Every generator receives an EmitContext for the enum it works on and
builds Python expressions through these helpers, so the naming of
variant classes, fields and runtime references stays consistent.

Python 3.13+. Zero external dependencies.
"""

from dataclasses import dataclass

from enumkit.model import EnumModel, FieldConfig, VariantConfig

__all__ = [
    "EmitContext",
    "build_expr",
    "catch_all_expr",
    "field_attr",
    "variant_class",
    "variant_ref",
]


@dataclass(frozen=True, slots=True)
class EmitContext:
    """Per-enum state handed to each generator.

    Attributes:
        model: Normalized enum
        rt: Local alias of the runtime module (``_rt``)
    """

    model: EnumModel
    rt: str

    @property
    def name(self) -> str:
        """Enum class name."""
        return self.model.type.name

    def qualified(self, variant: VariantConfig) -> str:
        """``Color.Red``, as shown in reprs and error messages."""
        return f"{self.name}.{variant.name}"


def field_attr(field: FieldConfig, index: int) -> str:
    """Attribute holding a field: its name, or ``_0``, ``_1``... if positional."""
    return field.name if field.name is not None else f"_{index}"


def variant_class(enum_name: str, variant: VariantConfig) -> str:
    """Module-level name of a variant's dataclass (``_Color_Red``)."""
    return f"_{enum_name}_{variant.name}"


def variant_ref(enum_name: str, variant: VariantConfig) -> str:
    """Public reference to a variant: the instance for unit variants, else the class."""
    return f"{enum_name}.{variant.name}"


def build_expr(enum_name: str, variant: VariantConfig) -> str:
    """Expression producing ``variant`` when the input carries no field data.

    Unit variants are singletons. Data variants get each field from its
    ``default_with`` factory, else from its type called with no arguments.

    Example:
        Red → Color.Red
        Blue(hue: int) → Color.Blue(hue=int())
    """
    ref = variant_ref(enum_name, variant)
    if variant.is_unit:
        return ref
    args = []
    for field in variant.fields:
        value = f"{field.factory}()"
        args.append(f"{field.name}={value}" if field.name is not None else value)
    return f"{ref}({', '.join(args)})"


def catch_all_expr(enum_name: str, variant: VariantConfig, argument: str) -> str:
    """Expression building the catch-all variant from the raw input.

    Example:
        Green(str) → Color.Green(value)
        Green(Shade) + default_with = "Shade.parse" → Color.Green(Shade.parse(value))
    """
    value = f"{variant.default_with}({argument})" if variant.default_with else argument
    return f"{variant_ref(enum_name, variant)}({value})"
