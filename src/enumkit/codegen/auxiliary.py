"""Auxiliary generators consuming the normalized model.

Each generator is independent and reads only the EnumModel:

- message: get_message / get_detailed_message / get_documentation /
  get_serializations
- property: get_property / get_str / get_int / get_bool
- discriminants: payload-free companion ``enum.Enum`` and ``discriminant()``
- count: ``COUNT``
- variant_names: ``VARIANTS`` (rendered names, declaration order)
- variant_array: ``VARIANT_VALUES`` (field-less enums only)
- iter: ``iter()`` over every enabled variant
- from_repr: ``from_repr(ordinal)``
- is_variant: ``is_<snake_name>()`` predicates

Tables are class-level tuples indexed by ordinal.

Python 3.13+. Zero external dependencies.
"""

import logging

from enumkit.casing import CaseStyle, render
from enumkit.codegen.context import EmitContext
from enumkit.codegen.strings import candidates_for
from enumkit.codegen.writer import CodeWriter, py_literal, py_string, py_tuple

__all__ = [
    "emit_count",
    "emit_discriminant_accessor",
    "emit_discriminants",
    "emit_from_repr",
    "emit_is_variant",
    "emit_iter",
    "emit_messages",
    "emit_properties",
    "emit_variant_array",
    "emit_variant_array_values",
    "emit_variant_names",
]

logger = logging.getLogger(__name__)


def _table_getter(out: CodeWriter, name: str, table: str, doc: str) -> None:
    out.line(f"def {name}(self) -> str | None:")
    with out.indented():
        out.docstring(doc)
        out.line(f"return self.{table}[self._ordinal]")


def emit_messages(ctx: EmitContext, out: CodeWriter) -> None:
    """Message, detailed message, documentation and serializations accessors."""
    variants = ctx.model.variants
    tables = (
        ("_MESSAGES", [py_literal(v.message) for v in variants]),
        ("_DETAILED_MESSAGES", [py_literal(v.detailed_message) for v in variants]),
        ("_DOCUMENTATION", [py_literal(v.documentation) for v in variants]),
    )
    for name, entries in tables:
        out.line(f"{name}: _typing.ClassVar[tuple[str | None, ...]] = {py_tuple(entries)}")

    serializations = [
        py_tuple([py_string(c.value) for c in candidates_for(v)]) for v in variants
    ]
    out.line(
        "_SERIALIZATIONS: _typing.ClassVar[tuple[tuple[str, ...], ...]] = "
        f"{py_tuple(serializations)}"
    )
    out.blank()

    _table_getter(out, "get_message", "_MESSAGES", "The variant's message, if declared.")
    out.blank()
    _table_getter(
        out,
        "get_detailed_message",
        "_DETAILED_MESSAGES",
        "The variant's detailed message, if declared.",
    )
    out.blank()
    _table_getter(
        out, "get_documentation", "_DOCUMENTATION", "The variant's doc comment, if any."
    )
    out.blank()
    out.line("def get_serializations(self) -> tuple[str, ...]:")
    with out.indented():
        out.docstring("Every string that parses to this variant.")
        out.line("return self._SERIALIZATIONS[self._ordinal]")


def emit_properties(ctx: EmitContext, out: CodeWriter) -> None:
    """Typed property lookup; absent keys and mismatched kinds give None."""
    entries = []
    for variant in ctx.model.variants:
        pairs = ", ".join(f"{py_string(k)}: {py_literal(v)}" for k, v in variant.props)
        entries.append(f"{{{pairs}}}")
    out.line(
        "_PROPS: _typing.ClassVar[tuple[dict[str, str | int | bool], ...]] = "
        f"{py_tuple(entries)}"
    )
    out.blank()
    out.line("def get_property(self, key: str) -> str | int | bool | None:")
    with out.indented():
        out.line("return self._PROPS[self._ordinal].get(key)")
    out.blank()
    out.line("def get_str(self, key: str) -> str | None:")
    with out.indented():
        out.line("value = self._PROPS[self._ordinal].get(key)")
        out.line("return value if isinstance(value, str) else None")
    out.blank()
    out.line("def get_int(self, key: str) -> int | None:")
    with out.indented():
        out.line("value = self._PROPS[self._ordinal].get(key)")
        out.line("# bool is an int subclass but a distinct property kind")
        out.line(
            "return value if isinstance(value, int) and not isinstance(value, bool) else None"
        )
    out.blank()
    out.line("def get_bool(self, key: str) -> bool | None:")
    with out.indented():
        out.line("value = self._PROPS[self._ordinal].get(key)")
        out.line("return value if isinstance(value, bool) else None")


def emit_discriminant_accessor(ctx: EmitContext, out: CodeWriter) -> None:
    """``discriminant()`` returning the payload-free companion member."""
    name = ctx.model.type.discriminants.name
    out.line(f'def discriminant(self) -> "{name}":')
    with out.indented():
        out.line(f"return {name}[self.variant_name]")


def emit_discriminants(ctx: EmitContext, out: CodeWriter) -> None:
    """Module-level discriminant enum, one member per variant."""
    config = ctx.model.type
    disc = config.discriminants
    bases = f"{config.repr_type}, _enum.Enum" if config.repr_type else "_enum.Enum"

    for derive in disc.derives:
        out.line(f"@{derive}")
    out.line(f"class {disc.name}({bases}):")
    with out.indented():
        out.docstring(disc.doc or f"Discriminants of {ctx.name}.")
        if disc.passthrough:
            raw = py_tuple([py_string(text) for _, text in disc.passthrough])
            out.line(f"__enumkit_passthrough__ = {raw}")
        out.blank()
        for variant in ctx.model.variants:
            out.line(f"{variant.name} = {variant.ordinal}")


def emit_count(ctx: EmitContext, out: CodeWriter) -> None:
    """``COUNT``: number of declared variants."""
    out.line(f"COUNT: _typing.ClassVar[int] = {len(ctx.model.variants)}")


def emit_variant_names(ctx: EmitContext, out: CodeWriter) -> None:
    """``VARIANTS``: rendered names of every variant, in declaration order."""
    names = [py_string(v.rendering) for v in ctx.model.variants]
    out.line(f"VARIANTS: _typing.ClassVar[tuple[str, ...]] = {py_tuple(names)}")


def emit_variant_array(ctx: EmitContext, out: CodeWriter) -> None:
    """Annotation for ``VARIANT_VALUES``; the value is bound after the variants exist."""
    out.line(f'VARIANT_VALUES: _typing.ClassVar[tuple["{ctx.name}", ...]]')


def emit_variant_array_values(ctx: EmitContext, out: CodeWriter) -> None:
    """Module-level assignment of ``VARIANT_VALUES``."""
    refs = [f"{ctx.name}.{v.name}" for v in ctx.model.variants]
    out.line(f"{ctx.name}.VARIANT_VALUES = {py_tuple(refs)}")


def emit_iter(ctx: EmitContext, out: CodeWriter) -> None:
    """``iter()`` classmethod over enabled variants, data zero-filled."""
    ordinals = [str(v.ordinal) for v in ctx.model.variants if not v.disabled]
    out.line("@classmethod")
    out.line(f'def iter(cls) -> _typing.Iterator["{ctx.name}"]:')
    with out.indented():
        out.docstring("Yield every enabled variant in declaration order.")
        if not ordinals:
            out.line("yield from ()")
            return
        out.line(f"for ordinal in {py_tuple(ordinals)}:")
        with out.indented():
            out.line("yield cls._BUILD[ordinal]()")


def emit_from_repr(ctx: EmitContext, out: CodeWriter) -> None:
    """``from_repr(ordinal)`` classmethod; None when out of range."""
    out.line("@classmethod")
    out.line(f'def from_repr(cls, ordinal: int) -> "{ctx.name} | None":')
    with out.indented():
        out.docstring("Variant with the given declaration index, or None.")
        out.line("if 0 <= ordinal < len(cls._BUILD):")
        with out.indented():
            out.line("return cls._BUILD[ordinal]()")
        out.line("return None")


def emit_is_variant(ctx: EmitContext, out: CodeWriter) -> None:
    """``is_<snake_name>()`` predicate per variant."""
    seen: set[str] = set()
    first = True
    for variant in ctx.model.variants:
        method = f"is_{render(variant.name, CaseStyle.SNAKE_CASE)}"
        if method in seen:
            logger.warning(
                "Enum %s: predicate %s() already generated; skipping it for %s",
                ctx.name,
                method,
                variant.name,
            )
            continue
        seen.add(method)
        if not first:
            out.blank()
        first = False
        out.line(f"def {method}(self) -> bool:")
        with out.indented():
            out.line(f"return self._ordinal == {variant.ordinal}")
