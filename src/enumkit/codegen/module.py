"""Module assembly: one Python module per schema.

Composes the string conversion and auxiliary generators for every enum
of a normalized schema. Generation is two-phase:

    1. Plan: build and validate the parse plan of every enum and check
       that generated class names are unique. Any diagnostic aborts here.
    2. Emit: write the module text. Nothing in this phase can fail, so a
       partially generated module is never produced.

Layout of a generated module:

    header comment
    private imports (dataclasses, enum, typing, runtime aliases)
    schema imports, verbatim
    __all__
    per enum:
        enum base class with tables and methods
        one frozen, slotted dataclass per variant
        constructor table, VARIANT_VALUES
        discriminant enum

Python 3.13+. Zero external dependencies.
"""

import logging
import re

from enumkit.codegen.auxiliary import (
    emit_count,
    emit_discriminant_accessor,
    emit_discriminants,
    emit_from_repr,
    emit_is_variant,
    emit_iter,
    emit_messages,
    emit_properties,
    emit_variant_array,
    emit_variant_array_values,
    emit_variant_names,
)
from enumkit.codegen.context import EmitContext, build_expr, field_attr, variant_class
from enumkit.codegen.strings import (
    ParsePlan,
    build_parse_plan,
    emit_display,
    emit_from_str,
    emit_variant_str,
)
from enumkit.codegen.writer import CodeWriter, py_string, py_tuple
from enumkit.config import GeneratorConfig
from enumkit.constants import GENERATED_HEADER, MODULE_PRELUDE_NAMES, RUNTIME_ALIAS
from enumkit.diagnostics import ErrorTemplate, SourceSpan, error_for_diagnostic
from enumkit.enums import Generator, Visibility
from enumkit.model import SchemaModel, VariantConfig

__all__ = ["ModuleGenerator", "check_class_names", "generate_module"]

logger = logging.getLogger(__name__)


_RUNTIME_ALIAS_RE = re.compile(rf"{RUNTIME_ALIAS}\d*")


def _is_prelude_name(name: str) -> bool:
    return name in MODULE_PRELUDE_NAMES or _RUNTIME_ALIAS_RE.fullmatch(name) is not None


def check_class_names(schema: SchemaModel) -> None:
    """Reject top-level classes that would replace another module-level name.

    Covers enum classes, discriminant enums and the per-variant
    dataclasses (``_Color_Red``), against each other and against the
    names the module prelude binds.

    Raises:
        InvalidAttributeSyntaxError: A class name is taken
    """
    seen: dict[str, SourceSpan] = {}
    names: list[tuple[str, SourceSpan]] = [(model.name, model.type.span) for model in schema.enums]
    names.extend(
        (model.type.discriminants.name, model.type.span)
        for model in schema.enums
        if model.type.runs(Generator.DISCRIMINANTS)
    )
    names.extend(
        (variant_class(model.name, variant), variant.span)
        for model in schema.enums
        for variant in model.variants
    )
    for name, span in names:
        if _is_prelude_name(name):
            diagnostic = ErrorTemplate.reserved_class_name(name, span)
            raise error_for_diagnostic(diagnostic.with_origin(schema.origin))
        first = seen.get(name)
        if first is not None:
            diagnostic = ErrorTemplate.name_collision(name, span, first)
            raise error_for_diagnostic(diagnostic.with_origin(schema.origin))
        seen[name] = span


class ModuleGenerator:
    """Turns a normalized schema into Python module source.

    Thread-safe: holds only the immutable GeneratorConfig.

    Example:
        >>> model = normalize_schema(parse_schema(text))
        >>> source = ModuleGenerator().generate(model)
    """

    __slots__ = ("_config",)

    def __init__(self, config: GeneratorConfig | None = None) -> None:
        """Initialize generator.

        Args:
            config: Generation settings (default: GeneratorConfig())
        """
        self._config = config or GeneratorConfig()

    def generate(self, schema: SchemaModel) -> str:
        """Generate the module source for ``schema``.

        Args:
            schema: Normalized schema

        Returns:
            Python source text

        Raises:
            ConflictingSerializationError: Two variants would match one input
            PerfectHashError: Perfect hash construction failed
            InvalidAttributeSyntaxError: A generated class name is taken
        """
        plans = [
            build_parse_plan(model, self._config, origin=schema.origin) for model in schema.enums
        ]
        check_class_names(schema)

        aliases = self._runtime_aliases(schema)
        out = CodeWriter()
        self._emit_prelude(schema, aliases, out)
        for plan in plans:
            out.blank(2)
            runtime = plan.model.type.runtime_module or self._config.runtime_module
            self._emit_enum(EmitContext(plan.model, aliases[runtime]), plan, out)

        logger.info(
            "Generated module for %s: %d enum(s)", schema.origin or "<schema>", len(plans)
        )
        return out.render()

    # ------------------------------------------------------------------
    # Planning
    # ------------------------------------------------------------------

    def _runtime_aliases(self, schema: SchemaModel) -> dict[str, str]:
        """Local alias per runtime module, in first-use order."""
        aliases: dict[str, str] = {}
        for model in schema.enums:
            runtime = model.type.runtime_module or self._config.runtime_module
            if runtime not in aliases:
                suffix = str(len(aliases)) if aliases else ""
                aliases[runtime] = f"{RUNTIME_ALIAS}{suffix}"
        return aliases

    # ------------------------------------------------------------------
    # Emission
    # ------------------------------------------------------------------

    def _emit_prelude(self, schema: SchemaModel, aliases: dict[str, str], out: CodeWriter) -> None:
        if self._config.emit_header:
            out.line(GENERATED_HEADER.format(origin=schema.origin or "<schema>"))
            out.blank()
        out.line("import dataclasses as _dataclasses")
        out.line("import enum as _enum")
        out.line("import typing as _typing")
        out.blank()
        for runtime, alias in aliases.items():
            out.line(f"import {runtime} as {alias}")
        if schema.imports:
            out.blank()
            out.lines(schema.imports)
        out.blank()

        exported: list[str] = []
        for model in schema.enums:
            exported.append(model.name)
            disc = model.type.discriminants
            if model.type.runs(Generator.DISCRIMINANTS) and disc.visibility is Visibility.PUBLIC:
                exported.append(disc.name)
        out.line(f"__all__ = [{', '.join(py_string(name) for name in exported)}]")

    def _emit_enum(self, ctx: EmitContext, plan: ParsePlan, out: CodeWriter) -> None:
        model = ctx.model
        out.line(f"class {ctx.name}({ctx.rt}.VariantBase):")
        with out.indented():
            out.docstring(model.type.doc)
            out.line("__slots__ = ()")
            out.blank()
            self._emit_members(ctx, plan, out)

        for variant in model.variants:
            out.blank(2)
            self._emit_variant(ctx, variant, out)

        out.blank(2)
        builders = [f"lambda: {build_expr(ctx.name, v)}" for v in model.variants]
        out.line(f"{ctx.name}._BUILD = {py_tuple(builders)}")
        if model.type.runs(Generator.VARIANT_ARRAY):
            emit_variant_array_values(ctx, out)

        if model.type.runs(Generator.DISCRIMINANTS):
            out.blank(2)
            emit_discriminants(ctx, out)

    def _emit_members(self, ctx: EmitContext, plan: ParsePlan, out: CodeWriter) -> None:
        """Class body of the enum: tables first, then methods."""
        config = ctx.model.type
        out.line(f'_BUILD: _typing.ClassVar[tuple[_typing.Callable[[], "{ctx.name}"], ...]]')
        if config.runs(Generator.COUNT):
            emit_count(ctx, out)
        if config.runs(Generator.VARIANT_NAMES):
            emit_variant_names(ctx, out)
        if config.runs(Generator.VARIANT_ARRAY):
            emit_variant_array(ctx, out)

        sections = (
            (Generator.MESSAGE, emit_messages),
            (Generator.PROPERTY, emit_properties),
            (Generator.DISPLAY, emit_display),
            (Generator.FROM_STR, lambda c, o: emit_from_str(c, plan, o)),
            (Generator.ITER, emit_iter),
            (Generator.FROM_REPR, emit_from_repr),
            (Generator.DISCRIMINANTS, emit_discriminant_accessor),
            (Generator.IS_VARIANT, emit_is_variant),
        )
        for generator, emit in sections:
            if not config.runs(generator):
                continue
            if generator is Generator.DISPLAY and not config.const_into_str:
                continue
            if generator is Generator.IS_VARIANT and not ctx.model.variants:
                continue
            out.blank()
            emit(ctx, out)

    def _emit_variant(self, ctx: EmitContext, variant: VariantConfig, out: CodeWriter) -> None:
        cls = variant_class(ctx.name, variant)
        out.line("@_dataclasses.dataclass(frozen=True, slots=True)")
        out.line(f"class {cls}({ctx.name}):")
        with out.indented():
            out.docstring(variant.documentation)
            for index, field in enumerate(variant.fields):
                out.line(f"{field_attr(field, index)}: {field.type_text}")
            out.line(f"_ordinal: _typing.ClassVar[int] = {variant.ordinal}")
            if ctx.model.type.runs(Generator.DISPLAY):
                body = CodeWriter()
                if emit_variant_str(ctx, variant, body):
                    out.blank()
                    out.extend(body)
        out.blank(2)
        out.line(f"{cls}.__name__ = {py_string(variant.name)}")
        out.line(f"{cls}.__qualname__ = {py_string(ctx.qualified(variant))}")
        instance = f"{cls}()" if variant.is_unit else cls
        out.line(f"{ctx.name}.{variant.name} = {instance}")


def generate_module(schema: SchemaModel, config: GeneratorConfig | None = None) -> str:
    """Generate module source for a normalized schema.

    Convenience wrapper around ModuleGenerator.
    """
    return ModuleGenerator(config).generate(schema)
