"""Schema validation without code generation.

Standalone validation for CI pipelines and editors: runs every check
the generator runs and reports diagnostics instead of raising.

Python 3.13+.
"""

import logging

from enumkit.codegen import build_parse_plan, check_class_names
from enumkit.config import GeneratorConfig
from enumkit.diagnostics import Diagnostic, EnumKitError, ValidationResult
from enumkit.model import EnumModel, MetadataNormalizer, SchemaModel
from enumkit.syntax.parser import SchemaParser

__all__ = ["validate_schema"]

logger = logging.getLogger(__name__)


def _diagnostic_of(error: EnumKitError) -> Diagnostic:
    if error.diagnostic is None:
        msg = f"{type(error).__name__} raised without a diagnostic"
        raise TypeError(msg) from error
    return error.diagnostic


def validate_schema(
    source: str, *, origin: str | None = None, config: GeneratorConfig | None = None
) -> ValidationResult:
    """Validate a schema and collect diagnostics.

    A syntax error stops validation (the schema has no usable structure).
    Otherwise each enum is normalized and planned on its own: the first
    error of an enum is recorded and the remaining enums are still checked.
    Class name collisions are checked last, across the enums that passed.

    Args:
        source: Schema text
        origin: Label attached to diagnostics
        config: Generation settings (size limit, perfect hash tuning)

    Returns:
        ValidationResult with one diagnostic per failing enum

    Example:
        >>> result = validate_schema(schema_text)
        >>> if not result.is_valid:
        ...     print(result.format())
    """
    config = config or GeneratorConfig()
    try:
        schema = SchemaParser(max_source_size=config.max_source_size).parse(
            source, origin=origin
        )
    except EnumKitError as e:
        logger.debug("Schema did not parse: %s", e)
        return ValidationResult.invalid((_diagnostic_of(e),))

    normalizer = MetadataNormalizer(source, origin)
    diagnostics: list[Diagnostic] = []
    models: list[EnumModel] = []
    for decl in schema.enums:
        try:
            model = normalizer.normalize_enum(decl)
            build_parse_plan(model, config, origin=origin)
        except EnumKitError as e:
            diagnostics.append(_diagnostic_of(e))
        else:
            models.append(model)

    try:
        check_class_names(SchemaModel(imports=(), enums=tuple(models), origin=origin))
    except EnumKitError as e:
        diagnostics.append(_diagnostic_of(e))

    logger.debug(
        "Validated schema %s: %d enum(s), %d error(s)",
        origin or "<schema>",
        len(schema.enums),
        len(diagnostics),
    )
    if diagnostics:
        return ValidationResult.invalid(tuple(diagnostics), enum_count=len(schema.enums))
    return ValidationResult.valid(enum_count=len(schema.enums))
