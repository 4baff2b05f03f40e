"""Schema-to-module pipeline.

Runs the stages in order: parse, normalize, plan, emit. Every stage
raises an EnumKitError subclass on the first problem, so the caller
either receives a complete module or an exception with a diagnostic.

Python 3.13+. Zero external dependencies.
"""

import logging
from pathlib import Path

from enumkit.codegen import ModuleGenerator
from enumkit.config import GeneratorConfig
from enumkit.model import normalize_schema
from enumkit.syntax.parser import SchemaParser

__all__ = ["generate", "generate_file"]

logger = logging.getLogger(__name__)


def generate(
    source: str, *, origin: str | None = None, config: GeneratorConfig | None = None
) -> str:
    """Generate a Python module from schema source.

    Args:
        source: Schema text
        origin: Label used in diagnostics and the generated header
        config: Generation settings (default: GeneratorConfig())

    Returns:
        Python module source

    Raises:
        EnumKitError: Any syntax, normalization or planning diagnostic

    Example:
        >>> text = generate('enum Dir:\\n    Up\\n    Down\\n')
        >>> "class Dir(_rt.VariantBase):" in text
        True
    """
    config = config or GeneratorConfig()
    schema = SchemaParser(max_source_size=config.max_source_size).parse(source, origin=origin)
    model = normalize_schema(schema)
    return ModuleGenerator(config).generate(model)


def generate_file(
    path: str | Path,
    output: str | Path | None = None,
    *,
    config: GeneratorConfig | None = None,
) -> str:
    """Generate a module from a schema file and write it out.

    Args:
        path: Schema file (read as UTF-8)
        output: Destination; defaults to ``path`` with a ``.py`` suffix
        config: Generation settings

    Returns:
        The generated source, as written
    """
    path = Path(path)
    destination = Path(output) if output is not None else path.with_suffix(".py")
    source = generate(path.read_text(encoding="utf-8"), origin=path.name, config=config)
    destination.write_text(source, encoding="utf-8")
    logger.debug("Wrote %s (%d characters)", destination, len(source))
    return source
