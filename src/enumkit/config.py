"""Generation settings.

Provides a single frozen dataclass holding every knob of the pipeline
that is not expressed in the schema itself.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

from dataclasses import dataclass

from enumkit.constants import (
    DEFAULT_RUNTIME_MODULE,
    MAX_SOURCE_SIZE,
    PHF_LAMBDA,
    PHF_MAX_ATTEMPTS,
)

__all__ = ["GeneratorConfig"]


@dataclass(frozen=True, slots=True)
class GeneratorConfig:
    """Immutable configuration for schema-to-module generation.

    Constructing ``GeneratorConfig()`` with no arguments produces the
    defaults used by ``generate()``.

    Attributes:
        max_source_size: Maximum schema size in characters (default: 1 MB).
            0 disables the limit.
        phf_lambda: Average keys per displacement bucket in perfect hash
            tables (default: 5).
        phf_max_attempts: Seeds tried before perfect hash construction
            fails (default: 64).
        runtime_module: Module generated code imports its helpers from,
            unless an enum overrides it with ``runtime = "..."``
            (default: ``enumkit.runtime``).
        emit_header: Start the generated module with a do-not-edit comment
            (default: True).

    Example:
        >>> config = GeneratorConfig(phf_lambda=3)
        >>> source = generate(schema_text, config=config)
    """

    max_source_size: int = MAX_SOURCE_SIZE
    phf_lambda: int = PHF_LAMBDA
    phf_max_attempts: int = PHF_MAX_ATTEMPTS
    runtime_module: str = DEFAULT_RUNTIME_MODULE
    emit_header: bool = True

    def __post_init__(self) -> None:
        """Validate configuration values at construction time.

        Raises:
            ValueError: If a limit is out of range or runtime_module is not
                a dotted module name.
        """
        if self.max_source_size < 0:
            msg = "max_source_size must be non-negative"
            raise ValueError(msg)
        if self.phf_lambda <= 0:
            msg = "phf_lambda must be positive"
            raise ValueError(msg)
        if self.phf_max_attempts <= 0:
            msg = "phf_max_attempts must be positive"
            raise ValueError(msg)
        if not all(part.isidentifier() for part in self.runtime_module.split(".")):
            msg = f"runtime_module must be a dotted module name, got {self.runtime_module!r}"
            raise ValueError(msg)
