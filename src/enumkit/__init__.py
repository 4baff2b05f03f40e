"""enumkit - declarative enum schemas compiled to Python modules.

An annotation compiler for enumerated types. Enums and their variants
are declared in a small schema language with attribute annotations;
enumkit validates the annotations ahead of time and generates a module
with string parsing and rendering, message and property lookup,
discriminants, counting and iteration.

Public API:
    generate - Schema source to Python module source
    generate_file - Schema file to Python module file
    load_module - Generate and execute a module in-process
    validate_schema - Collect diagnostics instead of raising
    parse_schema - Parse schema source to AST
    normalize_schema - Fold AST metadata into the configuration model
    build_parse_plan - Candidate set, conflicts and lookup strategy of one enum
    render / CaseStyle - Case-style transformation
    GeneratorConfig - Generation settings

Exceptions:
    EnumKitError - Base exception class
    InvalidAttributeSyntaxError - Malformed schema or annotation
    DuplicateOptionError - Exclusive option declared twice
    ConflictingVariantFlagsError - Incompatible variant flags
    ArityMismatchError - Variant shape unfit for a flag
    DuplicatePropertyError - Property key declared twice
    ConflictingSerializationError - Two variants match the same input
    PerfectHashError - Perfect hash construction failed

Submodules:
    enumkit.syntax - Schema parser, AST and metadata items
    enumkit.model - Normalized configuration model
    enumkit.codegen - Generators and module assembly
    enumkit.runtime - Support imported by generated modules
    enumkit.diagnostics - Diagnostic codes, formatter and validation results
"""

# Essential Public API - Minimal exports for clean namespace
from .casing import CaseStyle, render
from .codegen import build_parse_plan
from .config import GeneratorConfig
from .diagnostics import (
    ArityMismatchError,
    ConflictingSerializationError,
    ConflictingVariantFlagsError,
    DuplicateOptionError,
    DuplicatePropertyError,
    EnumKitError,
    InvalidAttributeSyntaxError,
    PerfectHashError,
)
from .loader import load_module
from .model import normalize_schema
from .pipeline import generate, generate_file
from .syntax import parse_schema
from .validation import validate_schema

# Version information - Auto-populated from package metadata
# SINGLE SOURCE OF TRUTH: pyproject.toml [project] version
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _get_version

try:
    __version__ = _get_version("enumkit")
except PackageNotFoundError:
    # Development mode: package not installed yet
    # Run: uv sync
    __version__ = "0.0.0+dev"

__all__ = [
    "ArityMismatchError",
    "CaseStyle",
    "ConflictingSerializationError",
    "ConflictingVariantFlagsError",
    "DuplicateOptionError",
    "DuplicatePropertyError",
    "EnumKitError",
    "GeneratorConfig",
    "InvalidAttributeSyntaxError",
    "PerfectHashError",
    "__version__",
    "build_parse_plan",
    "generate",
    "generate_file",
    "load_module",
    "normalize_schema",
    "parse_schema",
    "render",
    "validate_schema",
]
