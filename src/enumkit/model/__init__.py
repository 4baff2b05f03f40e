"""Normalized configuration model and the normalizer that builds it.

Python 3.13+.
"""

from .config import (
    DiscriminantConfig,
    EnumModel,
    FieldConfig,
    SchemaModel,
    Serialization,
    TypeConfig,
    VariantConfig,
)
from .normalize import MetadataNormalizer, normalize_enum, normalize_schema

__all__ = [
    "DiscriminantConfig",
    "EnumModel",
    "FieldConfig",
    "MetadataNormalizer",
    "SchemaModel",
    "Serialization",
    "TypeConfig",
    "VariantConfig",
    "normalize_enum",
    "normalize_schema",
]
