"""Runtime support imported by generated modules.

Generated code imports this package under a short alias and relies only
on the names exported here.

Python 3.13+. Zero external dependencies.
"""

from .base import VariantBase, ascii_lower, build_parse_error, eq_ignore_ascii_case
from .errors import ParseError, VariantDisabledError, VariantNotFoundError
from .phf import PhfMap, displace, phf_hash

__all__ = [
    "ParseError",
    "PhfMap",
    "VariantBase",
    "VariantDisabledError",
    "VariantNotFoundError",
    "ascii_lower",
    "build_parse_error",
    "displace",
    "eq_ignore_ascii_case",
    "phf_hash",
]
