"""Code generation: parse plans, generators and module assembly.

Python 3.13+. Zero external dependencies.
"""

from .context import EmitContext
from .module import ModuleGenerator, check_class_names, generate_module
from .phf import PhfTable, build_phf
from .strings import (
    Candidate,
    ParsePlan,
    build_parse_plan,
    candidates_for,
    check_conflicts,
    choose_strategy,
    collect_candidates,
    find_conflict,
)
from .writer import CodeWriter

__all__ = [
    "Candidate",
    "CodeWriter",
    "EmitContext",
    "ModuleGenerator",
    "ParsePlan",
    "PhfTable",
    "build_parse_plan",
    "build_phf",
    "candidates_for",
    "check_class_names",
    "check_conflicts",
    "choose_strategy",
    "collect_candidates",
    "find_conflict",
    "generate_module",
]
