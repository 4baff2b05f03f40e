"""String conversion generator: candidates, conflicts, strategy, emission.

Planning (validation time, before any code is emitted):
    1. Collect (candidate string, variant, case-insensitive) triples over
       every variant that is neither disabled nor the catch-all.
    2. Reject any pair of candidates from different variants that would
       both match a common input (ConflictingSerializationError).
    3. Choose the lookup strategy: a perfect hash table when requested
       and every candidate is case-sensitive, else a linear chain.

Emission:
    - ``from_str`` classmethod on the enum
    - ``__str__`` per variant, or a constant ``STRS`` table with a single
      base-class ``__str__`` when ``const_into_str`` is set

Python 3.13+. Zero external dependencies.
"""

import logging
from collections.abc import Sequence
from dataclasses import dataclass

from enumkit.codegen.context import EmitContext, build_expr, catch_all_expr, field_attr
from enumkit.codegen.phf import PhfTable, build_phf
from enumkit.codegen.writer import CodeWriter, py_string, py_tuple
from enumkit.config import GeneratorConfig
from enumkit.diagnostics import ErrorTemplate, SourceSpan, error_for_diagnostic
from enumkit.enums import MatchStrategy
from enumkit.model import EnumModel, VariantConfig
from enumkit.runtime import ascii_lower

__all__ = [
    "Candidate",
    "ParsePlan",
    "build_parse_plan",
    "candidates_for",
    "check_conflicts",
    "choose_strategy",
    "collect_candidates",
    "emit_display",
    "emit_from_str",
    "emit_variant_str",
    "find_conflict",
]

logger = logging.getLogger(__name__)

_INPUT = "value"


@dataclass(frozen=True, slots=True)
class Candidate:
    """A string that parses to a variant.

    Attributes:
        value: Candidate string as declared
        variant: Variant it resolves to
        case_insensitive: Matched ignoring ASCII case
        span: Where the string was declared (variant name for derived names)
    """

    value: str
    variant: VariantConfig
    case_insensitive: bool
    span: SourceSpan

    def collides_with(self, other: "Candidate") -> bool:
        """True if some input would match both candidates."""
        if self.value == other.value:
            return True
        if self.case_insensitive or other.case_insensitive:
            return ascii_lower(self.value) == ascii_lower(other.value)
        return False


@dataclass(frozen=True, slots=True)
class ParsePlan:
    """Validated parsing plan for one enum.

    Attributes:
        model: Enum the plan belongs to
        candidates: Candidates in variant declaration order
        strategy: Lookup strategy baked into the generated code
        phf: Perfect hash table (PERFECT_HASH strategy only)
        catch_all: Variant built from unmatched input, if any
    """

    model: EnumModel
    candidates: tuple[Candidate, ...]
    strategy: MatchStrategy
    phf: PhfTable | None = None
    catch_all: VariantConfig | None = None


def candidates_for(variant: VariantConfig) -> tuple[Candidate, ...]:
    """Candidate strings of one variant.

    Declared aliases in order, then ``to_string`` when it is not already
    an alias. A variant that declares neither contributes its derived name.
    """
    ci = variant.ascii_case_insensitive
    declared = list(variant.aliases)
    if variant.to_string is not None:
        declared.append(variant.to_string)

    result: list[Candidate] = []
    seen: set[str] = set()
    for serialization in declared:
        if serialization.value in seen:
            continue
        seen.add(serialization.value)
        result.append(Candidate(serialization.value, variant, ci, serialization.span))

    if not result:
        result.append(Candidate(variant.derived_name, variant, ci, variant.span))
    return tuple(result)


def collect_candidates(model: EnumModel) -> tuple[Candidate, ...]:
    """Candidates of every parseable variant, in declaration order."""
    return tuple(
        candidate
        for variant in model.variants
        if not variant.disabled and not variant.is_catch_all
        for candidate in candidates_for(variant)
    )


def find_conflict(candidates: Sequence[Candidate]) -> tuple[Candidate, Candidate] | None:
    """First pair of candidates from different variants that collide."""
    for i, first in enumerate(candidates):
        for second in candidates[i + 1 :]:
            if first.variant.ordinal != second.variant.ordinal and first.collides_with(second):
                return first, second
    return None


def check_conflicts(
    model: EnumModel, candidates: Sequence[Candidate], *, origin: str | None = None
) -> None:
    """Raise ConflictingSerializationError if two variants share a candidate.

    Checked pairwise over the full candidate set.
    """
    conflict = find_conflict(candidates)
    if conflict is None:
        return
    first, second = conflict
    raise error_for_diagnostic(
        ErrorTemplate.conflicting_serialization(
            second.value,
            first.variant.name,
            second.variant.name,
            second.span,
            first.span,
            enum_name=model.name,
        ).with_origin(origin)
    )


def choose_strategy(candidates: Sequence[Candidate], *, use_phf: bool) -> MatchStrategy:
    """Pure strategy decision.

    Perfect hash iff it was requested, there is at least one candidate and
    every candidate is case-sensitive.
    """
    if use_phf and candidates and not any(c.case_insensitive for c in candidates):
        return MatchStrategy.PERFECT_HASH
    return MatchStrategy.LINEAR


def build_parse_plan(
    model: EnumModel, config: GeneratorConfig | None = None, *, origin: str | None = None
) -> ParsePlan:
    """Validate string conversion for one enum and fix its lookup strategy.

    Args:
        model: Normalized enum
        config: Generation settings (perfect hash tuning)
        origin: Schema label attached to diagnostics

    Returns:
        ParsePlan ready for emission

    Raises:
        ConflictingSerializationError: Two variants would match one input
        PerfectHashError: No seed produced a perfect hash table
    """
    config = config or GeneratorConfig()
    candidates = collect_candidates(model)
    check_conflicts(model, candidates, origin=origin)

    strategy = choose_strategy(candidates, use_phf=model.type.use_phf)
    if model.type.use_phf and strategy is MatchStrategy.LINEAR and candidates:
        logger.warning(
            "Enum %s requests use_phf but has case-insensitive candidates; "
            "using the linear chain",
            model.name,
        )

    phf: PhfTable | None = None
    if strategy is MatchStrategy.PERFECT_HASH:
        phf = build_phf(
            [(c.value, c.variant.ordinal) for c in candidates],
            lam=config.phf_lambda,
            max_attempts=config.phf_max_attempts,
        )
        if phf is None:
            diagnostic = ErrorTemplate.perfect_hash_failed(model.name, config.phf_max_attempts)
            raise error_for_diagnostic(diagnostic.with_origin(origin))

    logger.info(
        "Enum %s: %d candidate(s), strategy=%s", model.name, len(candidates), strategy
    )
    return ParsePlan(
        model=model,
        candidates=candidates,
        strategy=strategy,
        phf=phf,
        catch_all=model.catch_all,
    )


# ============================================================================
# EMISSION
# ============================================================================


def _match_expr(ctx: EmitContext, candidate: Candidate) -> str:
    literal = py_string(candidate.value)
    if candidate.case_insensitive:
        return f"{ctx.rt}.eq_ignore_ascii_case({_INPUT}, {literal})"
    return f"{_INPUT} == {literal}"


def _emit_failure(ctx: EmitContext, out: CodeWriter) -> None:
    """Fallback after every candidate failed: catch-all, custom error or not-found."""
    config = ctx.model.type
    catch_all = ctx.model.catch_all
    if catch_all is not None:
        out.line(f"return {catch_all_expr(ctx.name, catch_all, _INPUT)}")
        return
    factory = config.parse_err_fn or config.parse_err_type
    if factory is not None:
        out.line(f"raise {ctx.rt}.build_parse_error({factory}, {_INPUT})")
    else:
        out.line(f"raise {ctx.rt}.VariantNotFoundError({_INPUT})")


def emit_from_str(ctx: EmitContext, plan: ParsePlan, out: CodeWriter) -> None:
    """Emit the ``from_str`` classmethod (and its table, for perfect hashing)."""
    if plan.phf is not None:
        table = plan.phf
        out.line(
            f"_PHF: _typing.ClassVar[{ctx.rt}.PhfMap[int]] = {ctx.rt}.PhfMap("
        )
        with out.indented():
            out.line(f"{table.seed},")
            out.line(f"{table.disps!r},")
            out.line(f"{table.keys!r},")
            out.line(f"{table.values!r},")
        out.line(")")
        out.blank()

    out.line("@classmethod")
    out.line(f'def from_str(cls, {_INPUT}: str) -> "{ctx.name}":')
    with out.indented():
        out.docstring(f"Parse a {ctx.name} from its string form.")
        if plan.strategy is MatchStrategy.PERFECT_HASH:
            out.line(f"ordinal = cls._PHF.get({_INPUT})")
            out.line("if ordinal is not None:")
            with out.indented():
                out.line("return cls._BUILD[ordinal]()")
        else:
            by_variant: dict[int, list[Candidate]] = {}
            for candidate in plan.candidates:
                by_variant.setdefault(candidate.variant.ordinal, []).append(candidate)
            for candidates in by_variant.values():
                variant = candidates[0].variant
                condition = " or ".join(_match_expr(ctx, c) for c in candidates)
                out.line(f"if {condition}:")
                with out.indented():
                    out.line(f"return {build_expr(ctx.name, variant)}")
        _emit_failure(ctx, out)


def _rendering_expr(ctx: EmitContext, variant: VariantConfig) -> str | None:
    """Expression rendering ``variant`` inside its own ``__str__``.

    None when the rendering is a constant string.
    """
    if variant.transparent:
        return f"str(self.{field_attr(variant.fields[0], 0)})"
    if variant.is_catch_all and variant.to_string is None and not variant.aliases:
        return f"str(self.{field_attr(variant.fields[0], 0)})"
    return None


def emit_display(ctx: EmitContext, out: CodeWriter) -> None:
    """Emit the enum-level part of rendering.

    With ``const_into_str`` this is the ``STRS`` table indexed by ordinal
    (None for variants without a constant rendering) and a ``__str__``
    reading it. Otherwise rendering is entirely per variant.
    """
    if not ctx.model.type.const_into_str:
        return
    entries = []
    for variant in ctx.model.variants:
        constant = not variant.disabled and _rendering_expr(ctx, variant) is None
        entries.append(py_string(variant.rendering) if constant else "None")
    out.line(f"STRS: _typing.ClassVar[tuple[str | None, ...]] = {py_tuple(entries)}")
    out.blank()
    out.line("def __str__(self) -> str:")
    with out.indented():
        out.line("text = self.STRS[self._ordinal]")
        out.line("if text is None:")
        with out.indented():
            out.line(f"raise {ctx.rt}.VariantDisabledError(type(self).__qualname__)")
        out.line("return text")


def emit_variant_str(ctx: EmitContext, variant: VariantConfig, out: CodeWriter) -> bool:
    """Emit ``__str__`` in a variant class body; False if nothing was emitted."""
    expr = _rendering_expr(ctx, variant)
    if variant.disabled:
        if ctx.model.type.const_into_str:
            return False
        body = f"raise {ctx.rt}.VariantDisabledError({py_string(ctx.qualified(variant))})"
    elif expr is not None:
        body = f"return {expr}"
    elif ctx.model.type.const_into_str:
        return False
    else:
        body = f"return {py_string(variant.rendering)}"

    out.line("def __str__(self) -> str:")
    with out.indented():
        out.line(body)
    return True
