"""Hypothesis strategies for enum schemas and their building blocks.

Provides identifiers, case styles, candidate strings and whole schemas
for property-based testing of the parser, case transformer and
generated modules.
"""

from __future__ import annotations

import keyword
import string

from hypothesis import strategies as st
from hypothesis.strategies import composite

from enumkit.casing import CaseStyle
from enumkit.constants import RESERVED_MEMBER_NAMES

# Printable ASCII minus the quote and backslash, which need escaping in schemas
SAFE_TEXT_ALPHABET = "".join(
    ch for ch in string.printable if ch not in '"\\\n\r\t\x0b\x0c'
)

case_styles = st.sampled_from(list(CaseStyle))


@composite
def pascal_identifiers(draw: st.DrawFn) -> str:
    """Generate PascalCase variant identifiers (``DarkBlack``, ``Http2Server``)."""
    words = draw(
        st.lists(
            st.text(alphabet=string.ascii_lowercase, min_size=1, max_size=6),
            min_size=1,
            max_size=4,
        )
    )
    name = "".join(word.capitalize() for word in words)
    if draw(st.booleans()):
        name += draw(st.sampled_from(["2", "42", "X", "HTTP"]))
    return name


@composite
def identifiers(draw: st.DrawFn) -> str:
    """Generate arbitrary ASCII identifiers, including underscores and digits."""
    first = draw(st.sampled_from(string.ascii_letters))
    rest = draw(st.text(alphabet=string.ascii_letters + string.digits + "_", max_size=15))
    name = first + rest
    if keyword.iskeyword(name):
        name += "_"
    return name


@composite
def variant_names(draw: st.DrawFn, *, min_size: int = 1, max_size: int = 8) -> list[str]:
    """Generate distinct variant identifiers usable in generated code."""
    return draw(
        st.lists(
            pascal_identifiers().filter(
                lambda name: name not in RESERVED_MEMBER_NAMES and not keyword.iskeyword(name)
            ),
            min_size=min_size,
            max_size=max_size,
            unique=True,
        )
    )


candidate_strings = st.text(alphabet=SAFE_TEXT_ALPHABET, min_size=1, max_size=12)

# Any Python str, lone surrogates included (st.text() never draws them)
any_strings = st.lists(
    st.one_of(st.characters(), st.integers(0xD800, 0xDFFF).map(chr)), max_size=8
).map("".join)


@composite
def serialized_enums(draw: st.DrawFn, *, use_phf: bool = False) -> tuple[str, dict[str, str]]:
    """Generate a unit-only enum where every variant has a distinct serialization.

    Returns:
        (schema source, {serialization: variant name})
    """
    names = draw(variant_names(max_size=10))
    values = draw(
        st.lists(candidate_strings, min_size=len(names), max_size=len(names), unique=True)
    )
    header = "@enumkit(use_phf)\n" if use_phf else ""
    lines = [f"{header}enum Generated:"]
    for name, value in zip(names, values, strict=True):
        lines.append(f'    @enumkit(serialize = "{value}")')
        lines.append(f"    {name}")
    return "\n".join(lines) + "\n", dict(zip(values, names, strict=True))
