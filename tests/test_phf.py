"""Tests for perfect hash construction and lookup.

The table builder runs at generation time; PhfMap evaluates the emitted
table at runtime. Both share phf_hash and displace.
"""

from __future__ import annotations

import pytest
from hypothesis import event, given
from hypothesis import strategies as st

from enumkit.codegen import build_phf
from enumkit.runtime import PhfMap, displace, phf_hash
from tests.strategies import candidate_strings


def as_map(entries: list[tuple[str, int]], **kwargs: int) -> PhfMap[int]:
    table = build_phf(entries, **kwargs)
    assert table is not None
    return PhfMap(table.seed, table.disps, table.keys, table.values)


class TestPhfHash:
    """Test the shared hash function."""

    def test_stable(self) -> None:
        """Hashes do not depend on the process (unlike builtin hash())."""
        assert phf_hash("red", 0) == phf_hash("red", 0)

    def test_seed_changes_hash(self) -> None:
        """Different seeds give different hashes."""
        assert phf_hash("red", 0) != phf_hash("red", 1)

    def test_32_bit_components(self) -> None:
        """Every component fits in 32 bits."""
        assert all(0 <= part < 2**32 for part in phf_hash("Über", 7))

    def test_lone_surrogate(self) -> None:
        """Any str hashes, including ones that cannot be encoded as UTF-8."""
        assert phf_hash("\ud800", 0) != phf_hash("\udfff", 0)
        assert PhfMap(0, ((0, 0),), ("red",), (1,)).get("\ud800") is None

    def test_displace_wraps(self) -> None:
        """displace() is computed modulo 2**32."""
        assert displace(2**32 - 1, 1, 1, 0) == (2**32 - 1 + 1) % 2**32


class TestBuildPhf:
    """Test table construction."""

    def test_lookup(self) -> None:
        """Every key maps to its value; unknown keys miss."""
        table = as_map([("red", 0), ("blue", 1), ("green", 2)])

        assert [table.get(k) for k in ("red", "blue", "green")] == [0, 1, 2]
        assert table.get("Red") is None
        assert "blue" in table
        assert 3 not in table
        assert len(table) == 3

    def test_empty(self) -> None:
        """An empty table has no buckets and misses everything."""
        table = build_phf([])

        assert table is not None
        assert table.keys == ()
        assert PhfMap(table.seed, table.disps, table.keys, table.values).get("x") is None

    def test_duplicate_keys_rejected(self) -> None:
        """Keys must be distinct."""
        with pytest.raises(ValueError, match="distinct"):
            build_phf([("a", 0), ("a", 1)])

    def test_values_may_repeat(self) -> None:
        """Several keys can map to the same variant ordinal."""
        table = as_map([("r", 0), ("red", 0), ("b", 1)])

        assert (table.get("r"), table.get("red"), table.get("b")) == (0, 0, 1)

    def test_bucket_count_follows_lambda(self) -> None:
        """There are ceil(n / lambda) displacement buckets."""
        entries = [(f"k{i}", i) for i in range(11)]
        table = build_phf(entries, lam=5)

        assert table is not None
        assert len(table.disps) == 3

    def test_deterministic(self) -> None:
        """The same entries always produce the same table."""
        entries = [("alpha", 0), ("beta", 1), ("gamma", 2)]

        assert build_phf(entries) == build_phf(entries)

    @given(st.lists(candidate_strings, min_size=1, max_size=40, unique=True))
    def test_every_key_found(self, keys: list[str]) -> None:
        """PROPERTY: every key of a built table is found at its own value."""
        event(f"size={len(keys) // 10 * 10}+")
        table = as_map([(key, index) for index, key in enumerate(keys)])

        assert [table.get(key) for key in keys] == list(range(len(keys)))
        assert sorted(table.keys()) == sorted(keys)


class TestPhfMapValidation:
    """Test PhfMap constructor checks."""

    def test_length_mismatch(self) -> None:
        """keys and values must have the same length."""
        with pytest.raises(ValueError, match="one value per key"):
            PhfMap(0, ((0, 0),), ("a",), ())

    def test_keys_without_buckets(self) -> None:
        """A non-empty table needs displacement buckets."""
        with pytest.raises(ValueError, match="displacement bucket"):
            PhfMap(0, (), ("a",), (0,))
