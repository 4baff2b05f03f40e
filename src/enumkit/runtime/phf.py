"""Perfect hash table lookup (hash and displace).

The table is computed ahead of time by :mod:`enumkit.codegen.phf` and
emitted as literal tuples; this module only evaluates it. Both sides
share ``phf_hash`` and ``displace`` so generation and lookup agree.

Lookup:
    (g, f1, f2) = phf_hash(key, seed)
    (d1, d2) = disps[g % len(disps)]
    index = displace(f1, f2, d1, d2) % len(keys)
    hit iff keys[index] == key

Python 3.13+. Zero external dependencies.
"""

import hashlib

__all__ = ["PhfMap", "displace", "phf_hash"]

_MASK_32 = 0xFFFFFFFF
_DIGEST_SIZE = 12


def phf_hash(key: str, seed: int) -> tuple[int, int, int]:
    """Hash ``key`` under ``seed`` into three 32-bit values (g, f1, f2).

    Uses keyed BLAKE2b, which is stable across processes and platforms,
    unlike the builtin ``hash()``. Lone surrogates are hashed as their
    code points so any ``str`` can be looked up.
    """
    digest = hashlib.blake2b(
        key.encode("utf-8", "surrogatepass"),
        digest_size=_DIGEST_SIZE,
        key=seed.to_bytes(8, "little"),
    ).digest()
    return (
        int.from_bytes(digest[0:4], "little"),
        int.from_bytes(digest[4:8], "little"),
        int.from_bytes(digest[8:12], "little"),
    )


def displace(f1: int, f2: int, d1: int, d2: int) -> int:
    """Combine hash halves with a bucket's displacement pair (mod 2**32)."""
    return (d2 + f1 * d1 + f2) & _MASK_32


class PhfMap[V]:
    """Immutable string-keyed map backed by a precomputed perfect hash.

    Example:
        >>> table = PhfMap(seed, disps, ("red", "blue"), (0, 1))
        >>> table.get("blue")
        1
        >>> table.get("green") is None
        True
    """

    __slots__ = ("_disps", "_keys", "_seed", "_values")

    def __init__(
        self,
        seed: int,
        disps: tuple[tuple[int, int], ...],
        keys: tuple[str, ...],
        values: tuple[V, ...],
    ) -> None:
        if len(keys) != len(values):
            msg = f"PhfMap needs one value per key, got {len(keys)} keys and {len(values)} values"
            raise ValueError(msg)
        if keys and not disps:
            msg = "PhfMap with keys needs at least one displacement bucket"
            raise ValueError(msg)
        self._seed = seed
        self._disps = disps
        self._keys = keys
        self._values = values

    def index(self, key: str) -> int | None:
        """Slot holding ``key``, or None if the key is absent."""
        if not self._keys:
            return None
        g, f1, f2 = phf_hash(key, self._seed)
        d1, d2 = self._disps[g % len(self._disps)]
        slot = displace(f1, f2, d1, d2) % len(self._keys)
        return slot if self._keys[slot] == key else None

    def get(self, key: str) -> V | None:
        """Value stored for ``key``, or None."""
        slot = self.index(key)
        return None if slot is None else self._values[slot]

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and self.index(key) is not None

    def __len__(self) -> int:
        return len(self._keys)

    def keys(self) -> tuple[str, ...]:
        """Keys in table order."""
        return self._keys
