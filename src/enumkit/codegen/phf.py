"""Perfect hash table construction (hash and displace).

Keys are hashed into buckets of about ``lam`` keys each. Buckets are
placed largest first: for each bucket, displacement pairs (d1, d2) are
tried until every key of the bucket lands in a free slot. When a bucket
cannot be placed, the whole construction restarts with the next seed.

The resulting table is evaluated at runtime by
:class:`enumkit.runtime.PhfMap`, which shares ``phf_hash`` and
``displace`` with this module.

Python 3.13+. Zero external dependencies.
"""

import logging
from collections.abc import Sequence
from dataclasses import dataclass

from enumkit.constants import PHF_LAMBDA, PHF_MAX_ATTEMPTS
from enumkit.runtime.phf import displace, phf_hash

__all__ = ["PhfTable", "build_phf"]

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class PhfTable:
    """Precomputed perfect hash table.

    Attributes:
        seed: Hash seed that produced a collision-free placement
        disps: Displacement pair per bucket
        keys: Keys in slot order
        values: Values in slot order
    """

    seed: int
    disps: tuple[tuple[int, int], ...]
    keys: tuple[str, ...]
    values: tuple[int, ...]


def _try_seed(
    hashes: Sequence[tuple[int, int, int]], seed: int, bucket_count: int
) -> tuple[tuple[tuple[int, int], ...], list[int]] | None:
    """Place every key for one seed; None if some bucket cannot be placed."""
    table_len = len(hashes)
    buckets: list[list[int]] = [[] for _ in range(bucket_count)]
    for index, (g, _, _) in enumerate(hashes):
        buckets[g % bucket_count].append(index)

    slots: list[int | None] = [None] * table_len
    disps: list[tuple[int, int]] = [(0, 0)] * bucket_count
    # Marks slots claimed by the displacement currently being tried
    trial: list[int] = [0] * table_len
    generation = 0

    order = sorted(range(bucket_count), key=lambda b: len(buckets[b]), reverse=True)
    for bucket in order:
        members = buckets[bucket]
        if not members:
            continue
        placed = False
        for d1 in range(table_len):
            for d2 in range(table_len):
                generation += 1
                targets: list[int] = []
                for index in members:
                    _, f1, f2 = hashes[index]
                    slot = displace(f1, f2, d1, d2) % table_len
                    if slots[slot] is not None or trial[slot] == generation:
                        break
                    trial[slot] = generation
                    targets.append(slot)
                else:
                    for index, slot in zip(members, targets, strict=True):
                        slots[slot] = index
                    disps[bucket] = (d1, d2)
                    placed = True
                    break
            if placed:
                break
        if not placed:
            logger.debug("Seed %d: bucket of %d key(s) could not be placed", seed, len(members))
            return None

    return tuple(disps), [slot for slot in slots if slot is not None]


def build_phf(
    entries: Sequence[tuple[str, int]],
    *,
    lam: int = PHF_LAMBDA,
    max_attempts: int = PHF_MAX_ATTEMPTS,
) -> PhfTable | None:
    """Build a perfect hash table over distinct string keys.

    Args:
        entries: (key, value) pairs; keys must be distinct
        lam: Average number of keys per displacement bucket
        max_attempts: Seeds tried before giving up

    Returns:
        PhfTable, or None if no seed below max_attempts works

    Raises:
        ValueError: If keys are not distinct

    Example:
        >>> table = build_phf([("red", 0), ("blue", 1)])
        >>> PhfMap(table.seed, table.disps, table.keys, table.values).get("blue")
        1
    """
    keys = [key for key, _ in entries]
    if len(set(keys)) != len(keys):
        msg = "Perfect hash keys must be distinct"
        raise ValueError(msg)
    if not entries:
        return PhfTable(seed=0, disps=(), keys=(), values=())

    bucket_count = (len(entries) + lam - 1) // lam
    for seed in range(max_attempts):
        hashes = [phf_hash(key, seed) for key in keys]
        placement = _try_seed(hashes, seed, bucket_count)
        if placement is None:
            continue
        disps, order = placement
        logger.debug(
            "Built perfect hash over %d key(s): seed=%d, buckets=%d",
            len(entries),
            seed,
            bucket_count,
        )
        return PhfTable(
            seed=seed,
            disps=disps,
            keys=tuple(entries[i][0] for i in order),
            values=tuple(entries[i][1] for i in order),
        )
    return None
