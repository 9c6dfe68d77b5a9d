"""Lazy fixed-size lineup enumeration in lexicographic input-index order."""

from __future__ import annotations

from itertools import combinations
from math import comb
from typing import Iterator, Sequence, Tuple, TypeVar

T = TypeVar("T")


def count_lineups(pool_size: int, size: int) -> int:
    if size < 0 or pool_size < 0:
        return 0
    return comb(pool_size, size)


def iter_lineups(items: Sequence[T], size: int) -> Iterator[Tuple[T, ...]]:
    """Yield every ``size``-subset of *items* once, ordered by input index.

    Each call starts a fresh enumeration. A pool smaller than ``size`` yields
    nothing.
    """

    if size < 0:
        raise ValueError(f"size must be non-negative, got {size}")
    return combinations(items, size)


def iter_lineup_block(items: Sequence[T], size: int, first: int) -> Iterator[Tuple[T, ...]]:
    """Yield the subsets of ``iter_lineups(items, size)`` whose lowest index is *first*.

    Chaining the blocks for ``first = 0 .. len(items) - size`` reproduces the
    full enumeration in the same order.
    """

    if size < 1:
        raise ValueError(f"block enumeration needs size >= 1, got {size}")
    if not 0 <= first < len(items):
        return
    head = items[first]
    for tail in combinations(items[first + 1:], size - 1):
        yield (head, *tail)


def block_count(pool_size: int, size: int) -> int:
    """Number of non-empty first-index blocks for a pool."""

    if size < 1 or pool_size < size:
        return 0
    return pool_size - size + 1
