from itertools import chain, combinations

import pytest

from racedfs.optimizer.combinations import block_count, count_lineups, iter_lineup_block, iter_lineups


def test_iter_lineups_matches_lexicographic_order():
    items = list("abcdef")
    assert list(iter_lineups(items, 3)) == list(combinations(items, 3))
    assert len(list(iter_lineups(items, 3))) == count_lineups(6, 3) == 20


def test_iter_lineups_is_restartable():
    items = list(range(8))
    first = list(iter_lineups(items, 6))
    second = list(iter_lineups(items, 6))
    assert first == second
    assert len(first) == 28


def test_iter_lineups_has_no_repeats():
    lineups = list(iter_lineups(list(range(9)), 6))
    assert len({frozenset(lineup) for lineup in lineups}) == len(lineups)
    assert all(len(set(lineup)) == 6 for lineup in lineups)


def test_iter_lineups_small_pool_is_empty():
    assert list(iter_lineups(list(range(5)), 6)) == []
    assert count_lineups(5, 6) == 0


def test_iter_lineups_rejects_negative_size():
    with pytest.raises(ValueError):
        iter_lineups([1, 2, 3], -1)


def test_blocks_chain_to_full_enumeration():
    items = list(range(10))
    blocks = [iter_lineup_block(items, 6, first) for first in range(block_count(10, 6))]
    assert block_count(10, 6) == 5
    assert list(chain.from_iterable(blocks)) == list(iter_lineups(items, 6))


def test_block_out_of_range_is_empty():
    assert list(iter_lineup_block(list(range(4)), 2, 7)) == []
    assert list(iter_lineup_block(list(range(4)), 2, 3)) == []
    assert block_count(3, 6) == 0
