"""Tests for diversity sampling."""

from collections import Counter

import numpy as np
import pytest

from workrec.scoring.diversity import (
    RANDOM_POOL_TAIL,
    RANDOM_POOL_TOP,
    plan_slots,
    sample_diverse,
)


def _ids(items):
    return [item.work_id for item in items]


@pytest.mark.parametrize("count, random_factor, expected", [
    (0, 0.5, (0, 0)),
    (-3, 0.5, (0, 0)),
    (10, 0.0, (10, 0)),
    (10, 0.25, (8, 2)),
    (10, 0.2, (8, 2)),
    (3, 0.34, (2, 1)),
    (5, 1.0, (0, 5)),
    (5, 1.7, (0, 5)),
    (4, -0.5, (4, 0)),
])
def test_plan_slots(count, random_factor, expected):
    assert plan_slots(count, random_factor) == expected


@pytest.mark.parametrize("random_pool", [RANDOM_POOL_TOP, RANDOM_POOL_TAIL])
def test_zero_count_returns_empty(fused_five, random_pool):
    assert sample_diverse(fused_five, count=0, random_factor=0.5, random_pool=random_pool) == []
    assert sample_diverse(fused_five, count=-1, random_factor=0.0, random_pool=random_pool) == []


@pytest.mark.parametrize("random_pool", [RANDOM_POOL_TOP, RANDOM_POOL_TAIL])
def test_no_randomness_returns_top_n_set(fused_five, random_pool):
    result = sample_diverse(fused_five, count=3, random_factor=0.0, seed=1, random_pool=random_pool)
    assert len(result) == 3
    assert set(_ids(result)) == {"A", "B", "C"}


def test_count_larger_than_fused(fused_five):
    result = sample_diverse(fused_five[:2], count=10, random_factor=0.0, seed=3)
    assert sorted(_ids(result)) == ["A", "B"]


def test_empty_fused():
    assert sample_diverse([], count=5, random_factor=0.4, seed=3) == []


def test_top_pool_draws_from_guaranteed_slice(fused_five):
    result = sample_diverse(fused_five, count=4, random_factor=0.5, seed=11, random_pool=RANDOM_POOL_TOP)

    # Two guaranteed items plus both of them drawn again
    assert Counter(_ids(result)) == Counter({"A": 2, "B": 2})


def test_top_pool_never_surfaces_lower_ranked_items(fused_five):
    for seed in range(20):
        result = sample_diverse(fused_five, count=5, random_factor=0.4, seed=seed, random_pool=RANDOM_POOL_TOP)
        assert len(result) == 5
        assert set(_ids(result)) == {"A", "B", "C"}


def test_top_pool_all_random_is_empty(fused_five):
    assert sample_diverse(fused_five, count=3, random_factor=1.0, seed=0, random_pool=RANDOM_POOL_TOP) == []


def test_tail_pool_draws_below_top_slice(fused_five):
    for seed in range(20):
        result = sample_diverse(fused_five, count=4, random_factor=0.5, seed=seed, random_pool=RANDOM_POOL_TAIL)
        ids = _ids(result)
        assert len(ids) == 4
        assert len(set(ids)) == 4
        assert {"A", "B"} <= set(ids)
        assert set(ids) - {"A", "B"} <= {"C", "D", "E"}


def test_tail_pool_all_random(fused_five):
    result = sample_diverse(fused_five, count=3, random_factor=1.0, seed=5, random_pool=RANDOM_POOL_TAIL)
    assert len(set(_ids(result))) == 3


def test_tail_pool_limited_by_remaining_items(fused_five):
    result = sample_diverse(fused_five[:3], count=4, random_factor=0.5, seed=2, random_pool=RANDOM_POOL_TAIL)
    assert sorted(_ids(result)) == ["A", "B", "C"]


def test_output_never_exceeds_count(fused_five):
    for random_factor in (-1.0, 0.0, 0.3, 0.5, 1.0, 2.5):
        for pool in (RANDOM_POOL_TOP, RANDOM_POOL_TAIL):
            result = sample_diverse(fused_five, count=3, random_factor=random_factor, seed=9, random_pool=pool)
            assert len(result) <= 3


def test_same_seed_same_output(fused_five):
    first = sample_diverse(fused_five, count=4, random_factor=0.5, seed=42, random_pool=RANDOM_POOL_TAIL)
    second = sample_diverse(fused_five, count=4, random_factor=0.5, seed=42, random_pool=RANDOM_POOL_TAIL)
    assert first == second


def test_explicit_generator_is_used(fused_five):
    first = sample_diverse(fused_five, count=5, random_factor=0.0, rng=np.random.default_rng(7))
    second = sample_diverse(fused_five, count=5, random_factor=0.0, rng=np.random.default_rng(7))
    assert first == second
    assert sorted(_ids(first)) == ["A", "B", "C", "D", "E"]


def test_scores_are_carried_through(fused_five):
    result = sample_diverse(fused_five, count=5, random_factor=0.0, seed=0)
    assert {item.work_id: item.score for item in result} == {
        item.work_id: item.score for item in fused_five
    }


def test_unknown_pool_rejected(fused_five):
    with pytest.raises(ValueError, match="random_pool"):
        sample_diverse(fused_five, count=2, random_factor=0.5, random_pool="bottom")


def test_input_not_mutated(fused_five):
    before = list(fused_five)
    sample_diverse(fused_five, count=5, random_factor=0.4, seed=1)
    assert fused_five == before
