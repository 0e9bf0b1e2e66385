"""Tests for the generators' random helpers."""

from __future__ import annotations

import random
from collections import Counter

import pytest

from folio.generators.random_utils import pick, shuffle


class TestPick:
    def test_returns_member(self):
        pool = ["a", "b", "c"]
        rng = random.Random(1)
        for _ in range(50):
            assert pick(pool, rng) in pool

    def test_empty_pool_raises(self):
        with pytest.raises(IndexError):
            pick([], random.Random(0))

    def test_same_seed_same_sequence(self):
        pool = list(range(100))
        rng_a, rng_b = random.Random(7), random.Random(7)
        a = [pick(pool, rng_a) for _ in range(10)]
        b = [pick(pool, rng_b) for _ in range(10)]
        assert a == b

    def test_roughly_uniform(self):
        rng = random.Random(3)
        counts = Counter(pick("abcd", rng) for _ in range(8000))
        assert set(counts) == set("abcd")
        assert all(1700 < n < 2300 for n in counts.values())


class TestShuffle:
    def test_is_permutation(self):
        seq = list(range(20))
        out = shuffle(seq, random.Random(5))
        assert sorted(out) == seq

    def test_input_untouched(self):
        seq = [1, 2, 3, 4]
        shuffle(seq, random.Random(5))
        assert seq == [1, 2, 3, 4]

    def test_empty_and_single(self):
        rng = random.Random(0)
        assert shuffle([], rng) == []
        assert shuffle(["x"], rng) == ["x"]

    def test_all_orders_reachable(self):
        rng = random.Random(11)
        seen = Counter(tuple(shuffle("abc", rng)) for _ in range(6000))
        assert len(seen) == 6
        assert all(800 < n < 1200 for n in seen.values())
