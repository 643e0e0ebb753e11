"""Tests for src/monster_arena/mechanics/random_source.py."""
from __future__ import annotations

import logging

import pytest

from monster_arena.mechanics.random_source import RandomSource, Stream


def _draws(rng: RandomSource, n: int = 30) -> list:
    out = []
    for i in range(n):
        out.append(rng.chance(50, "coin"))
        out.append(rng.uniform_float(0.85, 1.0, "variance"))
        out.append(rng.uniform_int(1, 6, "die"))
        out.append(rng.chance(33.33, "fade", Stream.STATUS))
    return out


class TestDeterminism:
    def test_same_seed_same_sequence(self):
        assert _draws(RandomSource(seed=7)) == _draws(RandomSource(seed=7))

    def test_different_seed_differs(self):
        assert _draws(RandomSource(seed=7)) != _draws(RandomSource(seed=8))

    def test_streams_are_independent(self):
        a = RandomSource(seed=3)
        b = RandomSource(seed=3)
        # Drawing from a's combat stream must not shift its status stream.
        for _ in range(10):
            a.chance(50, "noise")
        status_a = [a.chance(33.33, "fade", Stream.STATUS) for _ in range(20)]
        status_b = [b.chance(33.33, "fade", Stream.STATUS) for _ in range(20)]
        assert status_a == status_b


class TestRanges:
    def test_chance_extremes(self, seeded_rng):
        for _ in range(100):
            assert seeded_rng.chance(100, "sure thing")
            assert seeded_rng.chance(250, "over a hundred")
            assert not seeded_rng.chance(-1, "impossible")

    def test_uniform_float_in_range(self, seeded_rng):
        for _ in range(200):
            value = seeded_rng.uniform_float(0.85, 1.0, "variance")
            assert 0.85 <= value <= 1.0

    def test_uniform_int_inclusive(self, seeded_rng):
        seen = {seeded_rng.uniform_int(1, 3, "pick") for _ in range(300)}
        assert seen == {1, 2, 3}

    def test_uniform_int_degenerate_range(self, seeded_rng):
        assert seeded_rng.uniform_int(4, 4, "fixed") == 4


class TestReseed:
    def test_reseed_restarts_sequence(self):
        rng = RandomSource(seed=11)
        first = _draws(rng, 5)
        rng.reseed(11)
        assert _draws(rng, 5) == first

    def test_reseed_logs_warning(self, caplog):
        rng = RandomSource(seed=1)
        with caplog.at_level(logging.WARNING, logger="monster_arena.mechanics.random_source"):
            rng.reseed(2)
        assert "reinitialized" in caplog.text
        assert rng.seed == 2


class TestDecider:
    def test_decider_answers_every_draw(self, manual_rng, scripted):
        scripted.chances.extend([False, True])
        scripted.floats.append(0.9)
        scripted.ints.append(3)
        assert manual_rng.is_manual
        assert manual_rng.chance(100, "critical hit") is False
        assert manual_rng.chance(0, "hit", Stream.STATUS) is True
        assert manual_rng.uniform_float(0.85, 1.0, "damage random factor") == pytest.approx(0.9)
        assert manual_rng.uniform_int(1, 5, "repeat count") == 3
        assert scripted.asked == ["critical hit", "hit", "damage random factor", "repeat count"]
