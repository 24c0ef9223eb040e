import random

import pytest

from lottopro import sampler
from lottopro.sampler import UNIFORM, WEIGHTED, WeightTable, build_weight_table, sample


def assert_valid(combo):
    assert len(combo) == 6
    assert all(1 <= n <= 45 for n in combo)
    assert all(a < b for a, b in zip(combo, combo[1:]))


@pytest.mark.parametrize("mode", [UNIFORM, WEIGHTED])
def test_combinations_are_sorted_unique_in_range(rng, mode):
    for _ in range(500):
        assert_valid(sample(mode=mode, rng=rng))


@pytest.mark.parametrize("mode", [UNIFORM, WEIGHTED])
def test_fixed_numbers_always_present(rng, mode):
    for _ in range(300):
        combo = sample(mode=mode, fixed=(7, 12), excluded={20}, rng=rng)
        assert_valid(combo)
        assert {7, 12} <= set(combo)
        assert 20 not in combo


def test_excluded_numbers_never_drawn(rng):
    excluded = set(range(1, 30))
    for _ in range(200):
        combo = sample(mode=UNIFORM, excluded=excluded, rng=rng)
        assert not set(combo) & excluded


def test_returns_none_when_too_few_numbers_left(rng):
    # only 41-45 remain, a sixth number can never be found
    assert sample(mode=UNIFORM, excluded=set(range(1, 41)), rng=rng) is None
    assert sample(mode=WEIGHTED, excluded=set(range(1, 41)), rng=rng) is None


def test_exactly_six_allowed_numbers_still_succeeds(rng):
    combo = sample(mode=UNIFORM, excluded=set(range(1, 40)), rng=rng)
    assert combo == (40, 41, 42, 43, 44, 45)


def test_unknown_mode_rejected(rng):
    with pytest.raises(ValueError):
        sample(mode="lucky", rng=rng)


def test_base_curve_without_noise(fixed_random):
    table = build_weight_table(fixed_random(0.5))
    assert len(table) == 45
    assert table[1] == pytest.approx(1.5)     # hot
    assert table[5] == pytest.approx(1.0)
    assert table[9] == pytest.approx(0.6)     # cold
    assert table[13] == pytest.approx(1.8)    # hot + center
    assert table[22] == pytest.approx(0.9)    # cold + center
    assert table[35] == pytest.approx(1.3)
    assert table[36] == pytest.approx(1.0)
    assert table[40] == pytest.approx(1.5)


def test_noise_stays_within_bounds(rng):
    table = build_weight_table(rng)
    for ball, w in table.items():
        assert w > 0
        assert abs(w - sampler.base_weight(ball)) <= 0.2 + 1e-9


def test_weights_must_be_positive():
    with pytest.raises(ValueError):
        WeightTable([1.0, 0.0, 2.0])


def test_missing_ball_raises_key_error(rng):
    table = build_weight_table(rng)
    with pytest.raises(KeyError):
        table[46]


def test_wheel_edges(fixed_random):
    table = WeightTable([1.0] * 45)
    assert table.pick(fixed_random(0.0)) == 1
    assert table.pick(fixed_random(0.9999999)) == 45
    assert table.pick(fixed_random(0.5)) == 23


def test_heavier_balls_are_drawn_more_often():
    rng = random.Random(7)
    table = WeightTable([5.0 if n == 13 else 1.0 for n in range(1, 46)])
    picks = [table.pick(rng) for _ in range(20000)]
    assert picks.count(13) > 3 * picks.count(14)


def test_weight_table_built_once():
    assert sampler.get_weight_table() is sampler.get_weight_table()


def test_weighted_sample_uses_given_table(rng):
    # everything but 40-45 is nearly impossible to hit
    table = WeightTable([1e-9] * 39 + [1.0] * 6)
    assert sample(mode=WEIGHTED, rng=rng, weights=table) == (40, 41, 42, 43, 44, 45)
