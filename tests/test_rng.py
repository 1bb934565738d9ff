import pytest

from lardum.rng import RandomSource, weights_snapshot


def test_same_seed_same_sequence():
    a = RandomSource(seed=12345)
    b = RandomSource(seed=12345)
    assert [a.randint(0, 1000) for _ in range(10)] == [b.randint(0, 1000) for _ in range(10)]


def test_different_seeds_differ():
    a = RandomSource(seed=1)
    b = RandomSource(seed=2)
    assert [a.randint(0, 100) for _ in range(5)] != [b.randint(0, 100) for _ in range(5)]


def test_weighted_choice_skips_zero_weights():
    rng = RandomSource(seed=3)
    picks = {rng.weighted_choice({"a": 0, "b": 1, "c": 0}) for _ in range(50)}
    assert picks == {"b"}


def test_weighted_choice_roughly_follows_weights():
    rng = RandomSource(seed=8)
    picks = [rng.weighted_choice({"heavy": 9, "light": 1}) for _ in range(1000)]
    assert picks.count("heavy") > picks.count("light") * 4


@pytest.mark.parametrize("weights", [{}, {"a": 0}, {"a": -1, "b": 2}])
def test_weighted_choice_rejects_bad_weights(weights):
    with pytest.raises(ValueError):
        RandomSource(seed=1).weighted_choice(weights)


def test_weights_snapshot_drops_zeros():
    assert weights_snapshot({"a": 0, "b": 2}) == {"b": 2}
