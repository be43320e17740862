import pytest

from mgbench.randdp import randlc, vranlc

A = 5.0**13
SEED = 314159265.0
MOD = 2**46


@pytest.mark.parametrize("seed", [SEED, 1.0, 12345.0, 2.0**45 + 1])
def test_randlc_matches_modular_product(seed):
    _, new_seed = randlc(seed, A)
    assert new_seed == float((int(A) * int(seed)) % MOD)


def test_randlc_value_is_normalised_seed():
    value, new_seed = randlc(SEED, A)
    assert value == new_seed * 2.0**-46
    assert 0.0 < value < 1.0


def test_randlc_small_multiplier():
    value, new_seed = randlc(1.0, 3.0)
    assert new_seed == 3.0
    assert value == 3.0 * 2.0**-46


def test_vranlc_equals_repeated_randlc():
    values, last = vranlc(20, SEED, A)
    seed = SEED
    expected = []
    for _ in range(20):
        value, seed = randlc(seed, A)
        expected.append(value)
    assert values == expected
    assert last == seed


def test_vranlc_zero_count_keeps_seed():
    values, seed = vranlc(0, SEED, A)
    assert values == []
    assert seed == SEED


def test_vranlc_values_in_unit_interval():
    values, seed = vranlc(500, SEED, A)
    assert len(values) == 500
    assert all(0.0 < v < 1.0 for v in values)
    assert 0.0 < seed < 2.0**46
    assert seed == int(seed)


def test_vranlc_is_deterministic():
    first_values, first_seed = vranlc(10, SEED, A)
    second_values, second_seed = vranlc(10, SEED, A)
    assert first_values == second_values
    assert first_seed == second_seed
    assert first_seed == float((pow(5**13, 10, MOD) * int(SEED)) % MOD)