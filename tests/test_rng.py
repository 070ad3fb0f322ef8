"""
RNG Tests

Determinism, inclusive ranges and state export/import for the combat RNG.
"""

import pytest

from packages.combat.state.rng import Random, XorShift128, seed_to_long


class TestDeterminism:

    def test_same_seed_same_sequence(self):
        a, b = Random(42), Random(42)
        assert [a.random_int(99) for _ in range(50)] == [b.random_int(99) for _ in range(50)]

    def test_different_seeds_diverge(self):
        a, b = Random(1), Random(2)
        assert [a.random_int(999) for _ in range(20)] != [b.random_int(999) for _ in range(20)]

    def test_counter_skips_ahead(self):
        skipped = Random(7, counter=5)
        manual = Random(7)
        for _ in range(5):
            manual.random_int(999)
        assert skipped.random_int(99) == manual.random_int(99)
        assert skipped.counter == manual.counter == 6


class TestRanges:

    def test_random_int_is_inclusive(self, rng_seed_42):
        values = {rng_seed_42.random_int(2) for _ in range(300)}
        assert values == {0, 1, 2}

    def test_random_int_zero(self, rng_seed_42):
        assert all(rng_seed_42.random_int(0) == 0 for _ in range(10))

    def test_random_int_negative_raises(self, rng_seed_42):
        with pytest.raises(ValueError):
            rng_seed_42.random_int(-1)

    def test_random_int_range(self, rng_seed_42):
        values = {rng_seed_42.random_int_range(40, 44) for _ in range(300)}
        assert values == {40, 41, 42, 43, 44}

    def test_random_int_range_rejects_inverted(self, rng_seed_42):
        with pytest.raises(ValueError):
            rng_seed_42.random_int_range(5, 4)

    def test_random_float_bounds(self, rng_seed_42):
        assert all(0.0 <= rng_seed_42.random_float() < 1.0 for _ in range(200))

    def test_random_boolean_chance_extremes(self, rng_seed_42):
        assert not any(rng_seed_42.random_boolean(0.0) for _ in range(50))
        assert all(rng_seed_42.random_boolean(1.0) for _ in range(50))


class TestHelpers:

    def test_choice_empty_raises(self, rng_seed_42):
        with pytest.raises(ValueError):
            rng_seed_42.choice([])

    def test_shuffle_is_permutation(self, rng_seed_42):
        values = list(range(20))
        rng_seed_42.shuffle(values)
        assert sorted(values) == list(range(20))

    def test_shuffle_deterministic(self):
        a, b = list(range(10)), list(range(10))
        Random(3).shuffle(a)
        Random(3).shuffle(b)
        assert a == b


class TestState:

    def test_copy_is_independent(self, rng_seed_42):
        rng_seed_42.random_int(10)
        clone = rng_seed_42.copy()
        assert clone.random_int(99) == rng_seed_42.random_int(99)
        clone.random_int(99)
        assert clone.counter == rng_seed_42.counter + 1

    def test_state_round_trip(self, rng_seed_12345):
        for _ in range(7):
            rng_seed_12345.random_int(50)
        state = rng_seed_12345.get_state()
        expected = [rng_seed_12345.random_int(99) for _ in range(10)]

        restored = Random(0)
        restored.set_state(*state)
        assert restored.counter == state[2]
        assert [restored.random_int(99) for _ in range(10)] == expected

    def test_xorshift_explicit_state(self):
        a = XorShift128(0x12345678, 0x87654321)
        b = XorShift128(0x12345678, 0x87654321)
        assert [a.next_int(100) for _ in range(5)] == [b.next_int(100) for _ in range(5)]


class TestSeedConversion:

    def test_numeric_seed(self):
        assert seed_to_long("42") == 42

    def test_o_reads_as_zero(self):
        assert seed_to_long("A0B") == seed_to_long("AOB")

    def test_case_insensitive(self):
        assert seed_to_long("abc") == seed_to_long("ABC")
