import random
from collections import Counter

import pytest

from dice_notation.config import Settings
from dice_notation.errors import InvalidArgumentError
from dice_notation.generator import RandomNumberGenerator, from_settings


class RecordingRandom(random.Random):
    def __init__(self) -> None:
        super().__init__(0)
        self.bounds: list[tuple[int, int]] = []

    def randint(self, a: int, b: int) -> int:
        self.bounds.append((a, b))
        return super().randint(a, b)


def test_bounds_are_inclusive() -> None:
    rng = RecordingRandom()
    RandomNumberGenerator(rng).generate(6)
    assert rng.bounds == [(1, 6)]


@pytest.mark.parametrize("max", [0, -1])
def test_non_positive_max_fails(max) -> None:
    with pytest.raises(InvalidArgumentError) as exc:
        RandomNumberGenerator().generate(max)
    assert str(exc.value).startswith("[INVALID_ARGUMENT]")


def test_one_sided_die_always_returns_one() -> None:
    generator = RandomNumberGenerator()
    assert {generator.generate(1) for _ in range(50)} == {1}


def test_values_cover_both_ends_of_the_range() -> None:
    generator = RandomNumberGenerator()
    values = [generator.generate(4) for _ in range(10_000)]

    assert min(values) == 1
    assert max(values) == 4


def test_distribution_is_not_skewed() -> None:
    generator = RandomNumberGenerator(random.Random(20240601))
    samples = 10_000
    sides = 6
    counts = Counter(generator.generate(sides) for _ in range(samples))

    assert set(counts) == set(range(1, sides + 1))

    expected = samples / sides
    chi_square = sum((counts[face] - expected) ** 2 / expected for face in range(1, sides + 1))
    # df=5, p=0.0001
    assert chi_square < 25.7


def test_default_source_is_system_random() -> None:
    assert RandomNumberGenerator().source == "secrets.SystemRandom"


def test_seeded_settings_are_reproducible() -> None:
    config = Settings(seed=7)
    a = from_settings(config)
    b = from_settings(config)

    assert [a.generate(20) for _ in range(10)] == [b.generate(20) for _ in range(10)]
    assert a.source == "random.Random(seed=7)"


def test_unseeded_settings_use_system_random() -> None:
    assert from_settings(Settings(seed=None)).source == "secrets.SystemRandom"
