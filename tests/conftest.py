import pytest


class FixedGenerator:
    """Returns the given values in order, cycling, and records every request."""

    def __init__(self, *values: int) -> None:
        self.values = list(values) or [1]
        self.calls: list[int] = []

    def generate(self, max: int) -> int:
        self.calls.append(max)
        return self.values[(len(self.calls) - 1) % len(self.values)]


@pytest.fixture
def fixed_generator():
    return FixedGenerator
