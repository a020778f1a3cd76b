"""Number generators feeding the dice roll engine.

A generator answers one question: give me a value in the closed range
``[1, max]``. Both bounds are inclusive; ``randint`` is used for exactly that
reason.
"""

from __future__ import annotations

import random
import secrets
from typing import Protocol

from .config import Settings, settings
from .errors import InvalidArgumentError


class NumberGenerator(Protocol):
    def generate(self, max: int) -> int: ...


class RandomNumberGenerator:
    """Uniform generator backed by a ``random.Random`` compatible source."""

    def __init__(self, rng: random.Random | None = None, source: str | None = None) -> None:
        if rng is None:
            rng = secrets.SystemRandom()
            source = source or "secrets.SystemRandom"
        self._rng = rng
        self.source = source or type(rng).__name__

    def generate(self, max: int) -> int:
        if max <= 0:
            raise InvalidArgumentError(
                f"[INVALID_ARGUMENT] Cannot generate a value in [1, {max}]. The maximum must be at least 1."
            )
        return self._rng.randint(1, max)


def from_settings(config: Settings = settings) -> RandomNumberGenerator:
    if config.seed is None:
        return RandomNumberGenerator()
    return RandomNumberGenerator(random.Random(config.seed), source=f"random.Random(seed={config.seed})")
