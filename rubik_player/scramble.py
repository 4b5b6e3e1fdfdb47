"""Random scramble generation with local redundancy avoidance."""

from __future__ import annotations

import numpy as np

from .moves import MOVE_NAMES, is_inverse_pair, same_axis

MAX_ATTEMPTS = 10
DEFAULT_SCRAMBLE_COUNT = 20


def is_redundant(previous: str | None, candidate: str) -> bool:
    """Candidate undoes the previous move or turns about the same axis."""
    return is_inverse_pair(previous, candidate) or same_axis(previous, candidate)


class ScrambleGenerator:
    def __init__(self, rng: np.random.Generator | None = None, max_attempts: int = MAX_ATTEMPTS):
        self.rng = rng if rng is not None else np.random.default_rng()
        self.max_attempts = max_attempts
        self.last_attempts = 0

    def draw(self, previous: str | None = None) -> str:
        # After max_attempts draws the last candidate is taken as is.
        attempts = 0
        while True:
            candidate = MOVE_NAMES[int(self.rng.integers(len(MOVE_NAMES)))]
            attempts += 1
            self.last_attempts = attempts
            if attempts >= self.max_attempts or not is_redundant(previous, candidate):
                return candidate

    def generate(self, count: int):
        """Yield ``count`` moves; each draw only looks at the move before it."""
        previous: str | None = None
        for _ in range(count):
            move = self.draw(previous)
            yield move
            previous = move
