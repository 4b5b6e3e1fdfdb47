"""Solved-state checks for the puzzle."""

from __future__ import annotations

import numpy as np

from .moves import CENTER, N_FACES, STICKERS_PER_FACE
from .state_codec import validate_state


def is_solved(state: list[int] | np.ndarray) -> bool:
    """Every face's stickers equal that face's centre."""
    faces = validate_state(state).reshape(N_FACES, STICKERS_PER_FACE)
    return bool(np.all(faces == faces[:, CENTER : CENTER + 1]))

