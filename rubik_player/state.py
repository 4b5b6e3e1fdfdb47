"""Sticker-color model of the puzzle."""

from __future__ import annotations

import numpy as np

from .history import MoveHistory
from .moves import N_COLORS, solved_state
from .solved_check import is_solved
from .state_codec import face_slice, validate_state


class CubeState:
    """Flat color-id array (54 stickers, faces U R F D L B) plus the move log.

    The sticker array is only ever replaced as a whole, so a move is either
    fully applied or not applied at all.
    """

    def __init__(self, stickers: list[int] | np.ndarray | None = None, history: MoveHistory | None = None):
        self._stickers = solved_state() if stickers is None else validate_state(stickers)
        self.history = history if history is not None else MoveHistory()

    @property
    def stickers(self) -> np.ndarray:
        return self._stickers.copy()

    def reset(self) -> None:
        self._stickers = solved_state()
        self.history.clear()

    def is_solved(self) -> bool:
        return is_solved(self._stickers)

    def clone(self) -> "CubeState":
        return CubeState(self._stickers.copy(), self.history.copy())

    def apply_permutation(self, perm: np.ndarray) -> None:
        self._stickers = self._stickers[perm]

    def face(self, face: str) -> np.ndarray:
        return self._stickers[face_slice(face)].copy()

    def color_counts(self) -> np.ndarray:
        return np.bincount(self._stickers.astype(np.int64), minlength=N_COLORS)

    def __eq__(self, other) -> bool:
        if not isinstance(other, CubeState):
            return NotImplemented
        return np.array_equal(self._stickers, other._stickers)

    __hash__ = None
