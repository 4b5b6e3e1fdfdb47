"""Move notation and sticker permutation tables for the 3x3 puzzle."""

from __future__ import annotations

import numpy as np

FACE_ORDER = ("U", "R", "F", "D", "L", "B")
FACE_INDEX = {face: i for i, face in enumerate(FACE_ORDER)}
N_FACES = 6
STICKERS_PER_FACE = 9
CENTER = 4
STATE_SIZE = N_FACES * STICKERS_PER_FACE
N_COLORS = 6

COLOR_NAMES = ("white", "red", "blue", "orange", "green", "yellow")

# Home color id of each face (centre sticker).
FACE_COLORS = {"U": 0, "R": 1, "F": 2, "D": 5, "L": 3, "B": 4}

MOVE_NAMES = ("R", "R'", "L", "L'", "U", "U'", "D", "D'", "F", "F'", "B", "B'")
PRIME = "'"

MOVE_AXES = {"R": "x", "L": "x", "U": "y", "D": "y", "F": "z", "B": "z"}

# Clockwise face cycle as (receiver, source) pairs: new[receiver] = old[source].
FACE_CYCLE = ((0, 6), (6, 8), (8, 2), (2, 0), (1, 3), (3, 7), (7, 5), (5, 1))

# Clockwise edge transfer: each strip receives the stickers of the next one,
# the last strip receives the first.
STRIP_CYCLES = {
    "R": (("U", (2, 5, 8)), ("F", (2, 5, 8)), ("D", (2, 5, 8)), ("B", (6, 3, 0))),
    "L": (("U", (0, 3, 6)), ("B", (8, 5, 2)), ("D", (0, 3, 6)), ("F", (0, 3, 6))),
    "U": (("F", (0, 1, 2)), ("R", (0, 1, 2)), ("B", (0, 1, 2)), ("L", (0, 1, 2))),
    "D": (("F", (6, 7, 8)), ("L", (6, 7, 8)), ("B", (6, 7, 8)), ("R", (6, 7, 8))),
    "F": (("U", (6, 7, 8)), ("L", (8, 5, 2)), ("D", (2, 1, 0)), ("R", (0, 3, 6))),
    "B": (("U", (0, 1, 2)), ("R", (2, 5, 8)), ("D", (8, 7, 6)), ("L", (6, 3, 0))),
}


def sticker_index(face: str, position: int) -> int:
    return FACE_INDEX[face] * STICKERS_PER_FACE + position


def solved_state() -> np.ndarray:
    """Return the canonical solved flat state of length 54."""
    return np.repeat(np.array([FACE_COLORS[f] for f in FACE_ORDER], dtype=np.int8), STICKERS_PER_FACE)


def is_valid_move(move) -> bool:
    return isinstance(move, str) and move in MOVE_PERMUTATIONS


def inverse_move(move: str) -> str:
    """Toggle the direction marker: R <-> R'."""
    if move.endswith(PRIME):
        return move[:-1]
    return move + PRIME


def move_face(move: str) -> str:
    return move[0]


def move_axis(move: str) -> str | None:
    if not move:
        return None
    return MOVE_AXES.get(move[0])


def is_inverse_pair(first: str | None, second: str | None) -> bool:
    if not first or not second:
        return False
    return inverse_move(first) == second


def same_axis(first: str | None, second: str | None) -> bool:
    if not first or not second:
        return False
    axis = move_axis(first)
    return axis is not None and axis == move_axis(second)


def _clockwise_permutation(face: str) -> np.ndarray:
    perm = np.arange(STATE_SIZE, dtype=np.int32)

    for receiver, source in FACE_CYCLE:
        perm[sticker_index(face, receiver)] = sticker_index(face, source)

    strips = STRIP_CYCLES[face]
    for i, (recv_face, recv_positions) in enumerate(strips):
        src_face, src_positions = strips[(i + 1) % len(strips)]
        for recv_pos, src_pos in zip(recv_positions, src_positions):
            perm[sticker_index(recv_face, recv_pos)] = sticker_index(src_face, src_pos)

    return perm


def _inverse_permutation(perm: np.ndarray) -> np.ndarray:
    return np.argsort(perm).astype(np.int32)


def _generate_move_permutations() -> dict[str, np.ndarray]:
    perms: dict[str, np.ndarray] = {}
    for face in STRIP_CYCLES:
        clockwise = _clockwise_permutation(face)
        if not np.array_equal(np.sort(clockwise), np.arange(STATE_SIZE)):
            raise RuntimeError(f"Move table for {face} is not a permutation")
        perms[face] = clockwise
        perms[face + PRIME] = _inverse_permutation(clockwise)

    for perm in perms.values():
        perm.setflags(write=False)
    return {name: perms[name] for name in MOVE_NAMES}


MOVE_PERMUTATIONS = _generate_move_permutations()
