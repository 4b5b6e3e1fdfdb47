"""State validation and codec helpers."""

from __future__ import annotations

import numpy as np

from .moves import COLOR_NAMES, FACE_INDEX, FACE_ORDER, N_COLORS, N_FACES, STATE_SIZE, STICKERS_PER_FACE


class StateValidationError(ValueError):
    """Raised when an input state is invalid."""


def validate_state(state: list[int] | np.ndarray) -> np.ndarray:
    """Validate a flat state of color ids and return a canonical int8 copy (length 54)."""
    arr = np.asarray(state)
    if arr.ndim == 2 and arr.shape == (N_FACES, STICKERS_PER_FACE):
        arr = arr.reshape(-1)
    if arr.ndim != 1 or arr.size != STATE_SIZE:
        raise StateValidationError(f"State must have {STATE_SIZE} stickers, got shape {arr.shape}")
    if not np.issubdtype(arr.dtype, np.integer):
        raise StateValidationError("State must contain integer color ids")

    arr = arr.astype(np.int16)
    if np.any(arr < 0) or np.any(arr >= N_COLORS):
        raise StateValidationError("State contains invalid color IDs; allowed values are 0..5")

    counts = np.bincount(arr, minlength=N_COLORS)
    if not np.all(counts == STICKERS_PER_FACE):
        raise StateValidationError(
            "Invalid sticker counts; each color 0..5 must appear exactly 9 times"
        )

    return arr.astype(np.int8, copy=True)


def validate_face(face: str) -> str:
    if not isinstance(face, str) or face not in FACE_INDEX:
        raise StateValidationError(f"Unknown face {face!r}; expected one of {', '.join(FACE_ORDER)}")
    return face


def face_slice(face: str) -> slice:
    start = FACE_INDEX[validate_face(face)] * STICKERS_PER_FACE
    return slice(start, start + STICKERS_PER_FACE)


def color_name(color_id: int) -> str:
    return COLOR_NAMES[int(color_id)]


def flat_to_faces(state: list[int] | np.ndarray) -> dict[str, list[int]]:
    arr = validate_state(state)
    return {face: arr[face_slice(face)].astype(int).tolist() for face in FACE_ORDER}


def faces_to_flat(faces: dict[str, list[int]]) -> np.ndarray:
    missing = [face for face in FACE_ORDER if face not in faces]
    if missing:
        raise StateValidationError(f"Missing faces: {', '.join(missing)}")
    rows = []
    for face in FACE_ORDER:
        values = np.asarray(faces[face])
        if values.shape != (STICKERS_PER_FACE,):
            raise StateValidationError(f"Face {face} must have {STICKERS_PER_FACE} stickers")
        rows.append(values)
    return validate_state(np.concatenate(rows))


def state_to_color_names(state: list[int] | np.ndarray) -> dict[str, list[str]]:
    return {face: [color_name(c) for c in colors] for face, colors in flat_to_faces(state).items()}


def state_to_text(state: list[int] | np.ndarray) -> str:
    """One line per face, e.g. ``U: [0,0,0,0,0,0,0,0,0]``."""
    lines = [f"{face}: [{','.join(str(c) for c in colors)}]" for face, colors in flat_to_faces(state).items()]
    return "\n".join(lines) + "\n"
