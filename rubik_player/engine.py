"""Core 3x3 puzzle engine: move application, undo, scramble and sequence playback."""

from __future__ import annotations

import threading
from contextlib import contextmanager
from typing import Any, Callable

import numpy as np

from .moves import MOVE_PERMUTATIONS, inverse_move, is_valid_move
from .scramble import DEFAULT_SCRAMBLE_COUNT, ScrambleGenerator
from .sequences import (
    BUSY_MESSAGE,
    DEFAULT_TRIAL_LENGTH,
    DEFAULT_TRIALS,
    SequencePlayer,
    SolverTestReport,
    SolveResult,
    get_demo,
    run_solver_trials,
)
from .state import CubeState
from .state_codec import StateValidationError, color_name, flat_to_faces, validate_face

MoveObserver = Callable[[str, np.ndarray], Any]


class RubikEngine:
    """Thread-safe owner of one CubeState with the 12 quarter-turn moves.

    Only one mutating operation runs at a time. A request that arrives while
    another is in progress is rejected with that operation's no-op result.
    An ``on_move`` observer that returns False stops a running scramble,
    playback or demo before its next move.
    """

    def __init__(
        self,
        initial_state: list[int] | np.ndarray | None = None,
        on_move: MoveObserver | None = None,
        seed: int | None = None,
    ):
        self._lock = threading.RLock()
        self._busy = threading.Lock()
        self._rng = np.random.default_rng(seed)
        self._cube = CubeState(initial_state)
        self.on_move = on_move
        self.step_count = 0
        self._stop_requested = False

    @contextmanager
    def _operation(self):
        acquired = self._busy.acquire(blocking=False)
        if acquired:
            self._stop_requested = False
        try:
            yield acquired
        finally:
            if acquired:
                self._busy.release()

    @property
    def busy(self) -> bool:
        return self._busy.locked()

    @property
    def history(self) -> list[str]:
        with self._lock:
            return self._cube.history.moves()

    def get_state(self) -> np.ndarray:
        """Return flat color-id state (length 54)."""
        with self._lock:
            return self._cube.stickers

    def get_face(self, face: str) -> list[int]:
        validate_face(face)
        with self._lock:
            return self._cube.face(face).astype(int).tolist()

    def get_face_colors(self, face: str) -> list[str]:
        return [color_name(c) for c in self.get_face(face)]

    def clone(self) -> CubeState:
        with self._lock:
            return self._cube.clone()

    def is_solved(self) -> bool:
        with self._lock:
            return self._cube.is_solved()

    def _apply(self, move: str, record: bool = True) -> bool:
        if not is_valid_move(move):
            return False
        with self._lock:
            self._cube.apply_permutation(MOVE_PERMUTATIONS[move])
            if record:
                self._cube.history.push(move)
            self.step_count += 1
            snapshot = self._cube.stickers
        if self.on_move is not None and self.on_move(move, snapshot) is False:
            self._stop_requested = True
        return True

    def _should_stop(self) -> bool:
        return self._stop_requested

    def apply_move(self, move: str) -> bool:
        """Apply one of the 12 moves; anything else is rejected with False."""
        with self._operation() as ok:
            if not ok:
                return False
            return self._apply(move)

    def apply_move_animated(self, move: str) -> bool:
        # Animation belongs to the on_move observer.
        return self.apply_move(move)

    def apply_sequence(self, moves: list[str]) -> list[str]:
        """Apply moves in order and return the ones that were rejected."""
        with self._operation() as ok:
            if not ok:
                return list(moves)
            return [move for move in moves if not self._apply(move)]

    def undo_last_move(self) -> str | None:
        with self._operation() as ok:
            if not ok:
                return None
            with self._lock:
                last = self._cube.history.pop_last()
            if last is None:
                return None
            self._apply(inverse_move(last), record=False)
            return last

    def clear_history(self) -> bool:
        with self._operation() as ok:
            if not ok:
                return False
            with self._lock:
                self._cube.history.clear()
            return True

    def set_state(self, state: list[int] | np.ndarray) -> np.ndarray:
        cube = CubeState(state)
        with self._operation() as ok:
            if not ok:
                raise StateValidationError("Engine is busy")
            with self._lock:
                self._cube = cube
                self.step_count = 0
                return self._cube.stickers

    def reset(self) -> np.ndarray | None:
        with self._operation() as ok:
            if not ok:
                return None
            with self._lock:
                self._cube.reset()
                self.step_count = 0
                return self._cube.stickers

    def scramble(self, count: int = DEFAULT_SCRAMBLE_COUNT, seed: int | None = None) -> list[str]:
        """Reset, then draw and apply ``count`` moves; history is cleared afterwards."""
        if not isinstance(count, int) or isinstance(count, bool) or count < 0:
            raise StateValidationError("Scramble count must be a non-negative integer")

        with self._operation() as ok:
            if not ok:
                return []
            rng = np.random.default_rng(seed) if seed is not None else self._rng
            with self._lock:
                self._cube.reset()
                self.step_count = 0

            sequence: list[str] = []
            for move in ScrambleGenerator(rng).generate(count):
                self._apply(move)
                sequence.append(move)
                if self._should_stop():
                    break

            with self._lock:
                self._cube.history.clear()
            return sequence

    def solve(self) -> SolveResult:
        with self._operation() as ok:
            if not ok:
                return SolveResult(moves=[], message=BUSY_MESSAGE, solved=self.is_solved())
            return SequencePlayer(self._apply, self.is_solved, should_stop=self._should_stop).run()

    def demonstrate(self, name: str | None = None) -> list[str]:
        """Play a named algorithm from the demo catalogue; returns its notations."""
        demo = get_demo(name)
        with self._operation() as ok:
            if not ok:
                return []
            played: list[str] = []
            for move in demo.moves:
                self._apply(move)
                played.append(move)
                if self._should_stop():
                    break
            return played

    def test_solver(
        self,
        trials: int = DEFAULT_TRIALS,
        length: int = DEFAULT_TRIAL_LENGTH,
        seed: int | None = None,
    ) -> SolverTestReport:
        """Replay the verification sequence on freshly scrambled scratch cubes.

        The live cube is not touched; the busy token is still taken so a
        self-test never overlaps another operation.
        """
        for name, value in (("trials", trials), ("length", length)):
            if not isinstance(value, int) or isinstance(value, bool) or value < 0:
                raise StateValidationError(f"{name} must be a non-negative integer")

        with self._operation() as ok:
            if not ok:
                return SolverTestReport(trials=[])
            rng = np.random.default_rng(seed) if seed is not None else self._rng
            return run_solver_trials(rng, trials=trials, length=length)

    def state_payload(self) -> dict[str, Any]:
        with self._lock:
            return {
                "faces": flat_to_faces(self._cube.stickers),
                "history": self._cube.history.moves(),
                "step_count": self.step_count,
                "solved": self._cube.is_solved(),
            }
