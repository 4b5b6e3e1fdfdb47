"""Fixed move-sequence catalogue and the stage player that replays it.

The player does not look at the stickers while it plays. It replays the same
seven stages every time and only checks the solved state at the end, for the
verification message. Half-turn and slice notations in the catalogue (``U2``,
``R2``) are not in the move table, so the engine rejects them and they are
reported as skipped.
"""

from __future__ import annotations

import time
from dataclasses import asdict, dataclass, field
from typing import Callable

import numpy as np

from .moves import MOVE_NAMES, MOVE_PERMUTATIONS, is_valid_move
from .state import CubeState

CROSS_ALGORITHMS = (
    ("F", "D", "R", "D'"),
    ("R", "D", "F", "D'"),
    ("F", "R", "U", "R'", "U'", "F'"),
    ("R", "U", "R'", "F", "R", "F'"),
)

CORNER_ALGORITHMS = (
    ("R", "U", "R'", "U'"),
    ("R", "U2", "R'", "U'", "R", "U'", "R'"),
    ("R", "U'", "R'", "U'", "R", "U", "R'", "U'"),
    ("F", "R", "U'", "R'", "F'"),
)

RIGHT_HAND_INSERT = ("R", "U", "R'", "U'", "R'", "F", "R", "F'")
LEFT_HAND_INSERT = ("L'", "U'", "L", "U", "L", "F'", "L'", "F")

CROSS_ORIENTATION_ALGORITHMS = (
    ("F", "R", "U", "R'", "U'", "F'"),  # line
    ("F", "U", "R", "U'", "R'", "F'"),  # L-shape
    ("F", "R", "U", "R'", "U'", "R", "U", "R'", "U'", "F'"),  # dot
)

CORNER_ORIENTATION_ALGORITHMS = (
    ("R", "U", "R'", "U", "R", "U2", "R'"),  # Sune
    ("R", "U2", "R'", "U'", "R", "U'", "R'"),  # Anti-Sune
    ("R", "U", "R'", "U", "R", "U'", "R'", "U", "R", "U2", "R'"),  # Pi
)

CORNER_PERMUTATION_ALGORITHMS = (
    ("R'", "F", "R'", "B2", "R", "F'", "R'", "B2", "R2"),  # A-perm
    ("R", "U", "R'", "F'", "R", "U", "R'", "U'", "R'", "F", "R2", "U'", "R'"),  # T-perm
)

EDGE_PERMUTATION_ALGORITHMS = (
    ("R", "U'", "R", "U", "R", "U", "R", "U'", "R'", "U'", "R2"),  # U-perm
    ("R2", "U", "R", "U", "R'", "U'", "R'", "U'", "R'", "U", "R'"),  # H-perm
    ("M2", "U", "M2", "U2", "M2", "U", "M2"),  # Z-perm
)


def _cycle(algorithms, rounds: int) -> tuple[str, ...]:
    moves: list[str] = []
    for i in range(rounds):
        moves.extend(algorithms[i % len(algorithms)])
    return tuple(moves)


@dataclass(frozen=True)
class Stage:
    name: str
    title: str
    moves: tuple[str, ...]


STAGES = (
    Stage("cross", "Forming the cross on the bottom", _cycle(CROSS_ALGORITHMS, 8)),
    Stage("corners", "Positioning the first-layer corners", _cycle(CORNER_ALGORITHMS, 6)),
    Stage("middle_layer", "Completing the middle layer", _cycle((RIGHT_HAND_INSERT, LEFT_HAND_INSERT), 4)),
    Stage("second_cross", "Forming the cross on top", CROSS_ORIENTATION_ALGORITHMS[0]),
    Stage("second_layer_corners", "Orienting the top corners", CORNER_ORIENTATION_ALGORITHMS[0]),
    Stage("corner_permutation", "Permuting corners", CORNER_PERMUTATION_ALGORITHMS[1]),
    Stage("edge_permutation", "Permuting the final edges", EDGE_PERMUTATION_ALGORITHMS[0]),
)

STAGE_NAMES = tuple(stage.name for stage in STAGES)


@dataclass(frozen=True)
class Demo:
    title: str
    moves: tuple[str, ...]


DEMOS = {
    "sexy": Demo("Sexy Move (R U R' U')", ("R", "U", "R'", "U'")),
    "sledgehammer": Demo("Sledgehammer", ("R'", "F", "R", "F'")),
    "sune": Demo("Sune (OLL Algorithm)", CORNER_ORIENTATION_ALGORITHMS[0]),
    "jperm": Demo("J-Perm (PLL Algorithm)", ("R", "U", "R'", "F'", "R", "U", "R'", "U'", "R'", "F", "R2", "U'", "R'")),
}
DEFAULT_DEMO = "sexy"


def get_demo(name: str | None) -> Demo:
    """Unknown names fall back to the sexy move."""
    return DEMOS.get(name or DEFAULT_DEMO, DEMOS[DEFAULT_DEMO])


# Self-test sequence: cross, corners, middle, OLL and PLL blocks played back to back.
VERIFICATION_SEQUENCE = (
    ("F", "D", "R", "D'", "F'", "U", "F", "D'", "F'")
    + ("R", "U", "R'", "U'", "R", "U", "R'", "U'", "R", "U", "R'")
    + ("R", "U", "R'", "U'", "R'", "F", "R", "F'", "U", "R", "U'", "R'")
    + ("F", "R", "U", "R'", "U'", "F'", "R", "U", "R'", "U", "R", "U2", "R'")
    + ("R", "U", "R'", "F'", "R", "U", "R'", "U'", "R'", "F", "R2", "U'", "R'")
)
DEFAULT_TRIALS = 5
DEFAULT_TRIAL_LENGTH = 15

ALREADY_SOLVED_MESSAGE = "Already solved!"
BUSY_MESSAGE = "Busy"


@dataclass
class StageReport:
    name: str
    moves: list[str]
    skipped: list[str]


@dataclass
class SolveResult:
    moves: list[str]
    message: str
    solved: bool
    skipped: list[str] = field(default_factory=list)
    stages: list[StageReport] = field(default_factory=list)
    stopped: bool = False

    def as_dict(self) -> dict:
        return {
            "moves": list(self.moves),
            "message": self.message,
            "solved": self.solved,
            "skipped": list(self.skipped),
            "stopped": self.stopped,
            "stages": [{"name": s.name, "moves": list(s.moves), "skipped": list(s.skipped)} for s in self.stages],
        }


class SequencePlayer:
    """Replays STAGES through ``apply_move`` regardless of the cube's configuration.

    ``should_stop`` is polled after every move; once it returns True the
    player applies nothing further and reports what it has played so far.
    """

    def __init__(
        self,
        apply_move: Callable[[str], bool],
        is_solved: Callable[[], bool],
        stages: tuple[Stage, ...] = STAGES,
        should_stop: Callable[[], bool] | None = None,
    ):
        self.apply_move = apply_move
        self.is_solved = is_solved
        self.stages = stages
        self.should_stop = should_stop or (lambda: False)

    def play_stage(self, stage: Stage) -> StageReport:
        report = StageReport(name=stage.name, moves=[], skipped=[])
        for move in stage.moves:
            if not self.apply_move(move):
                report.skipped.append(move)
            report.moves.append(move)
            if self.should_stop():
                break
        return report

    def run(self) -> SolveResult:
        if self.is_solved():
            return SolveResult(moves=[], message=ALREADY_SOLVED_MESSAGE, solved=True)

        result = SolveResult(moves=[], message="", solved=False)
        for stage in self.stages:
            report = self.play_stage(stage)
            result.stages.append(report)
            result.moves.extend(report.moves)
            result.skipped.extend(report.skipped)
            if self.should_stop():
                result.stopped = True
                break

        result.solved = self.is_solved()
        if result.stopped:
            result.message = f"Stopped during {result.stages[-1].name} after {len(result.moves)} moves"
        elif result.solved:
            result.message = f"Solved in {len(result.moves)} moves using layer-by-layer method!"
        else:
            result.message = (
                f"Played {len(result.moves)} moves using layer-by-layer method; "
                "verification failed, cube is not solved"
            )
        return result


@dataclass
class SolverTrial:
    trial: int
    scramble: list[str]
    scrambled: bool
    solved: bool
    move_count: int
    time_ms: float
    final_state: list[int] = field(default_factory=list)


@dataclass
class SolverTestReport:
    trials: list[SolverTrial]

    @property
    def successes(self) -> int:
        return sum(1 for t in self.trials if t.solved)

    @property
    def success_rate(self) -> float:
        return self.successes / len(self.trials) if self.trials else 0.0

    @property
    def average_moves(self) -> float:
        return sum(t.move_count for t in self.trials) / len(self.trials) if self.trials else 0.0

    @property
    def average_time_ms(self) -> float:
        return sum(t.time_ms for t in self.trials) / len(self.trials) if self.trials else 0.0

    def as_dict(self) -> dict:
        return {
            "trials": [asdict(t) for t in self.trials],
            "successes": self.successes,
            "success_rate": self.success_rate,
            "average_moves": self.average_moves,
            "average_time_ms": self.average_time_ms,
        }


def run_solver_trials(
    rng: np.random.Generator,
    trials: int = DEFAULT_TRIALS,
    length: int = DEFAULT_TRIAL_LENGTH,
    sequence: tuple[str, ...] = VERIFICATION_SEQUENCE,
) -> SolverTestReport:
    """Scramble fresh cubes with unconstrained random moves and replay ``sequence`` on each."""
    report = SolverTestReport(trials=[])
    for trial in range(1, trials + 1):
        cube = CubeState()
        scramble = [MOVE_NAMES[int(rng.integers(len(MOVE_NAMES)))] for _ in range(length)]
        for move in scramble:
            cube.apply_permutation(MOVE_PERMUTATIONS[move])
        scrambled = not cube.is_solved()

        start = time.perf_counter()
        for move in sequence:
            if is_valid_move(move):
                cube.apply_permutation(MOVE_PERMUTATIONS[move])
        elapsed_ms = (time.perf_counter() - start) * 1000.0

        report.trials.append(
            SolverTrial(
                trial=trial,
                scramble=scramble,
                scrambled=scrambled,
                solved=cube.is_solved(),
                move_count=len(sequence),
                time_ms=elapsed_ms,
                final_state=cube.stickers.astype(int).tolist(),
            )
        )
    return report
