"""3x3 puzzle state model, move engine, scrambler and sequence player."""

from .engine import RubikEngine
from .solved_check import is_solved
from .state import CubeState

__all__ = ["CubeState", "RubikEngine", "is_solved"]
