"""Forward move log with undo support."""

from __future__ import annotations

from .moves import inverse_move


class MoveHistory:
    """Append-only log of applied moves; the newest entry can be popped for undo."""

    def __init__(self, moves: list[str] | None = None):
        self._moves: list[str] = list(moves) if moves else []

    def push(self, move: str) -> None:
        self._moves.append(move)

    def pop_last(self) -> str | None:
        if not self._moves:
            return None
        return self._moves.pop()

    def clear(self) -> None:
        self._moves = []

    def moves(self) -> list[str]:
        return list(self._moves)

    def copy(self) -> "MoveHistory":
        return MoveHistory(self._moves)

    @staticmethod
    def inverse(move: str) -> str:
        return inverse_move(move)

    def __len__(self) -> int:
        return len(self._moves)
