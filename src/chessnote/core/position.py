"""Position — a board paired with the side to move."""

from __future__ import annotations

from dataclasses import dataclass, field

from chessnote.core.board import Board
from chessnote.core.enums import Color


@dataclass(slots=True)
class Position:
    """Board + side to move.

    Castling rights, en-passant target and move clocks are deliberately not
    part of the model; replay derives what it needs from the move list.
    """

    board: Board = field(default_factory=Board.initial)
    side_to_move: Color = Color.WHITE

    def copy(self) -> Position:
        return Position(self.board.copy(), self.side_to_move)
