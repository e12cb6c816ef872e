"""Replay driver: board state at any move index of a game record.

Every call replays from the start position. Nothing is cached or mutated
between calls, so the same inputs always give equal boards; hosts that
want caching keep it on their side.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field

from chessnote.core.board import Board
from chessnote.core.enums import Color
from chessnote.core.move import MoveSquares
from chessnote.core.notation import ClockReading, resolve_san


@dataclass(frozen=True, slots=True)
class ManualOverlay:
    """Ad-hoc moves played on top of the replayed position at ``base_index``."""

    base_index: int
    board: Board
    last_move: MoveSquares | None
    manual_move_count: int


@dataclass(frozen=True, slots=True)
class ReplayResult:
    board: Board
    last_move: MoveSquares | None
    side_to_move: Color


def mover_at(index: int, initial_turn: Color = Color.WHITE) -> Color:
    """Side that plays move *index* (0-based)."""
    return initial_turn if index % 2 == 0 else initial_turn.opposite


def side_to_move_after(
    index: int, initial_turn: Color = Color.WHITE, manual_moves: int = 0
) -> Color:
    """Side to move once moves ``0..index`` and *manual_moves* are played."""
    side = mover_at(index + 1, initial_turn)
    return side.opposite if manual_moves % 2 else side


def board_at(
    moves: Sequence[str],
    index: int,
    *,
    start: Board | None = None,
    initial_turn: Color = Color.WHITE,
    overlay: ManualOverlay | None = None,
) -> ReplayResult:
    """Board after moves ``0..index`` (``-1`` = start position).

    Tokens that fail to resolve leave the board as it was and replay goes
    on with the next one. Only the last applied move reports its squares.
    An *overlay* recorded at *index* takes precedence over replaying.
    """
    index = max(-1, min(index, len(moves) - 1))

    if overlay is not None and overlay.base_index == index:
        return ReplayResult(
            overlay.board.copy(),
            overlay.last_move,
            side_to_move_after(index, initial_turn, overlay.manual_move_count),
        )

    board = start.copy() if start is not None else Board.initial()
    last_move: MoveSquares | None = None
    for ply in range(index + 1):
        resolved = resolve_san(
            board,
            moves[ply],
            mover_at(ply, initial_turn),
            moves,
            ply,
            track_squares=ply == index,
        )
        board = resolved.board
        if ply == index:
            last_move = resolved.squares
    return ReplayResult(board, last_move, side_to_move_after(index, initial_turn))


@dataclass(slots=True)
class GameRecord:
    """Move tokens plus everything needed to replay them."""

    moves: list[str] = field(default_factory=list)
    tags: dict[str, str] = field(default_factory=dict)
    timestamps: list[ClockReading] = field(default_factory=list)
    start_board: Board = field(default_factory=Board.initial)
    initial_turn: Color = Color.WHITE

    def __len__(self) -> int:
        return len(self.moves)

    @property
    def last_index(self) -> int:
        return len(self.moves) - 1

    def board_at(self, index: int, overlay: ManualOverlay | None = None) -> ReplayResult:
        return board_at(
            self.moves,
            index,
            start=self.start_board,
            initial_turn=self.initial_turn,
            overlay=overlay,
        )
