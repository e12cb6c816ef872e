"""Exploration session — navigation over a game record plus manual moves."""

from __future__ import annotations

from dataclasses import dataclass, field

from chessnote.core.board import Board
from chessnote.core.enums import Color, PieceType
from chessnote.core.move import MoveSquares
from chessnote.core.move_generator import MoveGenerator
from chessnote.core.notation import ClockReading, board_to_fen, clock_at
from chessnote.core.piece import Piece
from chessnote.core.rules import Rules
from chessnote.core.types import Square, file_of, make_square, rank_of
from chessnote.game.board_data import BoardData, MoveAnnotations
from chessnote.game.replay import GameRecord, ManualOverlay, ReplayResult
from chessnote.game.source import GameSource

_PROMOTION_RANK: tuple[int, int] = (7, 0)


@dataclass
class BoardSession:
    """State a host keeps for one open board.

    Holds the current move index and, optionally, a manual overlay of moves
    tried out on top of it. The overlay belongs to the index it was made
    at: any navigation drops it. Board positions themselves are always
    recomputed through :meth:`GameRecord.board_at`.
    """

    record: GameRecord
    board_data: BoardData = field(default_factory=BoardData)
    current_move: int = -1
    overlay: ManualOverlay | None = field(default=None, init=False)

    def __post_init__(self) -> None:
        self.current_move = self._clamp(self.current_move)

    @classmethod
    def from_source(cls, source: GameSource) -> BoardSession:
        """Session restored at the sidecar's last viewed move, if still valid."""
        record = source.record()
        start = -1
        saved = source.board_data.current_move
        if saved is not None and -1 <= saved <= record.last_index:
            start = saved
        return cls(record=record, board_data=source.board_data, current_move=start)

    # ── Navigation ───────────────────────────────────────────────────────

    def go_to(self, index: int) -> None:
        self.overlay = None
        self.current_move = self._clamp(index)
        self.board_data.current_move = self.current_move

    def next(self) -> None:
        self.go_to(self.current_move + 1)

    def previous(self) -> None:
        self.go_to(self.current_move - 1)

    def first(self) -> None:
        self.go_to(-1)

    def last(self) -> None:
        self.go_to(self.record.last_index)

    def _clamp(self, index: int) -> int:
        return max(-1, min(index, self.record.last_index))

    # ── Current view ─────────────────────────────────────────────────────

    def view(self) -> ReplayResult:
        return self.record.board_at(self.current_move, self.overlay)

    @property
    def board(self) -> Board:
        return self.view().board

    @property
    def last_move(self) -> MoveSquares | None:
        return self.view().last_move

    @property
    def current_turn(self) -> Color:
        return self.view().side_to_move

    @property
    def manual_move_count(self) -> int:
        return self.overlay.manual_move_count if self.overlay is not None else 0

    @property
    def fen(self) -> str:
        """FEN of what is on screen, for handing to an analysis process."""
        view = self.view()
        return board_to_fen(view.board, view.side_to_move)

    def king_status(self) -> tuple[bool, bool]:
        """``(in_check, checkmate)`` for the side to move."""
        view = self.view()
        return Rules.king_status(view.board, view.side_to_move)

    def clock(self) -> ClockReading | None:
        return clock_at(self.record.timestamps, self.current_move)

    def annotations(self) -> MoveAnnotations:
        return self.board_data.annotations_at(self.current_move)

    def note(self) -> str:
        return self.board_data.notes.get(self.current_move, "")

    def set_note(self, text: str) -> None:
        if text:
            self.board_data.notes[self.current_move] = text
        else:
            self.board_data.notes.pop(self.current_move, None)

    # ── Manual exploration ───────────────────────────────────────────────

    def selectable_moves(self, sq: Square) -> list[Square]:
        """Destinations offered when the piece on *sq* is picked up."""
        return MoveGenerator(self.board).destinations(sq)

    def try_manual_move(
        self,
        from_sq: Square,
        to_sq: Square,
        promotion: PieceType | None = None,
    ) -> bool:
        """Play *from_sq* → *to_sq* on top of the current view.

        Returns ``False`` and changes nothing when the move is not allowed.
        Dropping the king on its own corner rook castles. A pawn reaching
        the last rank only changes species when *promotion* is given.
        """
        view = self.view()
        gen = MoveGenerator(view.board)
        if not gen.is_legal_move(from_sq, to_sq):
            return False
        if to_sq not in gen.destinations(from_sq):
            king_target = gen.castling_rook_target(from_sq, to_sq)
            if king_target is None:
                return False
            to_sq = king_target

        board = view.board.copy()
        piece = board[from_sq]
        assert piece is not None

        if piece.piece_type == PieceType.KING and abs(file_of(to_sq) - file_of(from_sq)) == 2:
            kingside = file_of(to_sq) > file_of(from_sq)
            rank = rank_of(to_sq)
            rook_from = make_square(7 if kingside else 0, rank)
            rook_to = make_square(file_of(to_sq) + (-1 if kingside else 1), rank)
            board[rook_to] = board[rook_from]
            board[rook_from] = None

        if (
            promotion is not None
            and piece.piece_type == PieceType.PAWN
            and rank_of(to_sq) == _PROMOTION_RANK[int(piece.color)]
        ):
            piece = Piece(piece.color, promotion)

        board[to_sq] = piece
        board[from_sq] = None
        self.overlay = ManualOverlay(
            base_index=self.current_move,
            board=board,
            last_move=MoveSquares(from_sq, to_sq),
            manual_move_count=self.manual_move_count + 1,
        )
        return True

    def reset_manual_moves(self) -> None:
        """Drop the overlay and show the recorded position again."""
        self.overlay = None
