"""Tests for the replay driver."""

from chessnote.core.board import Board
from chessnote.core.enums import Color, PieceType
from chessnote.core.move import MoveSquares
from chessnote.core.notation import board_to_fen, parse_fen
from chessnote.core.piece import Piece
from chessnote.core.types import D5, D6, E2, E4, E5, E7, F1, F3, G1, H1, parse_square
from chessnote.game.replay import (
    GameRecord,
    ManualOverlay,
    board_at,
    mover_at,
    side_to_move_after,
)


def _placement(board: Board) -> str:
    return board_to_fen(board).split()[0]


class TestBoardAt:
    def test_start_position(self) -> None:
        result = board_at(["e4", "e5"], -1)
        assert result.board == Board.initial()
        assert result.last_move is None
        assert result.side_to_move == Color.WHITE

    def test_after_e4(self) -> None:
        result = board_at(["e4"], 0)
        assert _placement(result.board) == "rnbqkbnr/pppppppp/8/8/4P3/8/PPPP1PPP/RNBQKBNR"
        assert result.last_move == MoveSquares(E2, E4)
        assert result.side_to_move == Color.BLACK

    def test_ruy_lopez(self) -> None:
        result = board_at(["e4", "e5", "Nf3", "Nc6", "Bb5"], 4)
        assert _placement(result.board) == (
            "r1bqkbnr/pppp1ppp/2n5/1B2p3/4P3/5N2/PPPP1PPP/RNBQK2R"
        )
        assert result.last_move == MoveSquares(F1, parse_square("b5"))

    def test_intermediate_index(self) -> None:
        moves = ["e4", "e5", "Nf3", "Nc6", "Bb5"]
        result = board_at(moves, 1)
        assert _placement(result.board) == (
            "rnbqkbnr/pppp1ppp/8/4p3/4P3/8/PPPP1PPP/RNBQKBNR"
        )
        assert result.last_move == MoveSquares(E7, E5)

    def test_kingside_castling(self) -> None:
        moves = ["Nf3", "Nf6", "g3", "g6", "Bg2", "Bg7", "O-O"]
        board = board_at(moves, 6).board
        assert board[G1] == Piece(Color.WHITE, PieceType.KING)
        assert board[F1] == Piece(Color.WHITE, PieceType.ROOK)
        assert board[H1] is None

    def test_en_passant(self) -> None:
        moves = ["e4", "a6", "e5", "d5", "exd6"]
        board = board_at(moves, 4).board
        assert board[D6] == Piece(Color.WHITE, PieceType.PAWN)
        assert board[D5] is None
        assert board[E5] is None

    def test_index_is_clamped(self) -> None:
        moves = ["e4", "e5"]
        assert board_at(moves, 99).board == board_at(moves, 1).board
        assert board_at(moves, -5).board == Board.initial()

    def test_empty_move_list(self) -> None:
        result = board_at([], 3)
        assert result.board == Board.initial()
        assert result.last_move is None

    def test_failed_token_is_skipped(self) -> None:
        # Black's queen cannot reach h5; replay carries on regardless.
        result = board_at(["e4", "Qh5", "Nf3"], 2)
        assert result.board[E4] == Piece(Color.WHITE, PieceType.PAWN)
        assert result.board[F3] == Piece(Color.WHITE, PieceType.KNIGHT)
        assert result.board[parse_square("d8")] == Piece(Color.BLACK, PieceType.QUEEN)
        assert result.side_to_move == Color.BLACK

    def test_failed_last_token_has_no_squares(self) -> None:
        assert board_at(["e4", "Qh5"], 1).last_move is None

    def test_idempotent(self) -> None:
        moves = ["e4", "c5", "Nf3", "d6", "d4", "cxd4", "Nxd4"]
        first = board_at(moves, 6)
        second = board_at(moves, 6)
        assert first.board == second.board
        assert first.board is not second.board
        assert first.last_move == second.last_move

    def test_custom_start_with_black_to_move(self) -> None:
        start = parse_fen("4k3/4p3/8/8/8/8/4P3/4K3 b - - 0 1")
        result = board_at(["e5", "e4"], 1, start=start, initial_turn=Color.BLACK)
        assert result.board[E5] == Piece(Color.BLACK, PieceType.PAWN)
        assert result.board[E4] == Piece(Color.WHITE, PieceType.PAWN)
        assert result.side_to_move == Color.BLACK
        # The start board itself is never touched.
        assert start[E7] == Piece(Color.BLACK, PieceType.PAWN)


class TestOverlay:
    def test_overlay_at_same_index_wins(self) -> None:
        custom = Board()
        overlay = ManualOverlay(0, custom, MoveSquares(E2, E4), manual_move_count=1)
        result = board_at(["e4", "e5"], 0, overlay=overlay)
        assert result.board == custom
        assert result.last_move == MoveSquares(E2, E4)
        # One recorded move plus one manual move: White again.
        assert result.side_to_move == Color.WHITE

    def test_overlay_at_other_index_is_ignored(self) -> None:
        overlay = ManualOverlay(0, Board(), None, manual_move_count=1)
        result = board_at(["e4", "e5"], 1, overlay=overlay)
        assert result.board[E5] == Piece(Color.BLACK, PieceType.PAWN)


class TestSideToMove:
    def test_mover_at(self) -> None:
        assert mover_at(0) == Color.WHITE
        assert mover_at(1) == Color.BLACK
        assert mover_at(0, Color.BLACK) == Color.BLACK

    def test_side_to_move_after(self) -> None:
        assert side_to_move_after(-1) == Color.WHITE
        assert side_to_move_after(0) == Color.BLACK
        assert side_to_move_after(0, Color.WHITE, 1) == Color.WHITE
        assert side_to_move_after(-1, Color.BLACK) == Color.BLACK
        assert side_to_move_after(0, Color.BLACK) == Color.WHITE


class TestGameRecord:
    def test_len_and_last_index(self) -> None:
        record = GameRecord(moves=["e4", "e5"])
        assert len(record) == 2
        assert record.last_index == 1
        assert GameRecord().last_index == -1

    def test_board_at_uses_start_board(self) -> None:
        record = GameRecord(
            moves=["Ke2"],
            start_board=parse_fen("4k3/8/8/8/8/8/8/4K3 w - - 0 1"),
        )
        board = record.board_at(0).board
        assert board[E2] == Piece(Color.WHITE, PieceType.KING)
        assert len(list(board.occupied())) == 2
