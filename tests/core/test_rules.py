"""Tests for Rules: check and mobility-based checkmate."""

from chessnote.core.board import Board
from chessnote.core.enums import Color
from chessnote.core.notation import parse_fen
from chessnote.core.rules import Rules

# Black king boxed in by its own immobile pawns, checked by a knight.
_SMOTHERED = "7K/8/8/8/8/8/ppN5/kp6 b - - 0 1"
_BOXED_NO_CHECK = "7K/8/8/8/8/8/pp6/kp6 b - - 0 1"
_FOOLS_MATE = "rnb1kbnr/pppp1ppp/8/4p3/6Pq/5P2/PPPPP2P/RNBQKBNR w - - 1 3"


class TestCheck:
    def test_starting_not_in_check(self) -> None:
        board = Board.initial()
        assert not Rules.is_in_check(board, Color.WHITE)
        assert not Rules.is_in_check(board, Color.BLACK)

    def test_fools_mate_in_check(self) -> None:
        assert Rules.is_in_check(parse_fen(_FOOLS_MATE), Color.WHITE)

    def test_knight_check(self) -> None:
        assert Rules.is_in_check(parse_fen(_SMOTHERED), Color.BLACK)


class TestCheckmate:
    def test_no_moves_and_in_check(self) -> None:
        board = parse_fen(_SMOTHERED)
        assert Rules.is_checkmate(board, Color.BLACK)
        assert Rules.king_status(board, Color.BLACK) == (True, True)

    def test_fools_mate_is_not_detected(self) -> None:
        # White still has pawn pushes, so mobility alone says "not mate".
        board = parse_fen(_FOOLS_MATE)
        assert not Rules.is_checkmate(board, Color.WHITE)
        assert Rules.king_status(board, Color.WHITE) == (True, False)

    def test_no_moves_without_check(self) -> None:
        board = parse_fen(_BOXED_NO_CHECK)
        assert Rules.is_checkmate(board, Color.BLACK)
        assert Rules.king_status(board, Color.BLACK) == (False, False)

    def test_start_position(self) -> None:
        assert Rules.king_status(Board.initial(), Color.WHITE) == (False, False)

    def test_empty_board(self) -> None:
        assert Rules.king_status(Board(), Color.WHITE) == (False, False)
