"""Tests for Board, Piece and square helpers."""

import pytest

from chessnote.core.board import Board
from chessnote.core.enums import Color, PieceType
from chessnote.core.piece import Piece
from chessnote.core.types import (
    A1, B1, C1, D1, E1, F1, G1, H1,
    A8, B8, C8, D8, E8, F8, G8, H8,
    E2, E4,
    SCAN_ORDER,
    coords_of,
    parse_square,
    square_from_coords,
    square_name,
)


class TestBoardInitial:
    def test_white_back_rank(self) -> None:
        board = Board.initial()
        expected = [
            (A1, PieceType.ROOK), (B1, PieceType.KNIGHT), (C1, PieceType.BISHOP),
            (D1, PieceType.QUEEN), (E1, PieceType.KING), (F1, PieceType.BISHOP),
            (G1, PieceType.KNIGHT), (H1, PieceType.ROOK),
        ]
        for sq, pt in expected:
            assert board[sq] == Piece(Color.WHITE, pt), f"Mismatch at square {sq}"

    def test_black_back_rank(self) -> None:
        board = Board.initial()
        expected = [
            (A8, PieceType.ROOK), (B8, PieceType.KNIGHT), (C8, PieceType.BISHOP),
            (D8, PieceType.QUEEN), (E8, PieceType.KING), (F8, PieceType.BISHOP),
            (G8, PieceType.KNIGHT), (H8, PieceType.ROOK),
        ]
        for sq, pt in expected:
            assert board[sq] == Piece(Color.BLACK, pt), f"Mismatch at square {sq}"

    def test_pawns(self) -> None:
        board = Board.initial()
        assert all(8 <= sq < 16 for sq in board.pieces(Color.WHITE, PieceType.PAWN))
        assert all(48 <= sq < 56 for sq in board.pieces(Color.BLACK, PieceType.PAWN))

    def test_empty_middle(self) -> None:
        board = Board.initial()
        for sq in range(16, 48):
            assert board[sq] is None


class TestBoardOperations:
    def test_set_and_get(self) -> None:
        board = Board()
        piece = Piece(Color.WHITE, PieceType.PAWN)
        board[E4] = piece
        assert board[E4] == piece
        assert board.is_empty(E2)

    def test_copy_independence(self) -> None:
        board = Board.initial()
        copy = board.copy()
        assert board == copy
        copy[E1] = None
        assert board != copy
        assert board[E1] == Piece(Color.WHITE, PieceType.KING)

    def test_king_square(self) -> None:
        board = Board.initial()
        assert board.king_square(Color.WHITE) == E1
        assert board.king_square(Color.BLACK) == E8

    def test_missing_king(self) -> None:
        assert Board().king_square(Color.WHITE) is None

    def test_pieces_in_scan_order(self) -> None:
        board = Board.initial()
        # Rank 8 is scanned before rank 1.
        assert board.pieces(Color.BLACK, PieceType.ROOK) == [A8, H8]
        assert board.pieces(Color.WHITE, PieceType.KNIGHT) == [B1, G1]

    def test_all_pieces_by_color(self) -> None:
        board = Board.initial()
        white = board.all_pieces(Color.WHITE)
        assert len(white) == 16
        assert white[-8:] == [A1, B1, C1, D1, E1, F1, G1, H1]
        board[E2] = None
        assert E2 not in board.all_pieces(Color.WHITE)
        assert Board().all_pieces(Color.BLACK) == []

    def test_occupied_follows_scan_order(self) -> None:
        squares = [sq for sq, _ in Board.initial().occupied()]
        assert squares == [sq for sq in SCAN_ORDER if sq in squares]
        assert squares[0] == A8

    def test_grid_round_trip(self) -> None:
        board = Board.initial()
        grid = board.to_grid()
        assert grid[0][0] == "r"
        assert grid[7][4] == "K"
        assert grid[4][4] is None
        assert Board.from_grid(grid) == board

    def test_from_grid_skips_unknown_letters(self) -> None:
        grid = [[None] * 8 for _ in range(8)]
        grid[0][0] = "Z"
        grid[7][7] = "R"
        board = Board.from_grid(grid)
        assert board[A8] is None
        assert board[H1] == Piece(Color.WHITE, PieceType.ROOK)

    def test_boards_are_unhashable(self) -> None:
        with pytest.raises(TypeError):
            hash(Board())


class TestPiece:
    def test_from_char(self) -> None:
        assert Piece.from_char("N") == Piece(Color.WHITE, PieceType.KNIGHT)
        assert Piece.from_char("q") == Piece(Color.BLACK, PieceType.QUEEN)

    def test_from_char_rejects_unknown(self) -> None:
        with pytest.raises(ValueError):
            Piece.from_char("x")

    def test_str_is_fen_letter(self) -> None:
        assert str(Piece(Color.WHITE, PieceType.KING)) == "K"
        assert str(Piece(Color.BLACK, PieceType.PAWN)) == "p"

    def test_for_side_matches_case(self) -> None:
        assert Piece.for_side("q", Color.WHITE) == Piece(Color.WHITE, PieceType.QUEEN)
        assert Piece.for_side("Q", Color.BLACK) == Piece(Color.BLACK, PieceType.QUEEN)


class TestSquares:
    def test_names(self) -> None:
        assert square_name(A1) == "a1"
        assert square_name(H8) == "h8"
        assert parse_square("e4") == E4

    @pytest.mark.parametrize("name", ["", "e", "i1", "a9", "e44"])
    def test_parse_rejects_bad_names(self, name: str) -> None:
        with pytest.raises(ValueError):
            parse_square(name)

    def test_grid_coordinates(self) -> None:
        assert coords_of(A8) == (0, 0)
        assert coords_of(H1) == (7, 7)
        assert square_from_coords(6, 4) == E2

    def test_grid_coordinates_out_of_range(self) -> None:
        with pytest.raises(ValueError):
            square_from_coords(8, 0)
