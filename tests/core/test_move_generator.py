"""Tests for MoveGenerator: destinations, drag legality and attacks."""

from chessnote.core.board import Board
from chessnote.core.enums import Color, PieceType
from chessnote.core.move_generator import MoveGenerator
from chessnote.core.notation import parse_fen
from chessnote.core.piece import Piece
from chessnote.core.types import (
    A1, A3, A8, B1, C1, C3, D1, D4, E1, E2, E3, E4, E5, E8, F1, G1, H1, H8,
    parse_square,
)


def _board(*placements: tuple[int, str]) -> Board:
    board = Board()
    for sq, letter in placements:
        board[sq] = Piece.from_char(letter)
    return board


class TestDestinations:
    def test_knight_from_start(self) -> None:
        gen = MoveGenerator(Board.initial())
        assert sorted(gen.destinations(B1)) == [A3, C3]

    def test_pawn_single_and_double_push(self) -> None:
        gen = MoveGenerator(Board.initial())
        assert sorted(gen.destinations(E2)) == [E3, E4]

    def test_pawn_blocked(self) -> None:
        board = _board((E2, "P"), (E3, "n"))
        assert MoveGenerator(board).destinations(E2) == []

    def test_pawn_double_push_needs_both_squares_empty(self) -> None:
        board = _board((E2, "P"), (E4, "n"))
        assert MoveGenerator(board).destinations(E2) == [E3]

    def test_pawn_diagonal_needs_enemy(self) -> None:
        board = _board((E4, "P"), (D4 + 8, "p"), (E5 + 1, "P"))
        dests = MoveGenerator(board).destinations(E4)
        assert parse_square("d5") in dests
        assert parse_square("f5") not in dests

    def test_pawn_on_last_rank_has_no_moves(self) -> None:
        board = _board((A8, "P"))
        assert MoveGenerator(board).destinations(A8) == []

    def test_black_pawn_moves_down(self) -> None:
        gen = MoveGenerator(Board.initial())
        assert sorted(gen.destinations(parse_square("d7"))) == [
            parse_square("d5"),
            parse_square("d6"),
        ]

    def test_blocked_sliders_at_start(self) -> None:
        gen = MoveGenerator(Board.initial())
        assert gen.destinations(A1) == []
        assert gen.destinations(C1) == []
        assert gen.destinations(D1) == []

    def test_rook_stops_at_enemy(self) -> None:
        board = _board((A1, "R"), (A3, "p"))
        dests = MoveGenerator(board).destinations(A1)
        assert A3 in dests
        assert parse_square("a4") not in dests

    def test_empty_square(self) -> None:
        assert MoveGenerator(Board()).destinations(E4) == []


class TestCastlingDestinations:
    def test_kingside_when_path_clear(self) -> None:
        board = _board((E1, "K"), (H1, "R"))
        assert G1 in MoveGenerator(board).destinations(E1)

    def test_queenside_when_path_clear(self) -> None:
        board = _board((E1, "K"), (A1, "R"))
        assert C1 in MoveGenerator(board).destinations(E1)

    def test_blocked_path(self) -> None:
        board = _board((E1, "K"), (H1, "R"), (F1, "B"))
        assert G1 not in MoveGenerator(board).destinations(E1)

    def test_needs_own_rook(self) -> None:
        board = _board((E1, "K"), (H1, "r"))
        assert G1 not in MoveGenerator(board).destinations(E1)

    def test_king_off_home_square(self) -> None:
        board = _board((parse_square("d1"), "K"), (H1, "R"))
        assert MoveGenerator(board).castling_rook_target(parse_square("d1"), H1) is None

    def test_black_castles_on_rank_eight(self) -> None:
        board = _board((E8, "k"), (H8, "r"))
        assert parse_square("g8") in MoveGenerator(board).destinations(E8)


class TestIsLegalMove:
    def test_regular_destination(self) -> None:
        assert MoveGenerator(Board.initial()).is_legal_move(E2, E4)

    def test_illegal_destination(self) -> None:
        assert not MoveGenerator(Board.initial()).is_legal_move(E2, E5)

    def test_king_onto_own_rook(self) -> None:
        board = _board((E1, "K"), (H1, "R"))
        gen = MoveGenerator(board)
        assert gen.is_legal_move(E1, H1)
        assert gen.castling_rook_target(E1, H1) == G1

    def test_king_onto_rook_blocked(self) -> None:
        gen = MoveGenerator(Board.initial())
        assert not gen.is_legal_move(E1, H1)

    def test_empty_origin(self) -> None:
        assert not MoveGenerator(Board()).is_legal_move(E2, E4)


class TestCanReach:
    def test_pawn_capture_trusts_flag(self) -> None:
        board = _board((E4 + 8, "P"))
        gen = MoveGenerator(board)
        # d6 is empty, but a capture token is taken at its word.
        assert gen.can_reach(E5, parse_square("d6"), capture=True)
        assert not gen.can_reach(E5, parse_square("d6"), capture=False)

    def test_pawn_push_without_capture(self) -> None:
        gen = MoveGenerator(Board.initial())
        assert gen.can_reach(E2, E4, capture=False)
        assert not gen.can_reach(E2, E4, capture=True)

    def test_never_onto_own_piece(self) -> None:
        gen = MoveGenerator(Board.initial())
        assert not gen.can_reach(B1, D1 + 8, capture=False)

    def test_slider_path_must_be_clear(self) -> None:
        gen = MoveGenerator(Board.initial())
        assert not gen.can_reach(F1, parse_square("c4"), capture=False)

    def test_knight_geometry(self) -> None:
        gen = MoveGenerator(Board.initial())
        assert gen.can_reach(G1, parse_square("f3"), capture=False)
        assert not gen.can_reach(G1, parse_square("g3"), capture=False)


class TestAttacks:
    def test_not_in_check_at_start(self) -> None:
        gen = MoveGenerator(Board.initial())
        assert not gen.is_in_check(Color.WHITE)
        assert not gen.is_in_check(Color.BLACK)

    def test_rook_check(self) -> None:
        board = _board((E1, "K"), (E8, "r"))
        assert MoveGenerator(board).is_in_check(Color.WHITE)

    def test_blocked_check(self) -> None:
        board = _board((E1, "K"), (E2, "P"), (E8, "r"))
        assert not MoveGenerator(board).is_in_check(Color.WHITE)

    def test_no_king_is_never_in_check(self) -> None:
        board = _board((E4, "q"))
        assert not MoveGenerator(board).is_in_check(Color.WHITE)

    def test_has_no_moves(self) -> None:
        board = parse_fen("7K/8/8/8/8/8/pp6/kp6 b - - 0 1")
        gen = MoveGenerator(board)
        assert gen.has_no_moves(Color.BLACK)
        assert not gen.has_no_moves(Color.WHITE)

    def test_generator_does_not_mutate(self) -> None:
        board = Board.initial()
        snapshot = board.copy()
        gen = MoveGenerator(board)
        for sq in range(64):
            gen.destinations(sq)
        gen.is_in_check(Color.WHITE)
        assert board == snapshot
        assert board[E1] == Piece(Color.WHITE, PieceType.KING)
