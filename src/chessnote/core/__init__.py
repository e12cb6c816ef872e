"""Core domain layer — pure chess logic with zero external dependencies.

Quick start::

    from chessnote.core import MoveGenerator, parse_fen, parse_square, square_name

    board = parse_fen("rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w - - 0 1")
    for sq in MoveGenerator(board).destinations(parse_square("g1")):
        print(square_name(sq))
"""

from chessnote.core.board import Board
from chessnote.core.enums import Color, GameResult, MoveFlag, PieceType
from chessnote.core.move import Move, MoveSquares
from chessnote.core.move_generator import MoveGenerator
from chessnote.core.notation import (
    STARTING_FEN,
    board_to_fen,
    parse_fen,
    parse_pgn,
    resolve_san,
)
from chessnote.core.piece import Piece
from chessnote.core.position import Position
from chessnote.core.rules import Rules
from chessnote.core.types import (
    SCAN_ORDER,
    Square,
    coords_of,
    file_of,
    make_square,
    parse_square,
    rank_of,
    square_from_coords,
    square_name,
)

__all__ = [
    # Enums / flags
    "Color",
    "GameResult",
    "MoveFlag",
    "PieceType",
    # Types / helpers
    "SCAN_ORDER",
    "Square",
    "coords_of",
    "file_of",
    "make_square",
    "parse_square",
    "rank_of",
    "square_from_coords",
    "square_name",
    # Domain objects
    "Board",
    "Move",
    "MoveGenerator",
    "MoveSquares",
    "Piece",
    "Position",
    "Rules",
    # Notation
    "STARTING_FEN",
    "board_to_fen",
    "parse_fen",
    "parse_pgn",
    "resolve_san",
]
