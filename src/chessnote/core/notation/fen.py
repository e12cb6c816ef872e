"""FEN parsing and serialization.

Only the piece-placement and side-to-move fields carry information here.
Parsing is lenient and never raises: hand-written FEN in notes is often
slightly off, and a partially filled board is more useful than an error.
"""

from __future__ import annotations

import logging

from chessnote.core.board import Board
from chessnote.core.enums import Color
from chessnote.core.piece import Piece
from chessnote.core.position import Position
from chessnote.core.types import make_square

_LOGGER = logging.getLogger(__name__)

STARTING_FEN = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1"

# Castling, en passant and move clocks are not tracked.
_FEN_SUFFIX = "- - 0 1"


def parse_fen(fen: str) -> Board:
    """Parse the placement field of *fen* into a :class:`Board`."""
    board = Board()
    fields = fen.split()
    if not fields:
        return board

    for row, rank_text in enumerate(fields[0].split("/")[:8]):
        rank = 7 - row
        file = 0
        for ch in rank_text:
            if file >= 8:
                break
            if "1" <= ch <= "8":
                file += int(ch)
                continue
            try:
                board[make_square(file, rank)] = Piece.from_char(ch)
            except ValueError:
                _LOGGER.debug("Ignoring unknown FEN piece %r in %r", ch, fen)
            file += 1
    return board


def side_from_fen(fen: str) -> Color:
    """Side to move from the second FEN field; only ``b`` means Black."""
    fields = fen.split()
    return Color.from_fen_char(fields[1]) if len(fields) > 1 else Color.WHITE


def position_from_fen(fen: str) -> Position:
    """Parse a FEN string into a :class:`Position`."""
    return Position(parse_fen(fen), side_from_fen(fen))


def board_to_fen(board: Board, side: Color = Color.WHITE) -> str:
    """Serialise *board* with *side* to move.

    The castling, en-passant and clock fields are always emitted as
    ``- - 0 1``, so real castling rights do not survive a round trip.
    """
    rows: list[str] = []
    for rank in range(7, -1, -1):
        empty = 0
        row = ""
        for file in range(8):
            piece = board[make_square(file, rank)]
            if piece is None:
                empty += 1
            else:
                if empty:
                    row += str(empty)
                    empty = 0
                row += str(piece)
        if empty:
            row += str(empty)
        rows.append(row)
    return f"{'/'.join(rows)} {side.fen_char} {_FEN_SUFFIX}"


def position_to_fen(pos: Position) -> str:
    """Serialise a :class:`Position` to FEN."""
    return board_to_fen(pos.board, pos.side_to_move)
