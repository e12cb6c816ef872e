"""High-level rule checks: check and (mobility-based) checkmate."""

from __future__ import annotations

from chessnote.core.board import Board
from chessnote.core.enums import Color
from chessnote.core.move_generator import MoveGenerator


class Rules:
    """Static rule-checker that operates on a :class:`Board`.

    Known limitation: :meth:`is_checkmate` only asks whether *color* has any
    pseudo-legal move at all. A side whose only moves would leave its own
    king attacked is still reported as "not checkmate", and a side with no
    moves that is not in check is reported as "checkmate" unless the caller
    also requires :meth:`is_in_check`. :meth:`king_status` combines both the
    way the board highlighting expects.
    """

    @staticmethod
    def is_in_check(board: Board, color: Color) -> bool:
        return MoveGenerator(board).is_in_check(color)

    @staticmethod
    def is_checkmate(board: Board, color: Color) -> bool:
        """Zero pseudo-legal destinations for every piece of *color*."""
        return MoveGenerator(board).has_no_moves(color)

    @staticmethod
    def king_status(board: Board, color: Color) -> tuple[bool, bool]:
        """``(in_check, checkmate)`` for *color*'s king."""
        gen = MoveGenerator(board)
        in_check = gen.is_in_check(color)
        return in_check, in_check and gen.has_no_moves(color)
