"""Core enumerations and flags for the chess domain."""

from __future__ import annotations

from enum import IntEnum


class Color(IntEnum):
    """Side color."""

    WHITE = 0
    BLACK = 1

    @property
    def opposite(self) -> Color:
        return Color(1 - self.value)

    @property
    def fen_char(self) -> str:
        """Side-to-move letter used in FEN (``w`` / ``b``)."""
        return "w" if self == Color.WHITE else "b"

    @classmethod
    def from_fen_char(cls, char: str) -> Color:
        """Anything other than exactly ``b`` means White."""
        return cls.BLACK if char == "b" else cls.WHITE

    def __str__(self) -> str:
        return self.name.lower()


class PieceType(IntEnum):
    """Chess piece species."""

    PAWN = 1
    KNIGHT = 2
    BISHOP = 3
    ROOK = 4
    QUEEN = 5
    KING = 6

    @property
    def char(self) -> str:
        """Lowercase notation letter, e.g. ``n`` for a knight."""
        return _TYPE_CHARS[self]


_TYPE_CHARS: dict[PieceType, str] = {
    PieceType.PAWN: "p",
    PieceType.KNIGHT: "n",
    PieceType.BISHOP: "b",
    PieceType.ROOK: "r",
    PieceType.QUEEN: "q",
    PieceType.KING: "k",
}


class MoveFlag(IntEnum):
    """Side effect attached to a move."""

    NORMAL = 0
    DOUBLE_PAWN = 1
    EN_PASSANT = 2
    CASTLE_KINGSIDE = 3
    CASTLE_QUEENSIDE = 4
    PROMOTION = 5


class GameResult(IntEnum):
    """Declared outcome of a game record."""

    IN_PROGRESS = 0
    WHITE_WINS = 1
    BLACK_WINS = 2
    DRAW = 3
