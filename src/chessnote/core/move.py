"""Move value objects (UCI-style representation)."""

from __future__ import annotations

from dataclasses import dataclass

from chessnote.core.enums import MoveFlag, PieceType
from chessnote.core.types import Square, parse_square, square_name

_PROMO_CHARS: dict[PieceType, str] = {
    PieceType.KNIGHT: "n",
    PieceType.BISHOP: "b",
    PieceType.ROOK: "r",
    PieceType.QUEEN: "q",
}
_PROMO_TYPES: dict[str, PieceType] = {v: k for k, v in _PROMO_CHARS.items()}


@dataclass(frozen=True, slots=True)
class MoveSquares:
    """Origin and destination touched by a move, for highlighting."""

    from_sq: Square
    to_sq: Square


@dataclass(frozen=True, slots=True)
class Move:
    """Immutable value object representing a single chess move."""

    from_sq: Square
    to_sq: Square
    flag: MoveFlag = MoveFlag.NORMAL
    promotion: PieceType | None = None

    def __str__(self) -> str:
        base = f"{square_name(self.from_sq)}{square_name(self.to_sq)}"
        if self.promotion is not None:
            base += _PROMO_CHARS.get(self.promotion, "")
        return base

    @property
    def uci(self) -> str:
        """UCI long-algebraic notation."""
        return str(self)

    @property
    def squares(self) -> MoveSquares:
        return MoveSquares(self.from_sq, self.to_sq)

    @classmethod
    def from_uci(cls, text: str) -> Move:
        """Parse ``e2e4`` / ``e7e8q``. Flags are not inferred."""
        if len(text) not in (4, 5):
            raise ValueError(f"Invalid UCI move: {text!r}")
        from_sq = parse_square(text[:2])
        to_sq = parse_square(text[2:4])
        if len(text) == 4:
            return cls(from_sq, to_sq)
        promotion = _PROMO_TYPES.get(text[4])
        if promotion is None:
            raise ValueError(f"Invalid UCI promotion: {text!r}")
        return cls(from_sq, to_sq, MoveFlag.PROMOTION, promotion)
