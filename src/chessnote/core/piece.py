"""Piece value object."""

from __future__ import annotations

from dataclasses import dataclass

from chessnote.core.enums import Color, PieceType

_LETTER_TYPES: dict[str, PieceType] = {pt.char: pt for pt in PieceType}


@dataclass(frozen=True, slots=True)
class Piece:
    """Immutable piece token tagged by color and species."""

    color: Color
    piece_type: PieceType

    def __str__(self) -> str:
        """FEN letter (uppercase = white, lowercase = black)."""
        char = self.piece_type.char
        return char.upper() if self.color == Color.WHITE else char

    @classmethod
    def from_char(cls, char: str) -> Piece:
        """Create piece from a FEN letter, e.g. 'N' → white knight."""
        ptype = _LETTER_TYPES.get(char.lower()) if len(char) == 1 else None
        if ptype is None:
            raise ValueError(f"Invalid piece character: {char!r}")
        color = Color.WHITE if char.isupper() else Color.BLACK
        return cls(color, ptype)

    @classmethod
    def for_side(cls, letter: str, color: Color) -> Piece:
        """Piece of species *letter* (any case), case-matched to *color*."""
        return cls.from_char(letter.upper() if color == Color.WHITE else letter.lower())
