"""Board - piece placement on an 8x8 board."""

from __future__ import annotations

from collections.abc import Iterator, Sequence

from chessnote.core.enums import Color, PieceType
from chessnote.core.piece import Piece
from chessnote.core.types import SCAN_ORDER, Square, coords_of, make_square

_BACK_RANK: tuple[PieceType, ...] = (
    PieceType.ROOK,
    PieceType.KNIGHT,
    PieceType.BISHOP,
    PieceType.QUEEN,
    PieceType.KING,
    PieceType.BISHOP,
    PieceType.KNIGHT,
    PieceType.ROOK,
)


class Board:
    """Flat 64-square grid of optional pieces.

    Pure data: element access, copying and comparison. Nothing here knows
    how pieces move.
    """

    __slots__ = ("_squares",)

    def __init__(self) -> None:
        self._squares: list[Piece | None] = [None] * 64

    # -- Element access -----------------------------------------------------

    def __getitem__(self, sq: Square) -> Piece | None:
        return self._squares[sq]

    def __setitem__(self, sq: Square, piece: Piece | None) -> None:
        self._squares[sq] = piece

    def is_empty(self, sq: Square) -> bool:
        return self._squares[sq] is None

    def occupied(self) -> Iterator[tuple[Square, Piece]]:
        """``(square, piece)`` pairs in scan order (a8 → h1)."""
        squares = self._squares
        for sq in SCAN_ORDER:
            piece = squares[sq]
            if piece is not None:
                yield sq, piece

    # -- Query helpers ------------------------------------------------------

    def pieces(self, color: Color, piece_type: PieceType) -> list[Square]:
        """Squares holding *color*'s *piece_type*, in scan order."""
        target = Piece(color, piece_type)
        return [sq for sq in SCAN_ORDER if self._squares[sq] == target]

    def all_pieces(self, color: Color) -> list[Square]:
        """All squares occupied by *color*, in scan order."""
        return [sq for sq, piece in self.occupied() if piece.color == color]

    def king_square(self, color: Color) -> Square | None:
        """First king of *color* in scan order, or ``None`` when absent."""
        kings = self.pieces(color, PieceType.KING)
        return kings[0] if kings else None

    # -- Copying / conversion -----------------------------------------------

    def copy(self) -> Board:
        b = Board()
        b._squares = self._squares.copy()
        return b

    def to_grid(self) -> list[list[str | None]]:
        """Row-major letters, row 0 = rank 8 (renderer layout)."""
        grid: list[list[str | None]] = [[None] * 8 for _ in range(8)]
        for sq, piece in self.occupied():
            row, col = coords_of(sq)
            grid[row][col] = str(piece)
        return grid

    @classmethod
    def from_grid(cls, grid: Sequence[Sequence[str | None]]) -> Board:
        """Inverse of :meth:`to_grid`. Unknown letters become empty cells."""
        b = cls()
        for row, cells in enumerate(grid[:8]):
            for col, cell in enumerate(cells[:8]):
                if not cell:
                    continue
                try:
                    b[make_square(col, 7 - row)] = Piece.from_char(cell)
                except ValueError:
                    continue
        return b

    # -- Factory ------------------------------------------------------------

    @classmethod
    def initial(cls) -> Board:
        """Standard starting position."""
        b = cls()
        for f, pt in enumerate(_BACK_RANK):
            b[make_square(f, 0)] = Piece(Color.WHITE, pt)
            b[make_square(f, 1)] = Piece(Color.WHITE, PieceType.PAWN)
            b[make_square(f, 6)] = Piece(Color.BLACK, PieceType.PAWN)
            b[make_square(f, 7)] = Piece(Color.BLACK, pt)
        return b

    # -- Dunder helpers -----------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self._squares == other._squares

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        rows: list[str] = []
        for rank in range(7, -1, -1):
            row = []
            for file in range(8):
                p = self[make_square(file, rank)]
                row.append(str(p) if p else ".")
            rows.append(f"{rank + 1} {' '.join(row)}")
        rows.append("  a b c d e f g h")
        return "\n".join(rows)
