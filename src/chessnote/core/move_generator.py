"""Pseudo-legal move generation and attack detection.

Moves are generated per square from piece geometry alone: pinned pieces,
check evasion and castling rights are not considered, and en-passant
destinations are never offered here (only the SAN resolver reaches them).
"""

from __future__ import annotations

from chessnote.core.board import Board
from chessnote.core.enums import Color, PieceType
from chessnote.core.piece import Piece
from chessnote.core.types import Square, file_of, make_square, rank_of

KNIGHT_OFFSETS: tuple[tuple[int, int], ...] = (
    (-2, -1),
    (-2, 1),
    (-1, -2),
    (-1, 2),
    (1, -2),
    (1, 2),
    (2, -1),
    (2, 1),
)

KING_OFFSETS: tuple[tuple[int, int], ...] = (
    (-1, -1),
    (-1, 0),
    (-1, 1),
    (0, -1),
    (0, 1),
    (1, -1),
    (1, 0),
    (1, 1),
)

BISHOP_DIRS: tuple[tuple[int, int], ...] = ((-1, -1), (-1, 1), (1, -1), (1, 1))
ROOK_DIRS: tuple[tuple[int, int], ...] = ((-1, 0), (1, 0), (0, -1), (0, 1))
QUEEN_DIRS: tuple[tuple[int, int], ...] = BISHOP_DIRS + ROOK_DIRS

# Home rank, pawn start rank and pawn direction per color.
_BACK_RANK: tuple[int, int] = (0, 7)
_PAWN_START_RANK: tuple[int, int] = (1, 6)
_PAWN_DIR: tuple[int, int] = (1, -1)

_KING_HOME_FILE = 4


# -- Precomputed lookup tables ---------------------------------------------


def _build_targets(
    offsets: tuple[tuple[int, int], ...],
) -> tuple[tuple[Square, ...], ...]:
    targets: list[tuple[Square, ...]] = []
    for sq in range(64):
        file_idx = sq & 7
        rank_idx = sq >> 3
        moves: list[Square] = []
        for df, dr in offsets:
            af = file_idx + df
            ar = rank_idx + dr
            if 0 <= af < 8 and 0 <= ar < 8:
                moves.append(make_square(af, ar))
        targets.append(tuple(moves))
    return tuple(targets)


def _build_rays(
    directions: tuple[tuple[int, int], ...],
) -> tuple[tuple[tuple[Square, ...], ...], ...]:
    rays_per_square: list[tuple[tuple[Square, ...], ...]] = []
    for sq in range(64):
        file_idx = sq & 7
        rank_idx = sq >> 3
        square_rays: list[tuple[Square, ...]] = []
        for df, dr in directions:
            af = file_idx + df
            ar = rank_idx + dr
            ray: list[Square] = []
            while 0 <= af < 8 and 0 <= ar < 8:
                ray.append(make_square(af, ar))
                af += df
                ar += dr
            square_rays.append(tuple(ray))
        rays_per_square.append(tuple(square_rays))
    return tuple(rays_per_square)


_KNIGHT_TARGETS = _build_targets(KNIGHT_OFFSETS)
_KING_TARGETS = _build_targets(KING_OFFSETS)

_SLIDER_RAYS: dict[PieceType, tuple[tuple[tuple[Square, ...], ...], ...]] = {
    PieceType.BISHOP: _build_rays(BISHOP_DIRS),
    PieceType.ROOK: _build_rays(ROOK_DIRS),
    PieceType.QUEEN: _build_rays(QUEEN_DIRS),
}


def _sign(value: int) -> int:
    return (value > 0) - (value < 0)


class MoveGenerator:
    """Pseudo-legal destinations and attack queries for a :class:`Board`.

    The generator never mutates the board it is given.
    """

    __slots__ = ("_board",)

    def __init__(self, board: Board) -> None:
        self._board = board

    # -- Public API ---------------------------------------------------------

    def destinations(self, sq: Square) -> list[Square]:
        """Pseudo-legal destinations for the piece on *sq* (empty if none)."""
        piece = self._board[sq]
        if piece is None:
            return []

        moves: list[Square] = []
        ptype = piece.piece_type
        if ptype == PieceType.PAWN:
            self._gen_pawn(sq, piece.color, moves)
        elif ptype == PieceType.KNIGHT:
            self._gen_steps(sq, piece.color, _KNIGHT_TARGETS[sq], moves)
        elif ptype == PieceType.KING:
            self._gen_steps(sq, piece.color, _KING_TARGETS[sq], moves)
            self._gen_castling(sq, piece.color, moves)
        else:
            self._gen_sliding(sq, piece.color, _SLIDER_RAYS[ptype][sq], moves)
        return moves

    def is_legal_move(self, from_sq: Square, to_sq: Square) -> bool:
        """Whether dropping the piece on *from_sq* onto *to_sq* is allowed.

        Besides the regular destinations this accepts the castling gesture
        of dropping the king onto its own corner rook.
        """
        piece = self._board[from_sq]
        if piece is None:
            return False
        if to_sq in self.destinations(from_sq):
            return True
        if piece.piece_type != PieceType.KING:
            return False
        return self.castling_rook_target(from_sq, to_sq) is not None

    def castling_rook_target(self, king_sq: Square, rook_sq: Square) -> Square | None:
        """King destination for a king-onto-own-rook castling gesture."""
        king = self._board[king_sq]
        rook = self._board[rook_sq]
        if king is None or rook is None:
            return None
        if king.piece_type != PieceType.KING or rook != Piece(king.color, PieceType.ROOK):
            return None

        back_rank = _BACK_RANK[int(king.color)]
        if king_sq != make_square(_KING_HOME_FILE, back_rank):
            return None
        if rook_sq == make_square(7, back_rank):
            between = (5, 6)
            target_file = 6
        elif rook_sq == make_square(0, back_rank):
            between = (1, 2, 3)
            target_file = 2
        else:
            return None
        if all(self._board.is_empty(make_square(f, back_rank)) for f in between):
            return make_square(target_file, back_rank)
        return None

    def can_reach(self, from_sq: Square, to_sq: Square, *, capture: bool) -> bool:
        """Geometry test used when resolving SAN tokens.

        Pawns trust *capture* instead of looking at the destination: a
        capture is any one-step forward diagonal, occupied or not.
        """
        piece = self._board[from_sq]
        if piece is None:
            return False
        target = self._board[to_sq]
        if target is not None and target.color == piece.color:
            return False

        df = file_of(to_sq) - file_of(from_sq)
        dr = rank_of(to_sq) - rank_of(from_sq)
        ptype = piece.piece_type

        if ptype == PieceType.PAWN:
            direction = _PAWN_DIR[int(piece.color)]
            if capture:
                return dr == direction and abs(df) == 1
            if df != 0 or target is not None:
                return False
            if dr == direction:
                return True
            return (
                rank_of(from_sq) == _PAWN_START_RANK[int(piece.color)]
                and dr == 2 * direction
                and self._board.is_empty(from_sq + 8 * direction)
            )
        if ptype == PieceType.KNIGHT:
            return (abs(df), abs(dr)) in ((1, 2), (2, 1))
        if ptype == PieceType.KING:
            return abs(df) <= 1 and abs(dr) <= 1

        if df == 0 and dr == 0:
            return False
        diagonal = abs(df) == abs(dr)
        straight = df == 0 or dr == 0
        if ptype == PieceType.BISHOP and not diagonal:
            return False
        if ptype == PieceType.ROOK and not straight:
            return False
        if ptype == PieceType.QUEEN and not (diagonal or straight):
            return False
        return self._is_path_clear(from_sq, to_sq)

    # -- Attack detection --------------------------------------------------

    def is_in_check(self, color: Color) -> bool:
        """Is *color*'s king reached by any opposing piece?

        A side without a king is never in check.
        """
        king_sq = self._board.king_square(color)
        if king_sq is None:
            return False
        for sq, piece in self._board.occupied():
            if piece.color != color and king_sq in self.destinations(sq):
                return True
        return False

    def has_no_moves(self, color: Color) -> bool:
        """True when none of *color*'s pieces has a pseudo-legal destination."""
        return not any(self.destinations(sq) for sq in self._board.all_pieces(color))

    # -- Piece-specific generators (private) -------------------------------

    def _gen_pawn(self, sq: Square, color: Color, moves: list[Square]) -> None:
        board = self._board
        file_idx = file_of(sq)
        direction = _PAWN_DIR[int(color)]
        ahead_rank = rank_of(sq) + direction
        if not 0 <= ahead_rank < 8:
            return

        one_step = make_square(file_idx, ahead_rank)
        if board.is_empty(one_step):
            moves.append(one_step)
            if rank_of(sq) == _PAWN_START_RANK[int(color)]:
                two_step = make_square(file_idx, ahead_rank + direction)
                if board.is_empty(two_step):
                    moves.append(two_step)

        for df in (-1, 1):
            cap_file = file_idx + df
            if not 0 <= cap_file < 8:
                continue
            cap_sq = make_square(cap_file, ahead_rank)
            target = board[cap_sq]
            if target is not None and target.color != color:
                moves.append(cap_sq)

    def _gen_steps(
        self,
        sq: Square,
        color: Color,
        targets: tuple[Square, ...],
        moves: list[Square],
    ) -> None:
        board = self._board
        for to_sq in targets:
            target = board[to_sq]
            if target is None or target.color != color:
                moves.append(to_sq)

    def _gen_sliding(
        self,
        sq: Square,
        color: Color,
        rays: tuple[tuple[Square, ...], ...],
        moves: list[Square],
    ) -> None:
        board = self._board
        for ray in rays:
            for to_sq in ray:
                target = board[to_sq]
                if target is None:
                    moves.append(to_sq)
                    continue
                if target.color != color:
                    moves.append(to_sq)
                break

    def _gen_castling(self, king_sq: Square, color: Color, moves: list[Square]) -> None:
        back_rank = _BACK_RANK[int(color)]
        if king_sq != make_square(_KING_HOME_FILE, back_rank):
            return
        for rook_file in (7, 0):
            target = self.castling_rook_target(king_sq, make_square(rook_file, back_rank))
            if target is not None:
                moves.append(target)

    def _is_path_clear(self, from_sq: Square, to_sq: Square) -> bool:
        df = _sign(file_of(to_sq) - file_of(from_sq))
        dr = _sign(rank_of(to_sq) - rank_of(from_sq))
        file_idx = file_of(from_sq) + df
        rank_idx = rank_of(from_sq) + dr
        while make_square(file_idx, rank_idx) != to_sq:
            if not self._board.is_empty(make_square(file_idx, rank_idx)):
                return False
            file_idx += df
            rank_idx += dr
        return True
