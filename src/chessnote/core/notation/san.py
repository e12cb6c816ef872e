"""SAN token parsing and resolution against a board.

Resolution is best-effort: the board may already have drifted from the real
game because an earlier token failed, so nothing here raises. A token that
cannot be applied leaves the board unchanged and logs a warning, and the
caller simply carries on with the next token.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Sequence
from dataclasses import dataclass

from chessnote.core.board import Board
from chessnote.core.enums import Color, MoveFlag, PieceType
from chessnote.core.move import Move, MoveSquares
from chessnote.core.move_generator import MoveGenerator
from chessnote.core.piece import Piece
from chessnote.core.types import Square, file_of, make_square, rank_of, square_name

_LOGGER = logging.getLogger(__name__)

_SAN_PIECE_REV: dict[str, PieceType] = {
    "P": PieceType.PAWN,
    "N": PieceType.KNIGHT,
    "B": PieceType.BISHOP,
    "R": PieceType.ROOK,
    "Q": PieceType.QUEEN,
    "K": PieceType.KING,
}
_SUFFIX_RE = re.compile(r"[+#!?]")
_HISTORY_NOISE_RE = re.compile(r"[+#!?x]")
_CASTLES: dict[str, MoveFlag] = {
    "O-O": MoveFlag.CASTLE_KINGSIDE,
    "0-0": MoveFlag.CASTLE_KINGSIDE,
    "O-O-O": MoveFlag.CASTLE_QUEENSIDE,
    "0-0-0": MoveFlag.CASTLE_QUEENSIDE,
}

# Home rank and pawn direction per color.
_BACK_RANK: tuple[int, int] = (0, 7)
_PAWN_DIR: tuple[int, int] = (1, -1)
# Rank a double pawn push lands on, indexed by the pusher's color.
_DOUBLE_PUSH_RANK: tuple[int, int] = (3, 4)


@dataclass(frozen=True, slots=True)
class SanToken:
    """A move token broken into its parts.

    Castling tokens only carry ``castle``; every other token has a
    destination.
    """

    piece_type: PieceType = PieceType.PAWN
    to_sq: Square | None = None
    capture: bool = False
    from_file: int | None = None
    from_rank: int | None = None
    promotion: PieceType | None = None
    castle: MoveFlag | None = None


@dataclass(frozen=True, slots=True)
class ResolvedMove:
    """Outcome of applying one token.

    ``board`` is always a fresh copy. ``move`` is ``None`` when the token
    could not be applied; ``squares`` is only filled in when requested.
    """

    board: Board
    move: Move | None = None
    squares: MoveSquares | None = None

    @property
    def ok(self) -> bool:
        return self.move is not None


def parse_san_token(token: str) -> SanToken | None:
    """Split *token* into piece, hints, destination and promotion."""
    clean = _SUFFIX_RE.sub("", token)

    castle = _CASTLES.get(clean)
    if castle is not None:
        return SanToken(piece_type=PieceType.KING, castle=castle)

    capture = "x" in clean
    clean = clean.replace("x", "", 1)

    piece_type = PieceType.PAWN
    if clean and clean[0].isupper():
        piece_type = _SAN_PIECE_REV.get(clean[0])
        if piece_type is None:
            return None
        clean = clean[1:]

    promotion: PieceType | None = None
    if "=" in clean:
        clean, promo_text = clean.split("=", 1)
        if promo_text:
            promotion = _SAN_PIECE_REV.get(promo_text[0].upper())
            if promotion is None:
                return None

    if len(clean) < 2:
        return None
    dest_file, dest_rank = clean[-2], clean[-1]
    if not ("a" <= dest_file <= "h" and "1" <= dest_rank <= "8"):
        return None

    from_file: int | None = None
    from_rank: int | None = None
    for ch in clean[:-2]:
        if "a" <= ch <= "h":
            from_file = ord(ch) - ord("a")
        elif "1" <= ch <= "8":
            from_rank = int(ch) - 1

    return SanToken(
        piece_type=piece_type,
        to_sq=make_square(ord(dest_file) - ord("a"), int(dest_rank) - 1),
        capture=capture,
        from_file=from_file,
        from_rank=from_rank,
        promotion=promotion,
    )


def en_passant_file(
    side: Color, history: Sequence[str], index: int
) -> int | None:
    """File of a pawn *side* could take en passant at move *index*.

    Eligible when the previous token was a bare pawn push onto the
    double-push rank of the opponent (rank 4 for White, rank 5 for Black).
    """
    if index <= 0 or index > len(history):
        return None
    prev = _HISTORY_NOISE_RE.sub("", history[index - 1])
    if len(prev) != 2 or not "a" <= prev[0] <= "h" or not "1" <= prev[1] <= "8":
        return None
    if int(prev[1]) - 1 != _DOUBLE_PUSH_RANK[int(side.opposite)]:
        return None
    return ord(prev[0]) - ord("a")


def find_candidates(board: Board, token: SanToken, side: Color) -> list[Square]:
    """Origin squares that fit *token*, in scan order (a8 → h1).

    The first entry is the one the resolver picks; well-formed PGN
    disambiguation leaves exactly one.
    """
    if token.to_sq is None:
        return []
    gen = MoveGenerator(board)
    return [
        sq
        for sq in board.pieces(side, token.piece_type)
        if (token.from_file is None or file_of(sq) == token.from_file)
        and (token.from_rank is None or rank_of(sq) == token.from_rank)
        and gen.can_reach(sq, token.to_sq, capture=token.capture)
    ]


def _castle(board: Board, flag: MoveFlag, side: Color, track_squares: bool) -> ResolvedMove:
    back_rank = _BACK_RANK[int(side)]
    king_from = make_square(4, back_rank)
    if flag == MoveFlag.CASTLE_KINGSIDE:
        king_to = make_square(6, back_rank)
        rook_from, rook_to = make_square(7, back_rank), make_square(5, back_rank)
    else:
        king_to = make_square(2, back_rank)
        rook_from, rook_to = make_square(0, back_rank), make_square(3, back_rank)

    # Applied as written: castling rights are not tracked.
    board[king_to] = board[king_from]
    board[rook_to] = board[rook_from]
    board[king_from] = None
    board[rook_from] = None

    move = Move(king_from, king_to, flag)
    return ResolvedMove(board, move, move.squares if track_squares else None)


def resolve_san(
    board: Board,
    token: str,
    side: Color,
    history: Sequence[str] = (),
    index: int = 0,
    *,
    track_squares: bool = False,
) -> ResolvedMove:
    """Apply *token* for *side* to a copy of *board*.

    *history* is the full token list and *index* the position of *token* in
    it; both are only consulted for en-passant eligibility.
    """
    new_board = board.copy()
    parsed = parse_san_token(token)
    if parsed is None:
        _LOGGER.warning("Invalid move format: %s", token)
        return ResolvedMove(new_board)

    if parsed.castle is not None:
        return _castle(new_board, parsed.castle, side, track_squares)

    to_sq = parsed.to_sq
    assert to_sq is not None

    candidates = find_candidates(new_board, parsed, side)
    if not candidates:
        _LOGGER.warning(
            "Could not find piece for move: %s (piece=%s, to=%s, side=%s)",
            token,
            parsed.piece_type.char,
            square_name(to_sq),
            side,
        )
        return ResolvedMove(new_board)
    if len(candidates) > 1:
        _LOGGER.debug(
            "Ambiguous move %s, candidates %s; taking the first",
            token,
            [square_name(sq) for sq in candidates],
        )
    from_sq = candidates[0]

    flag = MoveFlag.NORMAL
    if parsed.piece_type == PieceType.PAWN:
        direction = _PAWN_DIR[int(side)]
        if parsed.capture and new_board.is_empty(to_sq):
            # Trusting the capture flag: an empty diagonal is en passant.
            if en_passant_file(side, history, index) != file_of(to_sq):
                _LOGGER.debug("En passant %s without a matching double push", token)
            new_board[to_sq - 8 * direction] = None
            flag = MoveFlag.EN_PASSANT
        elif abs(rank_of(to_sq) - rank_of(from_sq)) == 2:
            flag = MoveFlag.DOUBLE_PAWN

    placed = new_board[from_sq]
    if parsed.promotion is not None:
        placed = Piece(side, parsed.promotion)
        flag = MoveFlag.PROMOTION
    new_board[to_sq] = placed
    new_board[from_sq] = None

    move = Move(from_sq, to_sq, flag, parsed.promotion)
    return ResolvedMove(new_board, move, move.squares if track_squares else None)
