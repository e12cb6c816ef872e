"""Notation package: FEN / PGN / SAN parsing and serialization."""

from chessnote.core.notation.clock import (
    ClockReading,
    clock_at,
    format_clock,
    format_seconds,
    parse_clock_time,
)
from chessnote.core.notation.fen import (
    STARTING_FEN,
    board_to_fen,
    parse_fen,
    position_from_fen,
    position_to_fen,
    side_from_fen,
)
from chessnote.core.notation.models import ParsedPgn
from chessnote.core.notation.pgn import (
    game_result_from_pgn,
    is_move_token,
    parse_pgn,
    setup_fen,
)
from chessnote.core.notation.san import (
    ResolvedMove,
    SanToken,
    en_passant_file,
    find_candidates,
    parse_san_token,
    resolve_san,
)

__all__ = [
    "STARTING_FEN",
    "ClockReading",
    "ParsedPgn",
    "ResolvedMove",
    "SanToken",
    "board_to_fen",
    "clock_at",
    "en_passant_file",
    "find_candidates",
    "format_clock",
    "format_seconds",
    "game_result_from_pgn",
    "is_move_token",
    "parse_clock_time",
    "parse_fen",
    "parse_pgn",
    "parse_san_token",
    "position_from_fen",
    "position_to_fen",
    "resolve_san",
    "setup_fen",
    "side_from_fen",
]
