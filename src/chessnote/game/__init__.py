"""Game layer — code-block input, replay, sidecar data and sessions.

Quick start::

    from chessnote.game import BoardSession, parse_input

    session = BoardSession.from_source(parse_input("1. e4 e5 2. Nf3 Nc6"))
    session.last()
    print(session.fen)
"""

from chessnote.game.board_data import (
    DATA_DELIMITER,
    Arrow,
    BoardData,
    BoardSizes,
    MoveAnnotations,
    dump_board_data,
    join_inline_data,
    load_board_data,
    split_inline_data,
)
from chessnote.game.replay import (
    GameRecord,
    ManualOverlay,
    ReplayResult,
    board_at,
    mover_at,
    side_to_move_after,
)
from chessnote.game.session import BoardSession
from chessnote.game.source import GameSource, is_fen_source, parse_input

__all__ = [
    # Input
    "GameSource",
    "is_fen_source",
    "parse_input",
    # Replay
    "GameRecord",
    "ManualOverlay",
    "ReplayResult",
    "board_at",
    "mover_at",
    "side_to_move_after",
    # Session
    "BoardSession",
    # Sidecar data
    "DATA_DELIMITER",
    "Arrow",
    "BoardData",
    "BoardSizes",
    "MoveAnnotations",
    "dump_board_data",
    "join_inline_data",
    "load_board_data",
    "split_inline_data",
]
