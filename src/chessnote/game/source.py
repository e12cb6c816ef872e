"""Code-block input: FEN or PGN text, optionally followed by sidecar data."""

from __future__ import annotations

from dataclasses import dataclass, field

from chessnote.core.board import Board
from chessnote.core.enums import Color
from chessnote.core.notation import (
    ClockReading,
    parse_fen,
    parse_pgn,
    setup_fen,
    side_from_fen,
)
from chessnote.game.board_data import BoardData, load_board_data, split_inline_data
from chessnote.game.replay import GameRecord


@dataclass(slots=True)
class GameSource:
    """Everything extracted from one code block."""

    board: Board
    moves: list[str] = field(default_factory=list)
    tags: dict[str, str] = field(default_factory=dict)
    initial_turn: Color = Color.WHITE
    timestamps: list[ClockReading] = field(default_factory=list)
    board_data: BoardData = field(default_factory=BoardData)
    pgn_source: str = ""
    result_token: str = "*"

    @property
    def is_fen(self) -> bool:
        return is_fen_source(self.pgn_source)

    @property
    def white_name(self) -> str | None:
        return self.tags.get("White") or None

    @property
    def black_name(self) -> str | None:
        return self.tags.get("Black") or None

    @property
    def white_elo(self) -> str | None:
        return self.tags.get("WhiteElo") or None

    @property
    def black_elo(self) -> str | None:
        return self.tags.get("BlackElo") or None

    def record(self) -> GameRecord:
        return GameRecord(
            moves=list(self.moves),
            tags=dict(self.tags),
            timestamps=list(self.timestamps),
            start_board=self.board.copy(),
            initial_turn=self.initial_turn,
        )


def is_fen_source(text: str) -> bool:
    """FEN text has slashes but, unlike PGN tag pairs, no brackets."""
    return "/" in text and "[" not in text


def parse_input(source: str) -> GameSource:
    """Parse a code-block body. Never raises; empty input is an empty game."""
    notation, sidecar = split_inline_data(source)
    board_data = load_board_data(sidecar)

    if is_fen_source(notation):
        return GameSource(
            board=parse_fen(notation),
            initial_turn=side_from_fen(notation),
            board_data=board_data,
            pgn_source=notation,
        )

    parsed = parse_pgn(notation)
    fen = setup_fen(parsed.tags)
    board = parse_fen(fen) if fen else Board.initial()

    return GameSource(
        board=board,
        moves=parsed.moves,
        tags=parsed.tags,
        initial_turn=parsed.initial_turn,
        timestamps=parsed.timestamps if parsed.has_clock_data else [],
        board_data=board_data,
        pgn_source=notation,
        result_token=parsed.result_token,
    )
