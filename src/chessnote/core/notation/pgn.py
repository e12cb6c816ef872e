"""PGN tokenizer: tag pairs, mainline move tokens and clock annotations.

Parsing is permissive. Anything that does not look like a move is dropped
rather than reported, so annotated or hand-edited PGN always yields a
(possibly shorter) move list.
"""

from __future__ import annotations

import re

from chessnote.core.enums import Color, GameResult
from chessnote.core.notation.clock import (
    ClockReading,
    format_seconds,
    initial_seconds_from_time_control,
)
from chessnote.core.notation.fen import side_from_fen
from chessnote.core.notation.models import ParsedPgn

_MOVE_PATTERN = r"[NBRQK]?[a-h]?[1-8]?x?[a-h][1-8](?:=[NBRQ])?[+#]?|O-O(?:-O)?[+#]?"

_TAG_RE = re.compile(r'\[(\w+)\s+"(.+?)"\]')
_RESULT_RE = re.compile(r"\s*(1-0|0-1|1/2-1/2|\*)\s*$")
_CLOCK_RE = re.compile(r"\[%clk\s+([\d:.]+)\]")
_COMMENT_RE = re.compile(r"\{[^}]*\}")
_VARIATION_RE = re.compile(r"\([^()]*\)")
_NAG_RE = re.compile(r"\$\d+")
_COMMAND_RE = re.compile(r"\[%[^\]]*\]")
_GLYPH_RE = re.compile(rf"({_MOVE_PATTERN})[!?]+")
_MOVE_NUMBER_RE = re.compile(r"^\d+\.+$")
_MOVE_RE = re.compile(rf"^(?:{_MOVE_PATTERN})$")
_ELLIPSES = {"...", "…"}


def is_move_token(token: str) -> bool:
    """Whether *token* matches the accepted SAN move grammar."""
    return _MOVE_RE.match(token) is not None


def game_result_from_pgn(token: str) -> GameResult:
    """Convert PGN result token to :class:`GameResult`."""
    if token == "1-0":
        return GameResult.WHITE_WINS
    if token == "0-1":
        return GameResult.BLACK_WINS
    if token == "1/2-1/2":
        return GameResult.DRAW
    return GameResult.IN_PROGRESS


def _split_tags(pgn_text: str) -> tuple[dict[str, str], str]:
    tags: dict[str, str] = {}
    movetext = ""
    for raw_line in pgn_text.split("\n"):
        line = raw_line.strip()
        if line.startswith("[") and line.endswith("]"):
            match = _TAG_RE.search(line)
            if match is not None:
                tags[match.group(1)] = match.group(2)
        elif line and not line.startswith("["):
            movetext += " " + line
    return tags, movetext.strip()


def _strip_annotations(movetext: str) -> str:
    movetext = _COMMENT_RE.sub(" ", movetext)
    # Nested variations: peel innermost parentheses until nothing changes.
    while True:
        stripped = _VARIATION_RE.sub(" ", movetext)
        if stripped == movetext:
            break
        movetext = stripped
    movetext = _NAG_RE.sub(" ", movetext)
    movetext = _COMMAND_RE.sub(" ", movetext)
    return _GLYPH_RE.sub(r"\1", movetext)


def setup_fen(tags: dict[str, str]) -> str | None:
    """Start position from a ``FEN`` tag, unless ``SetUp`` is ``"0"``."""
    fen = tags.get("FEN")
    if fen and tags.get("SetUp", "1") != "0":
        return fen
    return None


def parse_pgn(pgn_text: str) -> ParsedPgn:
    """Parse a single PGN game into tags, move tokens and clock readings.

    Each clock annotation updates the clock of the side that made the
    move, which alternates from the ``FEN`` tag's side to move.
    """
    tags, movetext = _split_tags(pgn_text)
    fen = setup_fen(tags)
    initial_turn = side_from_fen(fen) if fen else Color.WHITE

    result_token = "*"
    result_match = _RESULT_RE.search(movetext)
    if result_match is not None:
        result_token = result_match.group(1)
        movetext = movetext[: result_match.start()]

    clock_times = _CLOCK_RE.findall(movetext)
    has_clock_data = bool(clock_times)

    moves: list[str] = []
    for token in _strip_annotations(movetext).split():
        if _MOVE_NUMBER_RE.match(token) or token in _ELLIPSES:
            continue
        if is_move_token(token):
            moves.append(token)

    timestamps: list[ClockReading] = []
    if has_clock_data:
        initial = format_seconds(initial_seconds_from_time_control(tags.get("TimeControl")))
        reading = ClockReading(white=initial, black=initial)
        timestamps.append(reading)
        remaining = iter(clock_times)
        for ply in range(len(moves)):
            clock = next(remaining, None)
            if clock is not None:
                mover = initial_turn if ply % 2 == 0 else initial_turn.opposite
                if mover == Color.WHITE:
                    reading = ClockReading(white=clock, black=reading.black)
                else:
                    reading = ClockReading(white=reading.white, black=clock)
            timestamps.append(reading)

    return ParsedPgn(
        tags=tags,
        moves=moves,
        timestamps=timestamps,
        has_clock_data=has_clock_data,
        result_token=result_token,
        initial_turn=initial_turn,
    )
