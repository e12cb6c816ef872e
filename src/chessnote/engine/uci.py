"""UCI ``info`` line parsing and evaluation display helpers."""

from __future__ import annotations

import math
import re
from dataclasses import dataclass

from chessnote.core.enums import Color
from chessnote.core.move import Move

MATE_SCORE = 10_000
# Evaluations at least this large are displayed as forced mates.
MATE_DISPLAY_THRESHOLD = 9_000
EVAL_BAR_SCALE = 250.0

_DEPTH_RE = re.compile(r"\bdepth (\d+)")
_SCORE_RE = re.compile(r"\bscore (cp|mate) (-?\d+)")
_PV_RE = re.compile(r"\bpv ([a-h][1-8][a-h][1-8])")


@dataclass(frozen=True, slots=True)
class EngineInfo:
    """One parsed ``info`` line.

    ``score_cp`` is always from White's point of view, with forced mates
    folded in via :func:`mate_to_cp`. ``mate`` keeps the signed move count
    (positive when White mates) when the engine reported one.
    """

    depth: int | None = None
    score_cp: int | None = None
    mate: int | None = None
    best_move: Move | None = None


def mate_to_cp(mate_in: int) -> int:
    """Centipawn stand-in for mate in ``|mate_in|``, signed like *mate_in*."""
    value = MATE_SCORE - abs(mate_in) * 10
    return value if mate_in > 0 else -value


def parse_info_line(line: str, side_to_move: Color) -> EngineInfo | None:
    """Parse an ``info … score …`` line; anything else yields ``None``.

    The engine scores from the side to move, so Black-to-move scores are
    negated.
    """
    if not line.startswith("info") or "score" not in line:
        return None

    depth: int | None = None
    match = _DEPTH_RE.search(line)
    if match:
        depth = int(match.group(1))

    score_cp: int | None = None
    mate: int | None = None
    match = _SCORE_RE.search(line)
    if match:
        value = int(match.group(2))
        if side_to_move == Color.BLACK:
            value = -value
        if match.group(1) == "cp":
            score_cp = value
        else:
            mate = value
            score_cp = mate_to_cp(value)

    best_move: Move | None = None
    match = _PV_RE.search(line)
    if match:
        best_move = Move.from_uci(match.group(1))

    return EngineInfo(depth=depth, score_cp=score_cp, mate=mate, best_move=best_move)


def format_eval(score_cp: int | None) -> str:
    """``+0.4`` / ``-1.3`` for material, ``M3`` / ``-M2`` for mates."""
    if score_cp is None:
        return "..."
    if abs(score_cp) >= MATE_DISPLAY_THRESHOLD:
        mate_in = math.ceil((MATE_SCORE - abs(score_cp)) / 10)
        return f"M{mate_in}" if score_cp > 0 else f"-M{mate_in}"
    pawns = score_cp / 100
    return f"+{pawns:.1f}" if pawns >= 0 else f"{pawns:.1f}"


def eval_bar_fraction(score_cp: int | None) -> float:
    """Share of the bar filled for White (0.5 when nothing is known)."""
    if score_cp is None:
        return 0.5
    return 1.0 / (1.0 + math.exp(-score_cp / EVAL_BAR_SCALE))
