"""Shared notation-layer data models."""

from __future__ import annotations

from dataclasses import dataclass, field

from chessnote.core.enums import Color
from chessnote.core.notation.clock import ClockReading


@dataclass(slots=True)
class ParsedPgn:
    """Tags, mainline move tokens and clock series extracted from PGN text."""

    tags: dict[str, str] = field(default_factory=dict)
    moves: list[str] = field(default_factory=list)
    timestamps: list[ClockReading] = field(default_factory=list)
    has_clock_data: bool = False
    result_token: str = "*"
    initial_turn: Color = Color.WHITE
