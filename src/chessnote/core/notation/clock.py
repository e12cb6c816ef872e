"""Clock readings extracted from ``[%clk ...]`` PGN annotations."""

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass

DEFAULT_INITIAL_SECONDS = 600


@dataclass(frozen=True, slots=True)
class ClockReading:
    """Both players' remaining time after a move, as clock strings."""

    white: str
    black: str

    @property
    def white_seconds(self) -> float:
        return parse_clock_time(self.white)

    @property
    def black_seconds(self) -> float:
        return parse_clock_time(self.black)


def format_seconds(total_seconds: int) -> str:
    """``H:MM:SS`` when an hour or more remains, ``M:SS`` otherwise."""
    hours, rest = divmod(total_seconds, 3600)
    minutes, seconds = divmod(rest, 60)
    if hours > 0:
        return f"{hours}:{minutes:02d}:{seconds:02d}"
    return f"{minutes}:{seconds:02d}"


def format_clock(seconds: float) -> str:
    """Display form of a remaining time; fractions of a second are floored."""
    return format_seconds(math.floor(max(0.0, seconds)))


def parse_clock_time(text: str) -> float:
    """Seconds in ``H:MM:SS(.s)`` or ``M:SS(.s)``; ``0.0`` for anything else."""
    parts = text.split(":")
    try:
        if len(parts) == 3:
            return int(parts[0]) * 3600 + int(parts[1]) * 60 + float(parts[2])
        if len(parts) == 2:
            return int(parts[0]) * 60 + float(parts[1])
    except ValueError:
        return 0.0
    return 0.0


def initial_seconds_from_time_control(time_control: str | None) -> int:
    """Base time of a PGN ``TimeControl`` tag (``"300+2"`` → 300)."""
    if not time_control:
        return DEFAULT_INITIAL_SECONDS
    base = time_control.split("+", 1)[0].strip()
    try:
        seconds = int(base)
    except ValueError:
        return DEFAULT_INITIAL_SECONDS
    return seconds or DEFAULT_INITIAL_SECONDS


def clock_at(timestamps: Sequence[ClockReading], index: int) -> ClockReading | None:
    """Reading shown at move *index* (−1 = starting position).

    Entry 0 holds the starting clocks and entry ``i + 1`` the clocks after
    move ``i``; indexes past the series reuse the last entry.
    """
    if not timestamps:
        return None
    if index < 0:
        return timestamps[0]
    return timestamps[min(index + 1, len(timestamps) - 1)]
