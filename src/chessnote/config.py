"""User settings shared by every board."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import asdict, dataclass, fields
from typing import Any

_LOGGER = logging.getLogger(__name__)

# Keys as the host stores them on disk.
_STORED_KEYS: dict[str, str] = {
    "defaultFlipped": "default_flipped",
    "defaultBoardSize": "default_board_size",
    "enableEngine": "enable_engine",
    "engineDepth": "engine_depth",
    "animationDuration": "animation_duration_ms",
    "engineCommand": "engine_command",
}


@dataclass
class ChessNoteSettings:
    """All user-configurable settings."""

    # Board
    default_flipped: bool = False
    default_board_size: int = 500  # px
    animation_duration_ms: int = 100

    # Engine
    enable_engine: bool = True
    engine_depth: int = 16
    engine_command: str = "stockfish"

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> ChessNoteSettings:
        """Defaults overlaid with the known keys of *data*.

        Both the stored camelCase names and the attribute names are
        accepted. Unknown keys and values of the wrong type are skipped.
        """
        settings = cls()
        types = {f.name: type(getattr(settings, f.name)) for f in fields(cls)}
        for key, value in data.items():
            name = _STORED_KEYS.get(key, key)
            expected = types.get(name)
            if expected is None:
                _LOGGER.debug("Ignoring unknown setting %r", key)
                continue
            # bool is an int subclass; keep the two apart.
            if not isinstance(value, expected) or (
                expected is int and isinstance(value, bool)
            ):
                _LOGGER.warning(
                    "Ignoring setting %r: expected %s, got %s",
                    key,
                    expected.__name__,
                    type(value).__name__,
                )
                continue
            setattr(settings, name, value)
        return settings

    def to_mapping(self) -> dict[str, Any]:
        """Stored form, keyed by the camelCase names."""
        names = {attr: key for key, attr in _STORED_KEYS.items()}
        return {names[name]: value for name, value in asdict(self).items()}
