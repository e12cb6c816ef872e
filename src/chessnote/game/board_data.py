"""Per-board sidecar data: annotations, notes, layout and last view.

Everything is keyed by move index against the game record (−1 is the
starting position). On disk the data is JSON appended to the code block
after :data:`DATA_DELIMITER`, with squares written as ``[row, col]`` grid
cells (row 0 = rank 8) and highlights as ``"row-col"`` strings.
"""

from __future__ import annotations

import json
import logging
import math
from dataclasses import dataclass, field
from typing import Any

from chessnote.core.types import Square, coords_of, square_from_coords

_LOGGER = logging.getLogger(__name__)

DATA_DELIMITER = "<!--chess-data-->"


@dataclass(frozen=True, slots=True)
class Arrow:
    from_sq: Square
    to_sq: Square


@dataclass(slots=True)
class MoveAnnotations:
    """Arrows and highlighted squares drawn at one move index."""

    arrows: list[Arrow] = field(default_factory=list)
    highlights: set[Square] = field(default_factory=set)

    def toggle_arrow(self, from_sq: Square, to_sq: Square) -> None:
        arrow = Arrow(from_sq, to_sq)
        if arrow in self.arrows:
            self.arrows.remove(arrow)
        else:
            self.arrows.append(arrow)

    def toggle_highlight(self, sq: Square) -> None:
        if sq in self.highlights:
            self.highlights.discard(sq)
        else:
            self.highlights.add(sq)

    def is_empty(self) -> bool:
        return not self.arrows and not self.highlights


@dataclass(slots=True)
class BoardSizes:
    board_width: int | None = None
    info_width: int | None = None
    total_height: int | None = None
    move_list_height: int | None = None


@dataclass(slots=True)
class BoardData:
    """Everything the host persists next to one board."""

    annotations: dict[int, MoveAnnotations] = field(default_factory=dict)
    notes: dict[int, str] = field(default_factory=dict)
    sizes: BoardSizes = field(default_factory=BoardSizes)
    current_move: int | None = None
    flipped: bool | None = None

    def annotations_at(self, index: int) -> MoveAnnotations:
        """Annotations for *index*, created empty on first access."""
        return self.annotations.setdefault(index, MoveAnnotations())


# ── JSON conversion ──────────────────────────────────────────────────────────

_SIZE_KEYS: dict[str, str] = {
    "boardWidth": "board_width",
    "infoWidth": "info_width",
    "totalHeight": "total_height",
    "moveListHeight": "move_list_height",
}


def _section(raw: dict[str, Any], key: str) -> dict[str, Any]:
    value = raw.get(key)
    return value if isinstance(value, dict) else {}


def _cell(value: Any) -> Square:
    row, col = value
    return square_from_coords(int(row), int(col))


def _parse_annotations(raw: dict[str, Any]) -> MoveAnnotations:
    annotations = MoveAnnotations()
    for arrow in raw.get("arrows") or []:
        annotations.arrows.append(Arrow(_cell(arrow["from"]), _cell(arrow["to"])))
    for key in raw.get("highlights") or []:
        row, col = str(key).split("-", 1)
        annotations.highlights.add(square_from_coords(int(row), int(col)))
    return annotations


def board_data_from_dict(raw: dict[str, Any]) -> BoardData:
    """Build :class:`BoardData` from decoded JSON, skipping malformed entries."""
    data = BoardData()

    for key, value in _section(raw, "annotations").items():
        try:
            data.annotations[int(key)] = _parse_annotations(value)
        except (AttributeError, KeyError, OverflowError, TypeError, ValueError):
            _LOGGER.warning("Skipping malformed annotations for move %r", key)

    for key, value in _section(raw, "notes").items():
        try:
            data.notes[int(key)] = str(value)
        except ValueError:
            _LOGGER.warning("Skipping note with non-numeric move index %r", key)

    sizes = _section(raw, "sizes")
    for json_key, attr in _SIZE_KEYS.items():
        value = sizes.get(json_key)
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            continue
        if isinstance(value, float) and not math.isfinite(value):
            _LOGGER.warning("Skipping non-finite size %s=%r", json_key, value)
            continue
        setattr(data.sizes, attr, int(value))

    current_move = raw.get("currentMove")
    if isinstance(current_move, int) and not isinstance(current_move, bool):
        data.current_move = current_move
    flipped = raw.get("flipped")
    if isinstance(flipped, bool):
        data.flipped = flipped
    return data


def board_data_to_dict(data: BoardData) -> dict[str, Any]:
    """JSON-ready form of *data*; empty sections are left out."""
    out: dict[str, Any] = {}

    sizes = {
        json_key: getattr(data.sizes, attr)
        for json_key, attr in _SIZE_KEYS.items()
        if getattr(data.sizes, attr) is not None
    }
    if sizes:
        out["sizes"] = sizes

    annotations: dict[str, Any] = {}
    for index, ann in sorted(data.annotations.items()):
        if ann.is_empty():
            continue
        annotations[str(index)] = {
            "arrows": [
                {"from": list(coords_of(a.from_sq)), "to": list(coords_of(a.to_sq))}
                for a in ann.arrows
            ],
            "highlights": [
                "{}-{}".format(*coords_of(sq)) for sq in sorted(ann.highlights)
            ],
        }
    if annotations:
        out["annotations"] = annotations

    notes = {str(index): text for index, text in sorted(data.notes.items()) if text}
    if notes:
        out["notes"] = notes
    if data.current_move is not None:
        out["currentMove"] = data.current_move
    if data.flipped is not None:
        out["flipped"] = data.flipped
    return out


def load_board_data(text: str) -> BoardData:
    """Decode the JSON sidecar; malformed input yields empty data."""
    if not text.strip():
        return BoardData()
    try:
        raw = json.loads(text)
    except (json.JSONDecodeError, RecursionError) as exc:
        _LOGGER.warning("Failed to parse inline board data: %s", exc)
        return BoardData()
    if not isinstance(raw, dict):
        _LOGGER.warning("Inline board data is not an object: %r", type(raw).__name__)
        return BoardData()
    return board_data_from_dict(raw)


def dump_board_data(data: BoardData) -> str:
    return json.dumps(board_data_to_dict(data))


def split_inline_data(source: str) -> tuple[str, str]:
    """Split a code-block body into ``(notation, sidecar_json)``, both trimmed."""
    notation, sep, sidecar = source.partition(DATA_DELIMITER)
    if not sep:
        return source.strip(), ""
    return notation.strip(), sidecar.strip()


def join_inline_data(notation: str, data: BoardData) -> str:
    """Code-block body with *data* appended after the delimiter."""
    payload = board_data_to_dict(data)
    if not payload:
        return notation.strip()
    return f"{notation.strip()}\n{DATA_DELIMITER}\n{json.dumps(payload)}"
