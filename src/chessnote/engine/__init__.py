"""Engine package: UCI output parsing and the Qt process bridge."""

from chessnote.engine.qt_bridge import AnalysisWorker
from chessnote.engine.uci import (
    EngineInfo,
    eval_bar_fraction,
    format_eval,
    mate_to_cp,
    parse_info_line,
)

__all__ = [
    "AnalysisWorker",
    "EngineInfo",
    "eval_bar_fraction",
    "format_eval",
    "mate_to_cp",
    "parse_info_line",
]
