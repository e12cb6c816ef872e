"""Qt bridge that drives an external UCI engine for live evaluation."""

from __future__ import annotations

import logging
import shlex

from PyQt6.QtCore import QObject, QProcess, pyqtSignal, pyqtSlot

from chessnote.config import ChessNoteSettings
from chessnote.core.enums import Color
from chessnote.core.move import Move
from chessnote.engine.uci import parse_info_line

_LOGGER = logging.getLogger(__name__)

# Evaluation changes up to this many centipawns are not re-emitted.
_EVAL_NOISE_CP = 5


class AnalysisWorker(QObject):
    """Runs a UCI engine in a :class:`QProcess` and reports its findings.

    The handshake is ``uci`` → ``uciok`` → ``isready`` → ``readyok``; a
    position requested before the engine is ready is analysed once it is.
    Output that arrives while no position is being analysed (for example
    between :meth:`clear_analysis` and the next :meth:`analyze`) belongs
    to a stale search and is dropped.
    """

    eval_changed = pyqtSignal(object)
    best_move_changed = pyqtSignal(object)
    depth_changed = pyqtSignal(int)
    engine_ready = pyqtSignal()
    engine_error = pyqtSignal(str)

    def __init__(
        self,
        *,
        command: str = "stockfish",
        depth: int = 16,
        parent: QObject | None = None,
    ) -> None:
        super().__init__(parent)
        self._command = command
        self._depth = depth
        self._process: QProcess | None = None
        self._buffer = ""
        self._is_ready = False
        self._pending: tuple[str, Color] | None = None

        self._analysis_fen: str | None = None
        self._analysis_side = Color.WHITE
        self._eval: int | None = None
        self._best_move: Move | None = None
        self._current_depth = 0

    @classmethod
    def from_settings(
        cls, settings: ChessNoteSettings, parent: QObject | None = None
    ) -> AnalysisWorker:
        return cls(
            command=settings.engine_command,
            depth=settings.engine_depth,
            parent=parent,
        )

    # ── State ────────────────────────────────────────────────────────────

    @property
    def is_ready(self) -> bool:
        return self._is_ready

    @property
    def analysis_fen(self) -> str | None:
        return self._analysis_fen

    @property
    def evaluation(self) -> int | None:
        """Latest score in centipawns from White's point of view."""
        return self._eval

    @property
    def best_move(self) -> Move | None:
        return self._best_move

    @property
    def depth(self) -> int:
        return self._current_depth

    # ── Process lifecycle ────────────────────────────────────────────────

    @pyqtSlot()
    def start(self) -> None:
        """Launch the engine process and begin the UCI handshake."""
        if self._process is not None:
            return
        args = shlex.split(self._command)
        if not args:
            self.engine_error.emit("Engine not available")
            return

        process = QProcess(self)
        process.readyReadStandardOutput.connect(self._on_ready_read)
        process.errorOccurred.connect(self._on_process_error)
        self._process = process
        _LOGGER.debug("Starting engine: %s", self._command)
        process.start(args[0], args[1:])
        self.send("uci")

    @pyqtSlot()
    def stop(self) -> None:
        """Ask the engine to quit and forget all analysis state."""
        process = self._process
        if process is not None:
            self.send("stop")
            self.send("quit")
            if not process.waitForFinished(1000):
                process.kill()
        self._process = None
        self._buffer = ""
        self._is_ready = False
        self._pending = None
        self._analysis_fen = None

    def send(self, command: str) -> None:
        """Write one command line to the engine's stdin."""
        if self._process is None:
            return
        _LOGGER.debug("engine << %s", command)
        self._process.write(f"{command}\n".encode())

    # ── Analysis requests ────────────────────────────────────────────────

    @pyqtSlot(str, object)
    def analyze(self, fen: str, side_to_move: Color) -> None:
        """Start analysing *fen* unless it is already being analysed."""
        if not self._is_ready:
            self._pending = (fen, side_to_move)
            return
        if fen == self._analysis_fen:
            return

        self._analysis_fen = fen
        self._analysis_side = side_to_move
        self._eval = None
        self._best_move = None
        self._current_depth = 0
        self.eval_changed.emit(None)
        self.best_move_changed.emit(None)
        self.depth_changed.emit(0)

        self.send("stop")
        self.send(f"position fen {fen}")
        self.send(f"go depth {self._depth}")

    @pyqtSlot()
    def clear_analysis(self) -> None:
        """Drop the current position; late output for it is then ignored."""
        self._analysis_fen = None
        self._pending = None

    @pyqtSlot(int)
    def set_depth(self, depth: int) -> None:
        """Search depth for the next :meth:`analyze` call."""
        self._depth = depth

    # ── Engine output ────────────────────────────────────────────────────

    def feed(self, data: bytes) -> None:
        """Buffer raw engine output and handle each completed line."""
        self._buffer += data.decode(errors="replace")
        *lines, self._buffer = self._buffer.split("\n")
        for line in lines:
            self.handle_line(line)

    def handle_line(self, line: str) -> None:
        """React to one line of engine output."""
        line = line.strip()
        if line == "uciok":
            self.send("isready")
        elif line == "readyok":
            self._is_ready = True
            self.engine_ready.emit()
            if self._pending is not None:
                fen, side = self._pending
                self._pending = None
                self.analyze(fen, side)
        elif line.startswith("info"):
            self._handle_info(line)

    def _handle_info(self, line: str) -> None:
        if self._analysis_fen is None:
            return
        try:
            info = parse_info_line(line, self._analysis_side)
        except ValueError:
            _LOGGER.debug("Unreadable engine line: %s", line)
            return
        if info is None:
            return

        if info.depth is not None and info.depth != self._current_depth:
            self._current_depth = info.depth
            self.depth_changed.emit(info.depth)

        if info.score_cp is not None and (
            self._eval is None or abs(info.score_cp - self._eval) > _EVAL_NOISE_CP
        ):
            self._eval = info.score_cp
            self.eval_changed.emit(info.score_cp)

        if info.best_move is not None and info.best_move != self._best_move:
            self._best_move = info.best_move
            self.best_move_changed.emit(info.best_move)

    @pyqtSlot()
    def _on_ready_read(self) -> None:
        if self._process is None:
            return
        self.feed(bytes(self._process.readAllStandardOutput().data()))

    def _on_process_error(self, error: QProcess.ProcessError) -> None:
        _LOGGER.warning("Engine process error: %s", error)
        self._is_ready = False
        self._process = None
        self.engine_error.emit("Failed to load engine")
