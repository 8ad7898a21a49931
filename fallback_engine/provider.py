"""Move source for a bot player: external UCI engine first, minimax fallback second.

The external engine (e.g. Stockfish) is driven through ``chess.engine``. When
it is not configured, fails to start, or errors mid-game, moves come from the
fixed-depth :class:`SearchEngine` at the depth mapped from the difficulty.
"""

import logging
import threading
from dataclasses import dataclass
from typing import Callable, Optional

import chess
import chess.engine

from fallback_engine.config import CONFIG
from fallback_engine.core import board as rules
from fallback_engine.core.difficulty import ExternalProfile, depth_for_difficulty, external_profile
from fallback_engine.core.search import SearchEngine

_log = logging.getLogger(__name__)

SOURCE_EXTERNAL = "external"
SOURCE_FALLBACK = "fallback"

_ENGINE_FAILURES = (chess.engine.EngineError, chess.engine.EngineTerminatedError,
                    OSError, TimeoutError)


@dataclass
class MoveChoice:
    move: chess.Move
    source: str
    score: Optional[int] = None
    depth: Optional[int] = None
    nodes: Optional[int] = None

    @property
    def uci(self) -> str:
        return self.move.uci()


class ExternalEngine:
    """Thin lifecycle wrapper around a UCI engine process."""

    def __init__(self, path: Optional[str] = None, timeout: Optional[float] = None):
        self.path = path if path is not None else CONFIG.external.path
        self.timeout = timeout if timeout is not None else CONFIG.external.handshake_timeout
        self._engine: Optional[chess.engine.SimpleEngine] = None
        self._analysis: Optional[chess.engine.SimpleAnalysisResult] = None

    @property
    def is_ready(self) -> bool:
        return self._engine is not None

    def open(self) -> bool:
        """Start the engine. Returns False (and logs) when it cannot be started."""
        if self._engine is not None:
            return True
        if not self.path:
            return False
        try:
            self._engine = chess.engine.SimpleEngine.popen_uci(self.path, timeout=self.timeout)
        except _ENGINE_FAILURES as e:
            _log.warning("External engine %s unavailable, using minimax fallback: %s", self.path, e)
            self._engine = None
            return False
        _log.info("External engine %s ready", self.path)
        return True

    def configure_skill(self, level: int):
        if self._engine is None:
            return
        if "Skill Level" in self._engine.options:
            self._engine.configure({"Skill Level": level})

    def play(self, board: chess.Board, profile: ExternalProfile) -> Optional[chess.Move]:
        """Run a limited search and return the engine's bestmove.

        Runs as an analysis so :meth:`stop` can end it early; a stopped
        search still reports the best move found so far.
        """
        if self._engine is None:
            return None
        limit = chess.engine.Limit(depth=profile.depth, time=profile.movetime_ms / 1000)
        analysis = self._engine.analysis(board, limit)
        self._analysis = analysis
        try:
            best = analysis.wait()
        finally:
            self._analysis = None
        return best.move

    def stop(self):
        analysis = self._analysis
        if analysis is not None:
            analysis.stop()

    def close(self):
        if self._engine is None:
            return
        self.stop()
        engine, self._engine = self._engine, None
        try:
            engine.quit()
        except _ENGINE_FAILURES as e:
            _log.debug("External engine did not quit cleanly: %s", e)

    def __enter__(self):
        self.open()
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()


class MoveProvider:
    def __init__(self, external: Optional[ExternalEngine] = None,
                 search: Optional[SearchEngine] = None, difficulty: Optional[str] = None):
        self.external = external
        self.search = search or SearchEngine()
        self.difficulty = difficulty or CONFIG.search.difficulty
        self._stop_event = threading.Event()
        self._thread: Optional[threading.Thread] = None

    def set_difficulty(self, difficulty: str):
        self.difficulty = difficulty
        if self.external is not None and self.external.is_ready:
            try:
                self.external.configure_skill(external_profile(difficulty).skill_level)
            except _ENGINE_FAILURES as e:
                self._drop_external(e)

    def choose_move(self, board: chess.Board, difficulty: Optional[str] = None) -> Optional[MoveChoice]:
        """Best move for the side to move, or None when the game is decided.

        ``difficulty`` overrides the provider's setting for this call only.
        """
        if rules.is_terminal(board) or not rules.legal_moves(board):
            return None
        difficulty = difficulty or self.difficulty

        choice = self._external_move(board, difficulty)
        if choice is not None:
            return choice

        depth = depth_for_difficulty(difficulty)
        result = self.search.search_best_move(board, depth)
        if result.move is None:
            return None
        _log.info("Fallback search (%s, depth %d) chose %s", difficulty, depth, result.uci)
        return MoveChoice(result.move, SOURCE_FALLBACK, result.score, result.depth, result.nodes)

    def _external_move(self, board: chess.Board, difficulty: str) -> Optional[MoveChoice]:
        if self.external is None or not CONFIG.external.enabled or not self.external.is_ready:
            return None
        try:
            move = self.external.play(board.copy(), external_profile(difficulty))
        except _ENGINE_FAILURES as e:
            self._drop_external(e)
            return None
        if move is None or move not in board.legal_moves:
            _log.warning("External engine returned unusable move %s, falling back", move)
            return None
        return MoveChoice(move, SOURCE_EXTERNAL)

    def _drop_external(self, error: Exception):
        _log.warning("External engine failed, switching to minimax fallback: %s", error)
        self.external.close()

    def request_move(self, board: chess.Board, callback: Callable[[Optional[MoveChoice]], None]):
        """Search on a daemon thread and hand the result to ``callback``.

        A new request supersedes any pending one: the older result is dropped.
        """
        self._stop_event.set()
        stop_event = self._stop_event = threading.Event()
        search_board = board.copy()

        def worker():
            choice = self.choose_move(search_board)
            if not stop_event.is_set():
                callback(choice)

        self._thread = threading.Thread(target=worker, daemon=True)
        self._thread.start()

    def stop(self, timeout: float = 0.2):
        """Drop the pending result and end an in-flight external search.

        The minimax fallback cannot be interrupted; its result is discarded.
        """
        self._stop_event.set()
        if self.external is not None:
            self.external.stop()
        if self._thread:
            self._thread.join(timeout=timeout)

    def wait(self, timeout: Optional[float] = None):
        if self._thread:
            self._thread.join(timeout=timeout)

    def close(self):
        self.stop()
        if self.external is not None:
            self.external.close()
