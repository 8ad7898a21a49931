import logging
import time
from dataclasses import dataclass
from typing import Optional

import chess

from fallback_engine.config import CONFIG
from fallback_engine.core import board as rules
from fallback_engine.core.evaluator import Evaluator
from fallback_engine.core.ordering import order_moves

_log = logging.getLogger(__name__)

# larger than any evaluation, including MATE_SCORE plus a full board of material
INF = 1000000


@dataclass
class SearchResult:
    move: Optional[chess.Move]
    score: int
    depth: int
    nodes: int
    elapsed: float

    @property
    def uci(self) -> Optional[str]:
        return self.move.uci() if self.move else None


class SearchEngine:
    """Fixed-depth minimax with alpha-beta pruning.

    Stateless between calls apart from the diagnostic node counter. Every
    root call works on a private copy of the caller's board, mutated with
    push/pop and restored move by move.
    """

    def __init__(self, evaluator: Optional[Evaluator] = None, depth: Optional[int] = None):
        self.evaluator = evaluator or Evaluator()
        self.max_depth = CONFIG.search.depth if depth is None else depth
        self.nodes = 0

    def search_best_move(self, board: chess.Board, depth: Optional[int] = None) -> SearchResult:
        """Pick the best root move; ``move`` is None when the game is decided."""
        depth = self.max_depth if depth is None else depth
        if depth < 1:
            raise ValueError(f"search depth must be >= 1, got {depth}")

        self.nodes = 0
        start_time = time.time()
        search_board = board.copy()

        if rules.is_terminal(search_board):
            return SearchResult(None, self.evaluator.evaluate(search_board), depth, 0, 0.0)

        moves = self._order_moves(search_board)
        if not moves:
            return SearchResult(None, self.evaluator.evaluate(search_board), depth, 0, 0.0)

        is_white = rules.side_to_move(search_board) == chess.WHITE
        best_score = -INF if is_white else INF
        best_move = None

        for move in moves:
            rules.apply(search_board, move)
            score = self.search(search_board, depth - 1, -INF, INF, not is_white)
            rules.undo(search_board)

            # strict comparison: first-found wins ties
            if (is_white and score > best_score) or (not is_white and score < best_score):
                best_score = score
                best_move = move

        elapsed = time.time() - start_time
        _log.debug("depth %d best %s score %d nodes %d time %.3fs",
                   depth, best_move, best_score, self.nodes, elapsed)
        return SearchResult(best_move, best_score, depth, self.nodes, elapsed)

    def best_move(self, board: chess.Board, depth: Optional[int] = None) -> Optional[chess.Move]:
        return self.search_best_move(board, depth).move

    def search(self, board: chess.Board, depth: int, alpha: int, beta: int, maximizing: bool) -> int:
        self.nodes += 1
        if depth <= 0 or rules.is_terminal(board):
            return self.evaluator.evaluate(board)

        moves = self._order_moves(board)

        if maximizing:
            max_eval = -INF
            for move in moves:
                rules.apply(board, move)
                score = self.search(board, depth - 1, alpha, beta, False)
                rules.undo(board)
                max_eval = max(max_eval, score)
                alpha = max(alpha, score)
                if beta <= alpha:
                    break
            return max_eval

        min_eval = INF
        for move in moves:
            rules.apply(board, move)
            score = self.search(board, depth - 1, alpha, beta, True)
            rules.undo(board)
            min_eval = min(min_eval, score)
            beta = min(beta, score)
            if beta <= alpha:
                break
        return min_eval

    def _order_moves(self, board: chess.Board):
        return order_moves(board, rules.legal_moves(board), self.evaluator.values)


def best_move_uci(fen: str, depth: int = 3) -> Optional[str]:
    """FEN in, UCI move out (origin, destination, optional promotion letter)."""
    board = rules.parse_board(fen)
    return SearchEngine().search_best_move(board, depth).uci
