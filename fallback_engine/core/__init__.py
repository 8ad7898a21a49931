"""Core search components: rules adapter, evaluator, move ordering, search, difficulty."""

from .board import ChessBoard, EngineError, IllegalMoveError, InvalidPositionError
from .difficulty import depth_for_difficulty, external_profile
from .evaluator import Evaluator, MATE_SCORE, evaluate_board
from .ordering import order_moves
from .search import SearchEngine, SearchResult, best_move_uci, INF
