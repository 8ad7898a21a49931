from fallback_engine.core.board import ChessBoard
from fallback_engine.core.difficulty import depth_for_difficulty
from fallback_engine.core.search import SearchEngine


class Engine:
    def __init__(self, depth=3, fen=None):
        self.board = ChessBoard(fen)
        self.search = SearchEngine(depth=depth)

    def set_difficulty(self, difficulty: str):
        self.search.max_depth = depth_for_difficulty(difficulty)

    def get_best_move(self):
        result = self.search.search_best_move(self.board.board)
        return result.uci, result.score

    def make_move(self, move_uci: str):
        return self.board.make_move(move_uci)

    def print_board(self):
        self.board.print_board()
