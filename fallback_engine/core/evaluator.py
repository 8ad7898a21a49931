"""Static evaluation: material plus piece-square tables, White's point of view.

Tables are written the way a board is printed from White's side: index 0 is
a8, index 63 is h1. A White piece on python-chess square ``sq`` reads index
``sq ^ 56``; a Black piece reads ``sq`` directly, which is the same table
mirrored vertically so each side reads it from its own back rank.
Indexing White unflipped in python-chess order (a1 = index 0) would read the
tables upside down; that orientation is deliberately not used, so move
choices differ from code that indexes that way at equal depth.
"""

from typing import Dict, Optional

import chess

from fallback_engine.config import CONFIG
from fallback_engine.core.board import is_draw

MATE_SCORE = 99999

PAWN_TABLE = [
     0,  0,  0,  0,  0,  0,  0,  0,
    50, 50, 50, 50, 50, 50, 50, 50,
    10, 10, 20, 30, 30, 20, 10, 10,
     5,  5, 10, 25, 25, 10,  5,  5,
     0,  0,  0, 20, 20,  0,  0,  0,
     5, -5,-10,  0,  0,-10, -5,  5,
     5, 10, 10,-20,-20, 10, 10,  5,
     0,  0,  0,  0,  0,  0,  0,  0,
]

KNIGHT_TABLE = [
    -50,-40,-30,-30,-30,-30,-40,-50,
    -40,-20,  0,  0,  0,  0,-20,-40,
    -30,  0, 10, 15, 15, 10,  0,-30,
    -30,  5, 15, 20, 20, 15,  5,-30,
    -30,  0, 15, 20, 20, 15,  0,-30,
    -30,  5, 10, 15, 15, 10,  5,-30,
    -40,-20,  0,  5,  5,  0,-20,-40,
    -50,-40,-30,-30,-30,-30,-40,-50,
]

BISHOP_TABLE = [
    -20,-10,-10,-10,-10,-10,-10,-20,
    -10,  0,  0,  0,  0,  0,  0,-10,
    -10,  0,  5, 10, 10,  5,  0,-10,
    -10,  5,  5, 10, 10,  5,  5,-10,
    -10,  0, 10, 10, 10, 10,  0,-10,
    -10, 10, 10, 10, 10, 10, 10,-10,
    -10,  5,  0,  0,  0,  0,  5,-10,
    -20,-10,-10,-10,-10,-10,-10,-20,
]

ROOK_TABLE = [
     0,  0,  0,  0,  0,  0,  0,  0,
     5, 10, 10, 10, 10, 10, 10,  5,
    -5,  0,  0,  0,  0,  0,  0, -5,
    -5,  0,  0,  0,  0,  0,  0, -5,
    -5,  0,  0,  0,  0,  0,  0, -5,
    -5,  0,  0,  0,  0,  0,  0, -5,
    -5,  0,  0,  0,  0,  0,  0, -5,
     0,  0,  0,  5,  5,  0,  0,  0,
]

QUEEN_TABLE = [
    -20,-10,-10, -5, -5,-10,-10,-20,
    -10,  0,  0,  0,  0,  0,  0,-10,
    -10,  0,  5,  5,  5,  5,  0,-10,
     -5,  0,  5,  5,  5,  5,  0, -5,
      0,  0,  5,  5,  5,  5,  0, -5,
    -10,  5,  5,  5,  5,  5,  0,-10,
    -10,  0,  5,  0,  0,  0,  0,-10,
    -20,-10,-10, -5, -5,-10,-10,-20,
]

KING_MIDDLE_TABLE = [
    -30,-40,-40,-50,-50,-40,-40,-30,
    -30,-40,-40,-50,-50,-40,-40,-30,
    -30,-40,-40,-50,-50,-40,-40,-30,
    -30,-40,-40,-50,-50,-40,-40,-30,
    -20,-30,-30,-40,-40,-30,-30,-20,
    -10,-20,-20,-20,-20,-20,-20,-10,
     20, 20,  0,  0,  0,  0, 20, 20,
     20, 30, 10,  0,  0, 10, 30, 20,
]

PIECE_SQUARE_TABLES = {
    chess.PAWN: PAWN_TABLE,
    chess.KNIGHT: KNIGHT_TABLE,
    chess.BISHOP: BISHOP_TABLE,
    chess.ROOK: ROOK_TABLE,
    chess.QUEEN: QUEEN_TABLE,
    chess.KING: KING_MIDDLE_TABLE,
}


def material_values(piece_values: Optional[Dict[str, int]] = None) -> Dict[chess.PieceType, int]:
    """Map config piece names ("PAWN", ...) to python-chess piece types."""
    names = piece_values or CONFIG.eval.piece_values
    return {pt: names.get(chess.piece_name(pt).upper(), 0) for pt in chess.PIECE_TYPES}


def piece_square_value(piece_type: chess.PieceType, color: chess.Color, square: chess.Square) -> int:
    idx = square ^ 56 if color == chess.WHITE else square
    return PIECE_SQUARE_TABLES[piece_type][idx]


class Evaluator:
    def __init__(self, piece_values: Optional[Dict[str, int]] = None):
        self.values = material_values(piece_values)

    def evaluate(self, board: chess.Board) -> int:
        """Return static eval in centipawns, positive favors White."""
        if board.is_checkmate():
            return -MATE_SCORE if board.turn == chess.WHITE else MATE_SCORE
        if is_draw(board):
            return 0

        score = 0
        for sq, piece in board.piece_map().items():
            value = self.values[piece.piece_type] + piece_square_value(piece.piece_type, piece.color, sq)
            if piece.color == chess.WHITE:
                score += value
            else:
                score -= value
        return score


_default = Evaluator()


def evaluate_board(board: chess.Board) -> int:
    """Evaluate with the default piece values from CONFIG."""
    return _default.evaluate(board)
