"""Capture-first move ordering."""

from typing import Dict, Iterable, List, Optional

import chess

from fallback_engine.core.evaluator import material_values


def captured_piece_type(board: chess.Board, move: chess.Move) -> Optional[chess.PieceType]:
    """Piece type removed by ``move`` in ``board`` (before the move is played)."""
    if not board.is_capture(move):
        return None
    if board.is_en_passant(move):
        return chess.PAWN
    return board.piece_type_at(move.to_square)


def order_moves(board: chess.Board, moves: Iterable[chess.Move],
                values: Optional[Dict[chess.PieceType, int]] = None) -> List[chess.Move]:
    """Sort captures first by victim value, descending.

    ``sorted`` is stable, so non-captures (value 0) and equal-value captures
    keep the order the rules engine generated them in.
    """
    values = values or material_values()

    def key(move):
        victim = captured_piece_type(board, move)
        return values[victim] if victim else 0

    return sorted(moves, key=key, reverse=True)
