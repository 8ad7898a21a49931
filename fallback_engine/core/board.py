"""Rules adapter over python-chess plus a board wrapper with move history.

The module level functions are everything the search core asks of the rules
engine. The search never inspects a ``chess.Board`` any other way.
"""

from typing import List, Optional, Tuple

import chess


class EngineError(ValueError):
    """Base class for errors raised at the engine boundary."""


class InvalidPositionError(EngineError):
    """The supplied FEN could not be parsed into a valid position."""


class IllegalMoveError(EngineError):
    """The supplied move is malformed or not legal in the position."""


# ---------------------------------------------------------------------------
# Rules engine interface
# ---------------------------------------------------------------------------

def legal_moves(board: chess.Board) -> List[chess.Move]:
    return list(board.legal_moves)


def apply(board: chess.Board, move: chess.Move):
    board.push(move)


def undo(board: chess.Board) -> chess.Move:
    return board.pop()


def is_checkmate(board: chess.Board) -> bool:
    return board.is_checkmate()


def is_stalemate(board: chess.Board) -> bool:
    return board.is_stalemate()


def is_draw(board: chess.Board) -> bool:
    """Stalemate, insufficient material, fifty-move rule or threefold repetition."""
    return (
        board.is_stalemate()
        or board.is_insufficient_material()
        or board.halfmove_clock >= 100
        or board.is_repetition(3)
    )


def is_terminal(board: chess.Board) -> bool:
    return board.is_checkmate() or is_draw(board)


def side_to_move(board: chess.Board) -> chess.Color:
    return board.turn


def piece_at(board: chess.Board, square: chess.Square) -> Optional[Tuple[chess.PieceType, chess.Color]]:
    piece = board.piece_at(square)
    if piece is None:
        return None
    return piece.piece_type, piece.color


def parse_board(fen: str) -> chess.Board:
    """Build a board from FEN, raising InvalidPositionError on bad input."""
    try:
        board = chess.Board(fen)
    except ValueError as e:
        raise InvalidPositionError(f"Invalid FEN: {e}") from e
    if not board.is_valid():
        raise InvalidPositionError(f"Invalid FEN: {board.status()!r}")
    return board


def parse_move(board: chess.Board, move_str: str) -> chess.Move:
    """Parse a UCI move, defaulting to queen promotion when the letter is omitted."""
    try:
        move = chess.Move.from_uci(move_str)
    except ValueError as e:
        raise IllegalMoveError(f"Invalid UCI move: {move_str!r}") from e
    if move.promotion is None and move not in board.legal_moves:
        promoted = chess.Move(move.from_square, move.to_square, promotion=chess.QUEEN)
        if promoted in board.legal_moves:
            move = promoted
    if move not in board.legal_moves:
        raise IllegalMoveError(f"Illegal move: {move_str}")
    return move


# ---------------------------------------------------------------------------
# Board wrapper
# ---------------------------------------------------------------------------

class ChessBoard:
    def __init__(self, fen: str = None):
        """Initialize from FEN or the standard starting position."""
        self.board = parse_board(fen) if fen else chess.Board()
        self.move_history = []

    def reset(self):
        """Reset to the initial position."""
        self.board.reset()
        self.move_history.clear()

    def set_fen(self, fen: str):
        """Set board state from a FEN string."""
        self.board = parse_board(fen)
        self.move_history.clear()

    def get_fen(self) -> str:
        """Return the current FEN."""
        return self.board.fen()

    def push_uci(self, move_str: str) -> chess.Move:
        """Push a UCI move, raising IllegalMoveError if it cannot be played."""
        move = parse_move(self.board, move_str)
        self.board.push(move)
        self.move_history.append(move.uci())
        return move

    def make_move(self, move_str: str) -> bool:
        """Push a UCI move (e.g. 'e2e4', 'a7a8'). Returns True if legal."""
        try:
            self.push_uci(move_str)
        except IllegalMoveError:
            return False
        return True

    def undo_move(self):
        """Pop the last move."""
        if self.move_history:
            self.board.pop()
            self.move_history.pop()

    def get_legal_moves(self):
        """Return legal moves as UCI strings."""
        return [m.uci() for m in self.board.legal_moves]

    def is_game_over(self):
        """Check if the game has ended (checkmate or any detected draw)."""
        return is_terminal(self.board)

    def status(self) -> str:
        if self.board.is_checkmate():
            return "checkmate"
        if self.board.is_stalemate():
            return "stalemate"
        if is_draw(self.board):
            return "draw"
        return "playing"

    def winner(self) -> Optional[str]:
        """'white' or 'black' after checkmate, otherwise None."""
        if not self.board.is_checkmate():
            return None
        return "black" if self.board.turn == chess.WHITE else "white"

    def print_board(self):
        """Print ASCII representation."""
        print(self.board)
