"""Play against the engine in the terminal."""

import argparse

import chess

from fallback_engine.config import CONFIG, DIFFICULTIES, configure_logging
from fallback_engine.core.board import ChessBoard, IllegalMoveError
from fallback_engine.provider import ExternalEngine, MoveProvider


def build_parser():
    parser = argparse.ArgumentParser(description="Play chess against the fallback engine.")
    parser.add_argument("--difficulty", choices=DIFFICULTIES, default=CONFIG.search.difficulty)
    parser.add_argument("--color", choices=("white", "black"), default="white",
                        help="side played by the human")
    parser.add_argument("--fen", default=None, help="start from this position")
    parser.add_argument("--engine-path", default=CONFIG.external.path,
                        help="UCI engine tried before the minimax fallback")
    return parser


def play(game: ChessBoard, provider: MoveProvider, human: chess.Color, read=input, write=print):
    while not game.is_game_over():
        write(game.board)
        write("----------------------------")

        if game.board.turn == human:
            user_move = read("Enter your move (uci format, e2e4): ").strip()
            if user_move in ("quit", "exit"):
                return None
            try:
                game.push_uci(user_move)
            except IllegalMoveError as e:
                write(f"{e}, try again.")
            continue

        choice = provider.choose_move(game.board)
        if choice is None:
            break
        game.push_uci(choice.uci)
        score = f" | Eval: {choice.score}" if choice.score is not None else ""
        write(f"Engine plays: {choice.uci} ({choice.source}){score}")

    write(game.board)
    write(f"Game Over: {game.status()}")
    write(f"Result: {game.board.result(claim_draw=True)}")
    return game.status()


def main(argv=None):
    args = build_parser().parse_args(argv)
    configure_logging()

    game = ChessBoard(args.fen)
    provider = MoveProvider(ExternalEngine(args.engine_path), difficulty=args.difficulty)
    if CONFIG.external.enabled:
        provider.external.open()
    provider.set_difficulty(args.difficulty)
    try:
        play(game, provider, chess.WHITE if args.color == "white" else chess.BLACK)
    finally:
        provider.close()


if __name__ == "__main__":
    main()
