"""Minimal UCI front end for the fixed-depth fallback search."""

import logging
import sys

import chess

from fallback_engine.config import CONFIG, configure_logging
from fallback_engine.core.board import EngineError, parse_board, parse_move
from fallback_engine.core.search import SearchEngine
from fallback_engine.core.utils import print_info

_log = logging.getLogger(__name__)


class UCI:
    def __init__(self, depth=None, out=None):
        self.engine = SearchEngine(depth=CONFIG.search.depth if depth is None else depth)
        self.board = chess.Board()
        self.out = out or sys.stdout

    def send(self, line: str):
        print(line, file=self.out, flush=True)

    def handle(self, command: str) -> bool:
        """Process one command line. Returns False when the loop should end."""
        tokens = command.split()
        if not tokens:
            return True
        cmd = tokens[0]

        if cmd == "uci":
            self.send(f"id name {CONFIG.ui.engine_name}")
            self.send(f"id author {CONFIG.ui.engine_author}")
            self.send("uciok")
        elif cmd == "isready":
            self.send("readyok")
        elif cmd == "ucinewgame":
            self.board = chess.Board()
        elif cmd == "position":
            self._position(tokens[1:])
        elif cmd == "go":
            self._go(tokens[1:])
        elif cmd == "quit":
            return False
        else:
            _log.debug("Ignoring unknown command %r", command)
        return True

    def _position(self, tokens):
        if not tokens:
            return
        if "moves" in tokens:
            idx = tokens.index("moves")
            setup, moves = tokens[:idx], tokens[idx + 1:]
        else:
            setup, moves = tokens, []

        if not setup:
            _log.warning("Bad position command: %s", " ".join(tokens))
            return
        try:
            if setup[0] == "startpos":
                board = chess.Board()
            elif setup[0] == "fen":
                board = parse_board(" ".join(setup[1:]))
            else:
                _log.warning("Bad position command: %s", " ".join(tokens))
                return
        except EngineError as e:
            _log.warning("%s", e)
            return

        for mv in moves:
            try:
                board.push(parse_move(board, mv))
            except EngineError as e:
                # keep the moves applied so far
                _log.warning("%s", e)
                break
        self.board = board

    def _go(self, tokens):
        depth = self.engine.max_depth
        if "depth" in tokens:
            idx = tokens.index("depth")
            try:
                depth = int(tokens[idx + 1])
            except (IndexError, ValueError):
                _log.warning("Bad go depth, using %d", depth)
        depth = max(1, min(depth, CONFIG.search.max_depth))

        result = self.engine.search_best_move(self.board, depth)
        if result.move is None:
            self.send("bestmove (none)")
            return
        print_info(result, self.board.turn == chess.WHITE, out=self.out)
        self.send(f"bestmove {result.uci}")

    def run(self, stream=None):
        stream = stream or sys.stdin
        for line in stream:
            if not self.handle(line.strip()):
                break


def main():
    # protocol goes to stdout, logs to stderr
    configure_logging()
    UCI().run()


if __name__ == "__main__":
    main()
