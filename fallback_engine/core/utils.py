import sys

from fallback_engine.core.evaluator import MATE_SCORE


def format_score(score):
    """UCI score token. Mate distance is not tracked, so mates report as 'mate 1'/'mate -1'."""
    if abs(score) >= MATE_SCORE:
        return f"mate {1 if score > 0 else -1}"
    return f"cp {score}"


def print_info(result, white_to_move=True, out=None):
    """Print a UCI info line for a SearchResult; score is reported from the mover's side."""
    score = result.score if white_to_move else -result.score
    nps = int(result.nodes / result.elapsed) if result.elapsed > 0 else 0
    pv_str = result.uci or ""
    line = (f"info depth {result.depth} score {format_score(score)} nodes {result.nodes} "
            f"nps {nps} time {int(result.elapsed * 1000)} pv {pv_str}")
    print(line.rstrip(), file=out or sys.stdout, flush=True)
