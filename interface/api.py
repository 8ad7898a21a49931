"""FastAPI REST interface for the fallback engine."""

import logging
import threading
from contextlib import asynccontextmanager
from dataclasses import asdict
from typing import Optional

import chess
from fastapi import FastAPI, HTTPException
from pydantic import BaseModel, Field

from fallback_engine.config import CONFIG, DIFFICULTIES
from fallback_engine.core.board import ChessBoard, EngineError, parse_board
from fallback_engine.core.difficulty import depth_for_difficulty, external_profile
from fallback_engine.core.evaluator import evaluate_board
from fallback_engine.core.search import SearchEngine
from fallback_engine.provider import ExternalEngine, MoveProvider, SOURCE_FALLBACK

_log = logging.getLogger(__name__)

# One game per process; searches run on a copy outside the lock.
game = ChessBoard()
engine = SearchEngine(depth=CONFIG.search.depth)
provider = MoveProvider(ExternalEngine(), search=engine)
_board_lock = threading.Lock()


@asynccontextmanager
async def lifespan(app: FastAPI):
    if CONFIG.external.enabled:
        provider.external.open()
    yield
    provider.close()


app = FastAPI(title=CONFIG.ui.engine_name, version="1.0.0", lifespan=lifespan)


class FenRequest(BaseModel):
    fen: str


class MoveRequest(BaseModel):
    move: str = Field(..., description="UCI move, e.g. 'e2e4'; promotion defaults to queen")


class SearchRequest(BaseModel):
    depth: Optional[int] = Field(None, ge=1, le=CONFIG.search.max_depth)
    difficulty: Optional[str] = None


class EvaluateRequest(BaseModel):
    fen: str


def _board_state():
    board = game.board
    return {
        "fen": board.fen(),
        "turn": "white" if board.turn == chess.WHITE else "black",
        "legal_moves": game.get_legal_moves(),
        "is_game_over": game.is_game_over(),
        "status": game.status(),
        "winner": game.winner(),
    }


@app.get("/board")
def get_board():
    with _board_lock:
        return _board_state()


@app.post("/position")
def set_position(req: FenRequest):
    with _board_lock:
        try:
            game.set_fen(req.fen)
        except EngineError as e:
            raise HTTPException(status_code=400, detail=str(e))
        _log.info("Position set to %s", game.get_fen())
        return {"fen": game.get_fen()}


@app.post("/move")
def make_move(req: MoveRequest):
    with _board_lock:
        try:
            move = game.push_uci(req.move)
        except EngineError as e:
            raise HTTPException(status_code=400, detail=str(e))
        return {"fen": game.get_fen(), "move": move.uci()}


@app.post("/search")
def search_move(req: SearchRequest = SearchRequest()):
    with _board_lock:
        if game.is_game_over():
            raise HTTPException(status_code=400, detail="Game is already over")
        search_board = game.board.copy()

    if req.depth is not None:
        result = engine.search_best_move(search_board, req.depth)
        return {
            "best_move": result.uci,
            "score": result.score,
            "nodes": result.nodes,
            "depth": result.depth,
            "source": SOURCE_FALLBACK,
            "fen": search_board.fen(),
        }

    choice = provider.choose_move(search_board, req.difficulty)
    return {
        "best_move": choice.uci if choice else None,
        "score": choice.score if choice else None,
        "nodes": choice.nodes if choice else None,
        "depth": choice.depth if choice else None,
        "source": choice.source if choice else None,
        "fen": search_board.fen(),
    }


@app.post("/evaluate")
def evaluate(req: EvaluateRequest):
    try:
        board = parse_board(req.fen)
    except EngineError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return {"fen": board.fen(), "score": evaluate_board(board)}


@app.get("/difficulties")
def list_difficulties():
    return {
        label: {
            "fallback_depth": depth_for_difficulty(label),
            "external": asdict(external_profile(label)),
        }
        for label in DIFFICULTIES
    }


@app.post("/reset")
def reset_board():
    with _board_lock:
        game.reset()
        return {"fen": game.get_fen()}
