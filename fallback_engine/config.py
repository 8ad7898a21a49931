# fallback_engine/config.py
from dataclasses import dataclass, field
from typing import Dict, Optional
import logging
import os
import tomllib

_log = logging.getLogger(__name__)

# Defaults (centipawns)
PIECE_VALUES = {
    "PAWN": 100,
    "KNIGHT": 320,
    "BISHOP": 330,
    "ROOK": 500,
    "QUEEN": 900,
    "KING": 20000,
}

DIFFICULTIES = ("easy", "medium", "hard")


@dataclass
class SearchConfig:
    depth: int = 3
    difficulty: str = "medium"
    max_depth: int = 6  # upper bound accepted from callers (API, UCI)


@dataclass
class EvalConfig:
    piece_values: Dict[str, int] = field(default_factory=lambda: PIECE_VALUES.copy())


@dataclass
class DifficultyConfig:
    # fixed-depth minimax fallback
    fallback_depths: Dict[str, int] = field(default_factory=lambda: {
        "easy": 1, "medium": 3, "hard": 4
    })
    fallback_default_depth: int = 2
    # time-boxed external engine
    skill_levels: Dict[str, int] = field(default_factory=lambda: {
        "easy": 3, "medium": 10, "hard": 20
    })
    external_depths: Dict[str, int] = field(default_factory=lambda: {
        "easy": 2, "medium": 8, "hard": 18
    })
    move_time_ms: Dict[str, int] = field(default_factory=lambda: {
        "easy": 200, "medium": 800, "hard": 2000
    })


@dataclass
class ExternalConfig:
    enabled: bool = True
    path: Optional[str] = None  # None means no external engine, always fall back
    handshake_timeout: float = 10.0


@dataclass
class UIConfig:
    engine_name: str = "FallbackEngine"
    engine_author: str = "Medo"


@dataclass
class Config:
    search: SearchConfig = field(default_factory=SearchConfig)
    eval: EvalConfig = field(default_factory=EvalConfig)
    difficulty: DifficultyConfig = field(default_factory=DifficultyConfig)
    external: ExternalConfig = field(default_factory=ExternalConfig)
    ui: UIConfig = field(default_factory=UIConfig)
    log_level: str = "INFO"

    @staticmethod
    def load_from_toml(path: str = "config.toml") -> "Config":
        cfg = Config()
        if not os.path.exists(path):
            return cfg
        with open(path, "rb") as f:
            raw = tomllib.load(f)
        for section in ("search", "eval", "difficulty", "external", "ui"):
            if section not in raw:
                continue
            target = getattr(cfg, section)
            for k, v in raw[section].items():
                if not hasattr(target, k):
                    _log.warning("Unknown config key [%s].%s ignored", section, k)
                    continue
                current = getattr(target, k)
                # tables are merged so a partial override keeps the other labels
                if isinstance(current, dict) and isinstance(v, dict):
                    current.update(v)
                else:
                    setattr(target, k, v)
        if "log_level" in raw:
            cfg.log_level = str(raw["log_level"]).upper()
        return cfg


def configure_logging(level: Optional[str] = None):
    """Configure root logging for entry points (API, UCI, CLI)."""
    logging.basicConfig(
        level=getattr(logging, (level or CONFIG.log_level).upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


# single globally importable config instance
CONFIG = Config.load_from_toml(os.environ.get("FALLBACK_ENGINE_CONFIG", "config.toml"))

# env overrides for quick debugging
_override_depth = os.environ.get("FALLBACK_ENGINE_DEPTH")
if _override_depth:
    try:
        CONFIG.search.depth = int(_override_depth)
    except ValueError:
        _log.warning("Ignoring non-integer FALLBACK_ENGINE_DEPTH=%r", _override_depth)

if os.environ.get("FALLBACK_ENGINE_PATH"):
    CONFIG.external.path = os.environ["FALLBACK_ENGINE_PATH"]
