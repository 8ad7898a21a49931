"""Difficulty label lookups for the minimax fallback and the external engine."""

from dataclasses import dataclass

from fallback_engine.config import CONFIG


@dataclass(frozen=True)
class ExternalProfile:
    skill_level: int
    depth: int
    movetime_ms: int


def _label(difficulty) -> str:
    return str(difficulty or "").strip().lower()


def depth_for_difficulty(difficulty: str) -> int:
    """Fixed search depth for the minimax fallback; unknown labels get the default."""
    cfg = CONFIG.difficulty
    return cfg.fallback_depths.get(_label(difficulty), cfg.fallback_default_depth)


def external_profile(difficulty: str) -> ExternalProfile:
    """Skill level and depth/time budget for the external engine (unknown -> medium)."""
    cfg = CONFIG.difficulty
    label = _label(difficulty)
    if label not in cfg.skill_levels:
        label = "medium"
    return ExternalProfile(
        skill_level=cfg.skill_levels[label],
        depth=cfg.external_depths[label],
        movetime_ms=cfg.move_time_ms[label],
    )
