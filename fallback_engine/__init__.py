"""Fixed-depth minimax fallback engine with an external UCI engine front."""

__version__ = "1.0.0"
