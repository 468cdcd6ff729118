"""Persistence collaborators that sit outside the engine."""

from .high_score import HighScore, HighScoreStore

__all__ = ["HighScore", "HighScoreStore"]
